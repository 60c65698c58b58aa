"""API views for the admin area: user management."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.http import Http404  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.pagination import PageNumberPagination  # type: ignore
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.repositories import UserRepository
from apps.users.serializers import UserSerializer
from apps.users.services import (
    IdentityOperationFailed,
    UserNotFound,
    delete_user,
    edit_user,
    toggle_lockout,
)
from shared.application.auth import AuthContext

from .permissions import IsAdminRole
from .serializers import AdminUserUpdateSerializer


class AdminUserPagination(PageNumberPagination):
    page_size = settings.ADMIN_PAGE_SIZE


class AdminUserViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for administrators to manage platform users.

    Endpoints:
    - GET /api/v1/admin/users/?search= - paginated list with roles
    - GET /api/v1/admin/users/{id}/ - user details
    - PUT|PATCH /api/v1/admin/users/{id}/ - edit contacts, photo and role
    - DELETE /api/v1/admin/users/{id}/ - delete user
    - POST /api/v1/admin/users/{id}/lockout/ - lock or unlock user
    """

    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated, IsAdminRole]
    pagination_class = AdminUserPagination
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_queryset(self):  # type: ignore
        return UserRepository().search(self.request.query_params.get("search"))

    def update(self, request, pk=None, partial=False):  # type: ignore
        serializer = AdminUserUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        # PUT replaces the contact details, PATCH keeps what it leaves out
        blank = None if partial else ""
        try:
            user = edit_user(
                AuthContext.from_user(request.user),
                pk,
                email=data.get("email"),
                phone=data.get("phone", blank),
                city=data.get("city", blank),
                role=data.get("role"),
                profile_image=data.get("profile_image"),
            )
        except UserNotFound as exc:
            raise Http404(str(exc))
        except IdentityOperationFailed as exc:
            return Response({"non_field_errors": [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)
        return Response(UserSerializer(user).data)

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):  # type: ignore
        try:
            delete_user(AuthContext.from_user(request.user), pk)
        except UserNotFound as exc:
            raise Http404(str(exc))
        except IdentityOperationFailed as exc:
            return Response({"non_field_errors": [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="lockout")
    def lockout(self, request, pk=None):  # type: ignore
        try:
            user = toggle_lockout(AuthContext.from_user(request.user), pk)
        except UserNotFound as exc:
            raise Http404(str(exc))
        except IdentityOperationFailed as exc:
            return Response({"non_field_errors": [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)
        message = "User locked successfully." if user.is_locked else "User unlocked successfully."
        return Response({"detail": message, "user": UserSerializer(user).data})
