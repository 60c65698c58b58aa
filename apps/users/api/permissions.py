"""Role-based permission classes shared by the management APIs."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from apps.users import roles


class HasRole(permissions.BasePermission):
    """
    Allow authenticated users holding ``role``.

    Platform superusers pass every role check.
    """

    role: str = ""

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if getattr(user, "is_superuser", False):
            return True
        return user.groups.filter(name=self.role).exists()


class IsAdminRole(HasRole):
    """Administrators manage users."""

    role = roles.ADMIN


class IsCompanyRole(HasRole):
    """Company accounts manage their own hotels."""

    role = roles.COMPANY
