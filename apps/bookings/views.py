"""API views for the booking domain."""

from __future__ import annotations

from django.http import Http404  # type: ignore
from django.urls import reverse  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.hotels.repositories import RoomSelection
from shared.application.auth import AuthContext

from .repositories import ReservationRepository
from .serializers import BookingCreateSerializer, ReservationSerializer
from .services import (
    BookingError,
    BookingRequest,
    HotelNotFound,
    create_booking,
)


class BookingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    The caller's reservations.

    Endpoints:
    - GET /api/v1/bookings/ - own reservations
    - GET /api/v1/bookings/{id}/ - one reservation with its rooms
    - POST /api/v1/bookings/ - book rooms; the response carries ``pay_url``
    """

    serializer_class = ReservationSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        return ReservationRepository().queryset(
            {"user_id": self.request.user.pk},
            include=("hotel", "coupon", "reservation_rooms"),
            tracked=False,
        )

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking_request = BookingRequest(
            selection=RoomSelection(
                hotel_id=data["hotel"],
                room_type=data["room_type"],
                price_per_night=data["price_per_night"],
                meal_price=data.get("meal_price"),
            ),
            room_count=data["room_count"],
            check_in_date=data["check_in_date"],
            check_out_date=data["check_out_date"],
            n_adult=data["n_adult"],
            n_children=data["n_children"],
            includes_meal=data["includes_meal"],
            coupon_code=data.get("coupon_code") or None,
        )
        try:
            reservation = create_booking(AuthContext.from_user(request.user), booking_request)
        except HotelNotFound as exc:
            raise Http404(str(exc))
        except BookingError as exc:
            return Response({"non_field_errors": [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)

        reservation = self.get_queryset().get(pk=reservation.pk)
        payload = dict(ReservationSerializer(reservation).data)
        payload["pay_url"] = request.build_absolute_uri(reverse("payments:pay", args=[reservation.pk]))
        return Response(payload, status=status.HTTP_201_CREATED)
