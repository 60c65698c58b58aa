"""Domain services for the booking workflow.

A booking takes ``room_count`` free rooms matching the customer's
selection (hotel, category, nightly price, meal price), prices them,
applies an optional coupon and records the reservation. Everything from
the availability check to the last room flip happens in one transaction
with the matching rooms and the coupon row locked, so concurrent bookings
cannot take the same room or spend the same coupon use twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from django.conf import settings  # type: ignore
from django.core.exceptions import PermissionDenied  # type: ignore

from apps.hotels.models import Room, RoomType
from apps.hotels.repositories import HotelRepository, RoomRepository, RoomSelection, RoomTypeRepository
from shared.application.auth import AuthContext
from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import DateRange, Money

from .models import Coupon, Reservation, ReservationRoom
from .repositories import CouponRepository, ReservationRepository, ReservationRoomRepository

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Base class for rejected bookings."""


class HotelNotFound(BookingError):
    pass


class InsufficientAvailability(BookingError):
    """Fewer free rooms match the selection than were requested."""


class InvalidCoupon(BookingError):
    """Unknown, used up or expired coupon code."""


class InvalidBookingRequest(BookingError):
    pass


@dataclass(frozen=True)
class BookingRequest:
    selection: RoomSelection
    room_count: int
    check_in_date: date
    check_out_date: date
    n_adult: int
    n_children: int = 0
    includes_meal: bool = False
    coupon_code: Optional[str] = None

    def validate(self) -> DateRange:
        if self.room_count < 1:
            raise InvalidBookingRequest("At least one room must be booked.")
        if self.n_adult < 1:
            raise InvalidBookingRequest("At least one adult is required.")
        if self.n_children < 0:
            raise InvalidBookingRequest("Number of children cannot be negative.")
        try:
            return DateRange(self.check_in_date, self.check_out_date)
        except ValueError as exc:
            raise InvalidBookingRequest("Check-out date must be after check-in date.") from exc


class BookingUnitOfWork(DjangoUnitOfWork):
    repositories = {
        "hotels": HotelRepository,
        "rooms": RoomRepository,
        "room_types": RoomTypeRepository,
        "reservations": ReservationRepository,
        "reservation_rooms": ReservationRoomRepository,
        "coupons": CouponRepository,
    }


def _currency() -> str:
    return getattr(settings, "PAYMENT_CURRENCY", "egp").upper()


def list_rooms_by_type(hotel_id: int, room_type: str) -> list[Room]:
    """Rooms of one category in a hotel, available or not."""
    return RoomRepository().by_type(hotel_id, room_type)


def count_available_rooms(selection: RoomSelection) -> int:
    """Free rooms matching category, nightly price and meal price."""
    return RoomRepository().available_matching(selection).count()


def quote_total(room_type: RoomType, room_count: int, includes_meal: bool) -> Money:
    """Price of ``room_count`` rooms of ``room_type``, meals included on request."""
    total = Money(room_type.price_per_night, _currency()) * room_count
    if includes_meal and room_type.meal_price is not None:
        total = total + Money(room_type.meal_price, _currency()) * room_count
    return total


def apply_coupon(total: Money, coupon: Coupon) -> Money:
    """Subtract the coupon's flat discount; the total never drops below zero."""
    discount = Money(coupon.discount, total.currency)
    if discount >= total:
        return Money.zero(total.currency)
    return total - discount


def create_booking(auth: AuthContext, request: BookingRequest) -> Reservation:
    """
    Reserve rooms for the calling customer.

    Raises ``HotelNotFound``, ``InsufficientAvailability``, ``InvalidCoupon``
    or ``InvalidBookingRequest``; nothing is written when any of them is
    raised.
    """
    if not auth.is_authenticated:
        raise PermissionDenied("Sign in to book a room.")
    request.validate()
    selection = request.selection

    with BookingUnitOfWork() as uow:
        hotel = uow.hotels.get_one({"pk": selection.hotel_id}, tracked=False)
        if hotel is None:
            raise HotelNotFound(f"Hotel {selection.hotel_id} not found")

        rooms = list(uow.rooms.available_matching(selection, lock=True))
        if len(rooms) < request.room_count:
            logger.warning(
                f"Booking rejected for user {auth.user_id}: {len(rooms)} room(s) free, "
                f"{request.room_count} requested in hotel {hotel.pk}"
            )
            raise InsufficientAvailability("Not enough rooms are available. Please adjust your selection.")

        total = quote_total(rooms[0].room_type, request.room_count, request.includes_meal)

        coupon = None
        if request.coupon_code:
            coupon = uow.coupons.by_code(request.coupon_code, lock=True)
            if coupon is None or not coupon.is_usable():
                logger.warning(f"Booking rejected for user {auth.user_id}: invalid coupon {request.coupon_code}")
                raise InvalidCoupon("Invalid or expired coupon.")
            total = apply_coupon(total, coupon)
            coupon.limit -= 1
            uow.coupons.update(coupon)

        reservation = uow.reservations.create(
            Reservation(
                user_id=auth.user_id,
                hotel=hotel,
                coupon=coupon,
                n_adult=request.n_adult,
                n_children=request.n_children,
                check_in_date=request.check_in_date,
                check_out_date=request.check_out_date,
                room_count=request.room_count,
                includes_meal=request.includes_meal,
                total_price=total.amount,
                currency=total.currency,
            )
        )
        for room in rooms[: request.room_count]:
            room.is_available = False
            uow.rooms.update(room)
            uow.reservation_rooms.create(ReservationRoom(reservation=reservation, room=room))

        uow.on_commit(
            lambda: logger.info(
                f"reservation_created: {reservation.pk} user={auth.user_id} hotel={hotel.pk} "
                f"rooms={request.room_count} total={total}"
            )
        )

    return reservation
