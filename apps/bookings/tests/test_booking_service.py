"""Tests for the booking workflow."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from unittest import mock

from django.core.exceptions import PermissionDenied
from django.test import TestCase

from apps.bookings.models import Coupon, Reservation, ReservationRoom
from apps.bookings.services import (
    BookingRequest,
    HotelNotFound,
    InsufficientAvailability,
    InvalidBookingRequest,
    InvalidCoupon,
    RoomSelection,
    count_available_rooms,
    create_booking,
    list_rooms_by_type,
)
from apps.hotels.models import Hotel, Room, RoomType
from apps.users.models import Company, User
from shared.application.auth import AuthContext


class BookingServiceTests(TestCase):
    def setUp(self) -> None:
        owner = User.objects.create_user(email="company@example.com", password="CompanyPass123")
        company = Company.objects.create(name="Nile Stays", owner=owner)
        self.hotel = Hotel.objects.create(name="Cairo Inn", address="1 Tahrir", city="Cairo", company=company)
        self.customer = User.objects.create_user(email="customer@example.com", password="CustomerPass123")
        self.auth = AuthContext.from_user(self.customer)

        self.double = RoomType.objects.create(type=RoomType.Category.DOUBLE, price_per_night=Decimal("100"))
        self.rooms = [
            Room.objects.create(hotel=self.hotel, room_type=self.double, number=str(101 + index))
            for index in range(3)
        ]
        self.selection = RoomSelection(hotel_id=self.hotel.pk, room_type="double", price_per_night=Decimal("100"))
        self.check_in = date.today() + timedelta(days=7)

    def _request(self, room_count: int = 1, **extra) -> BookingRequest:
        values = {
            "selection": self.selection,
            "room_count": room_count,
            "check_in_date": self.check_in,
            "check_out_date": self.check_in + timedelta(days=2),
            "n_adult": 2,
        }
        values.update(extra)
        return BookingRequest(**values)

    def test_booking_two_of_three_rooms(self) -> None:
        reservation = create_booking(self.auth, self._request(room_count=2))

        self.assertEqual(reservation.total_price, Decimal("200"))
        self.assertEqual(reservation.room_count, 2)
        self.assertEqual(reservation.user, self.customer)
        self.assertEqual(Room.objects.filter(hotel=self.hotel, is_available=False).count(), 2)
        self.assertEqual(count_available_rooms(self.selection), 1)
        booked = set(ReservationRoom.objects.filter(reservation=reservation).values_list("room_id", flat=True))
        self.assertEqual(booked, {self.rooms[0].pk, self.rooms[1].pk})

    def test_rooms_flipped_equals_room_count(self) -> None:
        for room_count in (1, 2):
            reservation = create_booking(self.auth, self._request(room_count=room_count))
            self.assertEqual(reservation.reservation_rooms.count(), room_count)
        self.assertEqual(Room.objects.filter(is_available=False).count(), 3)

    def test_not_enough_rooms_changes_nothing(self) -> None:
        with self.assertRaises(InsufficientAvailability):
            create_booking(self.auth, self._request(room_count=4))

        self.assertFalse(Reservation.objects.exists())
        self.assertEqual(count_available_rooms(self.selection), 3)

    def test_meal_price_is_added_per_room(self) -> None:
        with_meal = RoomType.objects.create(
            type=RoomType.Category.DOUBLE,
            price_per_night=Decimal("100"),
            meal_price=Decimal("30"),
        )
        Room.objects.create(hotel=self.hotel, room_type=with_meal, number="301")
        Room.objects.create(hotel=self.hotel, room_type=with_meal, number="302")
        selection = RoomSelection(
            hotel_id=self.hotel.pk,
            room_type="double",
            price_per_night=Decimal("100"),
            meal_price=Decimal("30"),
        )

        with_meals = create_booking(self.auth, self._request(selection=selection, includes_meal=True))
        without_meals = create_booking(self.auth, self._request(selection=selection, includes_meal=False))

        self.assertEqual(with_meals.total_price, Decimal("130"))
        self.assertEqual(without_meals.total_price, Decimal("100"))

    def test_selection_without_meal_price_only_counts_rooms_without_meal_plan(self) -> None:
        with_meal = RoomType.objects.create(
            type=RoomType.Category.DOUBLE,
            price_per_night=Decimal("100"),
            meal_price=Decimal("30"),
        )
        Room.objects.create(hotel=self.hotel, room_type=with_meal, number="301")

        self.assertEqual(count_available_rooms(self.selection), 3)
        self.assertEqual(len(list_rooms_by_type(self.hotel.pk, "double")), 4)

    def test_coupon_is_applied_once(self) -> None:
        coupon = Coupon.objects.create(code="SAVE10", discount=Decimal("10"), limit=1)

        reservation = create_booking(self.auth, self._request(coupon_code="SAVE10"))

        self.assertEqual(reservation.total_price, Decimal("90"))
        self.assertEqual(reservation.coupon, coupon)
        coupon.refresh_from_db()
        self.assertEqual(coupon.limit, 0)

        with self.assertRaises(InvalidCoupon):
            create_booking(self.auth, self._request(coupon_code="SAVE10"))
        self.assertEqual(Reservation.objects.count(), 1)
        self.assertEqual(count_available_rooms(self.selection), 2)

    def test_unknown_or_expired_coupon_writes_nothing(self) -> None:
        Coupon.objects.create(
            code="OLD",
            discount=Decimal("10"),
            limit=5,
            expire_date=date.today() - timedelta(days=1),
        )

        for code in ("NOPE", "OLD"):
            with self.assertRaises(InvalidCoupon):
                create_booking(self.auth, self._request(coupon_code=code))

        self.assertFalse(Reservation.objects.exists())
        self.assertEqual(count_available_rooms(self.selection), 3)
        self.assertEqual(Coupon.objects.get(code="OLD").limit, 5)

    def test_discount_never_makes_total_negative(self) -> None:
        cheap = RoomType.objects.create(type=RoomType.Category.SINGLE, price_per_night=Decimal("5"))
        Room.objects.create(hotel=self.hotel, room_type=cheap, number="1")
        Coupon.objects.create(code="BIG", discount=Decimal("50"), limit=1)
        selection = RoomSelection(hotel_id=self.hotel.pk, room_type="single", price_per_night=Decimal("5"))

        reservation = create_booking(self.auth, self._request(selection=selection, coupon_code="BIG"))

        self.assertEqual(reservation.total_price, Decimal("0"))

    def test_failure_while_linking_rooms_rolls_everything_back(self) -> None:
        Coupon.objects.create(code="SAVE10", discount=Decimal("10"), limit=1)

        with mock.patch.object(ReservationRoom, "save", side_effect=RuntimeError("disk full")):
            with self.assertRaises(RuntimeError):
                create_booking(self.auth, self._request(room_count=2, coupon_code="SAVE10"))

        self.assertFalse(Reservation.objects.exists())
        self.assertEqual(count_available_rooms(self.selection), 3)
        self.assertEqual(Coupon.objects.get(code="SAVE10").limit, 1)

    def test_unknown_hotel(self) -> None:
        selection = RoomSelection(hotel_id=999999, room_type="double", price_per_night=Decimal("100"))
        with self.assertRaises(HotelNotFound):
            create_booking(self.auth, self._request(selection=selection))

    def test_invalid_dates_are_rejected(self) -> None:
        with self.assertRaises(InvalidBookingRequest):
            create_booking(self.auth, self._request(check_out_date=self.check_in))

    def test_anonymous_cannot_book(self) -> None:
        with self.assertRaises(PermissionDenied):
            create_booking(AuthContext.anonymous(), self._request())
