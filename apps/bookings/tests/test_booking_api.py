"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Coupon, Reservation
from apps.hotels.models import Hotel, Room, RoomType
from apps.users.models import Company, User


class BookingAPITests(APITestCase):
    def setUp(self) -> None:
        owner = User.objects.create_user(email="company@example.com", password="CompanyPass123")
        company = Company.objects.create(name="Nile Stays", owner=owner)
        self.hotel = Hotel.objects.create(name="Cairo Inn", address="1 Tahrir", city="Cairo", company=company)
        room_type = RoomType.objects.create(type=RoomType.Category.DOUBLE, price_per_night=Decimal("100"))
        for number in ("101", "102", "103"):
            Room.objects.create(hotel=self.hotel, room_type=room_type, number=number)

        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.client.force_authenticate(self.guest)
        self.list_url = reverse("bookings:booking-list")

    def _payload(self, **extra) -> dict:
        check_in = date.today() + timedelta(days=3)
        payload = {
            "hotel": self.hotel.pk,
            "room_type": "double",
            "price_per_night": "100.00",
            "room_count": 2,
            "check_in_date": str(check_in),
            "check_out_date": str(check_in + timedelta(days=2)),
            "n_adult": 2,
        }
        payload.update(extra)
        return payload

    def test_guest_can_book_and_gets_pay_url(self) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Decimal(response.data["total_price"]), Decimal("200"))
        self.assertEqual(len(response.data["rooms"]), 2)
        reservation = Reservation.objects.get()
        self.assertTrue(
            response.data["pay_url"].endswith(reverse("payments:pay", args=[reservation.pk]))
        )

    def test_not_enough_rooms(self) -> None:
        response = self.client.post(self.list_url, self._payload(room_count=4), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("Not enough rooms", response.data["non_field_errors"][0])
        self.assertFalse(Reservation.objects.exists())

    def test_used_up_coupon(self) -> None:
        Coupon.objects.create(code="SAVE10", discount=Decimal("10"), limit=0)

        response = self.client.post(self.list_url, self._payload(coupon_code="SAVE10"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("coupon", response.data["non_field_errors"][0])

    def test_check_out_must_follow_check_in(self) -> None:
        today = str(date.today() + timedelta(days=3))
        response = self.client.post(
            self.list_url,
            self._payload(check_in_date=today, check_out_date=today),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("check_out_date", response.data)

    def test_unknown_hotel_is_404(self) -> None:
        response = self.client.post(self.list_url, self._payload(hotel=999999), format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_shows_only_own_reservations(self) -> None:
        self.client.post(self.list_url, self._payload(room_count=1), format="json")
        other = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.client.force_authenticate(other)
        self.client.post(self.list_url, self._payload(room_count=1), format="json")

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(Reservation.objects.count(), 2)

    def test_anonymous_cannot_book(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.post(self.list_url, self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
