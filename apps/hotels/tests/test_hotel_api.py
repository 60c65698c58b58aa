"""Tests for the public hotel catalogue."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.hotels.models import Amenity, Hotel, Room, RoomType
from apps.users.models import Company, User


class HotelAPITests(APITestCase):
    def setUp(self) -> None:
        owner = User.objects.create_user(email="company@example.com", password="CompanyPass123")
        company = Company.objects.create(name="Nile Stays", owner=owner)
        self.hotel = Hotel.objects.create(
            name="Cairo Inn",
            address="1 Tahrir Square",
            city="Cairo",
            stars=4,
            company=company,
        )
        Hotel.objects.create(name="Alex Bay", address="Corniche", city="Alexandria", company=company)
        self.hotel.amenities.add(Amenity.objects.create(name="Pool"))

        self.double = RoomType.objects.create(type=RoomType.Category.DOUBLE, price_per_night=Decimal("100"))
        self.double_meal = RoomType.objects.create(
            type=RoomType.Category.DOUBLE,
            price_per_night=Decimal("100"),
            meal_price=Decimal("25"),
        )
        self.suite = RoomType.objects.create(type=RoomType.Category.SUITE, price_per_night=Decimal("300"))
        Room.objects.create(hotel=self.hotel, room_type=self.double, number="101")
        Room.objects.create(hotel=self.hotel, room_type=self.double, number="102", is_available=False)
        Room.objects.create(hotel=self.hotel, room_type=self.double_meal, number="103")
        Room.objects.create(hotel=self.hotel, room_type=self.suite, number="201")

    def test_list_and_search(self) -> None:
        response = self.client.get(reverse("hotels:hotel-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)

        response = self.client.get(reverse("hotels:hotel-list"), {"search": "alex"})
        self.assertEqual([row["name"] for row in response.data["results"]], ["Alex Bay"])

    def test_detail_includes_amenities_and_rooms(self) -> None:
        response = self.client.get(reverse("hotels:hotel-detail", args=[self.hotel.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["company_name"], "Nile Stays")
        self.assertEqual([a["name"] for a in response.data["amenities"]], ["Pool"])
        self.assertEqual(len(response.data["rooms"]), 4)

    def test_rooms_by_type_ignore_availability(self) -> None:
        response = self.client.get(reverse("hotels:hotel-rooms", args=[self.hotel.pk]), {"room_type": "double"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(sorted(room["number"] for room in response.data), ["101", "102", "103"])

    def test_rooms_requires_known_type(self) -> None:
        response = self.client.get(reverse("hotels:hotel-rooms", args=[self.hotel.pk]), {"room_type": "penthouse"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_availability_matches_meal_price(self) -> None:
        url = reverse("hotels:hotel-availability", args=[self.hotel.pk])

        without_meal = self.client.get(url, {"room_type": "double", "price_per_night": "100.00"})
        self.assertEqual(without_meal.status_code, status.HTTP_200_OK, without_meal.data)
        self.assertEqual(without_meal.data["available_rooms"], 1)

        with_meal = self.client.get(url, {"room_type": "double", "price_per_night": "100", "meal_price": "25"})
        self.assertEqual(with_meal.data["available_rooms"], 1)

        wrong_price = self.client.get(url, {"room_type": "double", "price_per_night": "90"})
        self.assertEqual(wrong_price.data["available_rooms"], 0)

    def test_unknown_hotel_is_404(self) -> None:
        response = self.client.get(reverse("hotels:hotel-detail", args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
