"""Tests for the company area: hotel CRUD and gallery management."""

from __future__ import annotations

import io
import os

from django.conf import settings
from django.contrib.auth.models import Group
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from PIL import Image
from rest_framework import status
from rest_framework.test import APITestCase

from apps.hotels.models import Amenity, Hotel, HotelImage
from apps.users import roles
from apps.users.models import Company, User


def make_image(name: str = "photo.png", image_format: str = "PNG") -> SimpleUploadedFile:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color="blue").save(buffer, format=image_format)
    return SimpleUploadedFile(name, buffer.getvalue(), content_type=f"image/{image_format.lower()}")


class CompanyHotelAPITests(APITestCase):
    def setUp(self) -> None:
        roles.ensure_role_groups()
        self.owner = User.objects.create_user(email="company@example.com", password="CompanyPass123")
        self.owner.groups.add(Group.objects.get(name=roles.COMPANY))
        self.company = Company.objects.create(name="Nile Stays", owner=self.owner)

        other_owner = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.other_company = Company.objects.create(name="Red Sea Resorts", owner=other_owner)
        self.foreign_hotel = Hotel.objects.create(
            name="Hurghada Beach",
            address="Corniche",
            city="Hurghada",
            company=self.other_company,
        )

        self.pool = Amenity.objects.create(name="Pool")
        self.client.force_authenticate(self.owner)
        self.list_url = reverse("company:hotel-list")

    def _create_hotel(self, **extra) -> dict:
        payload = {
            "name": "Cairo Inn",
            "address": "1 Tahrir Square",
            "city": "Cairo",
            "description": "Close to the museum",
            "stars": 4,
        }
        payload.update(extra)
        response = self.client.post(self.list_url, payload, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data

    def test_create_with_cover_image(self) -> None:
        data = self._create_hotel(cover_image=make_image(), amenities=[self.pool.pk])

        hotel = Hotel.objects.get(pk=data["id"])
        self.assertEqual(hotel.company, self.company)
        self.assertTrue(hotel.cover_image.name.startswith(f"hotels/{hotel.pk}/cover/"))
        self.assertTrue(default_storage.exists(hotel.cover_image.name))
        self.assertEqual([a["name"] for a in data["amenities"]], ["Pool"])

    def test_invalid_cover_is_rejected_without_creating_hotel(self) -> None:
        upload = SimpleUploadedFile("cover.png", b"not an image", content_type="image/png")
        response = self.client.post(
            self.list_url,
            {"name": "Broken", "address": "Nowhere", "city": "Cairo", "cover_image": upload},
            format="multipart",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Hotel.objects.filter(name="Broken").exists())

    def test_list_only_own_hotels_with_search_and_page_size(self) -> None:
        for index in range(9):
            Hotel.objects.create(name=f"Hotel {index}", address="Street", city="Aswan", company=self.company)
        Hotel.objects.create(name="Luxor Palace", address="Karnak road", city="Luxor", company=self.company)

        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 10)
        self.assertEqual(len(response.data["results"]), settings.COMPANY_PAGE_SIZE)

        response = self.client.get(self.list_url, {"search": "karnak"})
        self.assertEqual([row["name"] for row in response.data["results"]], ["Luxor Palace"])

        response = self.client.get(self.list_url, {"search": "nile"})
        self.assertEqual(response.data["count"], 10)

    def test_other_company_hotel_is_404(self) -> None:
        url = reverse("company:hotel-detail", args=[self.foreign_hotel.pk])
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Hotel.objects.filter(pk=self.foreign_hotel.pk).exists())

    def test_user_without_company_gets_404(self) -> None:
        lonely = User.objects.create_user(email="lonely@example.com", password="LonelyPass123")
        lonely.groups.add(Group.objects.get(name=roles.COMPANY))
        self.client.force_authenticate(lonely)
        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_404_NOT_FOUND)

    def test_customer_is_forbidden(self) -> None:
        customer = User.objects.create_user(email="customer@example.com", password="CustomerPass123")
        self.client.force_authenticate(customer)
        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_403_FORBIDDEN)

    def test_update_replaces_cover_file(self) -> None:
        data = self._create_hotel(cover_image=make_image())
        hotel = Hotel.objects.get(pk=data["id"])
        old_cover = hotel.cover_image.name

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.patch(
                reverse("company:hotel-detail", args=[hotel.pk]),
                {"name": "Cairo Grand", "cover_image": make_image("new.jpg", "JPEG")},
                format="multipart",
            )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        hotel.refresh_from_db()
        self.assertEqual(hotel.name, "Cairo Grand")
        self.assertTrue(hotel.cover_image.name.endswith(".jpg"))
        self.assertFalse(default_storage.exists(old_cover))

    def test_gallery_upload_list_and_delete_one(self) -> None:
        hotel = Hotel.objects.get(pk=self._create_hotel()["id"])
        images_url = reverse("company:hotel-images", args=[hotel.pk])

        response = self.client.post(
            images_url,
            {"images": [make_image("a.png"), make_image("b.png")]},
            format="multipart",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(HotelImage.objects.filter(hotel=hotel).count(), 2)

        listed = self.client.get(images_url)
        self.assertEqual(len(listed.data), 2)

        image = HotelImage.objects.filter(hotel=hotel).first()
        name = image.image.name
        self.assertTrue(name.startswith(f"hotels/{hotel.pk}/gallery/"))
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.delete(reverse("company:hotel-delete-image", args=[hotel.pk, image.pk]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(HotelImage.objects.filter(pk=image.pk).exists())
        self.assertFalse(default_storage.exists(name))

    def test_clear_gallery_keeps_cover(self) -> None:
        hotel = Hotel.objects.get(pk=self._create_hotel(cover_image=make_image())["id"])
        images_url = reverse("company:hotel-images", args=[hotel.pk])
        self.client.post(images_url, {"images": [make_image("a.png")]}, format="multipart")

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.delete(images_url)

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(HotelImage.objects.filter(hotel=hotel).exists())
        self.assertFalse(os.path.exists(default_storage.path(f"hotels/{hotel.pk}/gallery")))
        self.assertTrue(default_storage.exists(hotel.cover_image.name))

    def test_delete_hotel_removes_folder_and_records(self) -> None:
        hotel = Hotel.objects.get(pk=self._create_hotel(cover_image=make_image())["id"])
        self.client.post(
            reverse("company:hotel-images", args=[hotel.pk]),
            {"images": [make_image("a.png")]},
            format="multipart",
        )

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.delete(reverse("company:hotel-detail", args=[hotel.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Hotel.objects.filter(pk=hotel.pk).exists())
        self.assertFalse(HotelImage.objects.filter(hotel_id=hotel.pk).exists())
        self.assertFalse(os.path.exists(default_storage.path(f"hotels/{hotel.pk}")))
