"""Repositories for hotels, their images, rooms and room types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore

from shared.infrastructure.repository import ChangeSet, Repository

from .models import Hotel, HotelImage, Room, RoomType
from .storage import HotelImageStorage


@dataclass(frozen=True)
class RoomSelection:
    """The room a customer picked: hotel, category and the prices shown."""

    hotel_id: int
    room_type: str
    price_per_night: Decimal
    meal_price: Optional[Decimal] = None

    def matching(self) -> Q:
        where = Q(
            hotel_id=self.hotel_id,
            room_type__type=self.room_type,
            room_type__price_per_night=self.price_per_night,
        )
        if self.meal_price is None:
            return where & Q(room_type__meal_price__isnull=True)
        return where & Q(room_type__meal_price=self.meal_price)


class HotelRepository(Repository[Hotel]):
    model = Hotel

    def __init__(self, changes: ChangeSet | None = None, storage: HotelImageStorage | None = None) -> None:
        super().__init__(changes)
        self.storage = storage or HotelImageStorage()

    def for_company(self, company, search: str | None = None):
        """Hotels of ``company``, optionally narrowed by name, address, city or company name."""
        qs = self.queryset({"company": company}, include=("company",), tracked=False)
        if search:
            search = search.strip()
            qs = qs.filter(
                Q(name__icontains=search)
                | Q(address__icontains=search)
                | Q(city__icontains=search)
                | Q(company__name__icontains=search)
            )
        return qs.order_by("id")

    def create_with_image(self, hotel: Hotel, upload=None) -> Hotel:
        """
        Save a new hotel and store its cover image.

        The hotel row is written first: the cover lives in a folder named
        after the hotel id.
        """
        if upload is not None:
            self.storage.validate(upload)
        self.create(hotel)
        self.commit()
        if upload is not None:
            hotel.cover_image.name = self.storage.save_cover(hotel.pk, upload)
            self.update(hotel)
        return hotel

    def update_with_image(self, hotel: Hotel, upload=None) -> Hotel:
        """Stage changes to ``hotel``; a new cover replaces the old file."""
        if upload is not None:
            old_name = hotel.cover_image.name if hotel.cover_image else None
            hotel.cover_image.name = self.storage.save_cover(hotel.pk, upload)
            transaction.on_commit(lambda: self.storage.delete(old_name))
        return self.update(hotel)

    def delete_with_image(self, hotel: Hotel) -> None:
        """Delete the hotel with its image records; files go once the transaction commits."""
        hotel_id = hotel.pk
        cover_name = hotel.cover_image.name if hotel.cover_image else None
        self.delete(hotel)

        def remove_files() -> None:
            self.storage.delete(cover_name)
            self.storage.delete_hotel_folder(hotel_id)

        transaction.on_commit(remove_files)


class HotelImageRepository(Repository[HotelImage]):
    model = HotelImage

    def __init__(self, changes: ChangeSet | None = None, storage: HotelImageStorage | None = None) -> None:
        super().__init__(changes)
        self.storage = storage or HotelImageStorage()

    def for_hotel(self, hotel_id: int) -> list[HotelImage]:
        return self.get({"hotel_id": hotel_id}, tracked=False)

    def create_images(self, hotel: Hotel, uploads: Iterable) -> list[HotelImage]:
        """Store every upload in the hotel's gallery, all or none."""
        uploads = list(uploads)
        for upload in uploads:
            self.storage.validate(upload)
        images = []
        for upload in uploads:
            name = self.storage.save_gallery_image(hotel.pk, upload)
            images.append(self.create(HotelImage(hotel=hotel, image=name)))
        return images

    def delete_image(self, image: HotelImage) -> None:
        name = image.image.name
        self.delete(image)
        transaction.on_commit(lambda: self.storage.delete(name))

    def delete_hotel_folder(self, hotel: Hotel) -> int:
        """Drop every gallery record and file of ``hotel``; the cover stays."""
        images = self.get({"hotel_id": hotel.pk})
        for image in images:
            self.delete(image)
        hotel_id = hotel.pk
        transaction.on_commit(lambda: self.storage.delete_gallery(hotel_id))
        return len(images)


class RoomTypeRepository(Repository[RoomType]):
    model = RoomType


class RoomRepository(Repository[Room]):
    model = Room

    def by_type(self, hotel_id: int, room_type: str) -> list[Room]:
        """Rooms of one category in a hotel, whatever their availability."""
        return self.get(
            {"hotel_id": hotel_id, "room_type__type": room_type},
            include=("room_type",),
            tracked=False,
        )

    def available_matching(self, selection: RoomSelection, lock: bool = False):
        """
        Available rooms matching ``selection``, oldest first.

        With ``lock`` inside an atomic block the rows stay locked until the
        transaction ends, so two bookings cannot take the same room.
        """
        where = selection.matching() & Q(is_available=True)
        return self.queryset(where, include=("room_type",), tracked=lock).order_by("pk")
