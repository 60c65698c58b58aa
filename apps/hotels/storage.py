"""Hotel image files, kept in one folder per hotel id."""

from __future__ import annotations

from shared.infrastructure.storage import ImageStorage


class HotelImageStorage(ImageStorage):
    """
    Layout::

        hotels/<hotel id>/cover/<file>
        hotels/<hotel id>/gallery/<file>
    """

    @staticmethod
    def hotel_folder(hotel_id: int) -> str:
        return f"hotels/{hotel_id}"

    def save_cover(self, hotel_id: int, upload) -> str:
        return self.save(f"{self.hotel_folder(hotel_id)}/cover", upload)

    def save_gallery_image(self, hotel_id: int, upload) -> str:
        return self.save(f"{self.hotel_folder(hotel_id)}/gallery", upload)

    def delete_gallery(self, hotel_id: int) -> None:
        self.delete_folder(f"{self.hotel_folder(hotel_id)}/gallery")

    def delete_hotel_folder(self, hotel_id: int) -> None:
        self.delete_folder(self.hotel_folder(hotel_id))
