"""Folder-based image storage on top of Django's storage API."""

import logging
import os
import shutil
import uuid

from django.conf import settings
from django.core.files.storage import Storage, default_storage
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class InvalidImage(ValueError):
    """Uploaded file is not an acceptable image."""


class ImageStorage:
    """Saves validated images under a folder and removes whole folders."""

    extensions = {"JPEG": "jpg", "PNG": "png", "WEBP": "webp"}

    def __init__(self, storage: Storage | None = None, max_size: int | None = None):
        self.storage = storage or default_storage
        self.max_size = max_size or getattr(settings, "HOTEL_IMAGE_MAX_SIZE", 5 * 1024 * 1024)

    # ---------- image utils ----------

    def validate(self, file_obj) -> str:
        """Return the image format, or raise InvalidImage."""
        size = getattr(file_obj, "size", None)
        if size is not None and size > self.max_size:
            raise InvalidImage(f"File too large. Maximum {self.max_size / 1024 / 1024:.1f} MB")

        try:
            file_obj.seek(0)
            img = Image.open(file_obj)
            img.verify()
        except (UnidentifiedImageError, OSError) as exc:
            raise InvalidImage(f"Invalid image: {exc}") from exc
        finally:
            file_obj.seek(0)

        if img.format not in self.extensions:
            raise InvalidImage(f"Unsupported format: {img.format}")
        return img.format

    # ---------- Storage API ----------

    def save(self, folder: str, file_obj) -> str:
        """Store ``file_obj`` under ``folder`` with a random name."""
        image_format = self.validate(file_obj)
        name = f"{folder.rstrip('/')}/{uuid.uuid4().hex}.{self.extensions[image_format]}"
        saved = self.storage.save(name, file_obj)
        logger.info(f"Image saved: {saved}")
        return saved

    def delete(self, name: str | None) -> None:
        if name and self.storage.exists(name):
            self.storage.delete(name)
            logger.info(f"Image deleted: {name}")

    def delete_folder(self, folder: str) -> None:
        """Delete every file below ``folder``, then the folder itself."""
        try:
            dirs, files = self.storage.listdir(folder)
        except FileNotFoundError:
            return
        for file_name in files:
            self.storage.delete(f"{folder}/{file_name}")
        for dir_name in dirs:
            self.delete_folder(f"{folder}/{dir_name}")

        try:
            path = self.storage.path(folder)
        except NotImplementedError:
            path = None
        if path and os.path.isdir(path):
            shutil.rmtree(path, ignore_errors=True)
        logger.info(f"Image folder deleted: {folder}")
