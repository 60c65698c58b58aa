"""Hotel domain models.

A hotel belongs to one company and carries a cover image, a gallery of
images, a set of amenities and its rooms. Each room points at a room type,
which holds the category and the prices a customer books against.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Amenity(models.Model):
    """Facility a hotel offers (pool, parking, wi-fi...)."""

    name = models.CharField(max_length=100, unique=True)

    class Meta:
        verbose_name = _("Amenity")
        verbose_name_plural = _("Amenities")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Hotel(models.Model):
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    stars = models.PositiveSmallIntegerField(
        default=3,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    cover_image = models.ImageField(upload_to="hotels/", blank=True, null=True)
    company = models.ForeignKey(
        "users.Company",
        on_delete=models.CASCADE,
        related_name="hotels",
    )
    amenities = models.ManyToManyField(Amenity, related_name="hotels", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Hotel")
        verbose_name_plural = _("Hotels")
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class HotelImage(models.Model):
    """Gallery image of a hotel."""

    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name="images")
    image = models.ImageField(upload_to="hotels/")
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Hotel image")
        verbose_name_plural = _("Hotel images")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.hotel_id}: {self.image.name}"


class RoomType(models.Model):
    """Room category with its nightly price and optional meal price."""

    class Category(models.TextChoices):
        SINGLE = "single", _("Single")
        DOUBLE = "double", _("Double")
        TRIPLE = "triple", _("Triple")
        SUITE = "suite", _("Suite")
        FAMILY = "family", _("Family")

    type = models.CharField(max_length=20, choices=Category.choices)
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    meal_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Empty when the room type has no meal plan."),
    )

    class Meta:
        verbose_name = _("Room type")
        verbose_name_plural = _("Room types")
        ordering = ["type", "price_per_night"]

    def __str__(self) -> str:
        return f"{self.get_type_display()} ({self.price_per_night})"


class Room(models.Model):
    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name="rooms")
    room_type = models.ForeignKey(RoomType, on_delete=models.PROTECT, related_name="rooms")
    number = models.CharField(max_length=20, blank=True)
    is_available = models.BooleanField(default=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.hotel} #{self.number or self.pk}"
