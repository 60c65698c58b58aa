"""Booking domain models: reservations, the rooms they hold, coupons."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Coupon(models.Model):
    """Discount code: a flat amount, usable ``limit`` more times."""

    code = models.CharField(max_length=50, unique=True)
    limit = models.PositiveIntegerField(default=0, help_text=_("Remaining uses."))
    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("99"))],
    )
    expire_date = models.DateField(null=True, blank=True)

    class Meta:
        verbose_name = _("Coupon")
        verbose_name_plural = _("Coupons")
        ordering = ["code"]

    def __str__(self) -> str:
        return self.code

    def is_usable(self, today=None) -> bool:
        today = today or timezone.localdate()
        if self.limit <= 0:
            return False
        return self.expire_date is None or self.expire_date >= today


class Reservation(models.Model):
    """A customer's booking of one or more rooms in a hotel."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    coupon = models.ForeignKey(
        Coupon,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reservations",
    )
    n_adult = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    n_children = models.PositiveSmallIntegerField(default=0)
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    room_count = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    includes_meal = models.BooleanField(default=False)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="EGP")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Reservation")
        verbose_name_plural = _("Reservations")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                check=models.Q(check_out_date__gt=models.F("check_in_date")),
                name="reservation_valid_dates",
            ),
        ]

    def __str__(self) -> str:
        return f"Reservation #{self.pk} ({self.hotel_id})"

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days


class ReservationRoom(models.Model):
    """Link between a reservation and one room it took."""

    reservation = models.ForeignKey(
        Reservation,
        on_delete=models.CASCADE,
        related_name="reservation_rooms",
    )
    room = models.ForeignKey(
        "hotels.Room",
        on_delete=models.CASCADE,
        related_name="reservation_rooms",
    )

    class Meta:
        verbose_name = _("Reserved room")
        verbose_name_plural = _("Reserved rooms")
        constraints = [
            models.UniqueConstraint(fields=["reservation", "room"], name="unique_reservation_room"),
        ]

    def __str__(self) -> str:
        return f"{self.reservation_id} -> {self.room_id}"
