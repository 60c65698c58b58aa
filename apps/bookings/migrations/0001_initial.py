import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hotels", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Coupon",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=50, unique=True)),
                ("limit", models.PositiveIntegerField(default=0, help_text="Remaining uses.")),
                (
                    "discount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("99")),
                        ],
                    ),
                ),
                ("expire_date", models.DateField(blank=True, null=True)),
            ],
            options={
                "verbose_name": "Coupon",
                "verbose_name_plural": "Coupons",
                "ordering": ["code"],
            },
        ),
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("n_adult", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("n_children", models.PositiveSmallIntegerField(default=0)),
                ("check_in_date", models.DateField()),
                ("check_out_date", models.DateField()),
                (
                    "room_count",
                    models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("includes_meal", models.BooleanField(default=False)),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("currency", models.CharField(default="EGP", max_length=3)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "coupon",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="reservations",
                        to="bookings.coupon",
                    ),
                ),
                (
                    "hotel",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reservations",
                        to="hotels.hotel",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reservations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Reservation",
                "verbose_name_plural": "Reservations",
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        check=models.Q(("check_out_date__gt", models.F("check_in_date"))),
                        name="reservation_valid_dates",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="ReservationRoom",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "reservation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reservation_rooms",
                        to="bookings.reservation",
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reservation_rooms",
                        to="hotels.room",
                    ),
                ),
            ],
            options={
                "verbose_name": "Reserved room",
                "verbose_name_plural": "Reserved rooms",
                "constraints": [
                    models.UniqueConstraint(fields=("reservation", "room"), name="unique_reservation_room")
                ],
            },
        ),
    ]
