"""Admin registrations for the booking domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Coupon, Reservation, ReservationRoom


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = ("code", "discount", "limit", "expire_date")
    search_fields = ("code",)


class ReservationRoomInline(admin.TabularInline):
    model = ReservationRoom
    extra = 0
    raw_id_fields = ("room",)


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "hotel",
        "check_in_date",
        "check_out_date",
        "room_count",
        "total_price",
        "currency",
        "created_at",
    )
    list_filter = ("includes_meal", "check_in_date")
    search_fields = ("user__email", "hotel__name", "coupon__code")
    inlines = (ReservationRoomInline,)
    readonly_fields = ("created_at",)
