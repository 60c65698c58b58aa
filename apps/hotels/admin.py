"""Admin registrations for the hotels domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Amenity, Hotel, HotelImage, Room, RoomType


@admin.register(Amenity)
class AmenityAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)


class HotelImageInline(admin.TabularInline):
    model = HotelImage
    extra = 0
    fields = ("image", "uploaded_at")
    readonly_fields = ("uploaded_at",)


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ("number", "room_type", "is_available")


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "stars", "company", "created_at")
    list_filter = ("city", "stars")
    search_fields = ("name", "address", "city", "company__name")
    inlines = (RoomInline, HotelImageInline)
    filter_horizontal = ("amenities",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(RoomType)
class RoomTypeAdmin(admin.ModelAdmin):
    list_display = ("type", "price_per_night", "meal_price")
    list_filter = ("type",)


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("hotel", "number", "room_type", "is_available")
    list_filter = ("is_available", "room_type__type")
    search_fields = ("hotel__name", "number")
