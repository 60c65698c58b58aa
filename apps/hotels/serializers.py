"""Serializers for the hotels domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Amenity, Hotel, HotelImage, Room, RoomType


class AmenitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Amenity
        fields = ["id", "name"]


class HotelImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = HotelImage
        fields = ["id", "image", "uploaded_at"]
        read_only_fields = fields


class RoomTypeSerializer(serializers.ModelSerializer):
    type_display = serializers.CharField(source="get_type_display", read_only=True)

    class Meta:
        model = RoomType
        fields = ["id", "type", "type_display", "price_per_night", "meal_price"]


class RoomSerializer(serializers.ModelSerializer):
    room_type = RoomTypeSerializer(read_only=True)

    class Meta:
        model = Room
        fields = ["id", "hotel", "number", "is_available", "room_type"]
        read_only_fields = fields


class HotelListSerializer(serializers.ModelSerializer):
    company_name = serializers.CharField(source="company.name", read_only=True)

    class Meta:
        model = Hotel
        fields = ["id", "name", "address", "city", "stars", "cover_image", "company_name"]
        read_only_fields = fields


class HotelDetailSerializer(serializers.ModelSerializer):
    """Hotel with its amenities, rooms and gallery."""

    company_name = serializers.CharField(source="company.name", read_only=True)
    amenities = AmenitySerializer(many=True, read_only=True)
    rooms = RoomSerializer(many=True, read_only=True)
    images = HotelImageSerializer(many=True, read_only=True)

    class Meta:
        model = Hotel
        fields = [
            "id",
            "name",
            "address",
            "city",
            "description",
            "stars",
            "cover_image",
            "company_name",
            "amenities",
            "rooms",
            "images",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class HotelWriteSerializer(serializers.ModelSerializer):
    """Hotel fields a company may set; the cover is handled by the repository."""

    amenities = serializers.PrimaryKeyRelatedField(
        queryset=Amenity.objects.all(),
        many=True,
        required=False,
    )
    cover_image = serializers.ImageField(required=False, write_only=True)

    class Meta:
        model = Hotel
        fields = ["name", "address", "city", "description", "stars", "amenities", "cover_image"]


class HotelImageUploadSerializer(serializers.Serializer):
    images = serializers.ListField(
        child=serializers.ImageField(),
        allow_empty=False,
    )


class AvailabilityQuerySerializer(serializers.Serializer):
    """Query parameters identifying a room selection."""

    room_type = serializers.ChoiceField(choices=RoomType.Category.choices)
    price_per_night = serializers.DecimalField(max_digits=10, decimal_places=2)
    meal_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)


class RoomTypeQuerySerializer(serializers.Serializer):
    room_type = serializers.ChoiceField(choices=RoomType.Category.choices)
