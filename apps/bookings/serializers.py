"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.hotels.models import RoomType

from .models import Coupon, Reservation


class BookingCreateSerializer(serializers.Serializer):
    """A customer's room selection plus the stay details."""

    hotel = serializers.IntegerField(min_value=1)
    room_type = serializers.ChoiceField(choices=RoomType.Category.choices)
    price_per_night = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    meal_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
        default=None,
    )
    room_count = serializers.IntegerField(min_value=1)
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()
    n_adult = serializers.IntegerField(min_value=1)
    n_children = serializers.IntegerField(min_value=0, default=0)
    includes_meal = serializers.BooleanField(default=False)
    coupon_code = serializers.CharField(required=False, allow_blank=True, max_length=50)

    def validate(self, attrs):  # type: ignore
        if attrs["check_out_date"] <= attrs["check_in_date"]:
            raise serializers.ValidationError({"check_out_date": "Check-out date must be after check-in date."})
        return attrs


class CouponSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coupon
        fields = ["code", "discount"]


class ReservationSerializer(serializers.ModelSerializer):
    hotel_name = serializers.CharField(source="hotel.name", read_only=True)
    coupon = CouponSerializer(read_only=True)
    rooms = serializers.SerializerMethodField()
    nights = serializers.IntegerField(read_only=True)

    class Meta:
        model = Reservation
        fields = [
            "id",
            "hotel",
            "hotel_name",
            "coupon",
            "n_adult",
            "n_children",
            "check_in_date",
            "check_out_date",
            "nights",
            "room_count",
            "includes_meal",
            "rooms",
            "total_price",
            "currency",
            "created_at",
        ]
        read_only_fields = fields

    def get_rooms(self, obj) -> list[int]:  # type: ignore
        return [link.room_id for link in obj.reservation_rooms.all()]
