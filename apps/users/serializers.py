"""Serializers for user-related API endpoints."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR, Company

User = get_user_model()


class CompanyShortSerializer(serializers.ModelSerializer):
    """Short company info embedded in user responses."""

    class Meta:
        model = Company
        fields = ["id", "name", "email", "phone"]


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer."""

    roles = serializers.SerializerMethodField()
    company = CompanyShortSerializer(read_only=True)
    is_locked = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "first_name",
            "last_name",
            "phone",
            "city",
            "profile_image",
            "roles",
            "company",
            "is_locked",
            "locked_until",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_roles(self, obj) -> list[str]:  # type: ignore
        return [group.name for group in obj.groups.all()]


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    password_confirm = serializers.CharField(min_length=8, write_only=True)
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])
    city = serializers.CharField(required=False, allow_blank=True, max_length=100)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs.get("password") != attrs.get("password_confirm"):
            raise serializers.ValidationError({"password_confirm": "Passwords do not match."})
        if User.objects.filter(email__iexact=attrs["email"]).exists():
            raise serializers.ValidationError({"email": "A user with this email already exists."})
        return attrs


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs["email"])
        except User.DoesNotExist:
            raise serializers.ValidationError({"email": "Invalid email or password."})

        if user.is_locked:
            raise serializers.ValidationError({"non_field_errors": ["This account is locked."]})

        if not user.is_active or not user.check_password(attrs["password"]):
            raise serializers.ValidationError({"email": "Invalid email or password."})

        attrs["user"] = user
        return attrs


class ProfileSerializer(serializers.Serializer):
    """Self-service profile update."""

    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])
    city = serializers.CharField(required=False, max_length=100)
    profile_image = serializers.ImageField(required=False)
