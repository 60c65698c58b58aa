"""Serializers for the admin-area user management API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users import roles
from apps.users.models import PHONE_VALIDATOR


class AdminUserUpdateSerializer(serializers.Serializer):
    """
    Fields an administrator may change on a user.

    ``role`` replaces every role the user currently holds.
    """

    email = serializers.EmailField()
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])
    city = serializers.CharField(required=False, allow_blank=True, max_length=100)
    role = serializers.ChoiceField(choices=roles.ALL_ROLES)
    profile_image = serializers.ImageField(required=False)
