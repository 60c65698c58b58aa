"""JWT authentication that honours account lockout."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework.exceptions import AuthenticationFailed  # type: ignore
from rest_framework_simplejwt.authentication import JWTAuthentication  # type: ignore
from rest_framework_simplejwt.serializers import TokenRefreshSerializer  # type: ignore
from rest_framework_simplejwt.settings import api_settings  # type: ignore
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore


def user_can_authenticate(user) -> bool:
    """Active and not locked out."""
    return user is not None and user.is_active and not user.is_locked


class LockoutAwareJWTAuthentication(JWTAuthentication):
    """Rejects tokens of users locked after the token was issued."""

    def get_user(self, validated_token):  # type: ignore
        user = super().get_user(validated_token)
        if user.is_locked:
            raise AuthenticationFailed("This account is locked.", code="user_locked")
        return user


class LockoutAwareTokenRefreshSerializer(TokenRefreshSerializer):
    def validate(self, attrs):  # type: ignore
        refresh = RefreshToken(attrs["refresh"])
        user_id = refresh.payload.get(api_settings.USER_ID_CLAIM)
        user = get_user_model().objects.filter(**{api_settings.USER_ID_FIELD: user_id}).first()
        if not user_can_authenticate(user):
            raise AuthenticationFailed("This account is locked or inactive.", code="user_locked")
        return super().validate(attrs)
