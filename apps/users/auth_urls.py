"""URL routing for identity endpoints (namespace: auth)."""

from __future__ import annotations

from django.urls import path  # type: ignore
from rest_framework_simplejwt.views import TokenRefreshView  # type: ignore

from .auth_views import LoginView, ProfileView, RegisterView
from .authentication import LockoutAwareTokenRefreshSerializer

app_name = "auth"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path(
        "token/refresh/",
        TokenRefreshView.as_view(serializer_class=LockoutAwareTokenRefreshSerializer),
        name="token_refresh",
    ),
    path("me/", ProfileView.as_view(), name="me"),
]
