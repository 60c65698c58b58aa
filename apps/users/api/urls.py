"""URL routing for the admin area (namespace: admin_api)."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AdminUserViewSet

app_name = "admin_api"

router = DefaultRouter()
router.register(r"users", AdminUserViewSet, basename="user")

urlpatterns = [
    path("", include(router.urls)),
]
