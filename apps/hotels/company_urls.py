"""URL routing for the company area (namespace: company)."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import CompanyHotelViewSet

app_name = "company"

router = DefaultRouter()
router.register(r"hotels", CompanyHotelViewSet, basename="hotel")

urlpatterns = [
    path("", include(router.urls)),
]
