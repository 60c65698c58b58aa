"""URL routing for the public hotel catalogue (namespace: hotels)."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import HotelViewSet

app_name = "hotels"

router = SimpleRouter()
router.register(r"", HotelViewSet, basename="hotel")

urlpatterns = [
    path("", include(router.urls)),
]
