"""URL routing for payments (namespace: payments)."""

from __future__ import annotations

from django.urls import path

from .views import CheckoutCancelView, CheckoutSuccessView, PayReservationView

app_name = "payments"

urlpatterns = [
    path("reservations/<int:reservation_id>/pay/", PayReservationView.as_view(), name="pay"),
    path("success/", CheckoutSuccessView.as_view(), name="success"),
    path("cancel/", CheckoutCancelView.as_view(), name="cancel"),
]
