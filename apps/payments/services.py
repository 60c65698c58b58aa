"""
Stripe hosted checkout.

A checkout session is opened for one of the caller's reservations and the
customer is sent to the gateway's page. Nothing is stored on our side and
the success callback does not change the reservation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import stripe
from django.conf import settings

from apps.bookings.models import Reservation
from apps.bookings.repositories import ReservationRepository
from shared.application.auth import AuthContext
from shared.domain.value_objects import Money

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    """Base class for payment failures."""


class ReservationNotFound(PaymentError):
    pass


class PaymentGatewayError(PaymentError):
    """The gateway refused or could not be reached."""


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str


def line_item(reservation: Reservation, currency: str) -> dict:
    """One checkout line per reservation, priced in minor units."""
    amount = Money(reservation.total_price, currency)
    return {
        "price_data": {
            "currency": currency.lower(),
            "product_data": {"name": f"Hotel: {reservation.hotel.name}, Rooms: {reservation.room_count}"},
            "unit_amount": amount.minor_units(),
        },
        "quantity": 1,
    }


def create_checkout_session(
    auth: AuthContext,
    reservation_id: int,
    success_url: str,
    cancel_url: str,
) -> CheckoutSession:
    """
    Open a hosted checkout session for the caller's reservation.

    Raises ``ReservationNotFound`` when the reservation does not exist or
    belongs to someone else, ``PaymentGatewayError`` when Stripe fails.
    """
    reservations = ReservationRepository().for_customer(auth.user_id, reservation_id) if auth.is_authenticated else []
    if not reservations:
        raise ReservationNotFound(f"Reservation {reservation_id} not found")

    currency = settings.PAYMENT_CURRENCY
    try:
        session = stripe.checkout.Session.create(
            api_key=settings.STRIPE_SECRET_KEY,
            mode="payment",
            payment_method_types=["card"],
            line_items=[line_item(reservation, currency) for reservation in reservations],
            success_url=success_url,
            cancel_url=cancel_url,
            client_reference_id=str(reservation_id),
        )
    except stripe.StripeError as exc:
        logger.error(f"Checkout session failed for reservation {reservation_id}: {exc}")
        raise PaymentGatewayError(str(exc)) from exc

    logger.info(f"Checkout session {session.id} created for reservation {reservation_id}")
    return CheckoutSession(id=session.id, url=session.url)
