"""Tests for the hosted checkout bridge."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from unittest import mock

import stripe
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Reservation
from apps.hotels.models import Hotel
from apps.payments.services import ReservationNotFound, create_checkout_session
from apps.users.models import Company, User
from shared.application.auth import AuthContext


class CheckoutTests(APITestCase):
    def setUp(self) -> None:
        owner = User.objects.create_user(email="company@example.com", password="CompanyPass123")
        company = Company.objects.create(name="Nile Stays", owner=owner)
        self.hotel = Hotel.objects.create(name="Cairo Inn", address="1 Tahrir", city="Cairo", company=company)
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        check_in = date.today() + timedelta(days=3)
        self.reservation = Reservation.objects.create(
            user=self.guest,
            hotel=self.hotel,
            n_adult=2,
            check_in_date=check_in,
            check_out_date=check_in + timedelta(days=2),
            room_count=2,
            total_price=Decimal("199.50"),
        )
        self.client.force_authenticate(self.guest)
        self.pay_url = reverse("payments:pay", args=[self.reservation.pk])

    @mock.patch("apps.payments.services.stripe.checkout.Session.create")
    def test_pay_redirects_to_checkout(self, create) -> None:
        create.return_value = mock.Mock(id="cs_test_1", url="https://checkout.stripe.test/cs_test_1")

        response = self.client.get(self.pay_url)

        self.assertEqual(response.status_code, status.HTTP_303_SEE_OTHER)
        self.assertEqual(response["Location"], "https://checkout.stripe.test/cs_test_1")

        kwargs = create.call_args.kwargs
        self.assertEqual(kwargs["mode"], "payment")
        self.assertEqual(kwargs["payment_method_types"], ["card"])
        self.assertEqual(kwargs["api_key"], "sk_test_dummy")
        self.assertTrue(kwargs["success_url"].endswith(reverse("payments:success")))
        self.assertTrue(kwargs["cancel_url"].endswith(reverse("payments:cancel")))
        self.assertEqual(
            kwargs["line_items"],
            [
                {
                    "price_data": {
                        "currency": "egp",
                        "product_data": {"name": "Hotel: Cairo Inn, Rooms: 2"},
                        "unit_amount": 19950,
                    },
                    "quantity": 1,
                }
            ],
        )

    @mock.patch("apps.payments.services.stripe.checkout.Session.create")
    def test_other_customers_reservation_is_404(self, create) -> None:
        other = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.client.force_authenticate(other)

        response = self.client.get(self.pay_url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        create.assert_not_called()

    @mock.patch("apps.payments.services.stripe.checkout.Session.create")
    def test_gateway_error_is_502(self, create) -> None:
        create.side_effect = stripe.APIConnectionError("network down")

        response = self.client.get(self.pay_url)

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertIn("network down", response.data["detail"])

    def test_missing_reservation_raises(self) -> None:
        with self.assertRaises(ReservationNotFound):
            create_checkout_session(AuthContext.from_user(self.guest), 999999, "http://s", "http://c")

    def test_success_and_cancel_do_not_touch_reservation(self) -> None:
        success = self.client.get(reverse("payments:success"))
        cancel = self.client.get(reverse("payments:cancel"))

        self.assertEqual(success.status_code, status.HTTP_200_OK)
        self.assertEqual(cancel.status_code, status.HTTP_200_OK)
        self.reservation.refresh_from_db()
        self.assertEqual(self.reservation.total_price, Decimal("199.50"))
