"""Payment views: redirect to checkout and the gateway's return pages."""

from __future__ import annotations

import logging

from django.http import Http404, HttpResponseRedirect
from django.urls import reverse
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from shared.application.auth import AuthContext

from .services import PaymentGatewayError, ReservationNotFound, create_checkout_session

logger = logging.getLogger(__name__)


class HttpResponseSeeOther(HttpResponseRedirect):
    status_code = 303


class PayReservationView(APIView):
    """GET /api/v1/payments/reservations/{id}/pay/ - 303 to the hosted checkout page."""

    permission_classes = [IsAuthenticated]

    def get(self, request, reservation_id: int):  # type: ignore
        try:
            session = create_checkout_session(
                AuthContext.from_user(request.user),
                reservation_id,
                success_url=request.build_absolute_uri(reverse("payments:success")),
                cancel_url=request.build_absolute_uri(reverse("payments:cancel")),
            )
        except ReservationNotFound as exc:
            raise Http404(str(exc))
        except PaymentGatewayError as exc:
            return Response({"detail": f"Payment gateway error: {exc}"}, status=status.HTTP_502_BAD_GATEWAY)
        return HttpResponseSeeOther(session.url)


class CheckoutSuccessView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):  # type: ignore
        logger.info(f"Checkout success callback for user {request.user.pk}")
        return Response({"detail": "Payment successful! Your reservations have been confirmed."})


class CheckoutCancelView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):  # type: ignore
        logger.info(f"Checkout cancelled by user {request.user.pk}")
        return Response(
            {"detail": "Your payment was canceled. Please try again if you'd like to complete your booking."}
        )
