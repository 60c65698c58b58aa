"""Repositories for reservations, their rooms and coupons."""

from __future__ import annotations

from shared.infrastructure.repository import Repository

from .models import Coupon, Reservation, ReservationRoom


class ReservationRepository(Repository[Reservation]):
    model = Reservation

    def for_customer(self, user_id: int, reservation_id=None) -> list[Reservation]:
        """The customer's reservations with hotel and rooms, or just one of them."""
        where = {"user_id": user_id}
        if reservation_id is not None:
            where["pk"] = reservation_id
        return self.get(where, include=("hotel", "reservation_rooms__room"), tracked=False)


class ReservationRoomRepository(Repository[ReservationRoom]):
    model = ReservationRoom


class CouponRepository(Repository[Coupon]):
    model = Coupon

    def by_code(self, code: str, lock: bool = False) -> Coupon | None:
        return self.get_one({"code": code}, tracked=lock)
