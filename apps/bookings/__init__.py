"""Bookings app package.

Reservations of hotel rooms, the room links they hold and discount
coupons. Room allocation, pricing and coupon use live in ``services``.
"""
