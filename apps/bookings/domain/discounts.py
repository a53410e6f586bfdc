"""Coupon discount arithmetic."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from .rates import to_decimal

CENT = Decimal('0.01')


class DiscountType(str, Enum):
    PERCENTAGE = 'percentage'
    FIXED_AMOUNT = 'fixed_amount'
    FREE_NIGHTS = 'free_nights'


def compute_discount(discount_type, discount_value, subtotal, nights: int) -> Decimal:
    """
    Discount for ``subtotal``, rounded half-up to cents.

    - percentage: ``subtotal * value / 100``
    - fixed_amount: ``value``, never more than the subtotal
    - free_nights: average nightly price times ``min(value, nights)``
    """
    subtotal = to_decimal(subtotal)
    value = to_decimal(discount_value)
    discount = Decimal('0.00')

    if discount_type == DiscountType.PERCENTAGE:
        discount = subtotal * value / Decimal('100')
    elif discount_type == DiscountType.FIXED_AMOUNT:
        discount = min(value, subtotal)
    elif discount_type == DiscountType.FREE_NIGHTS:
        effective_nights = nights or 1
        nightly = subtotal / effective_nights
        discount = nightly * min(value, Decimal(effective_nights))

    return discount.quantize(CENT, rounding=ROUND_HALF_UP)
