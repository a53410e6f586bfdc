"""
Add-on Pricing

Extra charges attached to a booking scale with quantity and, depending on
the pricing policy, with nights and/or guests:

    per_booking          price * quantity
    per_night            price * quantity * nights
    per_guest            price * quantity * guests
    per_guest_per_night  price * quantity * guests * nights

Unrecognised policies are priced per booking. Quantities are expected to be
clamped to [0, max_quantity] before they get here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List

from shared.domain.base import ValueObject

from .rates import to_decimal


class PricingPolicy(str, Enum):
    PER_BOOKING = 'per_booking'
    PER_NIGHT = 'per_night'
    PER_GUEST = 'per_guest'
    PER_GUEST_PER_NIGHT = 'per_guest_per_night'

    @classmethod
    def coerce(cls, value) -> 'PricingPolicy':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.PER_BOOKING


def addon_total(unit_price, pricing_policy, quantity: int, *, nights: int, guest_count: int) -> Decimal:
    total = to_decimal(unit_price) * quantity
    policy = PricingPolicy.coerce(pricing_policy)
    if policy is PricingPolicy.PER_NIGHT:
        total *= nights
    elif policy is PricingPolicy.PER_GUEST:
        total *= guest_count
    elif policy is PricingPolicy.PER_GUEST_PER_NIGHT:
        total *= guest_count * nights
    return total


@dataclass(frozen=True)
class AddOnSelection(ValueObject):
    addon_id: Any
    name: str
    unit_price: Decimal
    pricing_policy: str
    quantity: int

    def total(self, *, nights: int, guest_count: int) -> Decimal:
        return addon_total(
            self.unit_price,
            self.pricing_policy,
            self.quantity,
            nights=nights,
            guest_count=guest_count,
        )


@dataclass(frozen=True)
class AddOnLine(ValueObject):
    """A priced selection, as stored on the booking"""
    selection: AddOnSelection
    total: Decimal


def price_addons(selections: Iterable[AddOnSelection], *, nights: int, guest_count: int) -> List[AddOnLine]:
    """Price every selection with a positive quantity."""
    return [
        AddOnLine(selection=selection, total=selection.total(nights=nights, guest_count=guest_count))
        for selection in selections
        if selection.quantity > 0
    ]
