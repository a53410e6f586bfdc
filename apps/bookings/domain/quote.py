"""
Booking Quote

Total = sum of nightly final prices + sum of add-on totals - discount.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping

from shared.domain.base import ValueObject
from shared.domain.value_objects import Money

from .addons import AddOnLine, AddOnSelection, PricingPolicy, price_addons
from .dates import DateLike
from .rates import RateSchedule, SeasonalRate, resolve_nightly_rates, to_decimal


@dataclass(frozen=True)
class BookingQuote(ValueObject):
    schedule: RateSchedule
    addon_lines: tuple = field(default_factory=tuple)
    guest_count: int = 1
    currency: str = 'ZAR'
    discount_amount: Decimal = Decimal('0.00')

    @property
    def nights(self) -> int:
        return self.schedule.night_count

    @property
    def accommodation_total(self) -> Money:
        return Money(self.schedule.total, self.currency)

    @property
    def addons_total(self) -> Money:
        return Money(sum((line.total for line in self.addon_lines), Decimal('0.00')), self.currency)

    @property
    def subtotal(self) -> Money:
        return (self.accommodation_total + self.addons_total).rounded()

    @property
    def discount(self) -> Money:
        return Money(self.discount_amount, self.currency).rounded()

    @property
    def total(self) -> Money:
        return self.subtotal - self.discount

    def with_discount(self, amount) -> 'BookingQuote':
        return BookingQuote(
            schedule=self.schedule,
            addon_lines=self.addon_lines,
            guest_count=self.guest_count,
            currency=self.currency,
            discount_amount=to_decimal(amount),
        )

    def to_dict(self) -> dict:
        return {
            'nights': [
                {
                    'date': night.date.isoformat(),
                    'base_price': night.base_price,
                    'effective_price': night.effective_price,
                    'override_price': night.override_price,
                    'final_price': night.final_price,
                    'seasonal_rate': night.seasonal_rate.to_dict() if night.seasonal_rate else None,
                }
                for night in self.schedule
            ],
            'night_count': self.nights,
            'guest_count': self.guest_count,
            'addons': [
                {
                    'addon_id': line.selection.addon_id,
                    'name': line.selection.name,
                    'unit_price': line.selection.unit_price,
                    'pricing_type': PricingPolicy.coerce(line.selection.pricing_policy).value,
                    'quantity': line.selection.quantity,
                    'total': line.total,
                }
                for line in self.addon_lines
            ],
            'accommodation_total': self.accommodation_total.amount,
            'addons_total': self.addons_total.amount,
            'subtotal': self.subtotal.amount,
            'discount_amount': self.discount.amount,
            'total_amount': self.total.amount,
            'currency': self.currency,
        }


def build_quote(
    *,
    base_price,
    check_in: DateLike,
    check_out: DateLike,
    guest_count: int,
    seasonal_rates: Iterable[SeasonalRate] = (),
    overrides: Mapping[DateLike, Any] | None = None,
    addons: Iterable[AddOnSelection] = (),
    currency: str = 'ZAR',
) -> BookingQuote:
    schedule = resolve_nightly_rates(base_price, check_in, check_out, seasonal_rates, overrides)
    lines: list[AddOnLine] = price_addons(addons, nights=schedule.night_count, guest_count=guest_count)
    return BookingQuote(
        schedule=schedule,
        addon_lines=tuple(lines),
        guest_count=guest_count,
        currency=currency,
    )
