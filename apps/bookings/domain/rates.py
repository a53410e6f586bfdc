"""
Nightly Rates

Composes the price of every night of a stay:

1. Base price per night of the room
2. Seasonal rate covering the night replaces the base price
3. A manual override saved for the night replaces both

Seasonal periods are inclusive on both ends. When several periods cover
the same night the highest priority wins; equal priorities keep the order
they were given in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional

from shared.domain.base import ValueObject

from .dates import DateLike, as_date


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class SeasonalRate(ValueObject):
    start_date: date
    end_date: date
    price_per_night: Decimal
    name: str = ''
    priority: int = 0
    id: Any = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'price_per_night': self.price_per_night,
        }


@dataclass(frozen=True)
class NightlyRate(ValueObject):
    date: date
    base_price: Decimal
    effective_price: Decimal
    override_price: Optional[Decimal] = None
    seasonal_rate: Optional[SeasonalRate] = None

    @property
    def final_price(self) -> Decimal:
        if self.override_price is not None:
            return self.override_price
        return self.effective_price


@dataclass(frozen=True)
class RateSchedule(ValueObject):
    """Ordered nightly rates of one stay"""
    nights: tuple = field(default_factory=tuple)

    @property
    def night_count(self) -> int:
        return len(self.nights)

    @property
    def total(self) -> Decimal:
        return sum((night.final_price for night in self.nights), Decimal('0.00'))

    def __iter__(self):
        return iter(self.nights)

    def __len__(self) -> int:
        return len(self.nights)


def seasonal_rate_for(day: date, seasonal_rates: Iterable[SeasonalRate]) -> Optional[SeasonalRate]:
    """Highest-priority seasonal rate covering ``day``, if any."""
    best = None
    for rate in seasonal_rates:
        if not rate.covers(day):
            continue
        if best is None or rate.priority > best.priority:
            best = rate
    return best


def normalize_overrides(overrides: Mapping[DateLike, Any] | None) -> dict:
    if not overrides:
        return {}
    return {
        as_date(day): to_decimal(price)
        for day, price in overrides.items()
        if price is not None
    }


def resolve_nightly_rates(
    base_price,
    check_in: DateLike,
    check_out: DateLike,
    seasonal_rates: Iterable[SeasonalRate] = (),
    overrides: Mapping[DateLike, Any] | None = None,
) -> RateSchedule:
    """
    Price each night of ``[check_in, check_out)``.

    An empty or inverted stay produces an empty schedule with a zero total;
    rejecting such a stay is the caller's job.
    """
    base_price = to_decimal(base_price)
    check_in = as_date(check_in)
    check_out = as_date(check_out)
    seasonal_rates = list(seasonal_rates)
    overrides = normalize_overrides(overrides)

    nights: List[NightlyRate] = []
    current = check_in
    while current < check_out:
        seasonal = seasonal_rate_for(current, seasonal_rates)
        effective = to_decimal(seasonal.price_per_night) if seasonal else base_price
        nights.append(NightlyRate(
            date=current,
            base_price=base_price,
            effective_price=effective,
            override_price=overrides.get(current),
            seasonal_rate=seasonal,
        ))
        current += timedelta(days=1)
    return RateSchedule(nights=tuple(nights))
