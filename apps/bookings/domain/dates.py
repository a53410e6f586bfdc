"""Date coercion helpers shared by the domain modules."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Union

DateLike = Union[date, str]


def as_date(value: DateLike) -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def as_date_set(values: Iterable[DateLike] | None) -> frozenset[date]:
    if not values:
        return frozenset()
    return frozenset(as_date(value) for value in values)
