"""
Stay Selection

Two-phase check-in / check-out picking used by the booking calendar.

Phases:
- EMPTY: no check-in chosen yet
- AWAITING_END: check-in chosen, waiting for check-out
- COMPLETE: both dates chosen

Every transition returns a new StaySelection. Rejected clicks return the
selection unchanged instead of raising, so callers can always render the
result.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional

from shared.domain.base import ValueObject

from .dates import DateLike, as_date, as_date_set


class SelectionPhase(Enum):
    EMPTY = 'empty'
    AWAITING_END = 'awaiting_end'
    COMPLETE = 'complete'


@dataclass(frozen=True)
class StayRules(ValueObject):
    """
    Constraints a selection must satisfy

    max_stay_nights of None (or 0) means no upper bound.
    """
    min_stay_nights: int = 1
    max_stay_nights: Optional[int] = None
    unavailable_dates: frozenset = field(default_factory=frozenset)
    min_date: Optional[date] = None

    @classmethod
    def build(
        cls,
        *,
        min_stay_nights: int = 1,
        max_stay_nights: Optional[int] = None,
        unavailable_dates: Iterable[DateLike] | None = None,
        min_date: DateLike | None = None,
    ) -> 'StayRules':
        return cls(
            min_stay_nights=min_stay_nights,
            max_stay_nights=max_stay_nights,
            unavailable_dates=as_date_set(unavailable_dates),
            min_date=as_date(min_date) if min_date else None,
        )

    def is_unavailable(self, day: date) -> bool:
        return day in self.unavailable_dates

    def allows_nights(self, nights: int) -> bool:
        if nights < self.min_stay_nights:
            return False
        if self.max_stay_nights and nights > self.max_stay_nights:
            return False
        return True


@dataclass(frozen=True)
class StaySelection(ValueObject):
    """Check-in / check-out pair as picked so far"""
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def phase(self) -> SelectionPhase:
        if self.start_date is None:
            return SelectionPhase.EMPTY
        if self.end_date is None:
            return SelectionPhase.AWAITING_END
        return SelectionPhase.COMPLETE

    @property
    def nights(self) -> int:
        if self.start_date is None or self.end_date is None:
            return 0
        return max(0, (self.end_date - self.start_date).days)


def nights_between(start: date, end: date) -> int:
    """Whole nights from start to end, rounded up"""
    return math.ceil((end - start) / timedelta(days=1))


def is_selectable(day: date, *, today: date, rules: StayRules) -> bool:
    """Past, pre-window and unavailable days can never be clicked."""
    if day < today:
        return False
    if rules.min_date and day < rules.min_date:
        return False
    return not rules.is_unavailable(day)


def crosses_unavailable(start: date, end: date, rules: StayRules) -> bool:
    """True when any day strictly between start and end is unavailable."""
    current = start + timedelta(days=1)
    while current < end:
        if rules.is_unavailable(current):
            return True
        current += timedelta(days=1)
    return False


def select_date(
    selection: StaySelection,
    clicked: DateLike,
    *,
    today: DateLike,
    rules: StayRules | None = None,
) -> StaySelection:
    """Apply one calendar click to the current selection."""
    rules = rules or StayRules()
    clicked = as_date(clicked)
    today = as_date(today)

    if not is_selectable(clicked, today=today, rules=rules):
        return selection

    if selection.phase is not SelectionPhase.AWAITING_END:
        return StaySelection(start_date=clicked)

    start = selection.start_date
    if clicked <= start:
        return StaySelection(start_date=clicked)

    # The whole range is dropped and the click becomes the new check-in.
    if crosses_unavailable(start, clicked, rules):
        return StaySelection(start_date=clicked)

    if not rules.allows_nights(nights_between(start, clicked)):
        return selection

    return StaySelection(start_date=start, end_date=clicked)
