"""
Month Grid

Builds the 6 x 7 day grid shown by the booking calendar. The grid starts
on the Sunday on or before the 1st of the month and is padded with days of
the following month up to 42 cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional

from shared.domain.base import ValueObject

from .dates import DateLike, as_date, as_date_set
from .selection import StaySelection

GRID_ROWS = 6
GRID_COLUMNS = 7
GRID_SIZE = GRID_ROWS * GRID_COLUMNS


@dataclass(frozen=True)
class CalendarDay(ValueObject):
    date: date
    is_current_month: bool
    is_past: bool
    is_today: bool
    is_unavailable: bool
    is_seasonal: bool
    is_disabled: bool
    is_selected_start: bool
    is_selected_end: bool
    is_in_range: bool

    def to_dict(self) -> dict:
        return {
            'date': self.date.isoformat(),
            'is_current_month': self.is_current_month,
            'is_past': self.is_past,
            'is_today': self.is_today,
            'is_unavailable': self.is_unavailable,
            'is_seasonal': self.is_seasonal,
            'is_disabled': self.is_disabled,
            'is_selected_start': self.is_selected_start,
            'is_selected_end': self.is_selected_end,
            'is_in_range': self.is_in_range,
        }


def grid_start(year: int, month: int) -> date:
    """Sunday on or before the 1st of the month"""
    first = date(year, month, 1)
    # date.weekday(): Monday=0 ... Sunday=6
    padding = (first.weekday() + 1) % 7
    return first - timedelta(days=padding)


def build_month_grid(
    year: int,
    month: int,
    *,
    today: DateLike,
    selection: StaySelection | None = None,
    unavailable_dates: Iterable[DateLike] | None = None,
    seasonal_dates: Iterable[DateLike] | None = None,
    min_date: Optional[DateLike] = None,
) -> List[CalendarDay]:
    """Return the 42 cells for ``year``/``month``."""
    today = as_date(today)
    selection = selection or StaySelection()
    unavailable = as_date_set(unavailable_dates)
    seasonal = as_date_set(seasonal_dates)
    min_date = as_date(min_date) if min_date else None
    start, end = selection.start_date, selection.end_date

    days = []
    current = grid_start(year, month)
    for _ in range(GRID_SIZE):
        is_past = current < today
        is_unavailable = current in unavailable
        days.append(CalendarDay(
            date=current,
            is_current_month=(current.year, current.month) == (year, month),
            is_past=is_past,
            is_today=current == today,
            is_unavailable=is_unavailable,
            is_seasonal=current in seasonal,
            is_disabled=is_past or is_unavailable or bool(min_date and current < min_date),
            is_selected_start=current == start,
            is_selected_end=current == end,
            is_in_range=bool(start and end and start < current < end),
        ))
        current += timedelta(days=1)
    return days
