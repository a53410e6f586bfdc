"""Tests for the 42-cell calendar month grid."""

from datetime import date, timedelta

import pytest

from apps.bookings.domain.calendar import GRID_SIZE, build_month_grid, grid_start
from apps.bookings.domain.selection import StaySelection

TODAY = date(2024, 6, 15)


@pytest.mark.parametrize("year,month", [(2024, 2), (2024, 6), (2024, 9), (2025, 3), (2026, 11)])
def test_grid_has_42_consecutive_days_from_sunday(year, month):
    days = build_month_grid(year, month, today=TODAY)

    assert len(days) == GRID_SIZE
    assert days[0].date.weekday() == 6
    assert days[0].date <= date(year, month, 1)
    for previous, current in zip(days, days[1:]):
        assert current.date - previous.date == timedelta(days=1)


@pytest.mark.parametrize("year,month", [(2024, 2), (2024, 6), (2024, 9), (2025, 3), (2026, 11)])
def test_first_of_month_sits_in_first_row(year, month):
    days = build_month_grid(year, month, today=TODAY)
    first = date(year, month, 1)
    index = (first.weekday() + 1) % 7

    assert days[index].date == first
    assert days[index].is_current_month
    assert not any(day.is_current_month for day in days[:index])


def test_month_starting_on_sunday_begins_the_grid():
    # 2024-09-01 is a Sunday.
    assert grid_start(2024, 9) == date(2024, 9, 1)
    assert grid_start(2024, 6) == date(2024, 5, 26)


def test_flags_reflect_today_availability_and_selection():
    selection = StaySelection(date(2024, 6, 20), date(2024, 6, 23))
    days = {
        day.date: day
        for day in build_month_grid(
            2024,
            6,
            today=TODAY,
            selection=selection,
            unavailable_dates=["2024-06-25"],
            seasonal_dates=[date(2024, 6, 28)],
        )
    }

    assert days[date(2024, 6, 14)].is_past and days[date(2024, 6, 14)].is_disabled
    assert days[TODAY].is_today and not days[TODAY].is_disabled
    assert days[date(2024, 6, 25)].is_unavailable and days[date(2024, 6, 25)].is_disabled
    assert days[date(2024, 6, 28)].is_seasonal and not days[date(2024, 6, 28)].is_disabled
    assert days[date(2024, 6, 20)].is_selected_start
    assert days[date(2024, 6, 23)].is_selected_end
    assert [d for d, day in days.items() if day.is_in_range] == [date(2024, 6, 21), date(2024, 6, 22)]


def test_days_before_min_date_are_disabled():
    days = {day.date: day for day in build_month_grid(2024, 6, today=TODAY, min_date=date(2024, 6, 18))}

    assert days[date(2024, 6, 17)].is_disabled
    assert not days[date(2024, 6, 17)].is_past
    assert not days[date(2024, 6, 18)].is_disabled


def test_grid_is_pure():
    kwargs = dict(
        today=TODAY,
        selection=StaySelection(start_date=date(2024, 6, 20)),
        unavailable_dates=[date(2024, 6, 22)],
        seasonal_dates=[date(2024, 6, 24)],
    )

    first = build_month_grid(2024, 6, **kwargs)
    second = build_month_grid(2024, 6, **kwargs)

    assert first == second
    assert [day.to_dict() for day in first] == [day.to_dict() for day in second]
