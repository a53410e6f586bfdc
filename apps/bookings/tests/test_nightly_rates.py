"""Tests for nightly rate resolution."""

from datetime import date
from decimal import Decimal

from apps.bookings.domain.rates import SeasonalRate, resolve_nightly_rates


def test_seasonal_rate_and_override_compose_nightly_prices():
    christmas = SeasonalRate(date(2024, 12, 25), date(2024, 12, 25), Decimal("150"), name="Christmas")

    schedule = resolve_nightly_rates(
        100,
        date(2024, 12, 24),
        date(2024, 12, 27),
        [christmas],
        {"2024-12-26": 120},
    )

    assert [night.final_price for night in schedule] == [Decimal("100"), Decimal("150"), Decimal("120")]
    assert schedule.total == Decimal("370")
    assert schedule.night_count == 3
    assert schedule.nights[1].seasonal_rate == christmas
    assert schedule.nights[2].override_price == Decimal("120")
    assert schedule.nights[2].effective_price == Decimal("100")


def test_override_wins_over_seasonal_rate():
    season = SeasonalRate(date(2024, 12, 1), date(2024, 12, 31), Decimal("200"))

    schedule = resolve_nightly_rates("100.00", date(2024, 12, 10), date(2024, 12, 11), [season], {date(2024, 12, 10): "90"})

    night = schedule.nights[0]
    assert night.effective_price == Decimal("200")
    assert night.final_price == Decimal("90")


def test_seasonal_periods_include_their_end_date():
    season = SeasonalRate(date(2024, 7, 1), date(2024, 7, 2), Decimal("80"))

    schedule = resolve_nightly_rates(100, date(2024, 6, 30), date(2024, 7, 4), [season])

    assert [night.effective_price for night in schedule] == [
        Decimal("100"),
        Decimal("80"),
        Decimal("80"),
        Decimal("100"),
    ]


def test_highest_priority_period_wins_and_ties_keep_given_order():
    low = SeasonalRate(date(2024, 8, 1), date(2024, 8, 31), Decimal("110"), name="August", priority=0)
    high = SeasonalRate(date(2024, 8, 10), date(2024, 8, 12), Decimal("300"), name="Festival", priority=5)
    tie = SeasonalRate(date(2024, 8, 1), date(2024, 8, 31), Decimal("999"), name="Duplicate", priority=0)

    schedule = resolve_nightly_rates(100, date(2024, 8, 9), date(2024, 8, 11), [low, tie, high])

    assert [night.seasonal_rate.name for night in schedule] == ["August", "Festival"]


def test_overrides_outside_the_stay_are_ignored():
    schedule = resolve_nightly_rates(100, date(2024, 5, 1), date(2024, 5, 3), overrides={"2024-05-10": 1})

    assert schedule.total == Decimal("200")


def test_empty_or_inverted_stay_has_no_nights():
    assert resolve_nightly_rates(100, date(2024, 5, 3), date(2024, 5, 3)).night_count == 0
    assert resolve_nightly_rates(100, date(2024, 5, 3), date(2024, 5, 1)).total == Decimal("0.00")
