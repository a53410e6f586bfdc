"""Tests for add-on pricing, coupon discounts and booking quotes."""

from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.domain.addons import AddOnSelection, PricingPolicy, addon_total, price_addons
from apps.bookings.domain.discounts import DiscountType, compute_discount
from apps.bookings.domain.quote import build_quote
from apps.bookings.domain.rates import SeasonalRate
from shared.domain.value_objects import DateRange, Money


@pytest.mark.parametrize(
    "policy,expected",
    [
        (PricingPolicy.PER_BOOKING, Decimal("100")),
        (PricingPolicy.PER_NIGHT, Decimal("400")),
        (PricingPolicy.PER_GUEST, Decimal("300")),
        (PricingPolicy.PER_GUEST_PER_NIGHT, Decimal("1200")),
    ],
)
def test_addon_total_per_policy(policy, expected):
    assert addon_total(50, policy, 2, nights=4, guest_count=3) == expected


def test_unknown_policy_is_priced_per_booking():
    assert addon_total("50", "per_week", 2, nights=4, guest_count=3) == Decimal("100")
    assert PricingPolicy.coerce("per_week") is PricingPolicy.PER_BOOKING


def test_zero_quantity_selections_are_dropped():
    selections = [
        AddOnSelection(1, "Breakfast", Decimal("95.00"), "per_guest_per_night", 1),
        AddOnSelection(2, "Transfer", Decimal("450.00"), "per_booking", 0),
    ]

    lines = price_addons(selections, nights=2, guest_count=2)

    assert [line.selection.name for line in lines] == ["Breakfast"]
    assert lines[0].total == Decimal("380.00")


@pytest.mark.parametrize(
    "discount_type,value,expected",
    [
        (DiscountType.PERCENTAGE, "10", Decimal("45.00")),
        (DiscountType.PERCENTAGE, "12.5", Decimal("56.25")),
        (DiscountType.FIXED_AMOUNT, "100", Decimal("100.00")),
        (DiscountType.FIXED_AMOUNT, "1000", Decimal("450.00")),
        (DiscountType.FREE_NIGHTS, "1", Decimal("150.00")),
        (DiscountType.FREE_NIGHTS, "5", Decimal("450.00")),
    ],
)
def test_compute_discount(discount_type, value, expected):
    assert compute_discount(discount_type, value, Decimal("450.00"), nights=3) == expected


def test_discount_rounds_half_up_to_cents():
    assert compute_discount("percentage", "15", Decimal("0.10"), nights=1) == Decimal("0.02")


def test_quote_totals_nights_addons_and_discount():
    quote = build_quote(
        base_price=Decimal("1000.00"),
        check_in=date(2024, 12, 24),
        check_out=date(2024, 12, 27),
        guest_count=2,
        seasonal_rates=[SeasonalRate(date(2024, 12, 25), date(2024, 12, 25), Decimal("1500.00"))],
        overrides={date(2024, 12, 26): Decimal("1200.00")},
        addons=[AddOnSelection(7, "Breakfast", Decimal("100.00"), PricingPolicy.PER_GUEST_PER_NIGHT, 1)],
    )

    assert quote.nights == 3
    assert quote.accommodation_total == Money(Decimal("3700.00"))
    assert quote.addons_total == Money(Decimal("600.00"))
    assert quote.subtotal.amount == Decimal("4300.00")
    assert quote.total.amount == Decimal("4300.00")

    discounted = quote.with_discount("300")
    assert discounted.total.amount == Decimal("4000.00")

    payload = discounted.to_dict()
    assert payload["night_count"] == 3
    assert payload["addons"][0]["pricing_type"] == "per_guest_per_night"
    assert payload["discount_amount"] == Decimal("300.00")
    assert payload["total_amount"] == Decimal("4000.00")


def test_discount_never_makes_total_negative():
    quote = build_quote(
        base_price=100,
        check_in=date(2024, 1, 1),
        check_out=date(2024, 1, 2),
        guest_count=1,
    ).with_discount(500)

    assert quote.total.amount == Decimal("0.00")


def test_date_range_rejects_empty_stays():
    with pytest.raises(ValueError):
        DateRange(date(2024, 1, 2), date(2024, 1, 2))

    stay = DateRange(date(2024, 1, 1), date(2024, 1, 4))
    assert len(stay) == 3
    assert list(stay.nights())[-1] == date(2024, 1, 3)


def test_money_rejects_negative_amounts():
    with pytest.raises(ValueError):
        Money(Decimal("-1"))
