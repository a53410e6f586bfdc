"""Room domain models for Vilo.

A room carries its base nightly price and stay limits. Seasonal rates
replace the base price for inclusive date periods, and blocks take dates
out of sale (maintenance, owner use).
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.rates import SeasonalRate as SeasonalRatePeriod
from apps.bookings.domain.selection import StayRules
from apps.tenants.models import default_currency


class Room(models.Model):
    """A bookable room of a tenant's property."""

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="rooms",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    room_code = models.CharField(max_length=50, blank=True)
    bed_type = models.CharField(max_length=100, default="double")
    bed_count = models.PositiveSmallIntegerField(default=1)
    max_guests = models.PositiveSmallIntegerField(default=2, validators=[MinValueValidator(1)])
    base_price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    currency = models.CharField(max_length=3, default=default_currency)
    min_stay_nights = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    max_stay_nights = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        help_text=_("Empty means no maximum."),
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(max_stay_nights__isnull=True)
                    | models.Q(max_stay_nights__gte=models.F("min_stay_nights"))
                ),
                name="room_min_max_stay_valid",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant", "is_active"], name="rooms_room_tenant_active_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    def seasonal_periods(self, start: date, end: date) -> list[SeasonalRatePeriod]:
        """Seasonal rates touching ``[start, end]`` as domain values, highest priority first."""
        rates = self.seasonal_rates.filter(start_date__lte=end, end_date__gte=start).order_by("-priority", "start_date")
        return [rate.as_period() for rate in rates]

    def stay_rules(self, unavailable_dates=(), min_date: date | None = None) -> StayRules:
        return StayRules.build(
            min_stay_nights=self.min_stay_nights,
            max_stay_nights=self.max_stay_nights,
            unavailable_dates=unavailable_dates,
            min_date=min_date,
        )


class SeasonalRate(models.Model):
    """Price per night that replaces the base price inside a period."""

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="seasonal_rates",
    )
    room = models.ForeignKey(
        Room,
        on_delete=models.CASCADE,
        related_name="seasonal_rates",
    )
    name = models.CharField(max_length=255)
    start_date = models.DateField()
    end_date = models.DateField(help_text=_("Inclusive."))
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    priority = models.IntegerField(
        default=0,
        help_text=_("When periods overlap the higher priority wins."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Seasonal rate")
        verbose_name_plural = _("Seasonal rates")
        ordering = ["start_date", "-priority"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="seasonal_rates_valid_date_range",
            ),
            models.CheckConstraint(
                condition=models.Q(price_per_night__gte=0),
                name="seasonal_rates_valid_price",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "start_date", "end_date", "priority"], name="rooms_rate_room_dates_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.room.name}: {self.name} ({self.start_date} - {self.end_date})"

    def as_period(self) -> SeasonalRatePeriod:
        return SeasonalRatePeriod(
            start_date=self.start_date,
            end_date=self.end_date,
            price_per_night=self.price_per_night,
            name=self.name,
            priority=self.priority,
            id=self.id,
        )


class RoomBlock(models.Model):
    """Dates taken out of sale by the owner."""

    class Reason(models.TextChoices):
        BLOCKED = "blocked", _("Blocked")
        MAINTENANCE = "maintenance", _("Maintenance")
        OWNER_USE = "owner_use", _("Owner use")

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="room_blocks",
    )
    room = models.ForeignKey(
        Room,
        on_delete=models.CASCADE,
        related_name="blocks",
    )
    start_date = models.DateField()
    end_date = models.DateField(help_text=_("Inclusive."))
    reason = models.CharField(max_length=20, choices=Reason.choices, default=Reason.BLOCKED)
    notes = models.CharField(max_length=255, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="room_blocks",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Room block")
        verbose_name_plural = _("Room blocks")
        ordering = ["start_date"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="room_blocks_valid_date_range",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "start_date", "end_date"], name="rooms_block_room_dates_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.room.name}: {self.start_date} - {self.end_date} ({self.reason})"

    def days(self):
        current = self.start_date
        while current <= self.end_date:
            yield current
            current += timedelta(days=1)
