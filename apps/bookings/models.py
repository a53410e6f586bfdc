"""Booking models for Vilo.

Add-ons and per-night prices of a booking are stored as rows of their own
(``BookingAddOn``, ``BookingNight``) so a booking keeps the prices it was
sold at even when the catalog or the room rates change later.
"""

from __future__ import annotations

import secrets
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.tenants.models import default_currency
from shared.domain.value_objects import DateRange


class Booking(models.Model):
    """A guest's stay in one room."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        CHECKED_IN = "checked_in", _("Checked in")
        CHECKED_OUT = "checked_out", _("Checked out")
        CANCELLED = "cancelled", _("Cancelled")
        COMPLETED = "completed", _("Completed")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        PAID = "paid", _("Paid")
        PARTIAL = "partial", _("Partially paid")
        REFUNDED = "refunded", _("Refunded")

    class Source(models.TextChoices):
        VILO = "vilo", _("Vilo")
        PORTAL = "portal", _("Customer portal")
        MANUAL = "manual", _("Manual entry")
        EXTERNAL = "external", _("External channel")

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    booking_code = models.CharField(max_length=12, unique=True, editable=False)
    guest_name = models.CharField(max_length=255)
    guest_email = models.EmailField(blank=True)
    guest_phone = models.CharField(max_length=50, blank=True)
    check_in = models.DateField()
    check_out = models.DateField()
    guests_count = models.PositiveSmallIntegerField(default=1)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    source = models.CharField(max_length=20, choices=Source.choices, default=Source.VILO)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default=default_currency)
    coupon = models.ForeignKey(
        "coupons.Coupon",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    coupon_code = models.CharField(max_length=50, blank=True)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_bookings",
    )
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant", "status"], name="bookings_tenant_status_idx"),
            models.Index(fields=["room", "check_in", "check_out"], name="bookings_room_dates_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.booking_code} ({self.guest_name})"

    @property
    def stay(self) -> DateRange:
        return DateRange(self.check_in, self.check_out)

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def save(self, *args, **kwargs):  # type: ignore
        if self._state.adding and not self.booking_code:
            self.booking_code = self.generate_booking_code()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_booking_code() -> str:
        return secrets.token_hex(4).upper()

    def mark_cancelled(self, reason: str = "") -> None:
        self.status = self.Status.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = timezone.now()
        self.save(update_fields=["status", "cancellation_reason", "cancelled_at", "updated_at"])


class BookingAddOn(models.Model):
    """Add-on as sold with the booking, detached from the live catalog."""

    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name="addons")
    addon = models.ForeignKey(
        "addons.AddOn",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="booking_lines",
    )
    name = models.CharField(max_length=255)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    pricing_type = models.CharField(max_length=30)
    quantity = models.PositiveSmallIntegerField()
    total = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        verbose_name = _("Booking add-on")
        verbose_name_plural = _("Booking add-ons")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity}"


class BookingNight(models.Model):
    """Price of one night of a booking."""

    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name="nights_breakdown")
    date = models.DateField()
    base_price = models.DecimalField(max_digits=10, decimal_places=2)
    effective_price = models.DecimalField(max_digits=10, decimal_places=2)
    override_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    final_price = models.DecimalField(max_digits=10, decimal_places=2)
    seasonal_rate_name = models.CharField(max_length=255, blank=True)

    class Meta:
        verbose_name = _("Booking night")
        verbose_name_plural = _("Booking nights")
        ordering = ["date"]
        constraints = [
            models.UniqueConstraint(fields=["booking", "date"], name="booking_night_unique_date"),
        ]

    def __str__(self) -> str:
        return f"{self.booking.booking_code} {self.date}: {self.final_price}"
