"""Coupon models for Vilo."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.db.models.functions import Lower  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.discounts import DiscountType


class Coupon(models.Model):
    """Promotional code of a tenant."""

    class Type(models.TextChoices):
        PERCENTAGE = DiscountType.PERCENTAGE.value, _("Percentage")
        FIXED_AMOUNT = DiscountType.FIXED_AMOUNT.value, _("Fixed amount")
        FREE_NIGHTS = DiscountType.FREE_NIGHTS.value, _("Free nights")

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="coupons",
    )
    code = models.CharField(max_length=50)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    discount_type = models.CharField(max_length=20, choices=Type.choices)
    discount_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    applicable_rooms = models.ManyToManyField(
        "rooms.Room",
        blank=True,
        related_name="coupons",
        help_text=_("Leave empty to allow the coupon on every room."),
    )
    valid_from = models.DateField(null=True, blank=True)
    valid_until = models.DateField(null=True, blank=True)
    max_uses = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    max_uses_per_customer = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    current_uses = models.PositiveIntegerField(default=0)
    min_booking_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    min_nights = models.PositiveSmallIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Coupon")
        verbose_name_plural = _("Coupons")
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                Lower("code"),
                "tenant",
                name="coupons_unique_code_per_tenant",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(valid_until__isnull=True)
                    | models.Q(valid_from__isnull=True)
                    | models.Q(valid_until__gte=models.F("valid_from"))
                ),
                name="coupons_valid_date_range",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"


class CouponUsage(models.Model):
    """One redemption of a coupon."""

    coupon = models.ForeignKey(Coupon, on_delete=models.CASCADE, related_name="usages")
    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="coupon_usages",
    )
    booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="coupon_usages",
    )
    customer_email = models.EmailField()
    discount_applied = models.DecimalField(max_digits=12, decimal_places=2)
    original_amount = models.DecimalField(max_digits=12, decimal_places=2)
    final_amount = models.DecimalField(max_digits=12, decimal_places=2)
    used_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Coupon usage")
        verbose_name_plural = _("Coupon usages")
        ordering = ["-used_at"]

    def __str__(self) -> str:
        return f"{self.coupon.code} by {self.customer_email}"
