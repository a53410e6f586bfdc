"""Add-on catalog models for Vilo."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.addons import AddOnSelection, PricingPolicy
from apps.tenants.models import default_currency


class AddOn(models.Model):
    """A catalog extra offered by a tenant."""

    class AddOnType(models.TextChoices):
        SERVICE = "service", _("Service")
        PRODUCT = "product", _("Product")
        EXPERIENCE = "experience", _("Experience")

    class PricingType(models.TextChoices):
        PER_BOOKING = PricingPolicy.PER_BOOKING.value, _("Per booking")
        PER_NIGHT = PricingPolicy.PER_NIGHT.value, _("Per night")
        PER_GUEST = PricingPolicy.PER_GUEST.value, _("Per guest")
        PER_GUEST_PER_NIGHT = PricingPolicy.PER_GUEST_PER_NIGHT.value, _("Per guest per night")

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="addons",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    addon_code = models.CharField(max_length=50, blank=True)
    addon_type = models.CharField(max_length=20, choices=AddOnType.choices, default=AddOnType.SERVICE)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    currency = models.CharField(max_length=3, default=default_currency)
    pricing_type = models.CharField(
        max_length=30,
        choices=PricingType.choices,
        default=PricingType.PER_BOOKING,
    )
    max_quantity = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    available_for_rooms = models.ManyToManyField(
        "rooms.Room",
        blank=True,
        related_name="addons",
        help_text=_("Leave empty to offer the add-on with every room."),
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Add-on")
        verbose_name_plural = _("Add-ons")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["tenant", "is_active"], name="addons_tenant_active_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    def is_available_for(self, room) -> bool:
        if not self.is_active:
            return False
        room_ids = [r.id for r in self.available_for_rooms.all()]
        return not room_ids or room.id in room_ids

    def select(self, quantity: int) -> AddOnSelection:
        """Snapshot of this add-on at the chosen quantity, clamped to ``[0, max_quantity]``."""
        quantity = max(0, min(quantity, self.max_quantity))
        return AddOnSelection(
            addon_id=self.id,
            name=self.name,
            unit_price=self.price,
            pricing_policy=self.pricing_type,
            quantity=quantity,
        )
