"""Coupon validation and redemption."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

import structlog
from django.db import transaction  # type: ignore
from django.db.models import F  # type: ignore

from apps.bookings.domain.discounts import DiscountType, compute_discount

from .models import Coupon, CouponUsage

logger = structlog.get_logger(__name__)


class CouponValidationError(Exception):
    """Raised when a coupon cannot be applied; carries every failed check."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def find_coupon(tenant_id: int, code: str) -> Optional[Coupon]:
    """Case-insensitive lookup within one tenant."""
    code = (code or "").strip()
    if not code:
        return None
    return (
        Coupon.objects.filter(tenant_id=tenant_id, code__iexact=code)
        .prefetch_related("applicable_rooms")
        .first()
    )


def coupon_errors(
    coupon: Coupon,
    *,
    room_ids: Iterable[int] = (),
    customer_email: str | None = None,
    subtotal: Decimal | None = None,
    nights: int | None = None,
    check_in: date | None = None,
) -> list[str]:
    errors: list[str] = []

    if not coupon.is_active:
        errors.append("This coupon is no longer active")

    if coupon.valid_from and check_in and check_in < coupon.valid_from:
        errors.append(f"This coupon is valid from {coupon.valid_from.isoformat()}")
    if coupon.valid_until and check_in and check_in > coupon.valid_until:
        errors.append("This coupon has expired")

    room_ids = list(room_ids)
    applicable_ids = {room.id for room in coupon.applicable_rooms.all()}
    if applicable_ids and room_ids and not applicable_ids.intersection(room_ids):
        errors.append("This coupon is not valid for the selected room(s)")

    if coupon.max_uses is not None and coupon.current_uses >= coupon.max_uses:
        errors.append("This coupon has reached its maximum usage limit")

    if coupon.max_uses_per_customer is not None and customer_email:
        used = CouponUsage.objects.filter(coupon=coupon, customer_email__iexact=customer_email).count()
        if used >= coupon.max_uses_per_customer:
            errors.append("You have already used this coupon the maximum number of times")

    if coupon.min_booking_amount is not None and subtotal is not None and subtotal < coupon.min_booking_amount:
        errors.append(f"Minimum booking amount of {coupon.min_booking_amount} required")

    if coupon.min_nights is not None and nights is not None and nights < coupon.min_nights:
        suffix = "s" if coupon.min_nights > 1 else ""
        errors.append(f"Minimum stay of {coupon.min_nights} night{suffix} required")

    return errors


def discount_for(coupon: Coupon, *, subtotal: Decimal, accommodation_total: Decimal, nights: int) -> Decimal:
    """Free nights are priced off the room nights only, other types off the subtotal."""
    base = accommodation_total if coupon.discount_type == DiscountType.FREE_NIGHTS else subtotal
    return compute_discount(coupon.discount_type, coupon.discount_value, base, nights)


def validate_coupon(
    coupon: Optional[Coupon],
    *,
    room_ids: Iterable[int] = (),
    customer_email: str | None = None,
    subtotal: Decimal = Decimal("0.00"),
    accommodation_total: Decimal | None = None,
    nights: int = 0,
    check_in: date | None = None,
) -> Decimal:
    """Return the discount ``coupon`` grants or raise CouponValidationError."""
    if coupon is None:
        raise CouponValidationError(["Invalid coupon code"])

    errors = coupon_errors(
        coupon,
        room_ids=room_ids,
        customer_email=customer_email,
        subtotal=subtotal,
        nights=nights,
        check_in=check_in,
    )
    if errors:
        raise CouponValidationError(errors)

    return discount_for(
        coupon,
        subtotal=subtotal,
        accommodation_total=subtotal if accommodation_total is None else accommodation_total,
        nights=nights,
    )


@transaction.atomic
def record_usage(
    coupon: Coupon,
    *,
    booking,
    customer_email: str,
    discount_applied: Decimal,
    original_amount: Decimal,
    final_amount: Decimal,
) -> CouponUsage:
    usage = CouponUsage.objects.create(
        coupon=coupon,
        tenant_id=coupon.tenant_id,
        booking=booking,
        customer_email=customer_email,
        discount_applied=discount_applied,
        original_amount=original_amount,
        final_amount=final_amount,
    )
    Coupon.objects.filter(pk=coupon.pk).update(current_uses=F("current_uses") + 1)
    logger.info(
        "coupon_redeemed",
        coupon_id=coupon.id,
        code=coupon.code,
        booking_id=getattr(booking, "id", None),
        discount=str(discount_applied),
    )
    return usage
