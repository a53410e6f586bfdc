"""Booking services: availability, pricing and booking creation.

These functions load rooms, rates and bookings through the ORM and hand
plain values to ``apps.bookings.domain``. The tenant is always passed in
explicitly as a TenantContext.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Mapping, Optional, Sequence, TYPE_CHECKING

import structlog
from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.coupons.services import record_usage, validate_coupon
from apps.rooms.models import Room, RoomBlock
from apps.tenants.context import TenantContext

from .domain.addons import AddOnSelection
from .domain.quote import BookingQuote, build_quote
from .domain.rates import RateSchedule, resolve_nightly_rates
from .models import Booking, BookingAddOn, BookingNight

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.coupons.models import Coupon

logger = structlog.get_logger(__name__)

BLOCKING_STATUSES: Sequence[str] = tuple(
    value for value in Booking.Status.values if value != Booking.Status.CANCELLED
)


class BookingConflictError(Exception):
    """Raised when a room is already taken for requested dates."""

    def __init__(self, conflicts: Iterable[dict]):
        self.conflicts = list(conflicts)
        super().__init__(f"This room has {len(self.conflicts)} overlapping booking(s).")


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def find_conflicts(
    room: Room,
    check_in: date,
    check_out: date,
    *,
    exclude_booking_id=None,
) -> list[dict]:
    """Bookings and blocks overlapping ``[check_in, check_out)``."""

    bookings_qs = Booking.objects.filter(
        room=room,
        status__in=BLOCKING_STATUSES,
    ).filter(Q(check_in__lt=check_out) & Q(check_out__gt=check_in))

    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)

    bookings_qs = _lock_queryset_if_possible(bookings_qs.order_by("check_in"))

    conflicts = [
        {
            "id": booking.id,
            "guest": booking.guest_name,
            "source": booking.source,
            "dates": f"{booking.check_in.isoformat()} - {booking.check_out.isoformat()}",
            "status": booking.status,
        }
        for booking in bookings_qs
    ]

    # Blocks are inclusive of their end date.
    blocks_qs = RoomBlock.objects.filter(
        room=room,
        start_date__lt=check_out,
        end_date__gte=check_in,
    ).order_by("start_date")
    conflicts.extend(
        {
            "id": block.id,
            "guest": None,
            "source": "block",
            "dates": f"{block.start_date.isoformat()} - {block.end_date.isoformat()}",
            "status": block.reason,
        }
        for block in blocks_qs
    )
    return conflicts


def ensure_room_is_available(room: Room, check_in: date, check_out: date, *, exclude_booking_id=None) -> None:
    conflicts = find_conflicts(room, check_in, check_out, exclude_booking_id=exclude_booking_id)
    if conflicts:
        logger.info(
            "booking_conflict_detected",
            room_id=room.id,
            check_in=check_in.isoformat(),
            check_out=check_out.isoformat(),
            conflicts=len(conflicts),
        )
        raise BookingConflictError(conflicts)


def unavailable_dates(room: Room, start: date, end: date, *, exclude_booking_id=None) -> set[date]:
    """Days in ``[start, end]`` that cannot be booked as a night."""

    taken: set[date] = set()
    bookings_qs = Booking.objects.filter(
        room=room,
        status__in=BLOCKING_STATUSES,
        check_in__lte=end,
        check_out__gt=start,
    )
    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)
    for booking in bookings_qs:
        taken.update(booking.stay.nights())

    for block in RoomBlock.objects.filter(room=room, start_date__lte=end, end_date__gte=start):
        taken.update(block.days())

    return {day for day in taken if start <= day <= end}


def seasonal_dates(room: Room, start: date, end: date) -> set[date]:
    """Days in ``[start, end]`` covered by any seasonal rate."""

    days: set[date] = set()
    for period in room.seasonal_periods(start, end):
        current = max(period.start_date, start)
        last = min(period.end_date, end)
        while current <= last:
            days.add(current)
            current += timedelta(days=1)
    return days


def price_stay(
    room: Room,
    check_in: date,
    check_out: date,
    overrides: Mapping | None = None,
) -> RateSchedule:
    periods = room.seasonal_periods(check_in, check_out - timedelta(days=1)) if check_out > check_in else []
    return resolve_nightly_rates(room.base_price_per_night, check_in, check_out, periods, overrides)


@dataclass
class BookingRequest:
    """Everything needed to price (and optionally persist) a stay."""

    room: Room
    check_in: date
    check_out: date
    guests_count: int = 1
    addons: list[AddOnSelection] = field(default_factory=list)
    addon_objects: dict = field(default_factory=dict)
    overrides: dict = field(default_factory=dict)
    coupon: Optional["Coupon"] = None
    coupon_code: str = ""
    customer_email: str = ""


def build_booking_quote(request: BookingRequest) -> BookingQuote:
    """Price a request; applies the coupon when one was given."""

    room = request.room
    last_night = request.check_out - timedelta(days=1)
    quote = build_quote(
        base_price=room.base_price_per_night,
        check_in=request.check_in,
        check_out=request.check_out,
        guest_count=request.guests_count,
        seasonal_rates=room.seasonal_periods(request.check_in, last_night),
        overrides=request.overrides,
        addons=request.addons,
        currency=room.currency,
    )

    if request.coupon is not None or request.coupon_code:
        discount = validate_coupon(
            request.coupon,
            room_ids=[room.id],
            customer_email=request.customer_email or None,
            subtotal=quote.subtotal.amount,
            accommodation_total=quote.accommodation_total.amount,
            nights=quote.nights,
            check_in=request.check_in,
        )
        quote = quote.with_discount(discount)
    return quote


@transaction.atomic
def create_booking(
    tenant: TenantContext,
    request: BookingRequest,
    *,
    guest_name: str,
    guest_email: str = "",
    guest_phone: str = "",
    notes: str = "",
    source: str = Booking.Source.VILO,
    status: str = Booking.Status.PENDING,
    payment_status: str = Booking.PaymentStatus.PENDING,
    created_by=None,
    force_create: bool = False,
) -> Booking:
    """Persist a booking priced from the current rates."""

    # Serialises concurrent bookings of one room; overlap locks alone miss free ranges.
    _lock_queryset_if_possible(Room.objects.filter(pk=request.room.pk)).get()

    if not force_create:
        ensure_room_is_available(request.room, request.check_in, request.check_out)

    quote = build_booking_quote(request)

    booking = Booking.objects.create(
        tenant_id=tenant.id,
        room=request.room,
        guest_name=guest_name,
        guest_email=guest_email,
        guest_phone=guest_phone,
        check_in=request.check_in,
        check_out=request.check_out,
        guests_count=request.guests_count,
        status=status,
        payment_status=payment_status,
        source=source,
        subtotal=quote.subtotal.amount,
        discount_amount=quote.discount.amount,
        total_amount=quote.total.amount,
        currency=quote.currency,
        coupon=request.coupon,
        coupon_code=request.coupon.code if request.coupon else "",
        notes=notes,
        created_by=created_by if created_by is not None and created_by.is_authenticated else None,
    )

    BookingNight.objects.bulk_create(
        BookingNight(
            booking=booking,
            date=night.date,
            base_price=night.base_price,
            effective_price=night.effective_price,
            override_price=night.override_price,
            final_price=night.final_price,
            seasonal_rate_name=night.seasonal_rate.name if night.seasonal_rate else "",
        )
        for night in quote.schedule
    )
    BookingAddOn.objects.bulk_create(
        BookingAddOn(
            booking=booking,
            addon=request.addon_objects.get(line.selection.addon_id),
            name=line.selection.name,
            unit_price=line.selection.unit_price,
            pricing_type=line.selection.pricing_policy,
            quantity=line.selection.quantity,
            total=line.total,
        )
        for line in quote.addon_lines
    )

    if request.coupon is not None and guest_email:
        record_usage(
            request.coupon,
            booking=booking,
            customer_email=guest_email,
            discount_applied=quote.discount.amount,
            original_amount=quote.subtotal.amount,
            final_amount=quote.total.amount,
        )

    logger.info(
        "booking_created",
        booking_id=booking.id,
        booking_code=booking.booking_code,
        tenant_id=tenant.id,
        room_id=request.room.id,
        nights=quote.nights,
        total=str(quote.total.amount),
        forced=force_create,
    )
    return booking


def cancel_booking(booking: Booking, reason: str = "") -> Booking:
    booking.mark_cancelled(reason)
    logger.info("booking_cancelled", booking_id=booking.id, reason=reason)
    return booking

