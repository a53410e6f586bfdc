"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore

from apps.coupons.services import CouponValidationError
from apps.tenants.mixins import TenantScopedMixin
from apps.tenants.permissions import IsTenantManager

from .filters import BookingFilterSet
from .models import Booking
from .serializers import (
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingQuoteSerializer,
    BookingSerializer,
    BookingUpdateSerializer,
    CheckConflictsSerializer,
)
from .services import (
    BookingConflictError,
    build_booking_quote,
    cancel_booking,
    create_booking,
    find_conflicts,
)

PUBLIC_ACTIONS = {"create", "quote", "check_conflicts"}


def _conflict_response(exc: BookingConflictError) -> Response:
    return Response(
        {"detail": str(exc), "conflicts": exc.conflicts},
        status=status.HTTP_409_CONFLICT,
    )


def _coupon_error_response(exc: CouponValidationError) -> Response:
    return Response({"coupon_code": exc.errors}, status=status.HTTP_400_BAD_REQUEST)


class BookingViewSet(TenantScopedMixin, viewsets.ModelViewSet):
    """Guests price and request stays; tenant managers run the bookings."""

    permission_classes = [IsTenantManager]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BookingFilterSet
    ordering_fields = ["check_in", "created_at", "total_amount"]
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_permissions(self):  # type: ignore
        if self.action in PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        return (
            Booking.objects.filter(tenant_id=self.tenant_context.id)
            .select_related("room")
            .prefetch_related("addons", "nights_breakdown")
        )

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "partial_update":
            return BookingUpdateSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        tenant = self.tenant_context

        # Guests cannot override conflicts or pick booking state.
        extra = {}
        if tenant.can_manage:
            extra = {
                key: data[key]
                for key in ("source", "status", "payment_status")
                if key in data
            }
        else:
            extra["source"] = Booking.Source.PORTAL

        try:
            booking = create_booking(
                tenant,
                serializer.to_booking_request(),
                guest_name=data["guest_name"],
                guest_email=data["guest_email"],
                guest_phone=data["guest_phone"],
                notes=data["notes"],
                created_by=request.user,
                force_create=bool(data["force_create"] and tenant.can_manage),
                **extra,
            )
        except BookingConflictError as exc:
            return _conflict_response(exc)
        except CouponValidationError as exc:
            return _coupon_error_response(exc)

        booking = self.get_queryset().get(pk=booking.pk)
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        instance = self.get_object()
        serializer = BookingUpdateSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        instance = self.get_queryset().get(pk=instance.pk)
        return Response(BookingSerializer(instance, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["post"])
    def quote(self, request):  # type: ignore
        """Price a prospective booking without saving it."""
        serializer = BookingQuoteSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)
        booking_request = serializer.to_booking_request()
        try:
            quote = build_booking_quote(booking_request)
        except CouponValidationError as exc:
            return _coupon_error_response(exc)

        payload = quote.to_dict()
        payload["room"] = booking_request.room.id
        payload["check_in"] = booking_request.check_in.isoformat()
        payload["check_out"] = booking_request.check_out.isoformat()
        payload["coupon_code"] = booking_request.coupon.code if booking_request.coupon else None
        return Response(payload)

    @action(detail=False, methods=["post"], url_path="check-conflicts")
    def check_conflicts(self, request):  # type: ignore
        serializer = CheckConflictsSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        conflicts = find_conflicts(
            data["room"],
            data["check_in"],
            data["check_out"],
            exclude_booking_id=data.get("exclude_booking_id"),
        )
        return Response({"has_conflicts": bool(conflicts), "conflicts": conflicts})

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()
        if booking.status in (Booking.Status.CANCELLED, Booking.Status.COMPLETED, Booking.Status.CHECKED_OUT):
            return Response(
                {"detail": f"A {booking.get_status_display().lower()} booking cannot be cancelled."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer = BookingCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cancel_booking(booking, serializer.validated_data["reason"])
        return Response({"id": booking.id, "status": booking.status, "cancelled_at": booking.cancelled_at})
