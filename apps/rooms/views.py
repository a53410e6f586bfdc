"""Room API views: catalog, pricing lookups and the availability calendar."""

from __future__ import annotations

from datetime import timedelta

from django.db.models import ProtectedError  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.domain.calendar import GRID_SIZE, build_month_grid, grid_start
from apps.bookings.domain.selection import StaySelection, select_date
from apps.bookings.services import price_stay, seasonal_dates, unavailable_dates
from apps.tenants.mixins import TenantScopedMixin
from apps.tenants.permissions import IsTenantManager, IsTenantManagerOrReadOnly

from .models import Room, RoomBlock, SeasonalRate
from .serializers import (
    CalendarQuerySerializer,
    CalendarSelectSerializer,
    PriceQuerySerializer,
    PriceRangeQuerySerializer,
    RoomBlockSerializer,
    RoomBlockWriteSerializer,
    RoomSerializer,
    SeasonalRateSerializer,
    SeasonalRateWriteSerializer,
)


def _night_payload(night) -> dict:
    return {
        "date": night.date.isoformat(),
        "base_price": night.base_price,
        "effective_price": night.effective_price,
        "override_price": night.override_price,
        "final_price": night.final_price,
        "seasonal_rate": night.seasonal_rate.to_dict() if night.seasonal_rate else None,
    }


class RoomViewSet(TenantScopedMixin, viewsets.ModelViewSet):
    """Rooms of the current tenant; guests see active rooms only."""

    serializer_class = RoomSerializer
    permission_classes = [IsTenantManagerOrReadOnly]
    filterset_fields = ["is_active"]

    def get_queryset(self):  # type: ignore
        qs = Room.objects.filter(tenant_id=self.tenant_context.id)
        if not self.tenant_context.can_manage:
            qs = qs.filter(is_active=True)
        return qs.order_by("name")

    def perform_create(self, serializer):  # type: ignore
        # Priced in the tenant currency unless the manager picked another one.
        currency = serializer.validated_data.get("currency", self.tenant_context.currency)
        serializer.save(tenant_id=self.tenant_context.id, currency=currency)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        try:
            return super().destroy(request, *args, **kwargs)
        except ProtectedError:
            return Response(
                {"detail": "A room with bookings cannot be deleted; deactivate it instead."},
                status=status.HTTP_400_BAD_REQUEST,
            )

    @action(detail=True, methods=["get"])
    def price(self, request, pk=None):  # type: ignore
        """Effective price of one night."""
        room: Room = self.get_object()
        query = PriceQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        day = query.validated_data["date"]
        schedule = price_stay(room, day, day + timedelta(days=1))
        payload = _night_payload(schedule.nights[0])
        payload["currency"] = room.currency
        return Response(payload)

    @action(detail=True, methods=["get"])
    def prices(self, request, pk=None):  # type: ignore
        """Nightly schedule for ``[start_date, end_date)``."""
        room: Room = self.get_object()
        query = PriceRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        schedule = price_stay(room, query.validated_data["start_date"], query.validated_data["end_date"])
        return Response(
            {
                "nights": [_night_payload(night) for night in schedule],
                "night_count": schedule.night_count,
                "total": schedule.total,
                "currency": room.currency,
            }
        )

    @action(detail=True, methods=["get"])
    def calendar(self, request, pk=None):  # type: ignore
        """The 42-day month grid with availability, seasons and the current selection."""
        room: Room = self.get_object()
        query = CalendarQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data
        year, month = data["year"], data["month"]

        first = grid_start(year, month)
        last = first + timedelta(days=GRID_SIZE - 1)
        today = timezone.localdate()
        days = build_month_grid(
            year,
            month,
            today=today,
            selection=StaySelection(data.get("start_date"), data.get("end_date")),
            unavailable_dates=unavailable_dates(room, first, last),
            seasonal_dates=seasonal_dates(room, first, last),
            min_date=today,
        )
        return Response(
            {
                "room": room.id,
                "year": year,
                "month": month,
                "min_stay_nights": room.min_stay_nights,
                "max_stay_nights": room.max_stay_nights,
                "days": [day.to_dict() for day in days],
            }
        )

    @action(detail=True, methods=["post"], url_path="calendar/select", permission_classes=[])
    def calendar_select(self, request, pk=None):  # type: ignore
        """Apply one click to a check-in/check-out selection under the room's stay rules."""
        room: Room = self.get_object()
        serializer = CalendarSelectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        current = StaySelection(data.get("start_date"), data.get("end_date"))
        clicked = data["clicked_date"]

        # Enough of the calendar to judge any stay starting at the current check-in.
        window_start = min(filter(None, [current.start_date, clicked]))
        span = room.max_stay_nights or 366
        window_end = max(clicked, window_start + timedelta(days=span))
        today = timezone.localdate()
        rules = room.stay_rules(unavailable_dates(room, window_start, window_end), min_date=today)

        selection = select_date(current, clicked, today=today, rules=rules)
        return Response(
            {
                "start_date": selection.start_date.isoformat() if selection.start_date else None,
                "end_date": selection.end_date.isoformat() if selection.end_date else None,
                "phase": selection.phase.value,
                "nights": selection.nights,
                "changed": selection != current,
            }
        )


class RoomScopedMixin(TenantScopedMixin):
    """Loads ``self.room`` from the URL within the current tenant."""

    room_lookup_url_kwarg = "room_id"
    room: Room

    def initial(self, request, *args, **kwargs):  # type: ignore
        super().initial(request, *args, **kwargs)
        room_id = kwargs.get(self.room_lookup_url_kwarg)
        self.room = get_object_or_404(Room, pk=room_id, tenant_id=self.tenant_context.id)

    def get_serializer_context(self):  # type: ignore
        context = super().get_serializer_context()
        context["room"] = getattr(self, "room", None)
        return context


class SeasonalRateViewSet(RoomScopedMixin, viewsets.ModelViewSet):
    """Seasonal prices of one room."""

    permission_classes = [IsTenantManagerOrReadOnly]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return SeasonalRateWriteSerializer
        return SeasonalRateSerializer

    def get_queryset(self):  # type: ignore
        qs = SeasonalRate.objects.filter(room=self.room)
        start = self.request.query_params.get("start")
        end = self.request.query_params.get("end")
        if start:
            qs = qs.filter(end_date__gte=start)
        if end:
            qs = qs.filter(start_date__lte=end)
        return qs.order_by("start_date", "-priority")

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        rate = serializer.save(room=self.room, tenant_id=self.tenant_context.id)
        read_serializer = SeasonalRateSerializer(rate, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        rate = serializer.save()
        return Response(SeasonalRateSerializer(rate, context=self.get_serializer_context()).data)


class RoomBlockViewSet(RoomScopedMixin, viewsets.ModelViewSet):
    """Dates a manager took out of sale."""

    permission_classes = [IsTenantManager]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return RoomBlockWriteSerializer
        return RoomBlockSerializer

    def get_queryset(self):  # type: ignore
        return RoomBlock.objects.filter(room=self.room).select_related("created_by").order_by("start_date")

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        block = serializer.save(
            room=self.room,
            tenant_id=self.tenant_context.id,
            created_by=request.user,
        )
        read_serializer = RoomBlockSerializer(block, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        block = serializer.save()
        return Response(RoomBlockSerializer(block, context=self.get_serializer_context()).data)
