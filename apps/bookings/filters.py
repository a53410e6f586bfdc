"""FilterSet for booking listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(field_name="status", choices=Booking.Status.choices)
    room = django_filters.NumberFilter(field_name="room_id", lookup_expr="exact")
    check_in_from = django_filters.DateFilter(field_name="check_in", lookup_expr="gte")
    check_in_to = django_filters.DateFilter(field_name="check_in", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["status", "payment_status", "source", "room"]
