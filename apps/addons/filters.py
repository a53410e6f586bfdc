"""FilterSet for the add-on catalog."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import AddOn


class AddOnFilterSet(django_filters.FilterSet):
    is_active = django_filters.BooleanFilter(field_name="is_active")
    addon_type = django_filters.ChoiceFilter(field_name="addon_type", choices=AddOn.AddOnType.choices)
    search = django_filters.CharFilter(method="filter_search")
    # Add-ons offered with this room, including the ones offered with every room
    room = django_filters.NumberFilter(method="filter_room")

    class Meta:
        model = AddOn
        fields = ["is_active", "addon_type", "pricing_type"]

    def filter_search(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) | Q(description__icontains=value) | Q(addon_code__icontains=value)
        )

    def filter_room(self, queryset, name, value):  # type: ignore
        if value is None:
            return queryset
        return queryset.filter(
            Q(available_for_rooms__isnull=True) | Q(available_for_rooms__id=value)
        ).distinct()
