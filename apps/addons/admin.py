"""Admin registration for add-ons."""

from __future__ import annotations

from django.contrib import admin

from .models import AddOn


@admin.register(AddOn)
class AddOnAdmin(admin.ModelAdmin):
    list_display = ("name", "tenant", "addon_type", "price", "currency", "pricing_type", "max_quantity", "is_active")
    list_filter = ("addon_type", "pricing_type", "is_active")
    search_fields = ("name", "addon_code", "tenant__name")
    filter_horizontal = ("available_for_rooms",)
