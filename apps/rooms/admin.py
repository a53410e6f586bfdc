"""Admin registration for rooms."""

from __future__ import annotations

from django.contrib import admin

from .models import Room, RoomBlock, SeasonalRate


class SeasonalRateInline(admin.TabularInline):
    model = SeasonalRate
    extra = 0
    fields = ("name", "start_date", "end_date", "price_per_night", "priority")


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "tenant",
        "room_code",
        "max_guests",
        "base_price_per_night",
        "currency",
        "min_stay_nights",
        "max_stay_nights",
        "is_active",
    )
    list_filter = ("is_active", "tenant")
    search_fields = ("name", "room_code", "tenant__name")
    inlines = [SeasonalRateInline]


@admin.register(SeasonalRate)
class SeasonalRateAdmin(admin.ModelAdmin):
    list_display = ("room", "name", "start_date", "end_date", "price_per_night", "priority")
    list_filter = ("room__tenant",)
    search_fields = ("name", "room__name")


@admin.register(RoomBlock)
class RoomBlockAdmin(admin.ModelAdmin):
    list_display = ("room", "start_date", "end_date", "reason", "created_by", "created_at")
    list_filter = ("reason",)
    search_fields = ("room__name", "notes")
