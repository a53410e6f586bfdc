"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking, BookingAddOn, BookingNight


class BookingNightInline(admin.TabularInline):
    model = BookingNight
    extra = 0
    readonly_fields = ("date", "base_price", "effective_price", "override_price", "final_price", "seasonal_rate_name")
    can_delete = False


class BookingAddOnInline(admin.TabularInline):
    model = BookingAddOn
    extra = 0
    readonly_fields = ("addon", "name", "unit_price", "pricing_type", "quantity", "total")
    can_delete = False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_code",
        "room",
        "guest_name",
        "status",
        "payment_status",
        "check_in",
        "check_out",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "source", "check_in")
    search_fields = ("booking_code", "guest_name", "guest_email", "room__name")
    readonly_fields = (
        "booking_code",
        "subtotal",
        "discount_amount",
        "total_amount",
        "created_at",
        "updated_at",
    )
    inlines = [BookingNightInline, BookingAddOnInline]
