"""Admin registration for coupons."""

from __future__ import annotations

from django.contrib import admin

from .models import Coupon, CouponUsage


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "tenant",
        "discount_type",
        "discount_value",
        "valid_from",
        "valid_until",
        "current_uses",
        "max_uses",
        "is_active",
    )
    list_filter = ("discount_type", "is_active")
    search_fields = ("code", "name", "tenant__name")
    readonly_fields = ("current_uses", "created_at", "updated_at")
    filter_horizontal = ("applicable_rooms",)


@admin.register(CouponUsage)
class CouponUsageAdmin(admin.ModelAdmin):
    list_display = ("coupon", "customer_email", "discount_applied", "final_amount", "booking", "used_at")
    search_fields = ("coupon__code", "customer_email")
    readonly_fields = ("used_at",)
