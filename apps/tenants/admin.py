"""Admin registration for tenants."""

from __future__ import annotations

from django.contrib import admin

from .models import Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "owner", "currency", "is_active", "created_at")
    list_filter = ("is_active", "currency")
    search_fields = ("name", "slug", "owner__email", "owner__username")
    readonly_fields = ("created_at", "updated_at")
