"""Serializers for the tenants domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.domain.value_objects import SUPPORTED_CURRENCIES

from .models import Tenant


class TenantSerializer(serializers.ModelSerializer):
    owner = serializers.ReadOnlyField(source="owner_id")

    class Meta:
        model = Tenant
        fields = ["id", "name", "slug", "owner", "currency", "is_active", "created_at", "updated_at"]
        read_only_fields = ["owner", "created_at", "updated_at"]
        extra_kwargs = {"slug": {"required": False}}

    def validate_currency(self, value: str) -> str:
        value = value.upper()
        if value not in SUPPORTED_CURRENCIES:
            raise serializers.ValidationError(f"Unsupported currency: {value}")
        return value
