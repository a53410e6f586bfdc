"""Serializers for the add-on catalog."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.rooms.models import Room
from shared.domain.value_objects import SUPPORTED_CURRENCIES

from .models import AddOn


class AddOnSerializer(serializers.ModelSerializer):
    tenant = serializers.ReadOnlyField(source="tenant_id")
    pricing_type_display = serializers.ReadOnlyField(source="get_pricing_type_display")
    available_for_rooms = serializers.PrimaryKeyRelatedField(
        many=True,
        queryset=Room.objects.all(),
        required=False,
    )

    class Meta:
        model = AddOn
        fields = [
            "id",
            "tenant",
            "name",
            "description",
            "addon_code",
            "addon_type",
            "price",
            "currency",
            "pricing_type",
            "pricing_type_display",
            "max_quantity",
            "available_for_rooms",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["tenant", "pricing_type_display", "created_at", "updated_at"]

    def get_fields(self):  # type: ignore
        fields = super().get_fields()
        tenant = self.context.get("tenant")
        if tenant is not None:
            fields["available_for_rooms"].child_relation.queryset = Room.objects.filter(tenant_id=tenant.id)
        return fields

    def validate_currency(self, value: str) -> str:
        value = value.upper()
        if value not in SUPPORTED_CURRENCIES:
            raise serializers.ValidationError(f"Unsupported currency: {value}")
        return value
