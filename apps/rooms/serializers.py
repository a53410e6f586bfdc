"""Serializers for rooms, seasonal rates and blocks."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.domain.value_objects import SUPPORTED_CURRENCIES

from .models import Room, RoomBlock, SeasonalRate


class RoomSerializer(serializers.ModelSerializer):
    tenant = serializers.ReadOnlyField(source="tenant_id")

    class Meta:
        model = Room
        fields = [
            "id",
            "tenant",
            "name",
            "description",
            "room_code",
            "bed_type",
            "bed_count",
            "max_guests",
            "base_price_per_night",
            "currency",
            "min_stay_nights",
            "max_stay_nights",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["tenant", "created_at", "updated_at"]

    def validate_currency(self, value: str) -> str:
        value = value.upper()
        if value not in SUPPORTED_CURRENCIES:
            raise serializers.ValidationError(f"Unsupported currency: {value}")
        return value

    def validate(self, attrs):  # type: ignore
        instance = self.instance
        min_stay = attrs.get("min_stay_nights", getattr(instance, "min_stay_nights", 1))
        max_stay = attrs.get("max_stay_nights", getattr(instance, "max_stay_nights", None))
        if max_stay is not None and max_stay < min_stay:
            raise serializers.ValidationError(
                {"max_stay_nights": "Maximum stay cannot be shorter than the minimum stay."}
            )
        return attrs


class SeasonalRateSerializer(serializers.ModelSerializer):
    room = serializers.ReadOnlyField(source="room_id")

    class Meta:
        model = SeasonalRate
        fields = [
            "id",
            "room",
            "name",
            "start_date",
            "end_date",
            "price_per_night",
            "priority",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["room", "created_at", "updated_at"]


class SeasonalRateWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = SeasonalRate
        fields = [
            "name",
            "start_date",
            "end_date",
            "price_per_night",
            "priority",
        ]

    def validate(self, attrs):  # type: ignore
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and start > end:
            raise serializers.ValidationError("End date cannot be before the start date.")
        return attrs


class RoomBlockSerializer(serializers.ModelSerializer):
    room = serializers.ReadOnlyField(source="room_id")
    created_by = serializers.ReadOnlyField(source="created_by_id")
    reason_display = serializers.ReadOnlyField(source="get_reason_display")

    class Meta:
        model = RoomBlock
        fields = [
            "id",
            "room",
            "start_date",
            "end_date",
            "reason",
            "reason_display",
            "notes",
            "created_by",
            "created_at",
        ]
        read_only_fields = ["room", "created_by", "created_at", "reason_display"]


class RoomBlockWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = RoomBlock
        fields = ["start_date", "end_date", "reason", "notes"]

    def validate(self, attrs):  # type: ignore
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and start > end:
            raise serializers.ValidationError("End date cannot be before the start date.")
        return attrs


class PriceQuerySerializer(serializers.Serializer):
    date = serializers.DateField()


class PriceRangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] <= attrs["start_date"]:
            raise serializers.ValidationError("end_date must be after start_date.")
        return attrs


class CalendarQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=1, max_value=9999)
    month = serializers.IntegerField(min_value=1, max_value=12)
    start_date = serializers.DateField(required=False, allow_null=True)
    end_date = serializers.DateField(required=False, allow_null=True)

    def validate(self, attrs):  # type: ignore
        if attrs.get("end_date") and not attrs.get("start_date"):
            raise serializers.ValidationError("end_date requires start_date.")
        return attrs


class CalendarSelectSerializer(serializers.Serializer):
    """One click on the calendar, with the selection it applies to."""

    clicked_date = serializers.DateField()
    start_date = serializers.DateField(required=False, allow_null=True)
    end_date = serializers.DateField(required=False, allow_null=True)

    def validate(self, attrs):  # type: ignore
        if attrs.get("end_date") and not attrs.get("start_date"):
            raise serializers.ValidationError("end_date requires start_date.")
        return attrs
