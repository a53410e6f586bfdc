"""Serializers for the booking domain."""

from __future__ import annotations

from collections import Counter
from datetime import date
from decimal import Decimal, InvalidOperation

from rest_framework import serializers  # type: ignore

from apps.addons.models import AddOn
from apps.coupons.services import find_coupon
from apps.rooms.models import Room

from .models import Booking, BookingAddOn, BookingNight
from .services import BookingRequest


class AddOnChoiceSerializer(serializers.Serializer):
    addon_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=0)


class StayRequestSerializer(serializers.Serializer):
    """Room and dates shared by every booking request."""

    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all())
    check_in = serializers.DateField()
    check_out = serializers.DateField()

    def get_fields(self):  # type: ignore
        fields = super().get_fields()
        tenant = self.context.get("tenant")
        if tenant is not None:
            fields["room"].queryset = Room.objects.filter(tenant_id=tenant.id)
        return fields

    def validate(self, attrs):  # type: ignore
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError({"check_out": "Check-out must be after check-in."})
        return attrs


class CheckConflictsSerializer(StayRequestSerializer):
    exclude_booking_id = serializers.IntegerField(required=False, allow_null=True)


class BookingQuoteSerializer(StayRequestSerializer):
    """Everything needed to price a stay; nothing is saved."""

    guests_count = serializers.IntegerField(min_value=1, default=1)
    addons = AddOnChoiceSerializer(many=True, required=False, default=list)
    nightly_overrides = serializers.DictField(
        child=serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.00")),
        required=False,
        default=dict,
    )
    coupon_code = serializers.CharField(required=False, allow_blank=True, default="")
    guest_email = serializers.EmailField(required=False, allow_blank=True, default="")

    def validate(self, attrs):  # type: ignore
        attrs = super().validate(attrs)
        room: Room = attrs["room"]
        check_in: date = attrs["check_in"]
        check_out: date = attrs["check_out"]
        nights = (check_out - check_in).days

        if not room.is_active:
            raise serializers.ValidationError({"room": "This room is not available for booking."})
        if attrs["guests_count"] > room.max_guests:
            raise serializers.ValidationError(
                {"guests_count": f"This room sleeps at most {room.max_guests} guests."}
            )
        if nights < room.min_stay_nights:
            raise serializers.ValidationError(
                {"check_out": f"Minimum stay is {room.min_stay_nights} night(s)."}
            )
        if room.max_stay_nights and nights > room.max_stay_nights:
            raise serializers.ValidationError(
                {"check_out": f"Maximum stay is {room.max_stay_nights} night(s)."}
            )

        tenant = self.context.get("tenant")
        if attrs["nightly_overrides"] and not (tenant is not None and tenant.can_manage):
            raise serializers.ValidationError(
                {"nightly_overrides": "Only the property manager can override nightly prices."}
            )
        attrs["nightly_overrides"] = self._validate_overrides(attrs["nightly_overrides"], check_in, check_out)
        attrs["addon_selections"], attrs["addon_objects"] = self._validate_addons(attrs["addons"], room)

        code = attrs["coupon_code"].strip()
        attrs["coupon"] = find_coupon(tenant.id, code) if tenant is not None and code else None
        attrs["coupon_code"] = code
        return attrs

    @staticmethod
    def _validate_overrides(raw: dict, check_in: date, check_out: date) -> dict:
        overrides = {}
        for key, price in raw.items():
            try:
                night = date.fromisoformat(str(key))
            except ValueError:
                raise serializers.ValidationError({"nightly_overrides": f"Invalid date: {key}"})
            if not check_in <= night < check_out:
                raise serializers.ValidationError(
                    {"nightly_overrides": f"{night.isoformat()} is not a night of this stay."}
                )
            try:
                overrides[night] = Decimal(price)
            except (InvalidOperation, TypeError):
                raise serializers.ValidationError({"nightly_overrides": f"Invalid price for {key}"})
        return overrides

    def _validate_addons(self, choices: list, room: Room):  # type: ignore
        if not choices:
            return [], {}
        # Repeated lines for one add-on count against a single max_quantity.
        quantities = Counter()
        for choice in choices:
            quantities[choice["addon_id"]] += choice["quantity"]
        tenant = self.context.get("tenant")
        qs = AddOn.objects.filter(id__in=list(quantities)).prefetch_related("available_for_rooms")
        if tenant is not None:
            qs = qs.filter(tenant_id=tenant.id)
        catalog = {addon.id: addon for addon in qs}

        selections, objects, errors = [], {}, []
        for addon_id, quantity in quantities.items():
            addon = catalog.get(addon_id)
            if addon is None or not addon.is_available_for(room):
                errors.append(f"Add-on {addon_id} is not available for this room.")
                continue
            if quantity > addon.max_quantity:
                errors.append(f"{addon.name}: at most {addon.max_quantity} can be booked.")
                continue
            if quantity == 0:
                continue
            selections.append(addon.select(quantity))
            objects[addon.id] = addon
        if errors:
            raise serializers.ValidationError({"addons": errors})
        return selections, objects

    def to_booking_request(self) -> BookingRequest:
        data = self.validated_data
        return BookingRequest(
            room=data["room"],
            check_in=data["check_in"],
            check_out=data["check_out"],
            guests_count=data["guests_count"],
            addons=data["addon_selections"],
            addon_objects=data["addon_objects"],
            overrides=data["nightly_overrides"],
            coupon=data["coupon"],
            coupon_code=data["coupon_code"],
            customer_email=data["guest_email"],
        )


class BookingCreateSerializer(BookingQuoteSerializer):
    guest_name = serializers.CharField(max_length=255)
    guest_phone = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    source = serializers.ChoiceField(choices=Booking.Source.choices, required=False)
    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)
    payment_status = serializers.ChoiceField(choices=Booking.PaymentStatus.choices, required=False)
    force_create = serializers.BooleanField(required=False, default=False)


class BookingCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class BookingAddOnSerializer(serializers.ModelSerializer):
    class Meta:
        model = BookingAddOn
        fields = ["id", "addon", "name", "unit_price", "pricing_type", "quantity", "total"]
        read_only_fields = fields


class BookingNightSerializer(serializers.ModelSerializer):
    class Meta:
        model = BookingNight
        fields = ["date", "base_price", "effective_price", "override_price", "final_price", "seasonal_rate_name"]
        read_only_fields = fields


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking with its priced nights and add-ons."""

    tenant = serializers.ReadOnlyField(source="tenant_id")
    room_name = serializers.ReadOnlyField(source="room.name")
    nights = serializers.ReadOnlyField()
    addons = BookingAddOnSerializer(many=True, read_only=True)
    nights_breakdown = BookingNightSerializer(many=True, read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_code",
            "tenant",
            "room",
            "room_name",
            "guest_name",
            "guest_email",
            "guest_phone",
            "check_in",
            "check_out",
            "nights",
            "guests_count",
            "status",
            "payment_status",
            "source",
            "subtotal",
            "discount_amount",
            "total_amount",
            "currency",
            "coupon_code",
            "notes",
            "addons",
            "nights_breakdown",
            "cancelled_at",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingUpdateSerializer(serializers.ModelSerializer):
    """Fields a manager may change after the booking was priced."""

    class Meta:
        model = Booking
        fields = ["guest_name", "guest_email", "guest_phone", "status", "payment_status", "notes"]

    def validate_status(self, value: str) -> str:
        if value == Booking.Status.CANCELLED:
            raise serializers.ValidationError("Use the cancel endpoint to cancel a booking.")
        return value
