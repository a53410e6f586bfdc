"""Serializers for coupons and their redemptions."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.rooms.models import Room

from .models import Coupon, CouponUsage


class CouponSerializer(serializers.ModelSerializer):
    tenant = serializers.ReadOnlyField(source="tenant_id")
    applicable_rooms = serializers.PrimaryKeyRelatedField(
        many=True,
        queryset=Room.objects.all(),
        required=False,
    )

    class Meta:
        model = Coupon
        fields = [
            "id",
            "tenant",
            "code",
            "name",
            "description",
            "discount_type",
            "discount_value",
            "applicable_rooms",
            "valid_from",
            "valid_until",
            "max_uses",
            "max_uses_per_customer",
            "current_uses",
            "min_booking_amount",
            "min_nights",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["tenant", "current_uses", "created_at", "updated_at"]

    def get_fields(self):  # type: ignore
        fields = super().get_fields()
        tenant = self.context.get("tenant")
        if tenant is not None:
            fields["applicable_rooms"].child_relation.queryset = Room.objects.filter(tenant_id=tenant.id)
        return fields

    def validate_code(self, value: str) -> str:
        value = value.strip().upper()
        tenant = self.context.get("tenant")
        if tenant is not None:
            qs = Coupon.objects.filter(tenant_id=tenant.id, code__iexact=value)
            if self.instance is not None:
                qs = qs.exclude(pk=self.instance.pk)
            if qs.exists():
                raise serializers.ValidationError("A coupon with this code already exists")
        return value

    def validate(self, attrs):  # type: ignore
        valid_from = attrs.get("valid_from", getattr(self.instance, "valid_from", None))
        valid_until = attrs.get("valid_until", getattr(self.instance, "valid_until", None))
        if valid_from and valid_until and valid_until < valid_from:
            raise serializers.ValidationError({"valid_until": "valid_until cannot be before valid_from."})

        discount_type = attrs.get("discount_type", getattr(self.instance, "discount_type", None))
        discount_value = attrs.get("discount_value", getattr(self.instance, "discount_value", None))
        if discount_type == Coupon.Type.PERCENTAGE and discount_value is not None and discount_value > 100:
            raise serializers.ValidationError({"discount_value": "A percentage discount cannot exceed 100."})
        return attrs


class CouponValidateSerializer(serializers.Serializer):
    code = serializers.CharField()
    room_id = serializers.IntegerField(required=False)
    room_ids = serializers.ListField(child=serializers.IntegerField(), required=False, default=list)
    customer_email = serializers.EmailField(required=False, allow_blank=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)
    nights = serializers.IntegerField(required=False, min_value=0)
    check_in = serializers.DateField(required=False)

    def validate(self, attrs):  # type: ignore
        room_ids = list(attrs.get("room_ids") or [])
        if not room_ids and attrs.get("room_id") is not None:
            room_ids = [attrs["room_id"]]
        attrs["room_ids"] = room_ids
        return attrs


class CouponUsageSerializer(serializers.ModelSerializer):
    booking = serializers.SerializerMethodField()

    class Meta:
        model = CouponUsage
        fields = [
            "id",
            "coupon",
            "customer_email",
            "discount_applied",
            "original_amount",
            "final_amount",
            "used_at",
            "booking",
        ]
        read_only_fields = fields

    def get_booking(self, obj: CouponUsage):  # type: ignore
        booking = obj.booking
        if booking is None:
            return None
        return {
            "id": booking.id,
            "booking_code": booking.booking_code,
            "guest_name": booking.guest_name,
            "room_name": booking.room.name,
            "check_in": booking.check_in.isoformat(),
            "check_out": booking.check_out.isoformat(),
        }
