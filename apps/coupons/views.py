"""Coupon API views."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.tenants.mixins import TenantScopedMixin
from apps.tenants.permissions import IsTenantManager

from .models import Coupon
from .serializers import CouponSerializer, CouponUsageSerializer, CouponValidateSerializer
from .services import CouponValidationError, find_coupon, validate_coupon


class CouponViewSet(TenantScopedMixin, viewsets.ModelViewSet):
    """Coupons of the current tenant, managed by its owners."""

    serializer_class = CouponSerializer
    permission_classes = [IsTenantManager]
    filterset_fields = ["is_active", "discount_type"]

    def get_queryset(self):  # type: ignore
        return Coupon.objects.filter(tenant_id=self.tenant_context.id).prefetch_related("applicable_rooms")

    def perform_create(self, serializer):  # type: ignore
        serializer.save(tenant_id=self.tenant_context.id)

    @action(detail=False, methods=["post"], permission_classes=[permissions.AllowAny])
    def validate(self, request):  # type: ignore
        """Check a code against a prospective booking and report the discount."""
        serializer = CouponValidateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        coupon = find_coupon(self.tenant_context.id, data["code"])
        subtotal = data.get("subtotal", Decimal("0.00"))
        nights = data.get("nights") or 1
        try:
            discount = validate_coupon(
                coupon,
                room_ids=data["room_ids"],
                customer_email=data.get("customer_email") or None,
                subtotal=subtotal,
                nights=nights,
                check_in=data.get("check_in"),
            )
        except CouponValidationError as exc:
            return Response({"valid": False, "errors": exc.errors}, status=status.HTTP_200_OK)

        return Response(
            {
                "valid": True,
                "coupon": {
                    "id": coupon.id,
                    "code": coupon.code,
                    "name": coupon.name,
                    "description": coupon.description,
                    "discount_type": coupon.discount_type,
                    "discount_value": coupon.discount_value,
                },
                "discount_amount": discount,
                "final_amount": max(subtotal - discount, Decimal("0.00")),
            }
        )

    @action(detail=True, methods=["get"])
    def usage(self, request, pk=None):  # type: ignore
        coupon: Coupon = self.get_object()
        usages = coupon.usages.filter(tenant_id=self.tenant_context.id).select_related("booking", "booking__room")
        return Response(CouponUsageSerializer(usages, many=True).data)
