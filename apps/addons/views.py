"""Add-on catalog API views."""

from __future__ import annotations

from rest_framework import viewsets  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore

from apps.tenants.mixins import TenantScopedMixin
from apps.tenants.permissions import IsTenantManagerOrReadOnly

from .filters import AddOnFilterSet
from .models import AddOn
from .serializers import AddOnSerializer


class AddOnViewSet(TenantScopedMixin, viewsets.ModelViewSet):
    """Extras of the current tenant; guests see active ones only."""

    serializer_class = AddOnSerializer
    permission_classes = [IsTenantManagerOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = AddOnFilterSet
    ordering_fields = ["name", "price", "created_at"]

    def get_queryset(self):  # type: ignore
        qs = AddOn.objects.filter(tenant_id=self.tenant_context.id).prefetch_related("available_for_rooms")
        if not self.tenant_context.can_manage:
            qs = qs.filter(is_active=True)
        return qs

    def perform_create(self, serializer):  # type: ignore
        # Priced in the tenant currency unless the manager picked another one.
        currency = serializer.validated_data.get("currency", self.tenant_context.currency)
        serializer.save(tenant_id=self.tenant_context.id, currency=currency)
