"""Tenant API views."""

from __future__ import annotations

from rest_framework import permissions, viewsets  # type: ignore

from .models import Tenant
from .serializers import TenantSerializer


class TenantViewSet(viewsets.ModelViewSet):
    """Businesses owned by the current user."""

    serializer_class = TenantSerializer
    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ["get", "post", "put", "patch", "head", "options"]

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = Tenant.objects.select_related("owner")
        if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
            return qs
        return qs.filter(owner=user)

    def perform_create(self, serializer):  # type: ignore
        serializer.save(owner=self.request.user)
