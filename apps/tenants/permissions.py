"""Permissions for tenant-scoped views."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsTenantManagerOrReadOnly(permissions.BasePermission):
    """Anyone may read a tenant's public data; only its managers may change it."""

    def has_permission(self, request, view):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        if not request.user or not request.user.is_authenticated:
            return False
        context = getattr(view, "tenant_context", None)
        return bool(context and context.can_manage)


class IsTenantManager(permissions.BasePermission):
    """Only the tenant's managers, for reads and writes alike."""

    def has_permission(self, request, view):  # type: ignore
        if not request.user or not request.user.is_authenticated:
            return False
        context = getattr(view, "tenant_context", None)
        return bool(context and context.can_manage)
