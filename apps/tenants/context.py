"""
Tenant Context

The tenant a request acts for, resolved once per request and handed
explicitly to serializers and services.

Resolution order:
1. ``X-Tenant-ID`` header (numeric id or slug)
2. The first active tenant owned by the authenticated user
"""

from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore

from shared.domain.base import ValueObject

from .exceptions import TenantRequired
from .models import Tenant


@dataclass(frozen=True)
class TenantContext(ValueObject):
    id: int
    slug: str
    name: str
    currency: str
    can_manage: bool = False

    @classmethod
    def for_tenant(cls, tenant: Tenant, user=None) -> "TenantContext":
        return cls(
            id=tenant.id,
            slug=tenant.slug,
            name=tenant.name,
            currency=tenant.currency,
            can_manage=tenant.is_managed_by(user),
        )


def _tenant_from_header(value: str) -> Tenant:
    # str.isdigit() also accepts characters such as "²" that int() rejects.
    lookup = {"pk": int(value)} if value.isascii() and value.isdecimal() else {"slug": value}
    try:
        return Tenant.objects.get(is_active=True, **lookup)
    except Tenant.DoesNotExist:
        raise NotFound("Tenant not found")


def resolve_tenant_context(request) -> TenantContext:
    """Resolve the tenant for ``request`` or raise a 400/404."""
    header_value = (request.headers.get(settings.VILO_TENANT_HEADER) or "").strip()
    user = getattr(request, "user", None)

    if header_value:
        tenant = _tenant_from_header(header_value)
    elif user is not None and user.is_authenticated:
        tenant = Tenant.objects.filter(owner=user, is_active=True).order_by("id").first()
        if tenant is None:
            raise TenantRequired()
    else:
        raise TenantRequired()

    return TenantContext.for_tenant(tenant, user)
