"""View mixins shared by the tenant-scoped apps."""

from __future__ import annotations

from .context import TenantContext, resolve_tenant_context


class TenantScopedMixin:
    """Resolves ``self.tenant_context`` before permissions are checked."""

    tenant_context: TenantContext

    def initial(self, request, *args, **kwargs):  # type: ignore
        self.tenant_context = resolve_tenant_context(request)
        super().initial(request, *args, **kwargs)

    def get_serializer_context(self):  # type: ignore
        context = super().get_serializer_context()
        context["tenant"] = getattr(self, "tenant_context", None)
        return context
