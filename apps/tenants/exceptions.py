"""API errors raised while resolving the tenant of a request."""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.exceptions import APIException  # type: ignore


class TenantRequired(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Tenant ID required"
    default_code = "tenant_required"
