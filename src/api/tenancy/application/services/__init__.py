"""Application services for the tenancy bounded context."""

from tenancy.application.services.tenant_resolver import TenantResolver

__all__ = [
    "TenantResolver",
]
