"""Domain-Oriented Observability for the tenancy application layer."""

from tenancy.application.observability.tenant_resolver_probe import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)

__all__ = [
    "DefaultTenantResolverProbe",
    "TenantResolverProbe",
]
