"""Ports (interfaces) for the tenancy bounded context."""

from tenancy.ports.directory import ITenantDirectory
from tenancy.ports.exceptions import TenantLookupError, TenantLookupTimeoutError

__all__ = [
    "ITenantDirectory",
    "TenantLookupError",
    "TenantLookupTimeoutError",
]
