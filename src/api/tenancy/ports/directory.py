"""Tenant directory protocol (port).

The directory is the remote source of truth for tenant records. It is
consumed read-only: resolution never creates, renames or deactivates
tenants.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenancy.domain.tenant import Tenant


@runtime_checkable
class ITenantDirectory(Protocol):
    """Read-only lookups of active tenants.

    Both lookups are equality filters limited to one result and must only
    return tenants with ``is_active = true``. Implementations wrap every
    transport or query failure in ``TenantLookupError``.
    """

    async def find_active_by_subdomain(self, subdomain: str) -> Tenant | None:
        """Find the active tenant owning a subdomain.

        Args:
            subdomain: Lowercase subdomain label

        Returns:
            The matching Tenant, or None if no active tenant owns it

        Raises:
            TenantLookupError: If the directory could not be queried
        """
        ...

    async def find_active_by_custom_domain(self, domain: str) -> Tenant | None:
        """Find the active tenant owning a custom domain.

        Args:
            domain: Lowercase fully-qualified hostname

        Returns:
            The matching Tenant, or None if no active tenant owns it

        Raises:
            TenantLookupError: If the directory could not be queried
        """
        ...
