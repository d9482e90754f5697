"""Tenant context value object for resolved tenant identification.

The pure value object downstream services consult to scope their queries
by ``tenant_id``. Resolution itself (hostname rules, directory lookups)
lives in the tenancy bounded context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TenantSource = Literal["subdomain", "custom_domain"]


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    Attributes:
        tenant_id: The tenant identifier issued by the tenant directory.
        source: How the hostname matched - 'subdomain' or 'custom_domain'.
        hostname: Normalized hostname the request was addressed to.
    """

    tenant_id: str
    source: TenantSource
    hostname: str
