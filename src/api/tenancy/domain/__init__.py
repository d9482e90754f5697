"""Tenancy domain: tenants, hostname rules and resolution results.

Pure business rules with no dependency on infrastructure or frameworks.
"""

from tenancy.domain.exceptions import InvalidHostnameError
from tenancy.domain.hostnames import HostnamePolicy, is_ip_literal, normalize_hostname
from tenancy.domain.resolution import TenantResolution
from tenancy.domain.subdomains import (
    SubdomainPolicy,
    is_valid_subdomain,
    normalize_subdomain,
)
from tenancy.domain.tenant import Tenant
from tenancy.domain.value_objects import (
    PLATFORM_BRANDING,
    ResolutionOutcome,
    SubdomainCheck,
    TenantBranding,
    TenantId,
    TenantMatch,
)

__all__ = [
    "HostnamePolicy",
    "InvalidHostnameError",
    "PLATFORM_BRANDING",
    "ResolutionOutcome",
    "SubdomainCheck",
    "SubdomainPolicy",
    "Tenant",
    "TenantBranding",
    "TenantId",
    "TenantMatch",
    "TenantResolution",
    "is_ip_literal",
    "is_valid_subdomain",
    "normalize_hostname",
    "normalize_subdomain",
]
