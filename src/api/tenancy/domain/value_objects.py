"""Value objects for the tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant.

    Opaque: the tenant directory owns and issues the value.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("TenantId must not be empty")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class TenantBranding:
    """Visual identity applied to a tenant's portal."""

    primary_color: str
    secondary_color: str
    accent_color: str | None = None
    logo_url: str | None = None
    favicon_url: str | None = None


# Shown in public access mode, when no tenant owns the hostname
PLATFORM_BRANDING = TenantBranding(
    primary_color="#9213ec",
    secondary_color="#7a10c4",
    accent_color="#6366f1",
)


class TenantMatch(StrEnum):
    """Which directory field matched the hostname."""

    SUBDOMAIN = "subdomain"
    CUSTOM_DOMAIN = "custom_domain"


class ResolutionOutcome(StrEnum):
    """Outcome of resolving a hostname to a tenant."""

    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class SubdomainCheck(StrEnum):
    """Result of checking a candidate subdomain for registration.

    UNAVAILABLE means the directory could not be queried; callers must
    treat it as "not available" and may offer a retry.
    """

    AVAILABLE = "available"
    INVALID_FORMAT = "invalid_format"
    RESERVED = "reserved"
    TAKEN = "taken"
    UNAVAILABLE = "unavailable"

    @property
    def is_available(self) -> bool:
        return self is SubdomainCheck.AVAILABLE
