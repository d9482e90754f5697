"""Tagged result of resolving a hostname to a tenant."""

from __future__ import annotations

from dataclasses import dataclass

from tenancy.domain.tenant import Tenant
from tenancy.domain.value_objects import (
    PLATFORM_BRANDING,
    ResolutionOutcome,
    TenantBranding,
    TenantMatch,
)


@dataclass(frozen=True)
class TenantResolution:
    """Which tenant, if any, a hostname belongs to.

    Three shapes, built through the factory methods:

    - ``resolved``: ``tenant`` and ``matched_by`` are set.
    - ``not_found``: the directory answered and no active tenant owns the
      hostname. ``platform_domain`` is True when the hostname is part of
      the shared platform surface and no lookup was made.
    - ``failed``: the directory could not answer; ``error`` says why.
      Callers should show the public view with a retry/error banner rather
      than treating the hostname as tenant-less.

    Attributes:
        outcome: Resolution outcome tag.
        hostname: Normalized hostname the result is about.
        tenant: Resolved tenant (resolved only).
        matched_by: Directory field that matched (resolved only).
        platform_domain: Hostname is a platform domain (not_found only).
        error: Failure description (failed only).
    """

    outcome: ResolutionOutcome
    hostname: str
    tenant: Tenant | None = None
    matched_by: TenantMatch | None = None
    platform_domain: bool = False
    error: str | None = None

    @classmethod
    def resolved(
        cls, hostname: str, tenant: Tenant, matched_by: TenantMatch
    ) -> TenantResolution:
        return cls(
            outcome=ResolutionOutcome.RESOLVED,
            hostname=hostname,
            tenant=tenant,
            matched_by=matched_by,
        )

    @classmethod
    def not_found(cls, hostname: str, platform_domain: bool = False) -> TenantResolution:
        return cls(
            outcome=ResolutionOutcome.NOT_FOUND,
            hostname=hostname,
            platform_domain=platform_domain,
        )

    @classmethod
    def failed(cls, hostname: str, error: str) -> TenantResolution:
        return cls(
            outcome=ResolutionOutcome.FAILED,
            hostname=hostname,
            error=error,
        )

    @property
    def is_resolved(self) -> bool:
        return self.outcome is ResolutionOutcome.RESOLVED

    @property
    def is_failure(self) -> bool:
        return self.outcome is ResolutionOutcome.FAILED

    @property
    def is_public_access(self) -> bool:
        """True when the shared platform UI should be shown."""
        return not self.is_resolved

    @property
    def branding(self) -> TenantBranding:
        """Branding to apply: the tenant's, or the platform default."""
        if self.tenant is not None:
            return self.tenant.branding
        return PLATFORM_BRANDING
