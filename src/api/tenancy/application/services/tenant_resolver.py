"""Tenant resolver application service.

Answers "which tenant, if any, is this hostname scoped to?" and the
registration-time questions about candidate subdomains.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from tenancy.application.observability import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)
from tenancy.application.resolution_cache import ResolutionCache
from tenancy.domain.hostnames import HostnamePolicy, normalize_hostname
from tenancy.domain.resolution import TenantResolution
from tenancy.domain.subdomains import (
    SubdomainPolicy,
    is_valid_subdomain,
    normalize_subdomain,
)
from tenancy.domain.tenant import Tenant
from tenancy.domain.value_objects import SubdomainCheck, TenantMatch
from tenancy.ports.directory import ITenantDirectory
from tenancy.ports.exceptions import TenantLookupError, TenantLookupTimeoutError


class TenantResolver:
    """Resolve hostnames to tenants against the remote tenant directory.

    Resolution order for a hostname (first success wins):

    1. Cached result for the hostname, with no remote call.
    2. Platform domain: no tenant, no remote call.
    3. Subdomain lookup, when the hostname carries a subdomain.
    4. Custom-domain lookup on the full hostname.
    5. No tenant.

    Resolved and not-found results are cached until ``clear_cache()``.
    Directory failures produce a ``failed`` resolution that is not cached
    and never raised to the caller.
    """

    def __init__(
        self,
        directory: ITenantDirectory,
        hostname_policy: HostnamePolicy,
        subdomain_policy: SubdomainPolicy,
        cache: ResolutionCache | None = None,
        lookup_timeout: float = 5.0,
        probe: TenantResolverProbe | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            directory: Remote tenant directory
            hostname_policy: Platform domains and subdomain extraction rules
            subdomain_policy: Reserved subdomain names
            cache: Resolution cache; a private one is created if omitted
            lookup_timeout: Seconds allowed for each directory lookup
            probe: Optional domain probe for observability
        """
        if lookup_timeout <= 0:
            raise ValueError("lookup_timeout must be positive")
        self._directory = directory
        self._hostname_policy = hostname_policy
        self._subdomain_policy = subdomain_policy
        self._cache = cache if cache is not None else ResolutionCache()
        self._lookup_timeout = lookup_timeout
        self._probe = probe or DefaultTenantResolverProbe()

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    def is_platform_domain(self, hostname: str) -> bool:
        """True if the hostname is the shared platform surface (public access)."""
        return self._hostname_policy.is_platform_domain(hostname)

    def extract_subdomain(self, hostname: str) -> str | None:
        """Return the tenant subdomain carried by the hostname, if any."""
        return self._hostname_policy.extract_subdomain(hostname)

    async def get_tenant_by_subdomain(self, subdomain: str) -> Tenant | None:
        """Look up the active tenant owning a subdomain.

        Args:
            subdomain: Subdomain label, any case

        Returns:
            The active Tenant, or None

        Raises:
            ValueError: If the subdomain is empty
            TenantLookupError: If the directory could not answer
        """
        normalized = subdomain.strip().lower()
        if not normalized:
            raise ValueError("subdomain must not be empty")
        return await self._lookup(
            TenantMatch.SUBDOMAIN,
            normalized,
            self._directory.find_active_by_subdomain,
        )

    async def get_tenant_by_custom_domain(self, domain: str) -> Tenant | None:
        """Look up the active tenant owning a custom domain.

        Args:
            domain: Full hostname, any case, optionally with a port

        Returns:
            The active Tenant, or None

        Raises:
            InvalidHostnameError: If the domain is not a valid hostname
            TenantLookupError: If the directory could not answer
        """
        normalized = normalize_hostname(domain)
        return await self._lookup(
            TenantMatch.CUSTOM_DOMAIN,
            normalized,
            self._directory.find_active_by_custom_domain,
        )

    async def resolve(self, hostname: str) -> TenantResolution:
        """Resolve a hostname to a tenant.

        Args:
            hostname: Request hostname, optionally with a port

        Returns:
            A resolved, not_found or failed TenantResolution

        Raises:
            InvalidHostnameError: If the hostname is malformed
        """
        host = normalize_hostname(hostname)

        cached = self._cache.get(host)
        if cached is not None:
            self._probe.resolution_served_from_cache(host, cached.outcome.value)
            return cached

        if self.is_platform_domain(host):
            self._probe.platform_domain_detected(host)
            return self._remember(TenantResolution.not_found(host, platform_domain=True))

        subdomain = self.extract_subdomain(host)
        try:
            if subdomain:
                tenant = await self.get_tenant_by_subdomain(subdomain)
                if tenant is not None:
                    return self._resolved(host, tenant, TenantMatch.SUBDOMAIN)

            tenant = await self.get_tenant_by_custom_domain(host)
            if tenant is not None:
                return self._resolved(host, tenant, TenantMatch.CUSTOM_DOMAIN)
        except TenantLookupError as e:
            self._probe.resolution_failed(host, lookup=e.field or "unknown", error=e)
            return TenantResolution.failed(host, error=str(e))

        self._probe.tenant_not_found(host)
        return self._remember(TenantResolution.not_found(host))

    async def resolve_tenant(self, hostname: str) -> Tenant | None:
        """Resolve and return only the tenant.

        Collapses not_found and failed into None; use ``resolve`` when the
        difference matters.
        """
        resolution = await self.resolve(hostname)
        return resolution.tenant

    def clear_cache(self) -> None:
        """Forget every cached resolution (e.g. after sign-out or tenant switch)."""
        entries = self._cache.clear()
        self._probe.cache_cleared(entries)

    async def refresh(self, hostname: str) -> TenantResolution:
        """Clear the cache and resolve the hostname again."""
        self.clear_cache()
        return await self.resolve(hostname)

    async def is_subdomain_available(self, candidate: str) -> bool:
        """Whether a subdomain can be registered by a new tenant.

        Reserved names are never available. Otherwise available iff no
        active tenant owns it. Fails closed: if the directory cannot be
        queried the subdomain is reported as unavailable.
        """
        normalized = normalize_subdomain(candidate)
        if not normalized:
            return False

        if self._subdomain_policy.is_reserved(normalized):
            self._probe.subdomain_reserved(normalized)
            return False

        try:
            tenant = await self.get_tenant_by_subdomain(normalized)
        except TenantLookupError as e:
            self._probe.subdomain_check_failed(normalized, error=e)
            return False

        if tenant is not None:
            self._probe.subdomain_taken(normalized)
            return False
        return True

    async def check_subdomain(self, candidate: str) -> SubdomainCheck:
        """Classify a candidate subdomain for the registration form.

        Format is checked first, then the reserved list, then the
        directory; only the last step performs I/O.
        """
        normalized = normalize_subdomain(candidate)
        if not self.is_valid_subdomain(normalized):
            self._probe.subdomain_invalid(normalized)
            return SubdomainCheck.INVALID_FORMAT

        if self._subdomain_policy.is_reserved(normalized):
            self._probe.subdomain_reserved(normalized)
            return SubdomainCheck.RESERVED

        try:
            tenant = await self.get_tenant_by_subdomain(normalized)
        except TenantLookupError as e:
            self._probe.subdomain_check_failed(normalized, error=e)
            return SubdomainCheck.UNAVAILABLE

        if tenant is not None:
            self._probe.subdomain_taken(normalized)
            return SubdomainCheck.TAKEN
        return SubdomainCheck.AVAILABLE

    @staticmethod
    def is_valid_subdomain(candidate: str) -> bool:
        """Pure format check; see ``tenancy.domain.subdomains``."""
        return is_valid_subdomain(candidate)

    def _resolved(self, host: str, tenant: Tenant, matched_by: TenantMatch) -> TenantResolution:
        self._probe.tenant_resolved(host, tenant_id=tenant.id.value, matched_by=matched_by.value)
        return self._remember(TenantResolution.resolved(host, tenant, matched_by))

    def _remember(self, resolution: TenantResolution) -> TenantResolution:
        self._cache.put(resolution)
        return resolution

    async def _lookup(
        self,
        match: TenantMatch,
        value: str,
        finder: Callable[[str], Awaitable[Tenant | None]],
    ) -> Tenant | None:
        """Run one directory lookup under the timeout.

        Inactive tenants are dropped even if the directory returns them.
        """
        try:
            tenant = await asyncio.wait_for(finder(value), timeout=self._lookup_timeout)
        except TenantLookupError:
            raise
        except TimeoutError as e:
            raise TenantLookupTimeoutError(
                f"Tenant lookup by {match.value} timed out after {self._lookup_timeout}s",
                field=match.value,
                value=value,
            ) from e
        except Exception as e:
            raise TenantLookupError(
                f"Tenant lookup by {match.value} failed: {e}",
                field=match.value,
                value=value,
            ) from e

        if tenant is None or not tenant.is_active:
            return None
        return tenant
