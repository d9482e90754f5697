"""Domain probe for tenant resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of hostname resolution and subdomain checks.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantResolverProbe(Protocol):
    """Domain probe for tenant resolver operations."""

    def resolution_served_from_cache(self, hostname: str, outcome: str) -> None:
        """Record that a resolution was answered from the cache."""
        ...

    def platform_domain_detected(self, hostname: str) -> None:
        """Record that a hostname is part of the shared platform surface."""
        ...

    def tenant_resolved(self, hostname: str, tenant_id: str, matched_by: str) -> None:
        """Record that a hostname resolved to a tenant."""
        ...

    def tenant_not_found(self, hostname: str) -> None:
        """Record that no active tenant owns a hostname."""
        ...

    def resolution_failed(self, hostname: str, lookup: str, error: Exception) -> None:
        """Record that the directory could not answer during resolution."""
        ...

    def cache_cleared(self, entries: int) -> None:
        """Record that the resolution cache was cleared."""
        ...

    def subdomain_reserved(self, subdomain: str) -> None:
        """Record that a candidate subdomain is a reserved name."""
        ...

    def subdomain_invalid(self, subdomain: str) -> None:
        """Record that a candidate subdomain failed the format check."""
        ...

    def subdomain_taken(self, subdomain: str) -> None:
        """Record that a candidate subdomain is owned by an active tenant."""
        ...

    def subdomain_check_failed(self, subdomain: str, error: Exception) -> None:
        """Record that availability could not be determined."""
        ...

    def with_context(self, context: ObservationContext) -> TenantResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantResolverProbe:
    """Default implementation of TenantResolverProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantResolverProbe(logger=self._logger, context=context)

    def resolution_served_from_cache(self, hostname: str, outcome: str) -> None:
        self._logger.debug(
            "tenant_resolution_cache_hit",
            hostname=hostname,
            outcome=outcome,
            **self._get_context_kwargs(),
        )

    def platform_domain_detected(self, hostname: str) -> None:
        self._logger.debug(
            "tenant_resolution_platform_domain",
            hostname=hostname,
            **self._get_context_kwargs(),
        )

    def tenant_resolved(self, hostname: str, tenant_id: str, matched_by: str) -> None:
        self._logger.info(
            "tenant_resolved",
            hostname=hostname,
            tenant_id=tenant_id,
            matched_by=matched_by,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, hostname: str) -> None:
        self._logger.info(
            "tenant_resolution_not_found",
            hostname=hostname,
            **self._get_context_kwargs(),
        )

    def resolution_failed(self, hostname: str, lookup: str, error: Exception) -> None:
        self._logger.error(
            "tenant_resolution_failed",
            hostname=hostname,
            lookup=lookup,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def cache_cleared(self, entries: int) -> None:
        self._logger.info(
            "tenant_resolution_cache_cleared",
            entries=entries,
            **self._get_context_kwargs(),
        )

    def subdomain_reserved(self, subdomain: str) -> None:
        self._logger.debug(
            "subdomain_reserved",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def subdomain_invalid(self, subdomain: str) -> None:
        self._logger.debug(
            "subdomain_invalid_format",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def subdomain_taken(self, subdomain: str) -> None:
        self._logger.debug(
            "subdomain_taken",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def subdomain_check_failed(self, subdomain: str, error: Exception) -> None:
        self._logger.warning(
            "subdomain_availability_check_failed",
            subdomain=subdomain,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
