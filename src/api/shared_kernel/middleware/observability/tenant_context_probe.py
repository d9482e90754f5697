"""Domain probe for request tenant context.

Captures how each request's tenant context was established from its
hostname, and when a tenant-scoped route had to be refused.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context operations."""

    def tenant_context_established(self, tenant_id: str, hostname: str, source: str) -> None:
        """Record that a request was scoped to a tenant."""
        ...

    def public_access(self, hostname: str, platform_domain: bool) -> None:
        """Record that a request runs in public access mode."""
        ...

    def invalid_hostname(self, raw_value: str, reason: str) -> None:
        """Record that the request hostname could not be parsed."""
        ...

    def tenant_required(self, hostname: str) -> None:
        """Record that a tenant-scoped route was hit on a tenant-less host."""
        ...

    def tenant_unavailable(self, hostname: str, error: str | None) -> None:
        """Record that a tenant-scoped route was hit while resolution failed."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def tenant_context_established(self, tenant_id: str, hostname: str, source: str) -> None:
        """Record that a request was scoped to a tenant."""
        self._logger.debug(
            "tenant_context_established",
            tenant_id=tenant_id,
            hostname=hostname,
            source=source,
            **self._get_context_kwargs(),
        )

    def public_access(self, hostname: str, platform_domain: bool) -> None:
        """Record that a request runs in public access mode."""
        self._logger.debug(
            "tenant_context_public_access",
            hostname=hostname,
            platform_domain=platform_domain,
            **self._get_context_kwargs(),
        )

    def invalid_hostname(self, raw_value: str, reason: str) -> None:
        """Record that the request hostname could not be parsed."""
        self._logger.warning(
            "tenant_context_invalid_hostname",
            raw_value=raw_value,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def tenant_required(self, hostname: str) -> None:
        """Record that a tenant-scoped route was hit on a tenant-less host."""
        self._logger.warning(
            "tenant_context_required",
            hostname=hostname,
            **self._get_context_kwargs(),
        )

    def tenant_unavailable(self, hostname: str, error: str | None) -> None:
        """Record that a tenant-scoped route was hit while resolution failed."""
        self._logger.error(
            "tenant_context_unavailable",
            hostname=hostname,
            error=error,
            **self._get_context_kwargs(),
        )
