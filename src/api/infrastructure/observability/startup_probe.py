"""Domain probe for application startup and lifecycle events.

Captures what the service was wired with at startup and when its
resources were released at shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def tenant_resolver_configured(
        self,
        backend: str,
        platform_domains: list[str],
        lookup_timeout: float,
        cache_max_entries: int,
    ) -> None:
        """Record the tenant resolver wiring chosen at startup."""
        ...

    def shutdown_completed(self, backend: str) -> None:
        """Record that the directory backend was released."""
        ...

    def shutdown_failed(self, backend: str, error: Exception) -> None:
        """Record that releasing the directory backend failed."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def tenant_resolver_configured(
        self,
        backend: str,
        platform_domains: list[str],
        lookup_timeout: float,
        cache_max_entries: int,
    ) -> None:
        """Record the tenant resolver wiring chosen at startup."""
        self._logger.info(
            "tenant_resolver_configured",
            backend=backend,
            platform_domains=platform_domains,
            lookup_timeout=lookup_timeout,
            cache_max_entries=cache_max_entries,
            **self._get_context_kwargs(),
        )

    def shutdown_completed(self, backend: str) -> None:
        """Record that the directory backend was released."""
        self._logger.info(
            "shutdown_completed",
            backend=backend,
            **self._get_context_kwargs(),
        )

    def shutdown_failed(self, backend: str, error: Exception) -> None:
        """Record that releasing the directory backend failed."""
        self._logger.error(
            "shutdown_failed",
            backend=backend,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
