"""Domain probe for tenant directory lookups.

Captures domain-significant events of the directory adapters, independent
of which backend (Postgres or hosted API) answers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantDirectoryProbe(Protocol):
    """Domain probe for tenant directory operations."""

    def tenant_found(self, backend: str, field: str, value: str, tenant_id: str) -> None:
        """Record that an active tenant matched a lookup."""
        ...

    def tenant_not_found(self, backend: str, field: str, value: str) -> None:
        """Record that no active tenant matched a lookup."""
        ...

    def lookup_failed(self, backend: str, field: str, value: str, error: Exception) -> None:
        """Record that the backend could not answer a lookup."""
        ...

    def directory_closed(self, backend: str) -> None:
        """Record that the directory released its resources."""
        ...

    def with_context(self, context: ObservationContext) -> TenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantDirectoryProbe:
    """Default implementation of TenantDirectoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantDirectoryProbe(logger=self._logger, context=context)

    def tenant_found(self, backend: str, field: str, value: str, tenant_id: str) -> None:
        """Record that an active tenant matched a lookup."""
        self._logger.debug(
            "tenant_directory_match",
            backend=backend,
            field=field,
            value=value,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, backend: str, field: str, value: str) -> None:
        """Record that no active tenant matched a lookup."""
        self._logger.debug(
            "tenant_directory_no_match",
            backend=backend,
            field=field,
            value=value,
            **self._get_context_kwargs(),
        )

    def lookup_failed(self, backend: str, field: str, value: str, error: Exception) -> None:
        """Record that the backend could not answer a lookup."""
        self._logger.error(
            "tenant_directory_lookup_failed",
            backend=backend,
            field=field,
            value=value,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def directory_closed(self, backend: str) -> None:
        """Record that the directory released its resources."""
        self._logger.info(
            "tenant_directory_closed",
            backend=backend,
            **self._get_context_kwargs(),
        )
