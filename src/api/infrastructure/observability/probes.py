"""Probe for the tenant directory database engine.

The engine is created lazily on the first SQL lookup, so its creation
event doubles as the first sign the directory database is in use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionProbe(Protocol):
    """Probe for the directory engine lifecycle."""

    def engine_created(
        self, connection_string: str, pool_size: int, application_name: str
    ) -> None:
        """Record that the read-only directory engine was created."""
        ...

    def engine_disposed(self, connection_string: str) -> None:
        """Record that the directory engine released its pool."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe: ...


class DefaultConnectionProbe:
    """ConnectionProbe logging through structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        return {} if self._context is None else self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def engine_created(
        self, connection_string: str, pool_size: int, application_name: str
    ) -> None:
        self._logger.info(
            "directory_engine_created",
            connection_string=connection_string,
            pool_size=pool_size,
            application_name=application_name,
            read_only=True,
            **self._get_context_kwargs(),
        )

    def engine_disposed(self, connection_string: str) -> None:
        self._logger.info(
            "directory_engine_disposed",
            connection_string=connection_string,
            **self._get_context_kwargs(),
        )
