"""Async engine for the tenant directory database.

Tenant resolution never writes, so sessions run read-only at the server
and carry an application name that shows up in ``pg_stat_activity``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "build_async_url",
    "build_connect_args",
    "create_read_engine",
]


def build_connect_args(settings: DatabaseSettings) -> dict[str, Any]:
    """asyncpg connection arguments for directory sessions.

    Args:
        settings: Database connection settings

    Returns:
        ``connect_args`` for ``create_async_engine``
    """
    return {
        "server_settings": {
            "application_name": settings.application_name,
            "default_transaction_read_only": "on",
        },
        "command_timeout": settings.command_timeout_seconds,
    }


def create_read_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the async engine used for tenant lookups.

    The pool is capped at ``pool_max_connections`` with no overflow; a
    lookup that cannot get a connection waits and is then bounded by the
    resolver's own lookup timeout.
    """
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_max_connections,
        max_overflow=0,
        pool_pre_ping=True,
        pool_recycle=settings.pool_recycle_seconds,
        connect_args=build_connect_args(settings),
    )


def build_async_url(settings: DatabaseSettings) -> str:
    """Render the postgresql+asyncpg URL, percent-encoding credentials."""
    url = URL.create(
        drivername="postgresql+asyncpg",
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
    return url.render_as_string(hide_password=False)
