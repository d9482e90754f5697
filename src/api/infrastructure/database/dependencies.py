"""Database engine and session factory lifecycle.

The read engine and its sessionmaker are created lazily on first use and
disposed on application shutdown.
"""

from __future__ import annotations

import threading

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_read_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

_probe = DefaultConnectionProbe()

_read_engine: AsyncEngine | None = None
_read_sessionmaker: async_sessionmaker[AsyncSession] | None = None

_engine_lock = threading.Lock()


def get_read_engine() -> AsyncEngine:
    """Get the read database engine (singleton).

    Creates the engine and its sessionmaker on first call. Uses
    double-check locking for thread-safe initialization.

    Returns:
        Configured async engine for read operations
    """
    global _read_engine, _read_sessionmaker
    if _read_engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _read_engine is None:
                settings = get_database_settings()
                _read_engine = create_read_engine(settings)
                _read_sessionmaker = async_sessionmaker(
                    _read_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    connection_string=settings.connection_string,
                    pool_size=settings.pool_max_connections,
                    application_name=settings.application_name,
                )
    return _read_engine


def get_read_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the sessionmaker bound to the read engine.

    Returns:
        Sessionmaker producing read-only sessions
    """
    get_read_engine()
    assert _read_sessionmaker is not None
    return _read_sessionmaker


async def close_database_connections() -> None:
    """Dispose the read engine.

    Called on application shutdown. Resets the sessionmaker so the engine
    can be recreated.
    """
    global _read_engine, _read_sessionmaker

    if _read_engine is not None:
        await _read_engine.dispose()
        _probe.engine_disposed(
            connection_string=get_database_settings().connection_string,
        )
        _read_engine = None
        _read_sessionmaker = None
