"""Structlog configuration for the tenancy service.

Every event carries the service name and version so resolver logs can be
told apart from the rest of the helpdesk stack once aggregated. Console
rendering is used for interactive sessions, JSON lines everywhere else.
"""

import logging
import os
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "helpdesk-tenancy"

# Library loggers that would otherwise log every request or statement.
NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "asyncpg")


def _wants_colors() -> bool:
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def add_service_fields(version: str):
    """Build a processor stamping ``service`` and ``version`` onto events."""

    def processor(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("version", version)
        return event_dict

    return processor


def build_processors(colors: bool, version: str) -> list[Processor]:
    """Processor chain ending in a console or JSON renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_fields(version),
        structlog.processors.StackInfoRenderer(),
    ]
    if colors:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    return processors


def configure_logging(debug: bool = False, version: str = "unknown") -> None:
    """Configure structlog for the service.

    Debug events (cache hits, individual lookups) are filtered out unless
    ``debug`` is set. Chatty library loggers are held at WARNING either way.

    Args:
        debug: Emit debug-level events.
        version: Application version stamped onto every event.
    """
    min_level = logging.DEBUG if debug else logging.INFO

    structlog.configure(
        processors=build_processors(_wants_colors(), version),
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
