"""Unit tests for structlog configuration."""

import logging

import structlog

from infrastructure.logging import (
    NOISY_LOGGERS,
    SERVICE_NAME,
    add_service_fields,
    build_processors,
    configure_logging,
)


def test_service_fields_are_added():
    processor = add_service_fields("1.2.3")

    event = processor(None, "info", {"event": "tenant_resolved"})

    assert event["service"] == SERVICE_NAME
    assert event["version"] == "1.2.3"


def test_service_fields_do_not_override_explicit_values():
    processor = add_service_fields("1.2.3")

    event = processor(None, "info", {"event": "x", "service": "other"})

    assert event["service"] == "other"


def test_json_chain_ends_with_json_renderer():
    processors = build_processors(colors=False, version="0.1.0")

    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    assert structlog.processors.format_exc_info in processors


def test_console_chain_ends_with_console_renderer():
    processors = build_processors(colors=True, version="0.1.0")

    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_configure_logging_quiets_library_loggers():
    try:
        configure_logging(debug=True, version="0.1.0")

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
    finally:
        structlog.reset_defaults()
