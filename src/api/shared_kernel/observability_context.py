"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable request metadata included with every probe event.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        hostname: Hostname the request was addressed to (if applicable).

    Example:
        context = ObservationContext(request_id="req-123", hostname="acme.helpdesk.com")
        probe = DefaultTenantContextProbe().with_context(context)
    """

    request_id: str | None = None
    hostname: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean. The hostname is
        prefixed because probe events carry their own ``hostname`` field.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.hostname is not None:
            result["request_hostname"] = self.hostname
        return result
