"""Hostname rules for tenant resolution.

Pure functions of the hostname string: no I/O, no configuration lookups.
The policy object carries the deployment-specific lists (platform domains,
loopback marker) so staging or on-prem installs can vary them.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Iterable

from tenancy.domain.exceptions import InvalidHostnameError

_ALLOWED_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-.")
_MAX_HOSTNAME_LENGTH = 253
_MAX_LABEL_LENGTH = 63


def normalize_hostname(raw: str) -> str:
    """Normalize a Host header value into a bare, lowercase hostname.

    Strips surrounding whitespace, the port and a single trailing dot.
    Bracketed IPv6 literals are kept with their brackets.

    Args:
        raw: Hostname as received, e.g. ``"Acme.Helpdesk.com:8443"``.

    Returns:
        The normalized hostname, e.g. ``"acme.helpdesk.com"``.

    Raises:
        InvalidHostnameError: If the value is empty or not a DNS name.
    """
    if raw is None or not raw.strip():
        raise InvalidHostnameError("Hostname is empty")

    candidate = raw.strip().lower()
    if any(char.isspace() or ord(char) < 32 or char == "\x7f" for char in candidate):
        raise InvalidHostnameError(f"Hostname contains control characters: {raw!r}")

    if candidate.startswith("["):
        end = candidate.find("]")
        if end == -1:
            raise InvalidHostnameError(f"Unterminated IPv6 literal: {raw!r}")
        host, rest = candidate[: end + 1], candidate[end + 1 :]
        if rest and not (rest.startswith(":") and rest[1:].isdigit()):
            raise InvalidHostnameError(f"Invalid port in hostname: {raw!r}")
        try:
            ipaddress.IPv6Address(host[1:-1])
        except ValueError as e:
            raise InvalidHostnameError(f"Invalid IPv6 literal: {raw!r}") from e
        return host

    host, sep, port = candidate.partition(":")
    if sep and not port.isdigit():
        raise InvalidHostnameError(f"Invalid port in hostname: {raw!r}")

    if host.endswith("."):
        host = host[:-1]

    if not host or host.startswith(".") or ".." in host:
        raise InvalidHostnameError(f"Hostname is not a valid DNS name: {raw!r}")
    if len(host) > _MAX_HOSTNAME_LENGTH:
        raise InvalidHostnameError("Hostname is too long")
    if any(char not in _ALLOWED_CHARS for char in host):
        raise InvalidHostnameError(f"Hostname contains invalid characters: {raw!r}")
    if any(len(label) > _MAX_LABEL_LENGTH for label in host.split(".")):
        raise InvalidHostnameError("Hostname contains an overlong label")

    return host


def is_ip_literal(hostname: str) -> bool:
    """True for IPv4 addresses and bracketed IPv6 literals."""
    try:
        ipaddress.ip_address(hostname.strip("[]"))
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class HostnamePolicy:
    """Deployment-specific hostname rules.

    Attributes:
        platform_domains: Hostnames of the shared platform surface.
        loopback_marker: Development hostname (``localhost``) under which a
            single leading label already names a tenant.
        ignored_subdomain: Leading label that never names a tenant (``www``).
    """

    platform_domains: tuple[str, ...]
    loopback_marker: str = "localhost"
    ignored_subdomain: str = "www"

    @classmethod
    def create(
        cls,
        platform_domains: Iterable[str],
        loopback_marker: str = "localhost",
        ignored_subdomain: str = "www",
    ) -> HostnamePolicy:
        """Build a policy, normalizing the configured names."""
        domains = tuple(
            dict.fromkeys(
                domain.strip().lower().rstrip(".")
                for domain in platform_domains
                if domain.strip()
            )
        )
        return cls(
            platform_domains=domains,
            loopback_marker=loopback_marker.strip().lower(),
            ignored_subdomain=ignored_subdomain.strip().lower(),
        )

    def extract_subdomain(self, hostname: str) -> str | None:
        """Return the tenant subdomain carried by a hostname, if any.

        ``acme.localhost`` -> ``acme`` (development rule, two labels suffice;
        any leading label counts, ``www`` included).
        ``acme.helpdesk.com`` -> ``acme`` (three or more labels).
        ``www.helpdesk.com``, ``helpdesk.com``, ``localhost`` -> None.
        Two-label production hostnames never carry a subdomain; they can
        only resolve as custom domains.
        """
        host = normalize_hostname(hostname)
        if is_ip_literal(host):
            return None

        labels = host.split(".")
        first = labels[0]

        if self.loopback_marker in labels:
            if len(labels) >= 2 and first != self.loopback_marker:
                return first
            return None

        if len(labels) >= 3 and first != self.ignored_subdomain:
            return first

        return None

    def is_platform_domain(self, hostname: str) -> bool:
        """True when the hostname is the shared platform surface.

        A hostname is a platform domain if it equals a configured entry, or
        is the entry prefixed only by the ignored label (``www``) and that
        label does not name a tenant. ``acme.helpdesk.com`` and
        ``www.localhost`` both carry a subdomain, so neither is a platform
        domain.
        """
        host = normalize_hostname(hostname)
        for domain in self.platform_domains:
            if host == domain:
                return True
            suffix = f".{domain}"
            if (
                host.endswith(suffix)
                and host[: -len(suffix)] == self.ignored_subdomain
                and self.extract_subdomain(host) is None
            ):
                return True
        return False
