"""Subdomain registration rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

SUBDOMAIN_PATTERN = re.compile(r"[a-z][a-z0-9-]{2,62}")


def normalize_subdomain(candidate: str) -> str:
    """Trim and lowercase a candidate subdomain."""
    return candidate.strip().lower()


def is_valid_subdomain(candidate: str) -> bool:
    """Check the subdomain format.

    Lowercase letters, digits and hyphens; must start with a letter;
    3 to 63 characters. Input is lowercased first, so ``"ACME"`` and
    ``"acme"`` behave identically. Never raises.
    """
    if not isinstance(candidate, str):
        return False
    return SUBDOMAIN_PATTERN.fullmatch(candidate.lower()) is not None


@dataclass(frozen=True)
class SubdomainPolicy:
    """Names tenants may never register."""

    reserved: frozenset[str]

    @classmethod
    def create(cls, reserved: Iterable[str]) -> SubdomainPolicy:
        return cls(
            reserved=frozenset(
                normalize_subdomain(name) for name in reserved if name.strip()
            )
        )

    def is_reserved(self, candidate: str) -> bool:
        return normalize_subdomain(candidate) in self.reserved
