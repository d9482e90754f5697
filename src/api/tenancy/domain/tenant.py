"""Tenant entity as seen by hostname resolution."""

from __future__ import annotations

from dataclasses import dataclass, field

from tenancy.domain.value_objects import PLATFORM_BRANDING, TenantBranding, TenantId


@dataclass(frozen=True)
class Tenant:
    """A customer organization reachable by subdomain or custom domain.

    Only the fields resolution and branding need are modelled; the rest of
    the tenant record (settings, subscription, ...) belongs to the services
    that own it.

    Business rules:
    - subdomain is unique and lowercase
    - custom_domain is unique when present and stored lowercase
    - inactive tenants never resolve
    """

    id: TenantId
    name: str
    subdomain: str
    custom_domain: str | None = None
    is_active: bool = True
    branding: TenantBranding = field(default=PLATFORM_BRANDING)
    timezone: str = "UTC"
    language: str = "en"

    def __post_init__(self) -> None:
        # Directory records are not guaranteed to be normalized
        object.__setattr__(self, "subdomain", self.subdomain.strip().lower())
        if self.custom_domain is not None:
            domain = self.custom_domain.strip().lower().rstrip(".")
            object.__setattr__(self, "custom_domain", domain or None)

    @property
    def display_title(self) -> str:
        """Title used for the tenant's portal."""
        return f"{self.name} IT Helpdesk"
