"""Hosted-backend implementation of ITenantDirectory.

Talks to a PostgREST-style HTTP API (the hosted Postgres backend the
helpdesk front-end uses) with ``httpx``. Filters are pushed to the
server: ``<field>=eq.<value>``, ``is_active=eq.true``, ``limit=1``.
"""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from tenancy.domain.tenant import Tenant
from tenancy.domain.value_objects import PLATFORM_BRANDING, TenantBranding, TenantId
from tenancy.infrastructure.observability import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)
from tenancy.ports.directory import ITenantDirectory
from tenancy.ports.exceptions import TenantLookupError

BACKEND = "rest"


def tenant_from_record(record: Mapping[str, Any]) -> Tenant:
    """Build a Tenant from a directory record.

    Raises:
        KeyError: If a required field is missing
        ValueError: If the id is null or empty
    """
    raw_id = record["id"]
    if raw_id is None:
        raise ValueError("Tenant record has a null id")

    return Tenant(
        id=TenantId(value=str(raw_id)),
        name=record["name"],
        subdomain=record["subdomain"],
        custom_domain=record.get("custom_domain"),
        is_active=bool(record.get("is_active", False)),
        branding=TenantBranding(
            primary_color=record.get("primary_color") or PLATFORM_BRANDING.primary_color,
            secondary_color=record.get("secondary_color")
            or PLATFORM_BRANDING.secondary_color,
            accent_color=record.get("accent_color"),
            logo_url=record.get("logo_url"),
            favicon_url=record.get("favicon_url"),
        ),
        timezone=record.get("timezone") or "UTC",
        language=record.get("language") or "en",
    )


class RestTenantDirectory(ITenantDirectory):
    """Tenant directory backed by a hosted PostgREST-style API.

    Owns its ``httpx.AsyncClient``; call ``aclose()`` on shutdown.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "tenants",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        probe: TenantDirectoryProbe | None = None,
    ) -> None:
        """Initialize the directory.

        Args:
            base_url: API base URL, e.g. ``https://project.supabase.co``
            api_key: Key sent as ``apikey`` and as bearer token
            table: Table holding tenant records
            timeout: HTTP timeout in seconds (ignored when client is given)
            client: Preconfigured client, mainly for tests
            probe: Optional domain probe for observability
        """
        self._table = table
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
        )
        self._headers = self._build_headers(api_key)
        self._probe = probe or DefaultTenantDirectoryProbe()

    @staticmethod
    def _build_headers(api_key: str) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"
        return headers

    async def find_active_by_subdomain(self, subdomain: str) -> Tenant | None:
        """Fetch the active tenant whose subdomain equals the input."""
        return await self._find_one("subdomain", subdomain)

    async def find_active_by_custom_domain(self, domain: str) -> Tenant | None:
        """Fetch the active tenant whose custom_domain equals the input."""
        return await self._find_one("custom_domain", domain)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
        self._probe.directory_closed(BACKEND)

    async def _find_one(self, field: str, value: str) -> Tenant | None:
        params = {
            "select": "*",
            field: f"eq.{value}",
            "is_active": "eq.true",
            "limit": "1",
        }

        try:
            response = await self._client.get(
                f"/rest/v1/{self._table}",
                params=params,
                headers=self._headers,
            )
            response.raise_for_status()
            records = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._probe.lookup_failed(BACKEND, field=field, value=value, error=e)
            raise TenantLookupError(
                f"Tenant directory request by {field} failed", field=field, value=value
            ) from e

        if not isinstance(records, list):
            error = TenantLookupError(
                f"Unexpected directory payload type: {type(records).__name__}",
                field=field,
                value=value,
            )
            self._probe.lookup_failed(BACKEND, field=field, value=value, error=error)
            raise error

        if not records:
            self._probe.tenant_not_found(BACKEND, field=field, value=value)
            return None

        try:
            tenant = tenant_from_record(records[0])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            self._probe.lookup_failed(BACKEND, field=field, value=value, error=e)
            raise TenantLookupError(
                f"Malformed tenant record for {field}", field=field, value=value
            ) from e

        self._probe.tenant_found(BACKEND, field=field, value=value, tenant_id=tenant.id.value)
        return tenant
