"""Tenant resolver wiring for FastAPI.

The resolver and its cache are application-scoped: ``build_tenant_resolver``
runs once in the lifespan and the instance lives on ``app.state``. Request
handlers reach it through ``get_tenant_resolver``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from infrastructure.database.dependencies import get_read_sessionmaker
from infrastructure.settings import (
    DirectoryApiSettings,
    TenancySettings,
    get_directory_api_settings,
    get_tenancy_settings,
)
from tenancy.application.resolution_cache import ResolutionCache
from tenancy.application.services import TenantResolver
from tenancy.domain.hostnames import HostnamePolicy
from tenancy.domain.subdomains import SubdomainPolicy
from tenancy.infrastructure import RestTenantDirectory, SqlTenantDirectory
from tenancy.ports.directory import ITenantDirectory


def build_tenant_directory(
    settings: TenancySettings,
    api_settings: DirectoryApiSettings | None = None,
) -> ITenantDirectory:
    """Create the directory adapter selected by ``directory_backend``.

    Args:
        settings: Tenancy settings
        api_settings: Hosted API settings, read from the environment if omitted

    Returns:
        SqlTenantDirectory for "postgres", RestTenantDirectory for "rest"
    """
    if settings.directory_backend == "rest":
        api_settings = api_settings or get_directory_api_settings()
        return RestTenantDirectory(
            base_url=api_settings.base_url,
            api_key=api_settings.api_key.get_secret_value(),
            table=api_settings.table,
            timeout=api_settings.timeout_seconds,
        )
    return SqlTenantDirectory(sessionmaker=get_read_sessionmaker())


def build_tenant_resolver(
    settings: TenancySettings,
    directory: ITenantDirectory,
) -> TenantResolver:
    """Create the application-scoped resolver from settings."""
    return TenantResolver(
        directory=directory,
        hostname_policy=HostnamePolicy.create(
            settings.platform_domains,
            loopback_marker=settings.loopback_marker,
            ignored_subdomain=settings.ignored_subdomain,
        ),
        subdomain_policy=SubdomainPolicy.create(settings.reserved_subdomains),
        cache=ResolutionCache(max_entries=settings.cache_max_entries),
        lookup_timeout=settings.lookup_timeout_seconds,
    )


def get_tenant_resolver(request: Request) -> TenantResolver:
    """Get the application-scoped TenantResolver.

    Raises:
        RuntimeError: If the lifespan did not install a resolver
    """
    resolver = getattr(request.app.state, "tenant_resolver", None)
    if resolver is None:
        raise RuntimeError(
            "Tenant resolver not initialized. Ensure app startup completed successfully."
        )
    return resolver


def get_request_hostname(
    request: Request,
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> str:
    """Get the raw hostname the request was addressed to.

    ``X-Forwarded-Host`` is honoured only when the deployment sits behind
    a trusted proxy; the first value wins when the proxy chain appended
    several.

    Raises:
        HTTPException 400: If no host header is present
    """
    if settings.trust_forwarded_host:
        forwarded = request.headers.get("x-forwarded-host")
        if forwarded:
            first = forwarded.split(",")[0].strip()
            if first:
                return first

    host = request.headers.get("host")
    if not host:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Host header is required",
        )
    return host
