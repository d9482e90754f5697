"""Tenant context FastAPI dependencies.

Resolves the tenant a request is scoped to from its hostname.

Routes that work with or without a tenant read the ambient context:

    @router.get("/example")
    async def example(
        tenant: Annotated[TenantContext | None, Depends(get_current_tenant)],
    ):
        ...

Routes that only make sense inside a tenant require it:

    @router.get("/tickets")
    async def list_tickets(
        tenant: Annotated[TenantContext, Depends(require_tenant_context)],
    ):
        # tenant.tenant_id scopes every query
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from shared_kernel.middleware.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.observability_context import ObservationContext
from tenancy.application.services import TenantResolver
from tenancy.dependencies.resolver import get_request_hostname, get_tenant_resolver
from tenancy.domain.exceptions import InvalidHostnameError
from tenancy.domain.resolution import TenantResolution
from tenancy.domain.value_objects import TenantMatch


def get_tenant_context_probe(
    request: Request,
    hostname: Annotated[str, Depends(get_request_hostname)],
) -> TenantContextProbe:
    """Get a TenantContextProbe bound to the request id and raw host."""
    context = ObservationContext(
        request_id=request.headers.get("x-request-id"),
        hostname=hostname,
    )
    return DefaultTenantContextProbe().with_context(context)


async def get_tenant_resolution(
    hostname: Annotated[str, Depends(get_request_hostname)],
    resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
) -> TenantResolution:
    """Resolve the request hostname.

    Never raises for directory failures; those surface as a ``failed``
    resolution so the caller can decide how to degrade.

    Raises:
        HTTPException 400: If the hostname is malformed
    """
    try:
        resolution = await resolver.resolve(hostname)
    except InvalidHostnameError as e:
        probe.invalid_hostname(raw_value=hostname, reason=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid host: {e}",
        )

    if resolution.is_resolved and resolution.tenant is not None:
        probe.tenant_context_established(
            tenant_id=resolution.tenant.id.value,
            hostname=resolution.hostname,
            source=resolution.matched_by.value if resolution.matched_by else "subdomain",
        )
    elif not resolution.is_failure:
        probe.public_access(
            hostname=resolution.hostname,
            platform_domain=resolution.platform_domain,
        )
    return resolution


def to_tenant_context(resolution: TenantResolution) -> TenantContext | None:
    """Project a resolution onto the TenantContext value object."""
    if not resolution.is_resolved or resolution.tenant is None:
        return None
    return TenantContext(
        tenant_id=resolution.tenant.id.value,
        source=(
            "custom_domain"
            if resolution.matched_by is TenantMatch.CUSTOM_DOMAIN
            else "subdomain"
        ),
        hostname=resolution.hostname,
    )


async def get_current_tenant(
    resolution: Annotated[TenantResolution, Depends(get_tenant_resolution)],
) -> TenantContext | None:
    """Get the tenant context, or None in public access mode."""
    return to_tenant_context(resolution)


async def require_tenant_context(
    resolution: Annotated[TenantResolution, Depends(get_tenant_resolution)],
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
) -> TenantContext:
    """Get the tenant context for routes that only exist inside a tenant.

    Raises:
        HTTPException 404: If no active tenant owns the hostname
        HTTPException 503: If the tenant directory could not be reached
    """
    if resolution.is_failure:
        probe.tenant_unavailable(hostname=resolution.hostname, error=resolution.error)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to load organization",
        )

    context = to_tenant_context(resolution)
    if context is None:
        probe.tenant_required(hostname=resolution.hostname)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No organization is served from this host",
        )
    return context
