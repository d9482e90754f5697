"""HTTP routes for the tenancy bounded context."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from shared_kernel.middleware.tenant_context import TenantContext
from tenancy.application.services import TenantResolver
from tenancy.dependencies.current_tenant import (
    get_tenant_resolution,
    require_tenant_context,
)
from tenancy.dependencies.resolver import get_request_hostname, get_tenant_resolver
from tenancy.domain.exceptions import InvalidHostnameError
from tenancy.domain.resolution import TenantResolution
from tenancy.domain.subdomains import normalize_subdomain
from tenancy.presentation.models import (
    ResolutionResponse,
    SubdomainCheckResponse,
    TenantContextResponse,
)

router = APIRouter(
    prefix="/tenancy",
    tags=["tenancy"],
)


@router.get("/resolution")
async def get_resolution(
    resolution: Annotated[TenantResolution, Depends(get_tenant_resolution)],
) -> ResolutionResponse:
    """Resolve the organization served from the request host.

    Always 200 for well-formed hosts: a host with no tenant, or whose
    lookup failed, gets the public platform view with default branding.

    Raises:
        HTTPException: 400 if the host is malformed
    """
    return ResolutionResponse.from_domain(resolution)


@router.post("/resolution/refresh")
async def refresh_resolution(
    hostname: Annotated[str, Depends(get_request_hostname)],
    resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
) -> ResolutionResponse:
    """Clear cached resolutions and resolve the request host again.

    Called after sign-out or an organization switch.

    Raises:
        HTTPException: 400 if the host is malformed
    """
    try:
        resolution = await resolver.refresh(hostname)
    except InvalidHostnameError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid host: {e}",
        )
    return ResolutionResponse.from_domain(resolution)


@router.get("/context")
async def get_context(
    tenant: Annotated[TenantContext, Depends(require_tenant_context)],
) -> TenantContextResponse:
    """Return the tenant context of a tenant-scoped request.

    Raises:
        HTTPException: 404 if no organization is served from the host
        HTTPException: 503 if the tenant directory could not be reached
    """
    return TenantContextResponse.from_context(tenant)


@router.get("/subdomains/{candidate}")
async def check_subdomain(
    candidate: str,
    resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
) -> SubdomainCheckResponse:
    """Check whether a subdomain can be registered by a new organization.

    Args:
        candidate: Candidate subdomain, any case

    Returns:
        SubdomainCheckResponse; ``available`` is false when the directory
        could not be queried (status ``unavailable``)
    """
    check = await resolver.check_subdomain(candidate)
    return SubdomainCheckResponse.from_domain(normalize_subdomain(candidate), check)
