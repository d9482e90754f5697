"""Pydantic models for tenancy API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shared_kernel.middleware.tenant_context import TenantContext
from tenancy.domain.resolution import TenantResolution
from tenancy.domain.tenant import Tenant
from tenancy.domain.value_objects import SubdomainCheck, TenantBranding


class BrandingResponse(BaseModel):
    """Response model for the branding the UI should apply."""

    primary_color: str = Field(..., description="Primary color, e.g. #9213ec")
    secondary_color: str = Field(..., description="Secondary color")
    accent_color: str | None = Field(default=None, description="Accent color")
    logo_url: str | None = Field(default=None, description="Logo URL")
    favicon_url: str | None = Field(default=None, description="Favicon URL")

    @classmethod
    def from_domain(cls, branding: TenantBranding) -> BrandingResponse:
        return cls(
            primary_color=branding.primary_color,
            secondary_color=branding.secondary_color,
            accent_color=branding.accent_color,
            logo_url=branding.logo_url,
            favicon_url=branding.favicon_url,
        )


class TenantSummaryResponse(BaseModel):
    """Response model for the public fields of a resolved tenant."""

    id: str = Field(..., description="Tenant ID")
    name: str = Field(..., description="Organization name")
    display_title: str = Field(..., description="Document title for the tenant UI")
    subdomain: str = Field(..., description="Tenant subdomain")
    custom_domain: str | None = Field(default=None, description="Custom domain")
    timezone: str = Field(..., description="IANA timezone")
    language: str = Field(..., description="UI language code")

    @classmethod
    def from_domain(cls, tenant: Tenant) -> TenantSummaryResponse:
        """Convert domain Tenant to API response.

        Args:
            tenant: Tenant domain object

        Returns:
            TenantSummaryResponse
        """
        return cls(
            id=tenant.id.value,
            name=tenant.name,
            display_title=tenant.display_title,
            subdomain=tenant.subdomain,
            custom_domain=tenant.custom_domain,
            timezone=tenant.timezone,
            language=tenant.language,
        )


class ResolutionResponse(BaseModel):
    """Response model for the tenant resolution of the current host."""

    hostname: str = Field(..., description="Normalized request hostname")
    outcome: str = Field(..., description="resolved, not_found or failed")
    public_access: bool = Field(
        ..., description="True when the shared platform UI should be shown"
    )
    platform_domain: bool = Field(
        ..., description="True when the host is a platform domain"
    )
    resolution_failed: bool = Field(
        ..., description="True when the tenant directory could not be reached"
    )
    matched_by: str | None = Field(
        default=None, description="subdomain or custom_domain when resolved"
    )
    tenant: TenantSummaryResponse | None = Field(
        default=None, description="Resolved tenant"
    )
    branding: BrandingResponse = Field(..., description="Branding to apply")

    @classmethod
    def from_domain(cls, resolution: TenantResolution) -> ResolutionResponse:
        """Convert a TenantResolution to API response.

        The directory error text stays in the logs; clients only see the
        ``resolution_failed`` flag.
        """
        return cls(
            hostname=resolution.hostname,
            outcome=resolution.outcome.value,
            public_access=resolution.is_public_access,
            platform_domain=resolution.platform_domain,
            resolution_failed=resolution.is_failure,
            matched_by=resolution.matched_by.value if resolution.matched_by else None,
            tenant=(
                TenantSummaryResponse.from_domain(resolution.tenant)
                if resolution.tenant is not None
                else None
            ),
            branding=BrandingResponse.from_domain(resolution.branding),
        )


class SubdomainCheckResponse(BaseModel):
    """Response model for a subdomain availability check."""

    candidate: str = Field(..., description="Normalized candidate subdomain")
    valid: bool = Field(..., description="Candidate has a valid format")
    available: bool = Field(..., description="Candidate can be registered")
    status: SubdomainCheck = Field(..., description="Classification of the candidate")

    @classmethod
    def from_domain(cls, candidate: str, check: SubdomainCheck) -> SubdomainCheckResponse:
        return cls(
            candidate=candidate,
            valid=check is not SubdomainCheck.INVALID_FORMAT,
            available=check.is_available,
            status=check,
        )


class TenantContextResponse(BaseModel):
    """Response model for the tenant context a request is scoped to."""

    tenant_id: str = Field(..., description="Tenant ID")
    source: str = Field(..., description="subdomain or custom_domain")
    hostname: str = Field(..., description="Normalized request hostname")

    @classmethod
    def from_context(cls, context: TenantContext) -> TenantContextResponse:
        return cls(
            tenant_id=context.tenant_id,
            source=context.source,
            hostname=context.hostname,
        )
