"""PostgreSQL implementation of ITenantDirectory.

Queries the tenants table through async SQLAlchemy. The directory is
application-scoped, so each lookup opens its own short-lived session
from the read sessionmaker.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenancy.domain.tenant import Tenant
from tenancy.domain.value_objects import TenantBranding, TenantId
from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.observability import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)
from tenancy.ports.directory import ITenantDirectory
from tenancy.ports.exceptions import TenantLookupError

BACKEND = "postgres"


class SqlTenantDirectory(ITenantDirectory):
    """Tenant directory backed by the PostgreSQL tenants table."""

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        probe: TenantDirectoryProbe | None = None,
    ) -> None:
        """Initialize directory with a session factory.

        Args:
            sessionmaker: Factory for read sessions
            probe: Optional domain probe for observability
        """
        self._sessionmaker = sessionmaker
        self._probe = probe or DefaultTenantDirectoryProbe()

    async def find_active_by_subdomain(self, subdomain: str) -> Tenant | None:
        """Fetch the active tenant whose subdomain equals the input."""
        return await self._find_one("subdomain", subdomain)

    async def find_active_by_custom_domain(self, domain: str) -> Tenant | None:
        """Fetch the active tenant whose custom_domain equals the input."""
        return await self._find_one("custom_domain", domain)

    async def _find_one(self, field: str, value: str) -> Tenant | None:
        column = getattr(TenantModel, field)
        stmt = (
            select(TenantModel)
            .where(column == value, TenantModel.is_active.is_(True))
            .limit(1)
        )

        try:
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                model = result.scalars().first()
        except (SQLAlchemyError, OSError) as e:
            self._probe.lookup_failed(BACKEND, field=field, value=value, error=e)
            raise TenantLookupError(
                f"Tenant directory query by {field} failed", field=field, value=value
            ) from e

        if model is None:
            self._probe.tenant_not_found(BACKEND, field=field, value=value)
            return None

        tenant = self._to_domain(model)
        self._probe.tenant_found(BACKEND, field=field, value=value, tenant_id=tenant.id.value)
        return tenant

    @staticmethod
    def _to_domain(model: TenantModel) -> Tenant:
        """Reconstitute a Tenant from its row."""
        return Tenant(
            id=TenantId(value=model.id),
            name=model.name,
            subdomain=model.subdomain,
            custom_domain=model.custom_domain,
            is_active=model.is_active,
            branding=TenantBranding(
                primary_color=model.primary_color,
                secondary_color=model.secondary_color,
                accent_color=model.accent_color,
                logo_url=model.logo_url,
                favicon_url=model.favicon_url,
            ),
            timezone=model.timezone,
            language=model.language,
        )
