"""Unit tests for SqlTenantDirectory (mocked sessions)."""

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from sqlalchemy.exc import OperationalError

from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.observability import TenantDirectoryProbe
from tenancy.infrastructure.sql_directory import SqlTenantDirectory
from tenancy.ports.directory import ITenantDirectory
from tenancy.ports.exceptions import TenantLookupError


def _tenant_row(**overrides) -> TenantModel:
    values = {
        "id": "tenant-acme",
        "name": "Acme",
        "subdomain": "acme",
        "custom_domain": "support.acme.com",
        "is_active": True,
        "primary_color": "#112233",
        "secondary_color": "#445566",
        "accent_color": None,
        "logo_url": "https://cdn.acme.com/logo.png",
        "favicon_url": None,
        "timezone": "Europe/Paris",
        "language": "fr",
    }
    values.update(overrides)
    return TenantModel(**values)


@pytest.fixture
def mock_session():
    """Mock AsyncSession whose query returns no row."""
    session = MagicMock()
    result = MagicMock()
    result.scalars.return_value.first.return_value = None
    session.execute = AsyncMock(return_value=result)
    return session


@pytest.fixture
def mock_sessionmaker(mock_session):
    """Mock async_sessionmaker yielding mock_session as a context manager."""
    ctx_manager = AsyncMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=mock_session)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)
    return Mock(return_value=ctx_manager)


@pytest.fixture
def mock_probe():
    return Mock(spec=TenantDirectoryProbe)


@pytest.fixture
def directory(mock_sessionmaker, mock_probe):
    return SqlTenantDirectory(sessionmaker=mock_sessionmaker, probe=mock_probe)


def _set_row(session, row):
    session.execute.return_value.scalars.return_value.first.return_value = row


class TestSqlTenantDirectory:
    """Tests for SqlTenantDirectory lookups."""

    def test_implements_directory_port(self, directory):
        assert isinstance(directory, ITenantDirectory)

    @pytest.mark.asyncio
    async def test_find_by_subdomain_maps_row_to_tenant(self, directory, mock_session, mock_probe):
        _set_row(mock_session, _tenant_row())

        tenant = await directory.find_active_by_subdomain("acme")

        assert tenant is not None
        assert tenant.id.value == "tenant-acme"
        assert tenant.subdomain == "acme"
        assert tenant.custom_domain == "support.acme.com"
        assert tenant.branding.primary_color == "#112233"
        assert tenant.branding.logo_url == "https://cdn.acme.com/logo.png"
        assert tenant.timezone == "Europe/Paris"
        assert tenant.language == "fr"
        mock_probe.tenant_found.assert_called_once_with(
            "postgres", field="subdomain", value="acme", tenant_id="tenant-acme"
        )

    @pytest.mark.asyncio
    async def test_query_filters_on_field_and_active_flag(self, directory, mock_session):
        await directory.find_active_by_subdomain("acme")

        stmt = mock_session.execute.call_args[0][0]
        sql = str(stmt)
        assert "tenants.subdomain =" in sql
        assert "tenants.is_active IS" in sql
        assert "LIMIT" in sql

    @pytest.mark.asyncio
    async def test_find_by_custom_domain_queries_custom_domain(self, directory, mock_session):
        await directory.find_active_by_custom_domain("support.acme.com")

        sql = str(mock_session.execute.call_args[0][0])
        assert "tenants.custom_domain =" in sql

    @pytest.mark.asyncio
    async def test_missing_row_returns_none(self, directory, mock_probe):
        assert await directory.find_active_by_custom_domain("nobody.example.com") is None
        mock_probe.tenant_not_found.assert_called_once_with(
            "postgres", field="custom_domain", value="nobody.example.com"
        )

    @pytest.mark.asyncio
    async def test_database_error_raises_lookup_error(self, directory, mock_session, mock_probe):
        mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(TenantLookupError) as exc_info:
            await directory.find_active_by_subdomain("acme")

        assert exc_info.value.field == "subdomain"
        assert exc_info.value.value == "acme"
        mock_probe.lookup_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_connection_error_raises_lookup_error(self, directory, mock_session):
        mock_session.execute.side_effect = ConnectionRefusedError("refused")

        with pytest.raises(TenantLookupError):
            await directory.find_active_by_subdomain("acme")

    @pytest.mark.asyncio
    async def test_opens_one_session_per_lookup(self, directory, mock_sessionmaker):
        await directory.find_active_by_subdomain("acme")
        await directory.find_active_by_custom_domain("support.acme.com")

        assert mock_sessionmaker.call_count == 2
