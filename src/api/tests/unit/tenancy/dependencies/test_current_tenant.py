"""Unit tests for tenancy FastAPI dependencies."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import HTTPException

from infrastructure.settings import TenancySettings
from shared_kernel.middleware.observability import TenantContextProbe
from shared_kernel.middleware.tenant_context import TenantContext
from tenancy.application.services import TenantResolver
from tenancy.dependencies.current_tenant import (
    get_current_tenant,
    get_tenant_context_probe,
    get_tenant_resolution,
    require_tenant_context,
    to_tenant_context,
)
from tenancy.dependencies.resolver import (
    build_tenant_directory,
    build_tenant_resolver,
    get_request_hostname,
    get_tenant_resolver,
)
from tenancy.domain.exceptions import InvalidHostnameError
from tenancy.domain.resolution import TenantResolution
from tenancy.domain.value_objects import TenantMatch
from tenancy.infrastructure import RestTenantDirectory
from tests.unit.conftest import make_tenant


def _request(headers: dict[str, str], state=None):
    """Minimal stand-in for starlette's Request."""
    return SimpleNamespace(
        headers={key.lower(): value for key, value in headers.items()},
        app=SimpleNamespace(state=state or SimpleNamespace()),
    )


@pytest.fixture
def mock_context_probe():
    return Mock(spec=TenantContextProbe)


class TestGetTenantContextProbe:
    """Tests for get_tenant_context_probe."""

    def test_binds_request_id_and_hostname(self):
        request = _request({"X-Request-ID": "req-7"})

        probe = get_tenant_context_probe(request, "acme.helpdesk.com")

        assert probe._get_context_kwargs() == {
            "request_id": "req-7",
            "request_hostname": "acme.helpdesk.com",
        }

    def test_omits_missing_request_id(self):
        probe = get_tenant_context_probe(_request({}), "localhost")

        assert probe._get_context_kwargs() == {"request_hostname": "localhost"}


class TestGetRequestHostname:
    """Tests for get_request_hostname."""

    def test_uses_host_header(self):
        request = _request({"Host": "acme.helpdesk.com"})
        assert get_request_hostname(request, TenancySettings()) == "acme.helpdesk.com"

    def test_ignores_forwarded_host_by_default(self):
        request = _request({"Host": "internal:8000", "X-Forwarded-Host": "acme.helpdesk.com"})
        assert get_request_hostname(request, TenancySettings()) == "internal:8000"

    def test_uses_first_forwarded_host_when_trusted(self):
        request = _request(
            {"Host": "internal:8000", "X-Forwarded-Host": "acme.helpdesk.com, proxy.local"}
        )
        settings = TenancySettings(trust_forwarded_host=True)
        assert get_request_hostname(request, settings) == "acme.helpdesk.com"

    def test_missing_host_is_bad_request(self):
        with pytest.raises(HTTPException) as exc_info:
            get_request_hostname(_request({}), TenancySettings())
        assert exc_info.value.status_code == 400


class TestResolverWiring:
    """Tests for resolver construction and lookup on app state."""

    def test_build_tenant_resolver_applies_settings(self, mock_directory):
        settings = TenancySettings(
            platform_domains=["helpdesk.example"],
            reserved_subdomains=["portal"],
            lookup_timeout_seconds=2.5,
            cache_max_entries=7,
        )

        resolver = build_tenant_resolver(settings, mock_directory)

        assert resolver.is_platform_domain("helpdesk.example") is True
        assert resolver.is_platform_domain("helpdesk.com") is False
        assert resolver.cache.max_entries == 7

    def test_build_rest_directory(self):
        settings = TenancySettings(directory_backend="rest")
        directory = build_tenant_directory(settings)
        assert isinstance(directory, RestTenantDirectory)

    def test_get_tenant_resolver_reads_app_state(self):
        resolver = Mock(spec=TenantResolver)
        request = _request({}, state=SimpleNamespace(tenant_resolver=resolver))
        assert get_tenant_resolver(request) is resolver

    def test_get_tenant_resolver_requires_startup(self):
        with pytest.raises(RuntimeError):
            get_tenant_resolver(_request({}))


class TestGetTenantResolution:
    """Tests for get_tenant_resolution."""

    @pytest.mark.asyncio
    async def test_returns_resolution(self, mock_context_probe):
        tenant = make_tenant()
        resolution = TenantResolution.resolved("acme.helpdesk.com", tenant, TenantMatch.SUBDOMAIN)
        resolver = Mock(spec=TenantResolver)
        resolver.resolve = AsyncMock(return_value=resolution)

        result = await get_tenant_resolution("acme.helpdesk.com", resolver, mock_context_probe)

        assert result is resolution
        mock_context_probe.tenant_context_established.assert_called_once_with(
            tenant_id="tenant-acme", hostname="acme.helpdesk.com", source="subdomain"
        )

    @pytest.mark.asyncio
    async def test_public_access_is_recorded(self, mock_context_probe):
        resolver = Mock(spec=TenantResolver)
        resolver.resolve = AsyncMock(
            return_value=TenantResolution.not_found("helpdesk.com", platform_domain=True)
        )

        await get_tenant_resolution("helpdesk.com", resolver, mock_context_probe)

        mock_context_probe.public_access.assert_called_once_with(
            hostname="helpdesk.com", platform_domain=True
        )

    @pytest.mark.asyncio
    async def test_invalid_host_is_bad_request(self, mock_context_probe):
        resolver = Mock(spec=TenantResolver)
        resolver.resolve = AsyncMock(side_effect=InvalidHostnameError("bad"))

        with pytest.raises(HTTPException) as exc_info:
            await get_tenant_resolution("bad host", resolver, mock_context_probe)

        assert exc_info.value.status_code == 400
        mock_context_probe.invalid_hostname.assert_called_once()


class TestTenantContextProjection:
    """Tests for get_current_tenant and require_tenant_context."""

    def test_subdomain_match(self):
        resolution = TenantResolution.resolved(
            "acme.helpdesk.com", make_tenant(), TenantMatch.SUBDOMAIN
        )
        assert to_tenant_context(resolution) == TenantContext(
            tenant_id="tenant-acme", source="subdomain", hostname="acme.helpdesk.com"
        )

    def test_custom_domain_match(self):
        resolution = TenantResolution.resolved(
            "support.acme.com", make_tenant(), TenantMatch.CUSTOM_DOMAIN
        )
        assert to_tenant_context(resolution).source == "custom_domain"

    @pytest.mark.asyncio
    async def test_current_tenant_is_none_in_public_access(self):
        assert await get_current_tenant(TenantResolution.not_found("helpdesk.com")) is None

    @pytest.mark.asyncio
    async def test_current_tenant_is_none_on_failure(self):
        resolution = TenantResolution.failed("acme.helpdesk.com", error="down")
        assert await get_current_tenant(resolution) is None

    @pytest.mark.asyncio
    async def test_require_returns_context(self, mock_context_probe):
        resolution = TenantResolution.resolved(
            "acme.helpdesk.com", make_tenant(), TenantMatch.SUBDOMAIN
        )
        context = await require_tenant_context(resolution, mock_context_probe)
        assert context.tenant_id == "tenant-acme"

    @pytest.mark.asyncio
    async def test_require_without_tenant_is_not_found(self, mock_context_probe):
        with pytest.raises(HTTPException) as exc_info:
            await require_tenant_context(
                TenantResolution.not_found("ghost.helpdesk.com"), mock_context_probe
            )
        assert exc_info.value.status_code == 404
        mock_context_probe.tenant_required.assert_called_once_with(
            hostname="ghost.helpdesk.com"
        )

    @pytest.mark.asyncio
    async def test_require_on_failure_is_service_unavailable(self, mock_context_probe):
        with pytest.raises(HTTPException) as exc_info:
            await require_tenant_context(
                TenantResolution.failed("acme.helpdesk.com", error="down"), mock_context_probe
            )
        assert exc_info.value.status_code == 503
        assert exc_info.value.detail == "Failed to load organization"
