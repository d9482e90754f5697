"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, Mock

import pytest

from tenancy.application.observability import TenantResolverProbe
from tenancy.application.services import TenantResolver
from tenancy.domain.hostnames import HostnamePolicy
from tenancy.domain.subdomains import SubdomainPolicy
from tenancy.domain.tenant import Tenant
from tenancy.domain.value_objects import TenantBranding, TenantId
from tenancy.ports.directory import ITenantDirectory

PLATFORM_DOMAINS = [
    "localhost",
    "127.0.0.1",
    "helpdesk.com",
    "helpdesk.vercel.app",
    "helpdesk-5fe0c.web.app",
]

RESERVED_SUBDOMAINS = ["www", "api", "admin", "app", "help", "support", "mail", "ftp", "cdn"]


def make_tenant(
    tenant_id: str = "tenant-acme",
    name: str = "Acme",
    subdomain: str = "acme",
    custom_domain: str | None = None,
    is_active: bool = True,
) -> Tenant:
    """Build a Tenant with sensible defaults."""
    return Tenant(
        id=TenantId(value=tenant_id),
        name=name,
        subdomain=subdomain,
        custom_domain=custom_domain,
        is_active=is_active,
        branding=TenantBranding(primary_color="#112233", secondary_color="#445566"),
    )


@pytest.fixture
def acme_tenant() -> Tenant:
    """Active tenant reachable at acme.<platform> and support.acme.com."""
    return make_tenant(custom_domain="support.acme.com")


@pytest.fixture
def mock_directory():
    """Mock tenant directory that knows no tenants."""
    directory = Mock(spec=ITenantDirectory)
    directory.find_active_by_subdomain = AsyncMock(return_value=None)
    directory.find_active_by_custom_domain = AsyncMock(return_value=None)
    return directory


@pytest.fixture
def mock_resolver_probe():
    """Mock TenantResolverProbe."""
    return Mock(spec=TenantResolverProbe)


@pytest.fixture
def hostname_policy() -> HostnamePolicy:
    """Hostname policy with the production platform domains."""
    return HostnamePolicy.create(PLATFORM_DOMAINS)


@pytest.fixture
def subdomain_policy() -> SubdomainPolicy:
    """Subdomain policy with the production reserved names."""
    return SubdomainPolicy.create(RESERVED_SUBDOMAINS)


@pytest.fixture
def resolver(mock_directory, hostname_policy, subdomain_policy, mock_resolver_probe):
    """TenantResolver over the mock directory."""
    return TenantResolver(
        directory=mock_directory,
        hostname_policy=hostname_policy,
        subdomain_policy=subdomain_policy,
        lookup_timeout=0.5,
        probe=mock_resolver_probe,
    )
