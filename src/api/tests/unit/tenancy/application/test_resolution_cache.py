"""Unit tests for ResolutionCache."""

import pytest

from tenancy.application.resolution_cache import ResolutionCache
from tenancy.domain.resolution import TenantResolution
from tenancy.domain.value_objects import TenantMatch
from tests.unit.conftest import make_tenant


def _resolved(hostname: str) -> TenantResolution:
    return TenantResolution.resolved(hostname, make_tenant(), TenantMatch.SUBDOMAIN)


class TestResolutionCache:
    """Tests for the bounded LRU resolution cache."""

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            ResolutionCache(max_entries=0)

    def test_get_missing_returns_none(self):
        assert ResolutionCache().get("acme.helpdesk.com") is None

    def test_put_then_get(self):
        cache = ResolutionCache()
        resolution = _resolved("acme.helpdesk.com")

        assert cache.put(resolution) is True
        assert cache.get("acme.helpdesk.com") is resolution
        assert "acme.helpdesk.com" in cache
        assert len(cache) == 1

    def test_caches_not_found(self):
        cache = ResolutionCache()
        assert cache.put(TenantResolution.not_found("unknown.helpdesk.com")) is True
        assert cache.get("unknown.helpdesk.com") is not None

    def test_never_caches_failures(self):
        cache = ResolutionCache()
        assert cache.put(TenantResolution.failed("acme.helpdesk.com", error="boom")) is False
        assert cache.get("acme.helpdesk.com") is None
        assert len(cache) == 0

    def test_failure_does_not_evict_previous_entry(self):
        cache = ResolutionCache()
        resolution = _resolved("acme.helpdesk.com")
        cache.put(resolution)

        cache.put(TenantResolution.failed("acme.helpdesk.com", error="boom"))

        assert cache.get("acme.helpdesk.com") is resolution

    def test_single_entry_cache_keeps_only_last_hostname(self):
        """With max_entries=1 a new hostname replaces the previous one."""
        cache = ResolutionCache(max_entries=1)
        cache.put(_resolved("acme.helpdesk.com"))
        cache.put(_resolved("globex.helpdesk.com"))

        assert cache.get("acme.helpdesk.com") is None
        assert cache.get("globex.helpdesk.com") is not None

    def test_evicts_least_recently_used(self):
        cache = ResolutionCache(max_entries=2)
        cache.put(_resolved("a.helpdesk.com"))
        cache.put(_resolved("b.helpdesk.com"))
        cache.get("a.helpdesk.com")

        cache.put(_resolved("c.helpdesk.com"))

        assert "a.helpdesk.com" in cache
        assert "b.helpdesk.com" not in cache
        assert "c.helpdesk.com" in cache

    def test_clear_returns_count(self):
        cache = ResolutionCache()
        cache.put(_resolved("a.helpdesk.com"))
        cache.put(_resolved("b.helpdesk.com"))

        assert cache.clear() == 2
        assert len(cache) == 0
        assert cache.clear() == 0
