"""Unit tests for subdomain format rules and the reserved-name policy."""

import pytest

from tenancy.domain.subdomains import (
    SubdomainPolicy,
    is_valid_subdomain,
    normalize_subdomain,
)


class TestIsValidSubdomain:
    """Tests for is_valid_subdomain."""

    @pytest.mark.parametrize(
        "candidate",
        ["acme", "abc", "acme-corp", "a1b2c3", "acme--it", "a" * 63, "ACME", "Acme-Corp"],
    )
    def test_valid(self, candidate):
        assert is_valid_subdomain(candidate) is True

    @pytest.mark.parametrize(
        "candidate",
        [
            "",
            "ab",
            "1acme",
            "-acme",
            "acme_corp",
            "acme.corp",
            "acme corp",
            "a" * 64,
            "ácme",
        ],
    )
    def test_invalid(self, candidate):
        assert is_valid_subdomain(candidate) is False

    def test_case_insensitive(self):
        """Uppercase input behaves like its lowercase form."""
        for candidate in ("ACME", "1ACME", "AB"):
            assert is_valid_subdomain(candidate) == is_valid_subdomain(candidate.lower())

    @pytest.mark.parametrize("candidate", [None, 42, b"acme"])
    def test_never_raises_for_non_strings(self, candidate):
        assert is_valid_subdomain(candidate) is False

    def test_trailing_hyphen_is_accepted(self):
        """Only the first character is constrained beyond the alphabet."""
        assert is_valid_subdomain("acme-") is True


class TestNormalizeSubdomain:
    def test_trims_and_lowercases(self):
        assert normalize_subdomain("  Acme ") == "acme"


class TestSubdomainPolicy:
    """Tests for SubdomainPolicy."""

    def test_create_normalizes_names(self):
        policy = SubdomainPolicy.create([" WWW ", "api", ""])
        assert policy.reserved == frozenset({"www", "api"})

    def test_is_reserved_is_case_insensitive(self, subdomain_policy):
        assert subdomain_policy.is_reserved("Admin") is True
        assert subdomain_policy.is_reserved(" support ") is True

    def test_unreserved_name(self, subdomain_policy):
        assert subdomain_policy.is_reserved("acme") is False

    @pytest.mark.parametrize(
        "name", ["www", "api", "admin", "app", "help", "support", "mail", "ftp", "cdn"]
    )
    def test_default_reserved_names(self, subdomain_policy, name):
        assert subdomain_policy.is_reserved(name) is True
