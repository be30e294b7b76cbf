"""Unit tests for HomeserverMatcher."""

import pytest

from gate.domain.service import HomeserverMatcher

REALMS = [
    "https://chat.example.com",
    "http://chat.example.com/",
    "chat.example.com",
    "https://other.org",
    "https://chat.example.com:8448/path",
    "",
    "not a url",
]


class TestNormalize:
    """Tests for normalize."""

    def test_strips_trailing_slashes_and_lowercases(self):
        """Should drop every trailing slash and lower-case the string."""
        assert HomeserverMatcher.normalize("https://Chat.Example.com//") == (
            "https://chat.example.com"
        )

    def test_keeps_scheme(self):
        """Normalization alone does not unify schemes."""
        assert HomeserverMatcher.normalize("HTTP://a.org") == "http://a.org"


class TestDomainOf:
    """Tests for domain_of."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://chat.example.com", "chat.example.com"),
            ("https://Chat.Example.com:8448/_matrix", "chat.example.com"),
            ("http://chat.example.com/", "chat.example.com"),
            ("chat.example.com", "chat.example.com"),
            ("chat.example.com/path", "chat.example.com"),
            ("example.com:8080", "example.com:8080"),
        ],
    )
    def test_extracts_host(self, url, expected):
        """Should return the lower-cased host."""
        assert HomeserverMatcher.domain_of(url) == expected

    def test_empty_input_yields_empty_domain(self):
        """An empty string has no domain."""
        assert HomeserverMatcher.domain_of("") == ""


class TestMatch:
    """Tests for match."""

    def test_scheme_difference_matches(self):
        """http vs https on the same host is the same realm."""
        assert HomeserverMatcher.match(
            "http://chat.example.com", "https://chat.example.com"
        )

    def test_bare_domain_matches_url(self):
        """A bare domain matches the URL of the same host."""
        assert HomeserverMatcher.match("chat.example.com", "https://chat.example.com/")

    def test_case_and_trailing_slash_ignored(self):
        """Case and trailing slashes never cause a false negative."""
        assert HomeserverMatcher.match(
            "https://CHAT.example.com/", "https://chat.example.com"
        )

    def test_different_domains_do_not_match(self):
        """Distinct hosts never match."""
        assert not HomeserverMatcher.match(
            "https://matrix.org", "https://chat.example.com"
        )

    def test_subdomain_does_not_match(self):
        """A subdomain is a different realm."""
        assert not HomeserverMatcher.match(
            "https://evil.chat.example.com", "https://chat.example.com"
        )

    def test_empty_domains_do_not_match_each_other(self):
        """Unparseable inputs only equal themselves."""
        assert not HomeserverMatcher.match("https://", "http://")

    @pytest.mark.parametrize("a", REALMS)
    def test_reflexive(self, a):
        """Every input matches itself."""
        assert HomeserverMatcher.match(a, a)

    @pytest.mark.parametrize("a", REALMS)
    @pytest.mark.parametrize("b", REALMS)
    def test_symmetric(self, a, b):
        """match(a, b) == match(b, a)."""
        assert HomeserverMatcher.match(a, b) == HomeserverMatcher.match(b, a)


class TestRealmOf:
    """Tests for realm_of."""

    @pytest.mark.parametrize(
        "principal,expected",
        [
            ("@alice:matrix.org", "matrix.org"),
            ("  @alice:matrix.org  ", "matrix.org"),
            ("@alice:chat.example.com:8448", "chat.example.com:8448"),
        ],
    )
    def test_extracts_realm(self, principal, expected):
        """Should return everything after the first colon."""
        assert HomeserverMatcher.realm_of(principal) == expected

    @pytest.mark.parametrize(
        "principal",
        ["alice", "@alice", "alice:matrix.org", "@:matrix.org", "@alice:", ""],
    )
    def test_malformed_principal_has_no_realm(self, principal):
        """Malformed principals yield None."""
        assert HomeserverMatcher.realm_of(principal) is None
