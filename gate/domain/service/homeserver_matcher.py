"""Realm URL normalization and comparison."""

import re
from urllib.parse import urlsplit

from .base import Service

_SCHEME_PREFIX = re.compile(r"^https?://", re.IGNORECASE)
_PRINCIPAL_REALM = re.compile(r"^@[^:]+:(.+)$")


class HomeserverMatcher(Service):
    """Normalizes and compares realm identifiers (URLs or bare domains).

    Scheme differences (http vs https) never cause a false negative, and
    distinct domains never match.
    """

    @staticmethod
    def normalize(url: str) -> str:
        """Strip trailing slashes and lower-case the whole string.

        Example:
            >>> HomeserverMatcher.normalize("https://Chat.Example.com//")
            'https://chat.example.com'
        """
        return url.rstrip("/").lower()

    @staticmethod
    def domain_of(url: str) -> str:
        """Extract the host of a realm URL.

        Absolute URLs yield their hostname. Anything else falls back to
        stripping a leading http(s):// and keeping what precedes the first
        slash. Inputs like "example.com:8080" keep their port in the
        fallback, and may come back empty for odd inputs.
        """
        try:
            parts = urlsplit(url.strip())
        except ValueError:
            parts = None

        if parts is not None and parts.scheme and parts.netloc:
            return (parts.hostname or "").lower()

        return _SCHEME_PREFIX.sub("", url.strip()).split("/")[0].lower()

    @classmethod
    def match(cls, a: str, b: str) -> bool:
        """Whether two realm identifiers refer to the same realm.

        An empty extracted domain never matches by domain, so unparseable
        inputs are only equal to themselves.
        """
        if cls.normalize(a) == cls.normalize(b):
            return True

        domain_a = cls.domain_of(a)
        domain_b = cls.domain_of(b)
        return bool(domain_a) and domain_a == domain_b

    @staticmethod
    def realm_of(principal: str) -> str | None:
        """Realm embedded in a principal (@localpart:realm), or None.

        Example:
            >>> HomeserverMatcher.realm_of("@alice:matrix.org")
            'matrix.org'
            >>> HomeserverMatcher.realm_of("alice") is None
            True
        """
        found = _PRINCIPAL_REALM.match(principal.strip())
        return found.group(1) if found else None
