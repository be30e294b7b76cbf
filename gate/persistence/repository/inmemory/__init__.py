"""In-memory repository implementations for testing."""

from .invite import InMemoryInviteStore

__all__ = [
    "InMemoryInviteStore",
]
