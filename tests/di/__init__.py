"""Mock providers for testing."""

from .matrix import MockMatrixProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockMatrixProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
