"""Infrastructure providers."""

# Import bases
from .matrix import MatrixProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .matrix import ProdMatrixProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "MatrixProvider",
    "PersistenceProvider",
    "ProdMatrixProvider",
    "ProdPersistenceProvider",
]
