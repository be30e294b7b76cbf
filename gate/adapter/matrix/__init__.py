"""Matrix homeserver account-data adapter."""

from .client import (
    MatrixAccountDataClient,
    MatrixAccountDataClientFactory,
    MockAccountDataClient,
    MockAccountDataClientFactory,
)

__all__ = [
    "MatrixAccountDataClient",
    "MatrixAccountDataClientFactory",
    "MockAccountDataClient",
    "MockAccountDataClientFactory",
]
