"""Repository interfaces for the gatekeeper domain.

Interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence and adapter layers.
"""

from gate.domain.repository.account_data import (
    AccountDataClient,
    AccountDataClientFactory,
)
from gate.domain.repository.invite import InviteStore, ReconcilableInviteStore

__all__ = [
    "AccountDataClient",
    "AccountDataClientFactory",
    "InviteStore",
    "ReconcilableInviteStore",
]
