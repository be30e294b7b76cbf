"""Domain value objects for the gatekeeper."""

from gate.domain.value.identifiers import InviteId
from gate.domain.value.types import PRINCIPAL_PATTERN, DenyCode, Principal

__all__ = [
    # Identifiers
    "InviteId",
    # Types
    "DenyCode",
    "Principal",
    "PRINCIPAL_PATTERN",
]
