"""Domain model entities for the gatekeeper."""

from gate.domain.model.invite import (
    Invite,
    InviteDocument,
    InviteStoreStatus,
    NewInvite,
)
from gate.domain.model.verdict import ALLOW, Allow, Deny, Verdict

__all__ = [
    "ALLOW",
    "Allow",
    "Deny",
    "Invite",
    "InviteDocument",
    "InviteStoreStatus",
    "NewInvite",
    "Verdict",
]
