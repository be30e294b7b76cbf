"""Invite item shared by the invite use case responses."""

from datetime import datetime

from gate.application.usecase.base import CamelModel
from gate.domain.model import Invite


class InviteItem(CamelModel):
    """Invite item in response."""

    invite_id: str
    invited_principal: str
    issued_by: str
    created_at: datetime
    expires_at: datetime | None
    used: bool
    used_at: datetime | None
    notes: str | None

    @classmethod
    def from_invite(cls, invite: Invite) -> "InviteItem":
        return cls(
            invite_id=invite.id,
            invited_principal=invite.invited_principal,
            issued_by=invite.issued_by,
            created_at=invite.created_at,
            expires_at=invite.expires_at,
            used=invite.used,
            used_at=invite.used_at,
            notes=invite.notes,
        )
