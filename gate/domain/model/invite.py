"""Invite entity.

Invites let one specific out-of-realm principal log in to a private
deployment. They are issued by an admin, optionally expire, and are consumed
on the first successful login that relied on them.
"""

import secrets
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from gate.domain.model.common import DomainModel, ensure_utc, utc_now
from gate.domain.value import InviteId

INVITE_DOCUMENT_VERSION = 1


def generate_invite_id() -> InviteId:
    """Generate a new opaque invite id (32 hex characters)."""
    return InviteId(secrets.token_hex(16))


class Invite(DomainModel):
    """Invite entity.

    Field aliases are the persisted (camelCase) names shared by the file
    store and the account-data record.

    Business rules:
    - At most one valid invite is created per invited principal
    - used/used_at are set together, exactly once, and never revert
    - Expired invites are only removed by an explicit cleanup sweep
    """

    id: InviteId
    invited_principal: str = Field(alias="invitedUserId")
    issued_by: str = Field(alias="createdBy")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt")
    used: bool = False
    used_at: Optional[datetime] = Field(default=None, alias="usedAt")
    notes: Optional[str] = None  # Free text, no semantic meaning

    @field_validator("created_at", "expires_at", "used_at")
    @classmethod
    def normalize_timezone(cls, v: datetime | None) -> datetime | None:
        """Store every timestamp as timezone-aware UTC."""
        return ensure_utc(v)

    def is_expired(self, now: datetime) -> bool:
        """Whether the invite's expiry is at or before `now`."""
        return self.expires_at is not None and self.expires_at <= now

    def is_valid(self, now: datetime) -> bool:
        """Whether the invite can still grant access at `now`."""
        return not self.used and not self.is_expired(now)

    def matches(self, principal: str) -> bool:
        """Case-insensitive comparison against the invited principal."""
        return self.invited_principal.lower() == principal.strip().lower()

    def mark_used(self, now: datetime) -> "Invite":
        """Return a copy of this invite consumed at `now`."""
        return self.model_copy(update={"used": True, "used_at": now})

    def to_record(self) -> dict:
        """Serialize to the persisted JSON shape (absent optionals omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class NewInvite(DomainModel):
    """Candidate invite submitted to InviteStore.create.

    The id is drawn up front, so a caller can tell a fresh invite from a
    pre-existing one returned by idempotent creation.
    """

    id: InviteId = Field(default_factory=generate_invite_id)
    invited_principal: str
    issued_by: str
    expires_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None  # Defaults to the store's clock

    @field_validator("created_at", "expires_at")
    @classmethod
    def normalize_timezone(cls, v: datetime | None) -> datetime | None:
        """Store every timestamp as timezone-aware UTC."""
        return ensure_utc(v)

    def build(self, now: datetime) -> Invite:
        """Materialize the candidate into an Invite."""
        return Invite(
            id=self.id,
            invited_principal=self.invited_principal.strip(),
            issued_by=self.issued_by,
            created_at=self.created_at or now,
            expires_at=self.expires_at,
            used=False,
            notes=self.notes,
        )


class InviteDocument(DomainModel):
    """The single JSON document held by the local file store."""

    version: int = INVITE_DOCUMENT_VERSION
    last_updated: datetime = Field(default_factory=utc_now, alias="lastUpdated")
    invites: list[Invite] = []


class InviteStoreStatus(DomainModel):
    """Diagnostic counters over the full contents of a store."""

    total: int
    active: int
    used: int
    expired: int  # Unused and past expiry, i.e. what a cleanup would remove
