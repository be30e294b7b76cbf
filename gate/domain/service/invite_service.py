"""Invite domain service."""

from datetime import timedelta

import logfire
from pydantic import ValidationError as PydanticValidationError

from gate.config import InvitationSettings
from gate.domain.error import NotFoundError, ValidationError
from gate.domain.model.common import DomainModel, utc_now
from gate.domain.model.invite import Invite, InviteStoreStatus, NewInvite
from gate.domain.repository import InviteStore
from gate.domain.value import InviteId, Principal

from .base import Service


class CreatedInvite(DomainModel):
    """Result of an admin invite creation."""

    invite: Invite
    is_existing: bool  # A valid invite already existed and was returned


class InviteService(Service):
    """Domain service for admin invite management over one store."""

    def __init__(
        self, invite_store: InviteStore, invite_settings: InvitationSettings
    ) -> None:
        """Initialize invite service.

        Args:
            invite_store: Store the admin is authorized to reach
            invite_settings: Invitation configuration
        """
        self.invite_store = invite_store
        self.invite_settings = invite_settings

    async def create_invite(
        self,
        principal: str,
        issued_by: str,
        expiration_days: int | None = None,
        notes: str | None = None,
    ) -> CreatedInvite:
        """Create an invite for an external principal.

        Args:
            principal: Principal to invite (@localpart:realm)
            issued_by: Admin principal creating the invite
            expiration_days: Days until expiry, defaults to the configured value
            notes: Optional free text

        Returns:
            The invite, flagged when a valid one already existed

        Raises:
            ValidationError: If the principal or expiry is malformed
            InviteStorageError: If the store could not be written
        """
        try:
            invited = Principal(principal)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid principal format (expected @user:server.com)"
            ) from e

        days = (
            expiration_days
            if expiration_days is not None
            else self.invite_settings.default_expiration_days
        )
        if days <= 0:
            raise ValidationError("expiration_days must be positive")

        with logfire.span(
            "invite_service.create_invite",
            principal=invited.root,
            issued_by=issued_by,
            expiration_days=days,
        ):
            candidate = NewInvite(
                invited_principal=invited.root,
                issued_by=issued_by,
                expires_at=utc_now() + timedelta(days=days),
                notes=notes,
            )
            invite = await self.invite_store.create(candidate)
            is_existing = invite.id != candidate.id

            if is_existing:
                logfire.info(
                    "Invite already exists for principal",
                    principal=invited.root,
                    invite_id=invite.id,
                )
            else:
                logfire.info(
                    "Invite created",
                    principal=invited.root,
                    invite_id=invite.id,
                    issued_by=issued_by,
                )
            return CreatedInvite(invite=invite, is_existing=is_existing)

    async def list_invites(
        self, include_used: bool = False, include_expired: bool = False
    ) -> list[Invite]:
        """List invites.

        Args:
            include_used: Include consumed invites
            include_expired: Include expired invites

        Returns:
            Matching invites, oldest first
        """
        with logfire.span(
            "invite_service.list_invites",
            include_used=include_used,
            include_expired=include_expired,
        ):
            invites = await self.invite_store.list(
                include_used=include_used, include_expired=include_expired
            )
            logfire.info("Invites listed", count=len(invites))
            return invites

    async def revoke_invite(self, invite_id: InviteId) -> None:
        """Revoke (hard-delete) an invite.

        Raises:
            NotFoundError: If no invite has this id
            InviteStorageError: If the store could not be written
        """
        with logfire.span("invite_service.revoke_invite", invite_id=invite_id):
            revoked = await self.invite_store.revoke(invite_id)
            if not revoked:
                logfire.warn("Invite not found for revocation", invite_id=invite_id)
                raise NotFoundError("Invite", invite_id)
            logfire.info("Invite revoked", invite_id=invite_id)

    async def cleanup_expired(self, dry_run: bool = False) -> int:
        """Remove unused expired invites.

        Returns:
            Number of invites removed (or that would be removed)
        """
        with logfire.span("invite_service.cleanup_expired", dry_run=dry_run):
            removed = await self.invite_store.cleanup_expired(dry_run=dry_run)
            logfire.info("Expired invites cleaned up", removed=removed, dry_run=dry_run)
            return removed

    async def get_status(self) -> InviteStoreStatus:
        """Counters over the store's contents."""
        return await self.invite_store.status()
