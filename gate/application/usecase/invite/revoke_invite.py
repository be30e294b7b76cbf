"""Revoke invite use case."""

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase, CamelModel
from gate.domain.error import NotFoundError
from gate.domain.repository import InviteStore
from gate.domain.value import InviteId

from .admin_session import AdminSessionOpener


class RevokeInviteRequest(BaseModel):
    """Revoke invite request."""

    access_token: str
    invite_id: str


class RevokeInviteResponse(CamelModel):
    """Revoke invite response."""

    invite_id: str
    revoked_remote: bool
    revoked_local: bool


class RevokeInviteUseCase(BaseUseCase):
    """Use case for an admin revoking an invite.

    Pulling never deletes local records, so the invite is removed from
    both stores here; otherwise a revoked invite would keep granting access.
    """

    def __init__(
        self, session_opener: AdminSessionOpener, local_store: InviteStore
    ) -> None:
        self.session_opener = session_opener
        self.local_store = local_store

    async def execute(self, request: RevokeInviteRequest) -> RevokeInviteResponse:
        """Execute revoke invite flow.

        Raises:
            NotAuthenticatedError: If the token is not accepted
            NotAuthorizedError: If the caller is not an admin
            NotFoundError: If neither store holds the invite
            InviteStorageError: If a store could not be written
        """
        session = await self.session_opener.open(request.access_token, "revoke invites")
        invite_id = InviteId(request.invite_id)

        with logfire.span("revoke_invite", admin=session.principal, invite_id=invite_id):
            revoked_remote = await session.store.revoke(invite_id)
            revoked_local = await self.local_store.revoke(invite_id)

            if not revoked_remote and not revoked_local:
                logfire.warn("Invite not found for revocation", invite_id=invite_id)
                raise NotFoundError("Invite", invite_id)

            logfire.info(
                "Invite revoked",
                invite_id=invite_id,
                admin=session.principal,
                revoked_remote=revoked_remote,
                revoked_local=revoked_local,
            )
            return RevokeInviteResponse(
                invite_id=invite_id,
                revoked_remote=revoked_remote,
                revoked_local=revoked_local,
            )
