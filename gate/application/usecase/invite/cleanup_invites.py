"""Cleanup expired invites use case."""

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase, CamelModel
from gate.domain.repository import InviteStore

from .admin_session import AdminSessionOpener


class CleanupInvitesRequest(BaseModel):
    """Cleanup request.

    Without an access token only the local store is swept.
    """

    access_token: str | None = None
    dry_run: bool = False


class CleanupInvitesResponse(CamelModel):
    """Cleanup response."""

    dry_run: bool
    local_removed: int
    remote_removed: int | None  # None when no admin session was given


class CleanupInvitesUseCase(BaseUseCase):
    """Use case for sweeping unused expired invites."""

    def __init__(
        self, session_opener: AdminSessionOpener, local_store: InviteStore
    ) -> None:
        self.session_opener = session_opener
        self.local_store = local_store

    async def execute(self, request: CleanupInvitesRequest) -> CleanupInvitesResponse:
        """Execute cleanup flow.

        Raises:
            NotAuthenticatedError: If a token is given and not accepted
            NotAuthorizedError: If a token is given and the caller is not an admin
            InviteStorageError: If a store could not be written
        """
        session = None
        if request.access_token is not None:
            session = await self.session_opener.open(
                request.access_token, "clean up invites"
            )

        with logfire.span("cleanup_invites", dry_run=request.dry_run):
            local_removed = await self.local_store.cleanup_expired(
                dry_run=request.dry_run
            )
            remote_removed = None
            if session is not None:
                remote_removed = await session.store.cleanup_expired(
                    dry_run=request.dry_run
                )

            logfire.info(
                "Invite cleanup finished",
                dry_run=request.dry_run,
                local_removed=local_removed,
                remote_removed=remote_removed,
            )
            return CleanupInvitesResponse(
                dry_run=request.dry_run,
                local_removed=local_removed,
                remote_removed=remote_removed,
            )
