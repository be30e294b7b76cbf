"""Create invite use case."""

import logfire
from pydantic import BaseModel, Field

from gate.application.usecase.base import BaseUseCase, CamelModel
from gate.config import InvitationSettings
from gate.domain.error import InviteStorageError
from gate.domain.repository import ReconcilableInviteStore
from gate.domain.service import InviteService, SyncReconciler

from .admin_session import AdminSessionOpener
from .item import InviteItem


class CreateInviteRequest(BaseModel):
    """Request to invite an external principal."""

    access_token: str
    principal: str
    expiration_days: int | None = Field(default=None, ge=1)
    notes: str | None = None


class CreateInviteResponse(CamelModel):
    """Response after creating an invite."""

    invite: InviteItem
    is_existing: bool  # A valid invite already existed and was returned
    synced: bool  # Whether the local store already reflects the invite


class CreateInviteUseCase(BaseUseCase):
    """Use case for an admin creating an invite.

    The invite is written to the admin's account data, then pulled into the
    local store so the next login attempt can see it.
    """

    def __init__(
        self,
        session_opener: AdminSessionOpener,
        local_store: ReconcilableInviteStore,
        reconciler: SyncReconciler,
        invite_settings: InvitationSettings,
    ) -> None:
        """Initialize use case.

        Args:
            session_opener: Resolves the admin session
            local_store: Pre-authentication invite store
            reconciler: Remote to local pull
            invite_settings: Invitation configuration
        """
        self.session_opener = session_opener
        self.local_store = local_store
        self.reconciler = reconciler
        self.invite_settings = invite_settings

    async def execute(self, request: CreateInviteRequest) -> CreateInviteResponse:
        """Execute create invite use case.

        Raises:
            NotAuthenticatedError: If the token is not accepted
            NotAuthorizedError: If the caller is not an admin
            ValidationError: If the principal is malformed
            InviteStorageError: If the admin's store could not be written
        """
        session = await self.session_opener.open(request.access_token, "create invites")

        with logfire.span(
            "create_invite", admin=session.principal, principal=request.principal
        ):
            service = InviteService(session.store, self.invite_settings)
            created = await service.create_invite(
                principal=request.principal,
                issued_by=session.principal,
                expiration_days=request.expiration_days,
                notes=request.notes,
            )

            synced = True
            try:
                await self.reconciler.pull(session.store, self.local_store)
            except InviteStorageError as e:
                # The next admin login retries the pull
                synced = False
                logfire.error(
                    "Failed to pull new invite into local store",
                    invite_id=created.invite.id,
                    error=str(e),
                )

            return CreateInviteResponse(
                invite=InviteItem.from_invite(created.invite),
                is_existing=created.is_existing,
                synced=synced,
            )
