"""Sync invites use case."""

from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.domain.repository import ReconcilableInviteStore
from gate.domain.service import SyncReconciler, SyncResult

from .admin_session import AdminSessionOpener


class SyncInvitesRequest(BaseModel):
    """On-demand pull request."""

    access_token: str


class SyncInvitesUseCase(BaseUseCase):
    """Use case for pulling an admin's invites into the local store."""

    def __init__(
        self,
        session_opener: AdminSessionOpener,
        local_store: ReconcilableInviteStore,
        reconciler: SyncReconciler,
    ) -> None:
        self.session_opener = session_opener
        self.local_store = local_store
        self.reconciler = reconciler

    async def execute(self, request: SyncInvitesRequest) -> SyncResult:
        """Execute sync flow.

        Raises:
            NotAuthenticatedError: If the token is not accepted
            NotAuthorizedError: If the caller is not an admin
            InviteStorageError: If the local store could not be written
        """
        session = await self.session_opener.open(request.access_token, "sync invites")
        return await self.reconciler.pull(session.store, self.local_store)
