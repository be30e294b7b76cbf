"""Invite status use case."""

from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.domain.model import InviteStoreStatus
from gate.domain.repository import InviteStore

from .admin_session import AdminSessionOpener


class InviteStatusRequest(BaseModel):
    """Invite status request."""

    access_token: str


class InviteStatusResponse(BaseModel):
    """Counters over both invite stores."""

    remote: InviteStoreStatus  # The admin's account data
    local: InviteStoreStatus  # What the login check sees


class InviteStatusUseCase(BaseUseCase):
    """Use case for reporting invite store counters."""

    def __init__(
        self, session_opener: AdminSessionOpener, local_store: InviteStore
    ) -> None:
        self.session_opener = session_opener
        self.local_store = local_store

    async def execute(self, request: InviteStatusRequest) -> InviteStatusResponse:
        session = await self.session_opener.open(
            request.access_token, "view invite status"
        )
        return InviteStatusResponse(
            remote=await session.store.status(),
            local=await self.local_store.status(),
        )
