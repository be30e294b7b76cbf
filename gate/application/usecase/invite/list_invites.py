"""List invites use case."""

from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.config import InvitationSettings
from gate.domain.service import InviteService

from .admin_session import AdminSessionOpener
from .item import InviteItem


class ListInvitesRequest(BaseModel):
    """List invites request."""

    access_token: str
    include_used: bool = False
    include_expired: bool = False


class ListInvitesResponse(BaseModel):
    """List invites response."""

    invites: list[InviteItem]
    total: int


class ListInvitesUseCase(BaseUseCase):
    """Use case for listing the invites in an admin's account data."""

    def __init__(
        self, session_opener: AdminSessionOpener, invite_settings: InvitationSettings
    ) -> None:
        self.session_opener = session_opener
        self.invite_settings = invite_settings

    async def execute(self, request: ListInvitesRequest) -> ListInvitesResponse:
        """Execute list invites flow.

        Raises:
            NotAuthenticatedError: If the token is not accepted
            NotAuthorizedError: If the caller is not an admin
        """
        session = await self.session_opener.open(request.access_token, "list invites")
        service = InviteService(session.store, self.invite_settings)

        invites = await service.list_invites(
            include_used=request.include_used,
            include_expired=request.include_expired,
        )

        items = [InviteItem.from_invite(invite) for invite in invites]
        return ListInvitesResponse(invites=items, total=len(items))
