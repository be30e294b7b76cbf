"""Account-data invite store.

The authenticated copy of the invite list, kept in the signed-in admin's
per-account storage on the homeserver. Only reachable once a session exists.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from gate.domain.error import NotAuthenticatedError
from gate.domain.model.common import utc_now
from gate.domain.model.invite import INVITE_DOCUMENT_VERSION, Invite
from gate.domain.repository import AccountDataClient

from .document import (
    DocumentInviteStore,
    InviteSnapshot,
    document_records,
    parse_invite_records,
)

DEFAULT_RECORD_TYPE = "im.melo.admin_invites"


class RemoteInviteStore(DocumentInviteStore):
    """Invite store backed by one account-data record.

    Record shape: {"invites": [...], "version": 1}.
    """

    store_name = "remote"

    def __init__(
        self,
        client: AccountDataClient,
        record_type: str = DEFAULT_RECORD_TYPE,
        default_timeout: float | None = 10.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the store.

        Args:
            client: Authenticated account-data client; construction fails
                without a signed-in session
            record_type: Account-data key holding the invite list
            default_timeout: Deadline in seconds for each operation
            clock: Source of the current time
        """
        super().__init__(default_timeout=default_timeout, clock=clock)
        self.client = client
        self.record_type = record_type
        self._require_session()

    def _require_session(self) -> str:
        principal = self.client.current_principal_id()
        if principal is None:
            raise NotAuthenticatedError("Account data store requires a signed-in session")
        return principal

    async def _load(self) -> InviteSnapshot:
        principal = self._require_session()
        content: Any = await self.client.get_own_account_record(self.record_type)
        if not isinstance(content, dict):
            return InviteSnapshot(invites=[])

        records = content.get("invites")
        if not isinstance(records, list):
            return InviteSnapshot(invites=[])

        return parse_invite_records(records, source=f"{principal}/{self.record_type}")

    async def _save(self, invites: list[Invite], unreadable: tuple[Any, ...]) -> None:
        self._require_session()
        await self.client.set_own_account_record(
            self.record_type,
            {
                "invites": document_records(invites, unreadable),
                "version": INVITE_DOCUMENT_VERSION,
            },
        )
