"""In-memory invite store for testing."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from gate.domain.model.common import utc_now
from gate.domain.model.invite import Invite

from ..document import DocumentInviteStore, InviteSnapshot


class InMemoryInviteStore(DocumentInviteStore):
    """In-memory implementation of the invite store for testing.

    Shares the read-modify-write rules of the durable stores, so tests
    exercise the same creation, consumption and cleanup semantics.
    """

    store_name = "memory"

    def __init__(
        self,
        invites: list[Invite] | None = None,
        default_timeout: float | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__(default_timeout=default_timeout, clock=clock)
        self._invites: list[Invite] = list(invites or [])
        self._unreadable: tuple[Any, ...] = ()

    async def _load(self) -> InviteSnapshot:
        return InviteSnapshot(invites=list(self._invites), unreadable=self._unreadable)

    async def _save(self, invites: list[Invite], unreadable: tuple[Any, ...]) -> None:
        self._invites = list(invites)
        self._unreadable = unreadable
