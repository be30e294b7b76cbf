"""Invite store interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from gate.domain.model.invite import Invite, InviteStoreStatus, NewInvite
from gate.domain.value import InviteId


class InviteStore(ABC):
    """Store for Invite entities.

    Defines the contract both the pre-authentication file store and the
    authenticated account-data store satisfy identically. Implementations
    live in the persistence layer.

    Every method performs blocking I/O and accepts an optional `timeout`
    (seconds); `None` means the store's default deadline.
    """

    @abstractmethod
    async def create(
        self, candidate: NewInvite, *, timeout: float | None = None
    ) -> Invite:
        """Create an invite, or return the existing valid one.

        If a currently-valid invite already exists for the candidate's
        principal (case-insensitive), that record is returned unchanged.

        Args:
            candidate: The invite to create
            timeout: Optional deadline override

        Returns:
            The created or pre-existing invite

        Raises:
            InviteStorageError: If the store could not be written
        """
        pass

    @abstractmethod
    async def has_valid(self, principal: str, *, timeout: float | None = None) -> bool:
        """Check whether a valid invite exists for a principal.

        Critical path for the pre-authentication check. Never raises: an
        unreadable store or an expired deadline yields False.

        Args:
            principal: Principal identifier (@localpart:realm)
            timeout: Optional deadline override

        Returns:
            True if an unused, unexpired invite exists
        """
        pass

    @abstractmethod
    async def mark_used(self, principal: str, *, timeout: float | None = None) -> bool:
        """Consume the earliest-created valid invite for a principal.

        Args:
            principal: Principal identifier
            timeout: Optional deadline override

        Returns:
            True if a record was found and updated, False otherwise

        Raises:
            InviteStorageError: If the store could not be written
        """
        pass

    @abstractmethod
    async def list(
        self,
        include_used: bool = False,
        include_expired: bool = False,
        *,
        timeout: float | None = None,
    ) -> list[Invite]:
        """List invites, excluding used and expired ones by default.

        Args:
            include_used: Include consumed invites
            include_expired: Include invites past their expiry
            timeout: Optional deadline override

        Returns:
            Matching invites, oldest first
        """
        pass

    @abstractmethod
    async def revoke(self, invite_id: InviteId, *, timeout: float | None = None) -> bool:
        """Hard-delete an invite by id.

        Args:
            invite_id: The invite's identifier
            timeout: Optional deadline override

        Returns:
            True if deleted, False if no such invite

        Raises:
            InviteStorageError: If the store could not be written
        """
        pass

    @abstractmethod
    async def cleanup_expired(
        self,
        now: datetime | None = None,
        *,
        dry_run: bool = False,
        timeout: float | None = None,
    ) -> int:
        """Remove unused invites whose expiry is in the past.

        Used invites are never removed (audit trail).

        Args:
            now: Reference time, defaults to the current time
            dry_run: Count without deleting
            timeout: Optional deadline override

        Returns:
            Number of records removed (or that would be removed)

        Raises:
            InviteStorageError: If the store could not be written
        """
        pass

    @abstractmethod
    async def status(
        self, now: datetime | None = None, *, timeout: float | None = None
    ) -> InviteStoreStatus:
        """Summarize the store's contents.

        Args:
            now: Reference time, defaults to the current time
            timeout: Optional deadline override

        Returns:
            Counters over all records
        """
        pass


class ReconcilableInviteStore(InviteStore):
    """Invite store that accepts records copied from another store.

    Only the sync reconciler writes through `upsert`.
    """

    @abstractmethod
    async def upsert(
        self, invites: list[Invite], *, timeout: float | None = None
    ) -> tuple[int, int]:
        """Insert or overwrite records keyed by invite id.

        Records not present in `invites` are left untouched.

        Args:
            invites: Records to copy in; they win over same-id records
            timeout: Optional deadline override

        Returns:
            (inserted, updated) counts; unchanged records count as neither

        Raises:
            InviteStorageError: If the store could not be written
        """
        pass
