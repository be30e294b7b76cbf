"""Shared read-modify-write implementation of the invite store contract.

Both durable stores hold their invites as one document: every read loads the
whole document, every mutation loads it, edits the list in memory and writes
the whole document back. Concrete stores only provide `_load` and `_save`.
"""

import asyncio
from abc import abstractmethod
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, ClassVar, NamedTuple, TypeVar

import logfire
from pydantic import ValidationError as PydanticValidationError

from gate.domain.error import InviteStorageError
from gate.domain.model.common import utc_now
from gate.domain.model.invite import Invite, InviteStoreStatus, NewInvite
from gate.domain.repository import ReconcilableInviteStore
from gate.domain.value import InviteId

T = TypeVar("T")

# A mutation returns the list to persist (None: nothing changed) and a result
Mutation = Callable[[list[Invite], datetime], tuple[list[Invite] | None, T]]


class InviteSnapshot(NamedTuple):
    """Contents of a store document as loaded."""

    invites: list[Invite]
    # Raw records that did not parse; written back unchanged on every save
    unreadable: tuple[Any, ...] = ()


def parse_invite_records(records: Iterable[Any], source: str) -> InviteSnapshot:
    """Validate raw invite records, setting aside the ones that do not parse.

    A record set aside can never grant access, so a damaged entry fails
    closed without hiding the rest of the store.
    """
    invites: list[Invite] = []
    unreadable: list[Any] = []
    for index, record in enumerate(records):
        try:
            invites.append(Invite.model_validate(record))
        except PydanticValidationError as e:
            unreadable.append(record)
            logfire.warn(
                "Skipping unreadable invite record",
                source=source,
                index=index,
                error=str(e),
            )
    return InviteSnapshot(invites=invites, unreadable=tuple(unreadable))


def document_records(invites: list[Invite], unreadable: Iterable[Any]) -> list[Any]:
    """Records to persist: every invite, then the unreadable records kept as is.

    An unreadable record sharing its id with a parsed invite has been
    superseded and is dropped.
    """
    ids = {inv.id for inv in invites}
    kept = [
        record
        for record in unreadable
        if not (isinstance(record, dict) and record.get("id") in ids)
    ]
    return [inv.to_record() for inv in invites] + kept


def _first_valid(
    invites: list[Invite], principal: str, now: datetime
) -> Invite | None:
    """Earliest-created valid invite for a principal."""
    return min(
        (inv for inv in invites if inv.matches(principal) and inv.is_valid(now)),
        key=lambda inv: inv.created_at,
        default=None,
    )


def _expired_unused(invites: list[Invite], now: datetime) -> list[Invite]:
    return [inv for inv in invites if not inv.used and inv.is_expired(now)]


class DocumentInviteStore(ReconcilableInviteStore):
    """Invite store over a single whole-document backend.

    Mutations on one instance are serialized by an asyncio lock. Separate
    instances (or processes) writing the same backend are not linearizable:
    the last full write wins.
    """

    store_name: ClassVar[str] = "document"

    def __init__(
        self,
        default_timeout: float | None = 5.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the store.

        Args:
            default_timeout: Deadline in seconds for each operation (None: no deadline)
            clock: Source of the current time
        """
        self.default_timeout = default_timeout
        self._clock = clock
        self._lock = asyncio.Lock()

    @abstractmethod
    async def _load(self) -> InviteSnapshot:
        """Read every record.

        An absent or unparseable document reads as empty. Errors reaching
        the backend at all (permissions, network) propagate.
        """
        pass

    @abstractmethod
    async def _save(self, invites: list[Invite], unreadable: tuple[Any, ...]) -> None:
        """Replace the whole document with `invites` plus the `unreadable` records."""
        pass

    def _deadline(self, timeout: float | None) -> float | None:
        return timeout if timeout is not None else self.default_timeout

    async def _read(self, operation: str, timeout: float | None) -> list[Invite]:
        """Load for a read path. Never raises: failures read as empty."""
        try:
            async with asyncio.timeout(self._deadline(timeout)):
                snapshot = await self._load()
            return snapshot.invites
        except TimeoutError:
            logfire.warn(
                "Invite store read timed out, treating as empty",
                store=self.store_name,
                operation=operation,
            )
            return []
        except Exception as e:
            logfire.warn(
                "Invite store unreadable, treating as empty",
                store=self.store_name,
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

    def _write_failed(self, operation: str, e: Exception) -> InviteStorageError:
        logfire.error(
            "Invite store write failed",
            store=self.store_name,
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
        )
        return InviteStorageError(operation, str(e))

    async def _acquire_and_load(
        self, operation: str, timeout: float | None
    ) -> InviteSnapshot:
        """Take the lock and load the document, both within the deadline.

        On success the caller owns the lock.
        """
        try:
            async with asyncio.timeout(self._deadline(timeout)):
                await self._lock.acquire()
                try:
                    return await self._load()
                except BaseException:
                    self._lock.release()
                    raise
        except TimeoutError as e:
            logfire.error(
                "Invite store write timed out",
                store=self.store_name,
                operation=operation,
            )
            raise InviteStorageError(operation, "deadline exceeded") from e
        except Exception as e:
            raise self._write_failed(operation, e) from e

    async def _mutate(
        self, operation: str, mutation: Mutation[T], timeout: float | None
    ) -> T:
        """Run one read-modify-write under the lock.

        The deadline covers waiting for the lock and loading the document.
        Once a write has started it runs to completion, and the lock is held
        until it lands.
        """
        snapshot = await self._acquire_and_load(operation, timeout)
        try:
            changed, result = mutation(snapshot.invites, self._clock())
        except Exception as e:
            self._lock.release()
            raise self._write_failed(operation, e) from e
        if changed is None:
            self._lock.release()
            return result

        write = asyncio.ensure_future(self._save(changed, snapshot.unreadable))
        write.add_done_callback(lambda _: self._lock.release())
        try:
            await asyncio.shield(write)
        except InviteStorageError:
            raise
        except Exception as e:
            raise self._write_failed(operation, e) from e
        return result

    async def create(
        self, candidate: NewInvite, *, timeout: float | None = None
    ) -> Invite:
        """Create an invite, or return the principal's existing valid one."""

        def add(invites: list[Invite], now: datetime):
            existing = _first_valid(invites, candidate.invited_principal, now)
            if existing is not None:
                return None, existing
            invite = candidate.build(now)
            return [*invites, invite], invite

        with logfire.span(
            "invite_store.create",
            store=self.store_name,
            principal=candidate.invited_principal,
        ):
            return await self._mutate("create", add, timeout)

    async def has_valid(self, principal: str, *, timeout: float | None = None) -> bool:
        """Check whether a valid invite exists. Fails closed."""
        if not principal.strip():
            return False

        invites = await self._read("has_valid", timeout)
        now = self._clock()
        return any(inv.matches(principal) and inv.is_valid(now) for inv in invites)

    async def mark_used(self, principal: str, *, timeout: float | None = None) -> bool:
        """Consume the earliest-created valid invite for a principal."""

        def consume(invites: list[Invite], now: datetime):
            target = _first_valid(invites, principal, now)
            if target is None:
                return None, False
            return [
                inv.mark_used(now) if inv.id == target.id else inv for inv in invites
            ], True

        with logfire.span(
            "invite_store.mark_used", store=self.store_name, principal=principal
        ):
            return await self._mutate("mark_used", consume, timeout)

    async def revoke(self, invite_id: InviteId, *, timeout: float | None = None) -> bool:
        """Hard-delete an invite by id."""

        def remove(invites: list[Invite], now: datetime):
            remaining = [inv for inv in invites if inv.id != invite_id]
            if len(remaining) == len(invites):
                return None, False
            return remaining, True

        with logfire.span(
            "invite_store.revoke", store=self.store_name, invite_id=invite_id
        ):
            return await self._mutate("revoke", remove, timeout)

    async def cleanup_expired(
        self,
        now: datetime | None = None,
        *,
        dry_run: bool = False,
        timeout: float | None = None,
    ) -> int:
        """Remove unused invites past their expiry; used ones are kept."""
        with logfire.span(
            "invite_store.cleanup_expired", store=self.store_name, dry_run=dry_run
        ):
            if dry_run:
                invites = await self._read("cleanup_expired", timeout)
                return len(_expired_unused(invites, now or self._clock()))

            def sweep(invites: list[Invite], clock_now: datetime):
                expired = {inv.id for inv in _expired_unused(invites, now or clock_now)}
                if not expired:
                    return None, 0
                return [inv for inv in invites if inv.id not in expired], len(expired)

            removed = await self._mutate("cleanup_expired", sweep, timeout)
            if removed:
                logfire.info(
                    "Expired invites removed", store=self.store_name, removed=removed
                )
            return removed

    async def status(
        self, now: datetime | None = None, *, timeout: float | None = None
    ) -> InviteStoreStatus:
        """Counters over every record."""
        invites = await self._read("status", timeout)
        now = now or self._clock()
        return InviteStoreStatus(
            total=len(invites),
            active=sum(1 for inv in invites if inv.is_valid(now)),
            used=sum(1 for inv in invites if inv.used),
            expired=len(_expired_unused(invites, now)),
        )

    async def upsert(
        self, invites: list[Invite], *, timeout: float | None = None
    ) -> tuple[int, int]:
        """Insert or overwrite records by id; others are left untouched."""
        incoming = {inv.id: inv for inv in invites}

        def merge(current: list[Invite], now: datetime):
            inserted = updated = 0
            merged: list[Invite] = []
            for inv in current:
                replacement = incoming.get(inv.id)
                if replacement is None:
                    merged.append(inv)
                elif replacement != inv:
                    merged.append(replacement)
                    updated += 1
                else:
                    merged.append(inv)

            known = {inv.id for inv in current}
            for invite_id, inv in incoming.items():
                if invite_id not in known:
                    merged.append(inv)
                    inserted += 1

            if not inserted and not updated:
                return None, (0, 0)
            return merged, (inserted, updated)

        with logfire.span(
            "invite_store.upsert", store=self.store_name, count=len(invites)
        ):
            return await self._mutate("upsert", merge, timeout)

    # Defined last: the method name shadows the builtin within the class body
    async def list(
        self,
        include_used: bool = False,
        include_expired: bool = False,
        *,
        timeout: float | None = None,
    ) -> list[Invite]:
        """List invites, oldest first."""
        invites = await self._read("list", timeout)
        now = self._clock()
        return sorted(
            (
                inv
                for inv in invites
                if (include_used or not inv.used)
                and (include_expired or not inv.is_expired(now))
            ),
            key=lambda inv: inv.created_at,
        )
