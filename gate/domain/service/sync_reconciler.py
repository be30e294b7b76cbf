"""One-directional invite reconciliation.

Admins manage invites in their authenticated account data; the pre-auth
login check can only read the local file store. Pulling copies the former
into the latter whenever an admin session is available.
"""

import logfire

from gate.domain.model.common import DomainModel
from gate.domain.repository import InviteStore, ReconcilableInviteStore

from .base import Service


class SyncResult(DomainModel):
    """Outcome of one pull."""

    pulled: int  # Records read from the remote store
    inserted: int
    updated: int


class SyncReconciler(Service):
    """Merges remote invite records into the local store.

    The remote store is the source of truth: same-id records are
    overwritten (last writer wins by id), local-only records are left
    alone, and nothing is ever pushed back to the remote store.
    """

    async def pull(
        self, remote: InviteStore, local: ReconcilableInviteStore
    ) -> SyncResult:
        """Copy every remote record, used and expired included, into local.

        Args:
            remote: Authenticated (account data) store
            local: Pre-authentication (file) store

        Returns:
            Counts of records pulled, inserted and updated

        Raises:
            InviteStorageError: If the local store could not be written
        """
        with logfire.span("sync_reconciler.pull"):
            invites = await remote.list(include_used=True, include_expired=True)
            if not invites:
                logfire.info("Nothing to pull from remote invite store")
                return SyncResult(pulled=0, inserted=0, updated=0)

            inserted, updated = await local.upsert(invites)
            logfire.info(
                "Invites pulled into local store",
                pulled=len(invites),
                inserted=inserted,
                updated=updated,
            )
            return SyncResult(pulled=len(invites), inserted=inserted, updated=updated)
