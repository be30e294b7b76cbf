"""Local file invite store.

The pre-authentication source of truth: the login check runs before any
homeserver session exists, so it reads invites from a JSON document on disk.
"""

import asyncio
import json
import os
import secrets
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import logfire

from gate.domain.model.common import utc_now
from gate.domain.model.invite import Invite, InviteDocument

from .document import (
    DocumentInviteStore,
    InviteSnapshot,
    document_records,
    parse_invite_records,
)


class LocalInviteStore(DocumentInviteStore):
    """Invite store backed by a single JSON file.

    Document shape: {"version": 1, "lastUpdated": ..., "invites": [...]}.
    Writes go to a sibling temporary file which then replaces the original,
    so a crash mid-write never leaves a truncated document behind.
    """

    store_name = "local"

    def __init__(
        self,
        path: Path,
        default_timeout: float | None = 5.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON document; created on first write
            default_timeout: Deadline in seconds for each operation
            clock: Source of the current time
        """
        super().__init__(default_timeout=default_timeout, clock=clock)
        self.path = Path(path)

    async def _load(self) -> InviteSnapshot:
        return await asyncio.to_thread(self._read_file)

    async def _save(self, invites: list[Invite], unreadable: tuple[Any, ...]) -> None:
        await asyncio.to_thread(self._write_file, invites, unreadable)

    def _read_file(self) -> InviteSnapshot:
        if not self.path.exists():
            return InviteSnapshot(invites=[])

        try:
            raw = self.path.read_text(encoding="utf-8")
            document = json.loads(raw) if raw.strip() else None
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            logfire.warn(
                "Invite file is not valid JSON, treating as empty",
                path=str(self.path),
                error=str(e),
            )
            return InviteSnapshot(invites=[])

        if document is None:
            return InviteSnapshot(invites=[])

        records = document.get("invites") if isinstance(document, dict) else None
        if not isinstance(records, list):
            logfire.warn(
                "Invite file has no invite list, treating as empty",
                path=str(self.path),
            )
            return InviteSnapshot(invites=[])

        return parse_invite_records(records, source=str(self.path))

    def _write_file(self, invites: list[Invite], unreadable: tuple[Any, ...] = ()) -> None:
        document = InviteDocument(invites=invites, last_updated=self._clock()).model_dump(
            mode="json", by_alias=True, exclude_none=True
        )
        document["invites"] = document_records(invites, unreadable)
        payload = json.dumps(document, indent=2)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f".{self.path.name}.{secrets.token_hex(4)}.tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
