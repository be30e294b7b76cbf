"""Unit tests for LocalInviteStore file handling."""

import asyncio
import json
import time
from datetime import timedelta
from unittest.mock import patch

import pytest

from gate.domain.error import InviteStorageError
from gate.domain.model import NewInvite
from gate.persistence.repository import LocalInviteStore
from gate.persistence.repository.document import InviteSnapshot
from tests.factories import ADMIN, NOW, OUTSIDER, FixedClock, make_invite

REPLACE = "gate.persistence.repository.local.os.replace"


@pytest.fixture
def path(tmp_path):
    return tmp_path / "data" / "server-invites.json"


@pytest.fixture
def store(path) -> LocalInviteStore:
    return LocalInviteStore(path, clock=FixedClock())


class TestDocumentLayout:
    """Tests for the persisted JSON document."""

    @pytest.mark.asyncio
    async def test_first_write_creates_directory_and_document(self, store, path):
        """The document and its directory are created on first write."""
        invite = await store.create(
            NewInvite(
                invited_principal=OUTSIDER,
                issued_by=ADMIN,
                expires_at=NOW + timedelta(days=30),
            )
        )

        document = json.loads(path.read_text())
        assert document["version"] == 1
        assert "lastUpdated" in document
        [record] = document["invites"]
        assert record["id"] == invite.id
        assert record["invitedUserId"] == OUTSIDER
        assert record["createdBy"] == ADMIN
        assert record["used"] is False
        assert "expiresAt" in record
        # Absent optionals are omitted
        assert "usedAt" not in record
        assert "notes" not in record

    @pytest.mark.asyncio
    async def test_no_temporary_files_left_behind(self, store, path):
        """Atomic writes leave only the document."""
        await store.upsert([make_invite()])
        await store.mark_used(OUTSIDER)

        assert [p.name for p in path.parent.iterdir()] == [path.name]

    @pytest.mark.asyncio
    async def test_reads_records_written_elsewhere(self, store, path):
        """Documents written by other processes are understood."""
        path.parent.mkdir(parents=True)
        path.write_text(
            json.dumps(
                {
                    "version": 1,
                    "lastUpdated": "2024-06-01T00:00:00.000Z",
                    "invites": [
                        {
                            "id": "a" * 32,
                            "invitedUserId": OUTSIDER,
                            "createdBy": ADMIN,
                            "createdAt": "2024-05-30T10:00:00.000Z",
                            "expiresAt": "2024-06-29T10:00:00.000Z",
                            "used": False,
                        }
                    ],
                }
            )
        )

        assert await store.has_valid(OUTSIDER) is True


class TestUnreadableDocument:
    """Unreadable documents read as empty."""

    @pytest.mark.asyncio
    async def test_missing_file(self, store):
        """A missing file is an empty store."""
        assert await store.has_valid(OUTSIDER) is False
        assert await store.list(True, True) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "{not json", "[]", '{"invites": "x"}'])
    async def test_corrupt_file(self, store, path, content):
        """Corrupt content is an empty store, and the next write repairs it."""
        path.parent.mkdir(parents=True)
        path.write_text(content)

        assert await store.has_valid(OUTSIDER) is False

        await store.upsert([make_invite()])
        assert await store.has_valid(OUTSIDER) is True
        assert json.loads(path.read_text())["version"] == 1

    @pytest.mark.asyncio
    async def test_invalid_record_is_skipped(self, store, path):
        """One broken record does not hide the others."""
        good = make_invite()
        path.parent.mkdir(parents=True)
        path.write_text(
            json.dumps(
                {
                    "version": 1,
                    "invites": [{"id": "broken"}, good.to_record()],
                }
            )
        )

        assert [i.id for i in await store.list()] == [good.id]

    @pytest.mark.asyncio
    async def test_undecodable_file(self, store, path):
        """Bytes that are not UTF-8 read as empty, and writes still succeed."""
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xff\xfe\x00garbage")

        assert await store.has_valid(OUTSIDER) is False

        await store.create(NewInvite(invited_principal=OUTSIDER, issued_by=ADMIN))
        assert await store.has_valid(OUTSIDER) is True
        assert json.loads(path.read_text(encoding="utf-8"))["version"] == 1

    @pytest.mark.asyncio
    async def test_invalid_record_survives_mutation(self, store, path):
        """A write keeps records it could not parse."""
        other = "@b:other.org"
        broken = {"code": "ABC123", "invitedUserId": other}
        path.parent.mkdir(parents=True)
        path.write_text(
            json.dumps(
                {
                    "version": 1,
                    "invites": [make_invite("@a:other.org").to_record(), broken],
                }
            )
        )

        assert await store.mark_used("@a:other.org") is True

        records = json.loads(path.read_text())["invites"]
        assert len(records) == 2
        assert broken in records
        assert await store.has_valid(other) is False


class TestWriteFailures:
    """Write failures are explicit."""

    @pytest.mark.asyncio
    async def test_write_error_raises_storage_error(self, store):
        """OS errors during a write surface as InviteStorageError."""
        with patch(REPLACE, side_effect=OSError("disk full")):
            with pytest.raises(InviteStorageError) as exc_info:
                await store.upsert([make_invite()])

        assert exc_info.value.operation == "upsert"

    @pytest.mark.asyncio
    async def test_failed_write_keeps_previous_document(self, store, path):
        """A failed replace leaves the old document intact."""
        await store.upsert([make_invite()])
        before = path.read_text()

        with patch(REPLACE, side_effect=OSError("disk full")):
            with pytest.raises(InviteStorageError):
                await store.mark_used(OUTSIDER)

        assert path.read_text() == before
        assert [p.name for p in path.parent.iterdir()] == [path.name]

    @pytest.mark.asyncio
    async def test_write_deadline(self, path):
        """A write exceeding its deadline raises; a read returns empty."""
        store = LocalInviteStore(path, default_timeout=0.01, clock=FixedClock())

        async def slow_load():
            await asyncio.sleep(1)
            return InviteSnapshot(invites=[])

        with patch.object(store, "_load", slow_load):
            with pytest.raises(InviteStorageError, match="deadline"):
                await store.create(NewInvite(invited_principal=OUTSIDER, issued_by=ADMIN))
            assert await store.has_valid(OUTSIDER) is False

    @pytest.mark.asyncio
    async def test_per_call_timeout_overrides_default(self, path):
        """The timeout argument wins over the store default."""
        store = LocalInviteStore(path, default_timeout=None, clock=FixedClock())

        async def slow_load():
            await asyncio.sleep(1)
            return InviteSnapshot(invites=[])

        with patch.object(store, "_load", slow_load):
            assert await store.has_valid(OUTSIDER, timeout=0.01) is False

    @pytest.mark.asyncio
    async def test_started_write_is_not_abandoned(self, path):
        """A write slower than the deadline completes and is reported as done."""
        store = LocalInviteStore(path, default_timeout=0.05, clock=FixedClock())
        write_file = store._write_file

        def slow_write_file(invites, unreadable=()):
            time.sleep(0.3)
            write_file(invites, unreadable)

        with patch.object(store, "_write_file", slow_write_file):
            invite = await store.create(
                NewInvite(invited_principal=OUTSIDER, issued_by=ADMIN)
            )

        assert await store.has_valid(OUTSIDER) is True
        assert [i.id for i in await store.list()] == [invite.id]

    @pytest.mark.asyncio
    async def test_slow_writes_do_not_lose_updates(self, path):
        """Queued mutations wait for an in-flight write before loading."""
        store = LocalInviteStore(path, default_timeout=1.0, clock=FixedClock())
        write_file = store._write_file

        def slow_write_file(invites, unreadable=()):
            time.sleep(0.2)
            write_file(invites, unreadable)

        principals = ["@a:other.org", "@b:other.org"]
        with patch.object(store, "_write_file", slow_write_file):
            await asyncio.gather(
                *(
                    store.create(NewInvite(invited_principal=p, issued_by=ADMIN))
                    for p in principals
                )
            )

        assert {i.invited_principal for i in await store.list()} == set(principals)


class TestConcurrency:
    """Concurrent mutations on one store instance."""

    @pytest.mark.asyncio
    async def test_concurrent_creates_keep_every_invite(self, store):
        """Serialized read-modify-write loses no record."""
        principals = [f"@user{i}:other.org" for i in range(20)]

        await asyncio.gather(
            *(
                store.create(NewInvite(invited_principal=p, issued_by=ADMIN))
                for p in principals
            )
        )

        stored = {i.invited_principal for i in await store.list()}
        assert stored == set(principals)

    @pytest.mark.asyncio
    async def test_concurrent_consumption_succeeds_once(self, store):
        """Only one of several concurrent consumers wins."""
        await store.upsert([make_invite()])

        results = await asyncio.gather(*(store.mark_used(OUTSIDER) for _ in range(5)))

        assert results.count(True) == 1
