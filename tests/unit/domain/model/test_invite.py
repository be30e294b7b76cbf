"""Unit tests for the Invite entity."""

from datetime import datetime, timedelta, timezone

from gate.domain.model import Invite, NewInvite
from gate.domain.model.invite import generate_invite_id
from tests.factories import ADMIN, NOW, OUTSIDER, make_invite


class TestInviteRecord:
    """Tests for the persisted record shape."""

    def test_parses_stored_record(self):
        """Records use the camelCase storage names."""
        invite = Invite.model_validate(
            {
                "id": "legacy-1",
                "invitedUserId": OUTSIDER,
                "createdBy": ADMIN,
                "createdAt": "2024-06-01T12:00:00Z",
                "expiresAt": "2024-07-01T12:00:00Z",
                "used": False,
            }
        )

        assert invite.id == "legacy-1"
        assert invite.invited_principal == OUTSIDER
        assert invite.issued_by == ADMIN
        assert invite.created_at == NOW
        assert invite.used_at is None

    def test_to_record_omits_absent_fields(self):
        """Unset optional fields are left out of the record."""
        invite = make_invite(expires_in=None)

        record = invite.to_record()

        assert set(record) == {"id", "invitedUserId", "createdBy", "createdAt", "used"}
        assert record["createdAt"] == "2024-06-01T12:00:00Z"

    def test_naive_timestamps_are_utc(self):
        """Timestamps without an offset are read as UTC."""
        invite = Invite.model_validate(
            {
                "id": "x",
                "invitedUserId": OUTSIDER,
                "createdBy": ADMIN,
                "createdAt": "2024-06-01T12:00:00",
            }
        )

        assert invite.created_at.tzinfo is not None
        assert invite.created_at == NOW


class TestInviteValidity:
    """Tests for expiry and consumption rules."""

    def test_expiry_boundary(self):
        """An invite expiring exactly now is expired."""
        invite = make_invite(expires_in=timedelta(days=1))
        expiry = NOW + timedelta(days=1)

        assert invite.is_valid(expiry - timedelta(seconds=1))
        assert invite.is_expired(expiry)
        assert not invite.is_valid(expiry)

    def test_no_expiry_never_expires(self):
        invite = make_invite(expires_in=None)
        assert invite.is_valid(datetime(2100, 1, 1, tzinfo=timezone.utc))

    def test_mark_used(self):
        """Consumption sets used and used_at together on a copy."""
        invite = make_invite()
        later = NOW + timedelta(hours=1)

        consumed = invite.mark_used(later)

        assert consumed.used is True
        assert consumed.used_at == later
        assert consumed.id == invite.id
        assert invite.used is False

    def test_matches_ignores_case_and_whitespace(self):
        invite = make_invite("@Alice:Other.org")
        assert invite.matches(" @alice:other.org ")
        assert not invite.matches("@alice:other.net")


class TestNewInvite:
    """Tests for invite candidates."""

    def test_build_uses_store_time(self):
        """Creation time defaults to the time the store builds the record."""
        candidate = NewInvite(invited_principal=f" {OUTSIDER}", issued_by=ADMIN)

        invite = candidate.build(NOW)

        assert invite.id == candidate.id
        assert invite.invited_principal == OUTSIDER
        assert invite.created_at == NOW
        assert invite.used is False

    def test_generated_ids_are_unique_hex(self):
        ids = {generate_invite_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(len(i) == 32 and int(i, 16) >= 0 for i in ids)
