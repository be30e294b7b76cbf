"""End-to-end tests for the access control endpoints."""

from gate.domain.model.common import utc_now
from tests.factories import (
    ADMIN,
    ADMIN_TOKEN,
    OUTSIDER,
    OUTSIDER_TOKEN,
    bearer,
    make_invite,
)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["environment"] == "test"


class TestAccessStatus:
    """End-to-end tests for GET /access/status."""

    def test_configured_private_mode(self, client):
        response = client.get("/access/status")

        assert response.status_code == 200
        assert response.json() == {
            "isConfigured": True,
            "privateMode": True,
            "allowedRealm": "https://chat.example.com",
            "warnings": [],
        }


class TestEvaluateLogin:
    """End-to-end tests for POST /access/evaluate."""

    def test_home_realm_allowed(self, client):
        response = client.post(
            "/access/evaluate", json={"claimedRealm": "https://chat.example.com"}
        )

        assert response.status_code == 200
        assert response.json()["allowed"] is True

    def test_external_realm_denied(self, client):
        """A denial is a 200 carrying the reason and code."""
        response = client.post(
            "/access/evaluate", json={"claimedRealm": "https://other.org"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "allowed": False,
            "reason": "external realm",
            "code": "FORBIDDEN",
        }

    def test_outsider_needs_invite(self, client):
        response = client.post(
            "/access/evaluate",
            json={"claimedRealm": "https://other.org", "principal": OUTSIDER},
        )

        assert response.json()["code"] == "INVITE_REQUIRED"

    def test_invited_outsider_allowed(self, client, local_store):
        client.portal.call(local_store.upsert, [make_invite(created_at=utc_now())])

        response = client.post(
            "/access/evaluate",
            json={"claimedRealm": "https://other.org", "principal": OUTSIDER},
        )

        assert response.json()["allowed"] is True

    def test_missing_realm_is_rejected(self, client):
        response = client.post("/access/evaluate", json={})

        assert response.status_code == 422


class TestCompleteLogin:
    """End-to-end tests for POST /access/complete."""

    def test_invite_consumed_once(self, client, local_store):
        client.portal.call(local_store.upsert, [make_invite(created_at=utc_now())])

        first = client.post(
            "/access/complete", json={"principal": OUTSIDER}, headers=bearer(OUTSIDER_TOKEN)
        )
        second = client.post(
            "/access/complete", json={"principal": OUTSIDER}, headers=bearer(OUTSIDER_TOKEN)
        )
        retry = client.post(
            "/access/evaluate",
            json={"claimedRealm": "https://other.org", "principal": OUTSIDER},
        )

        assert first.json() == {"consumed": True, "synced": None}
        assert second.json()["consumed"] is False
        assert retry.json()["code"] == "INVITE_REQUIRED"

    def test_missing_token_consumes_nothing(self, client, local_store):
        client.portal.call(local_store.upsert, [make_invite(created_at=utc_now())])

        response = client.post("/access/complete", json={"principal": OUTSIDER})
        check = client.post(
            "/access/evaluate",
            json={"claimedRealm": "https://other.org", "principal": OUTSIDER},
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert check.json()["allowed"] is True

    def test_admin_session_pulls_invites(self, client, accounts):
        accounts.records_of(ADMIN)["im.melo.admin_invites"] = {
            "invites": [make_invite(created_at=utc_now()).to_record()],
            "version": 1,
        }

        response = client.post(
            "/access/complete", json={"principal": ADMIN}, headers=bearer(ADMIN_TOKEN)
        )
        check = client.post(
            "/access/evaluate",
            json={"claimedRealm": "https://other.org", "principal": OUTSIDER},
        )

        assert response.status_code == 200
        assert response.json()["synced"] == {"pulled": 1, "inserted": 1, "updated": 0}
        assert check.json()["allowed"] is True

    def test_token_for_another_principal(self, client):
        response = client.post(
            "/access/complete", json={"principal": ADMIN}, headers=bearer(OUTSIDER_TOKEN)
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_malformed_authorization_header(self, client):
        response = client.post(
            "/access/complete",
            json={"principal": ADMIN},
            headers={"Authorization": "Basic abc"},
        )

        assert response.status_code == 401
