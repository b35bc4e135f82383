"""Integration tests for token endpoints."""
import pytest
from datetime import datetime, timedelta, timezone

from tests.utils import make_token


def _expiry(**delta):
    return (datetime.now(timezone.utc) + timedelta(**delta)).isoformat()


@pytest.mark.integration
class TestTokenEndpoints:
    """Token issuer over HTTP."""

    def test_create_token(self, client, manager_headers, event):
        response = client.post(
            "/api/v1/tokens",
            headers=manager_headers,
            json={"event_id": event.id, "label": "Meeting 1", "expires_at": _expiry(hours=2)},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["event_id"] == event.id
        assert data["event_name"] == "Weekly Meeting"
        assert data["label"] == "Meeting 1"
        assert len(data["code"]) == 6
        assert data["qr_code"].startswith("data:image/svg+xml;base64,")
        assert data["is_active"] is True
        assert data["expired"] is False

    def test_create_token_unknown_event(self, client, manager_headers):
        response = client.post(
            "/api/v1/tokens",
            headers=manager_headers,
            json={"event_id": 99999, "expires_at": _expiry(hours=1)},
        )

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": {"code": "not_found", "message": "Event not found"},
        }

    def test_create_token_missing_expiry(self, client, manager_headers, event):
        response = client.post(
            "/api/v1/tokens",
            headers=manager_headers,
            json={"event_id": event.id},
        )

        assert response.status_code == 422

    def test_create_token_requires_manager(self, client, member_headers, event):
        response = client.post(
            "/api/v1/tokens",
            headers=member_headers,
            json={"event_id": event.id, "expires_at": _expiry(hours=1)},
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "forbidden"

    def test_create_token_requires_authentication(self, client, event):
        response = client.post(
            "/api/v1/tokens",
            json={"event_id": event.id, "expires_at": _expiry(hours=1)},
        )

        assert response.status_code == 401

    def test_list_tokens(self, client, manager_headers, db_session, event):
        make_token(db_session, event, label="past", expires_in=timedelta(minutes=-5))
        make_token(db_session, event, label="open")

        response = client.get(f"/api/v1/tokens?event_id={event.id}", headers=manager_headers)

        assert response.status_code == 200
        flags = {item["label"]: item["expired"] for item in response.json()}
        assert flags == {"past": True, "open": False}

    def test_get_token(self, client, manager_headers, db_session, event):
        token = make_token(db_session, event, code="GET123")

        response = client.get(f"/api/v1/tokens/{token.id}", headers=manager_headers)

        assert response.status_code == 200
        assert response.json()["code"] == "GET123"

    def test_get_missing_token(self, client, manager_headers):
        response = client.get("/api/v1/tokens/99999", headers=manager_headers)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Token not found"

    def test_regenerate_without_body(self, client, manager_headers, db_session, event):
        token = make_token(db_session, event, code="OLD123", label="Meeting 1")

        response = client.post(f"/api/v1/tokens/{token.id}/regenerate", headers=manager_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == token.id
        assert data["code"] != "OLD123"
        assert data["label"] == "Meeting 1"

    def test_regenerate_with_overrides(self, client, manager_headers, db_session, event):
        token = make_token(db_session, event, label="Meeting 1", expires_in=timedelta(minutes=-1))

        response = client.post(
            f"/api/v1/tokens/{token.id}/regenerate",
            headers=manager_headers,
            json={"expires_at": _expiry(hours=1), "label": None},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["label"] is None
        assert data["expired"] is False

    def test_old_code_fails_after_regenerate(self, client, manager_headers, member_headers, db_session, event):
        token = make_token(db_session, event, code="OLD123")
        client.post(f"/api/v1/tokens/{token.id}/regenerate", headers=manager_headers)

        response = client.post("/api/v1/checkin", headers=member_headers, json={"token": "OLD123"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "token_invalid"

    def test_revoke(self, client, manager_headers, member_headers, db_session, event):
        token = make_token(db_session, event, code="REV123")

        response = client.post(f"/api/v1/tokens/{token.id}/revoke", headers=manager_headers)
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        response = client.post("/api/v1/checkin", headers=member_headers, json={"token": "REV123"})
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "token_expired"

    def test_delete(self, client, manager_headers, db_session, event):
        token = make_token(db_session, event)

        response = client.delete(f"/api/v1/tokens/{token.id}", headers=manager_headers)
        assert response.status_code == 204

        response = client.get(f"/api/v1/tokens/{token.id}", headers=manager_headers)
        assert response.status_code == 404

    def test_delete_missing_token(self, client, manager_headers):
        response = client.delete("/api/v1/tokens/99999", headers=manager_headers)

        assert response.status_code == 404
