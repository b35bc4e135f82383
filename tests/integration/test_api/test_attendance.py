"""Integration tests for attendance record endpoints."""
import pytest

from app.services.attendance import create_manual_attendance


@pytest.mark.integration
class TestManualAttendanceEndpoints:
    """Manager-only create/update/delete."""

    def test_create_manual_entry(self, client, manager_headers, member, event):
        response = client.post(
            "/api/v1/attendance/manual",
            headers=manager_headers,
            json={
                "user_id": member.id,
                "event_id": event.id,
                "status": "sick",
                "label": "Meeting 3",
                "note": "Doctor's note received",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["token_id"] is None
        assert data["token_label"] == "Meeting 3"
        assert data["status"] == "sick"
        assert data["user_nim"] == "2101001"

    def test_create_manual_entry_invalid_status(self, client, manager_headers, member, event):
        response = client.post(
            "/api/v1/attendance/manual",
            headers=manager_headers,
            json={"user_id": member.id, "event_id": event.id, "status": "late"},
        )

        assert response.status_code == 422

    def test_create_manual_entry_unknown_user(self, client, manager_headers, event):
        response = client.post(
            "/api/v1/attendance/manual",
            headers=manager_headers,
            json={"user_id": 99999, "event_id": event.id, "status": "present"},
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User not found"

    def test_member_cannot_create_manual_entry(self, client, member_headers, member, event):
        response = client.post(
            "/api/v1/attendance/manual",
            headers=member_headers,
            json={"user_id": member.id, "event_id": event.id, "status": "present"},
        )

        assert response.status_code == 403

    def test_update_entry(self, client, manager_headers, db_session, member, event):
        attendance = create_manual_attendance(db_session, member.id, event.id, "present", note="x")

        response = client.put(
            f"/api/v1/attendance/{attendance.id}",
            headers=manager_headers,
            json={"status": "excused", "label": "Day 2"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "excused"
        assert data["token_label"] == "Day 2"
        assert data["note"] == "x"

    def test_update_missing_entry(self, client, manager_headers):
        response = client.put(
            "/api/v1/attendance/99999",
            headers=manager_headers,
            json={"status": "absent"},
        )

        assert response.status_code == 404

    def test_member_cannot_update(self, client, member_headers, db_session, member, event):
        attendance = create_manual_attendance(db_session, member.id, event.id, "absent")

        response = client.put(
            f"/api/v1/attendance/{attendance.id}",
            headers=member_headers,
            json={"status": "present"},
        )

        assert response.status_code == 403

    def test_delete_entry(self, client, manager_headers, db_session, member, event):
        attendance = create_manual_attendance(db_session, member.id, event.id, "present")

        response = client.delete(f"/api/v1/attendance/{attendance.id}", headers=manager_headers)
        assert response.status_code == 204

        response = client.delete(f"/api/v1/attendance/{attendance.id}", headers=manager_headers)
        assert response.status_code == 404


@pytest.mark.integration
class TestAttendanceQueries:

    @pytest.fixture
    def recorded(self, db_session, member, other_member, event):
        create_manual_attendance(db_session, member.id, event.id, "present", label="Meeting 1")
        create_manual_attendance(db_session, member.id, event.id, "sick", label="Meeting 2")
        create_manual_attendance(db_session, other_member.id, event.id, "present", label="Meeting 1")

    def test_manager_lists_all(self, client, manager_headers, recorded, event):
        response = client.get(
            f"/api/v1/attendance?event_id={event.id}&limit=2", headers=manager_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["items"]) == 2
        assert data["meta"] == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}

    def test_manager_filters_by_label(self, client, manager_headers, recorded, event):
        response = client.get(
            f"/api/v1/attendance?event_id={event.id}&label=Meeting 1", headers=manager_headers
        )

        assert response.json()["meta"]["total"] == 2

    def test_member_lists_own(self, client, member_headers, member, recorded):
        response = client.get(f"/api/v1/attendance?user_id={member.id}", headers=member_headers)

        assert response.status_code == 200
        assert {item["user_id"] for item in response.json()["items"]} == {member.id}

    def test_member_cannot_list_others(self, client, member_headers, other_member, recorded):
        response = client.get(f"/api/v1/attendance?user_id={other_member.id}", headers=member_headers)

        assert response.status_code == 403

    def test_member_cannot_list_everything(self, client, member_headers, recorded):
        response = client.get("/api/v1/attendance", headers=member_headers)

        assert response.status_code == 403

    def test_my_attendance(self, client, member_headers, member, recorded):
        response = client.get("/api/v1/attendance/me", headers=member_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["meta"]["total"] == 2
        assert all(item["user_id"] == member.id for item in data["items"])

    def test_labels(self, client, manager_headers, recorded, event):
        response = client.get(f"/api/v1/attendance/labels?event_id={event.id}", headers=manager_headers)

        assert response.status_code == 200
        assert response.json() == ["Meeting 1", "Meeting 2"]

    def test_labels_require_manager(self, client, member_headers, event):
        response = client.get(f"/api/v1/attendance/labels?event_id={event.id}", headers=member_headers)

        assert response.status_code == 403

    def test_summary(self, client, manager_headers, recorded, event):
        response = client.get(
            f"/api/v1/attendance/summary?event_id={event.id}&label=Meeting 1",
            headers=manager_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["counts"] == {"present": 2, "excused": 0, "sick": 0, "absent": 0}
        assert data["total"] == 2

    def test_summary_unknown_event(self, client, manager_headers):
        response = client.get("/api/v1/attendance/summary?event_id=99999", headers=manager_headers)

        assert response.status_code == 404
