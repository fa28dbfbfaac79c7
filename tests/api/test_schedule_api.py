"""HTTP tests for session scheduling, calendar views and spreadsheets."""

import io

import pytest
from openpyxl import Workbook, load_workbook

from app.core.config import settings

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
def trainer(register, grant):
    headers = register("coach@mail.com", first_name="Avi")
    grant("coach@mail.com", "Rider", "Trainer")
    return headers


@pytest.fixture
def rider(client, register, trainer):
    headers = register("dana@mail.com", first_name="Dana", last_name="Rider")
    connection = client.post("/api/v1/connections", headers=trainer, json={ "to_user_email": "dana@mail.com" }).json()
    client.post(f"/api/v1/connections/{connection['id']}/approve", headers=headers)
    return headers


class TestSessions:
    def test_recurring_creation_and_rider_inbox(self, client, trainer, rider):
        response = client.post("/api/v1/training/sessions", headers=trainer, json={
            "rider_email": "dana@mail.com", "session_date": "2026-01-10T14:00:00",
            "is_recurring": True, "recurrence_weeks": 3,
        })

        assert response.status_code == 201
        created = response.json()["created"]
        assert [s["session_date"] for s in created] == [
            "2026-01-10T14:00:00", "2026-01-17T14:00:00", "2026-01-24T14:00:00",
        ]
        unread = client.get("/api/v1/notifications/unread-count", headers=rider).json()
        # one connection request is addressed to the rider as well
        assert unread == { "unread": 4 }

    def test_rider_cannot_schedule(self, client, rider):
        response = client.post("/api/v1/training/sessions", headers=rider, json={
            "rider_email": "dana@mail.com", "session_date": "2026-01-10T14:00:00",
        })
        assert response.status_code == 403

    def test_too_many_weeks_422(self, client, trainer):
        response = client.post("/api/v1/training/sessions", headers=trainer, json={
            "rider_email": "dana@mail.com", "session_date": "2026-01-10T14:00:00",
            "is_recurring": True, "recurrence_weeks": 53,
        })
        assert response.status_code == 422

    def test_rider_verifies_session(self, client, trainer, rider):
        created = client.post("/api/v1/training/sessions", headers=trainer, json={
            "rider_email": "dana@mail.com", "session_date": "2026-01-10T14:00:00",
        }).json()["created"][0]

        assert client.post(f"/api/v1/training/sessions/{created['id']}/verify", headers=trainer).status_code == 403
        verified = client.post(f"/api/v1/training/sessions/{created['id']}/verify", headers=rider)
        assert verified.status_code == 200
        assert (verified.json()["status"], verified.json()["rider_verified"]) == ("completed", True)


class TestScheduleViews:
    def test_week_view(self, client, trainer, rider):
        client.post("/api/v1/training/sessions", headers=trainer, json={
            "rider_email": "dana@mail.com", "session_date": "2026-01-10T14:00:00",
            "is_recurring": True, "recurrence_weeks": 2,
        })
        view = client.get("/api/v1/schedule/view", headers=trainer,
                          params={ "mode": "week", "anchor": "2026-01-12" }).json()
        assert view["start"] == "2026-01-11T00:00:00"
        assert [s["session_date"] for s in view["sessions"]] == ["2026-01-17T14:00:00"]

    def test_navigate(self, client, trainer):
        moved = client.get("/api/v1/schedule/navigate", headers=trainer,
                           params={ "mode": "month", "anchor": "2026-01-31", "steps": 1 }).json()
        assert moved["anchor"] == "2026-02-28"


class TestSpreadsheets:
    def test_template_download(self, client, trainer):
        response = client.get("/api/v1/schedule/template", headers=trainer)
        assert response.status_code == 200
        assert response.headers["content-type"] == XLSX
        assert load_workbook(io.BytesIO(response.content)).sheetnames == ["Sessions Template"]

    def test_export(self, client, trainer):
        response = client.get("/api/v1/schedule/export", headers=trainer,
                              params={ "mode": "month", "anchor": "2026-01-10" })
        assert response.status_code == 200
        assert 'filename="Schedule_January_2026.xlsx"' in response.headers["content-disposition"]

    def test_import(self, client, trainer, rider):
        wb = Workbook()
        ws = wb.active
        ws.append(["Rider Email", "Rider Name", "Horse Name", "Date", "Time", "Duration", "Session Type", "Notes"])
        ws.append(["dana@mail.com", "", "Thunder", "2026-01-10", "14:00", 60, "Lesson", ""])
        ws.append(["stranger@mail.com", "", "", "2026-01-11", "09:00", 60, "Lesson", ""])
        buffer = io.BytesIO()
        wb.save(buffer)

        response = client.post("/api/v1/schedule/import", headers=trainer,
                               files={ "file": ("sessions.xlsx", buffer.getvalue(), XLSX) })

        assert response.status_code == 200
        assert response.json() == {
            "imported": 1,
            "errors": ["Row 3: Rider stranger@mail.com is not connected to you"],
        }

    def test_import_garbage_400(self, client, trainer):
        response = client.post("/api/v1/schedule/import", headers=trainer,
                               files={ "file": ("sessions.xlsx", b"garbage", XLSX) })
        assert response.status_code == 400

    def test_import_too_large_413(self, client, trainer, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 16)
        response = client.post("/api/v1/schedule/import", headers=trainer,
                               files={ "file": ("sessions.xlsx", b"x" * 17, XLSX) })
        assert response.status_code == 413


class TestUploads:
    def test_upload_and_delete(self, client, trainer):
        response = client.post("/api/v1/uploads", headers=trainer,
                               files={ "file": ("stable.png", b"\x89PNG fake image", "image/png") })
        assert response.status_code == 201
        body = response.json()
        assert body["original_name"] == "stable.png"
        assert body["file_url"].endswith(body["filename"])

        assert client.delete(f"/api/v1/uploads/{body['filename']}", headers=trainer).status_code == 204
        assert client.delete(f"/api/v1/uploads/{body['filename']}", headers=trainer).status_code == 404
