"""HTTP tests for monthly billing summaries and guardian links."""

import datetime

import pytest


@pytest.fixture
def trainer(client, register, grant):
    headers = register("coach@mail.com", first_name="Avi")
    grant("coach@mail.com", "Rider", "Trainer")
    client.put("/api/v1/billing/rates", headers=headers, json={ "session_type": "Lesson", "rate": 200 })
    return headers


@pytest.fixture
def minor(client, register):
    headers = register("kid@mail.com", first_name="Kid")
    birthday = datetime.date(datetime.date.today().year - 12, 1, 1).isoformat()
    response = client.patch("/api/v1/auth/me", headers=headers,
                            json={ "birthday": birthday, "parent_email": "Parent@mail.com" })
    assert response.status_code == 200, response.text
    assert response.json()["parent_email"] == "parent@mail.com"
    return headers


@pytest.fixture
def parent(register):
    return register("parent@mail.com", first_name="Rona")


class TestGuardians:
    def test_link_then_deactivate(self, client, minor, parent):
        response = client.post("/api/v1/connections/guardians", headers=parent, json={ "minor_email": "kid@mail.com" })
        assert response.status_code == 201
        link = response.json()

        listed = client.get("/api/v1/connections/guardians", headers=minor).json()
        assert [g["id"] for g in listed] == [link["id"]]

        updated = client.patch(f"/api/v1/connections/guardians/{link['id']}", headers=parent,
                               json={ "status": "inactive" })
        assert updated.json()["status"] == "inactive"

    def test_unknown_status_422(self, client, minor, parent):
        link = client.post("/api/v1/connections/guardians", headers=parent, json={ "minor_email": "kid@mail.com" })
        response = client.patch(f"/api/v1/connections/guardians/{link.json()['id']}", headers=parent,
                                json={ "status": "paused" })
        assert response.status_code == 422


class TestSummaries:
    def test_generate_bills_verified_session_to_parent(self, client, trainer, minor, parent):
        created = client.post("/api/v1/training/sessions", headers=trainer, json={
            "rider_email": "kid@mail.com", "session_date": "2026-03-02T09:00:00",
        }).json()["created"][0]
        client.post(f"/api/v1/training/sessions/{created['id']}/verify", headers=minor)

        response = client.post("/api/v1/billing/summaries/generate", headers=trainer, json={ "month": "2026-03" })

        assert response.status_code == 201
        [summary] = response.json()
        assert (summary["rider_email"], summary["total_revenue"], summary["session_count"]) == ("kid@mail.com", 200, 1)
        inbox = client.get("/api/v1/notifications", headers=parent).json()
        assert [n["message"] for n in inbox if n["type"] == "payment_request"] == [
            "Payment request for March 2026: ILS 200.00",
        ]

    def test_guardian_reads_minor_summaries(self, client, trainer, minor, parent):
        client.post("/api/v1/billing/summaries", headers=trainer, json={
            "rider_email": "kid@mail.com", "month": "2026-03", "sessions_revenue": 400,
        })

        forbidden = client.get("/api/v1/billing/summaries", headers=parent, params={ "rider_email": "kid@mail.com" })
        assert forbidden.status_code == 403

        client.post("/api/v1/connections/guardians", headers=parent, json={ "minor_email": "kid@mail.com" })
        listed = client.get("/api/v1/billing/summaries", headers=parent, params={ "rider_email": "kid@mail.com" })
        assert [s["total_revenue"] for s in listed.json()] == [400]

    def test_null_total_is_a_validation_error(self, client, trainer):
        summary = client.post("/api/v1/billing/summaries", headers=trainer, json={
            "rider_email": "kid@mail.com", "month": "2026-03",
        }).json()
        response = client.patch(f"/api/v1/billing/summaries/{summary['id']}", headers=trainer,
                                json={ "total_revenue": None })
        assert response.status_code == 422
