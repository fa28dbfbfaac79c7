"""Tests for competition rider entries, payment requests and costs."""

import datetime

import pytest
from fastapi import HTTPException

from app.db.repositories.billing_rate import BillingRateRepository
from app.db.repositories.notification import NotificationRepository
from app.db.repositories.user import UserRepository
from app.schemas.competition import CompetitionCreate, RiderAdd
from app.services.competition_service import CompetitionService


@pytest.fixture
def trainer(make_user):
    return make_user("coach@mail.com", roles=["Trainer"], first_name="Avi")


@pytest.fixture
def competition(session, trainer, make_user):
    make_user("dana@mail.com", first_name="Dana", last_name="Rider")
    service = CompetitionService(session)
    competition = service.create(trainer, CompetitionCreate(
        name="Spring Cup", competition_date=datetime.datetime(2026, 4, 12, 8, 0), location="Caesarea"))
    return service.add_rider(trainer, competition.id, RiderAdd(rider_email="dana@mail.com"))


class TestRiders:
    def test_add_rider_entry(self, competition):
        assert competition.riders == [{
            "rider_email": "dana@mail.com",
            "rider_name": "Dana Rider",
            "horses": [],
            "services": [],
            "payment_status": "pending",
        }]

    def test_rider_notified(self, session, competition):
        inbox = NotificationRepository(session).get_for_user("dana@mail.com")
        assert [n.title for n in inbox] == ["Competition Entry"]

    def test_duplicate_rider_conflicts(self, session, trainer, competition):
        with pytest.raises(HTTPException) as exc:
            CompetitionService(session).add_rider(trainer, competition.id, RiderAdd(rider_email="Dana@mail.com"))
        assert exc.value.status_code == 409

    def test_toggle_service_on_and_off(self, session, trainer, competition):
        service = CompetitionService(session)
        on = service.toggle_service(trainer, competition.id, "dana@mail.com", "Lesson")
        assert on.riders[0]["services"] == ["Lesson"]
        off = service.toggle_service(trainer, competition.id, "dana@mail.com", "Lesson")
        assert off.riders[0]["services"] == []

    def test_toggle_horse(self, session, trainer, competition):
        updated = CompetitionService(session).toggle_horse(trainer, competition.id, "dana@mail.com", "Thunder")
        assert updated.riders[0]["horses"] == ["Thunder"]

    def test_remove_rider(self, session, trainer, competition):
        assert CompetitionService(session).remove_rider(trainer, competition.id, "dana@mail.com").riders == []

    def test_stranger_cannot_view(self, session, make_user, competition):
        rider = make_user("dana2@mail.com")
        with pytest.raises(HTTPException):
            CompetitionService(session).get(rider, competition.id)


class TestPayments:
    def test_bad_index_404(self, session, trainer, competition):
        with pytest.raises(HTTPException) as exc:
            CompetitionService(session).set_payment_status(trainer, competition.id, 5, "paid")
        assert exc.value.status_code == 404

    def test_request_sends_cost(self, session, trainer, competition):
        BillingRateRepository(session).upsert("coach@mail.com", "Lesson", "ILS", 250.0)
        service = CompetitionService(session)
        service.toggle_service(trainer, competition.id, "dana@mail.com", "Lesson")

        updated = service.set_payment_status(trainer, competition.id, 0, "requested")

        assert updated.riders[0]["payment_status"] == "requested"
        request = NotificationRepository(session).get_for_user("dana@mail.com")[0]
        assert request.type == "payment_request"
        assert request.message == "Payment for Spring Cup: ILS 250.00"

    def test_minor_request_goes_to_parent(self, session, trainer, competition):
        dana = UserRepository(session).get_by_email("dana@mail.com")
        dana.birthday = datetime.date(datetime.date.today().year - 10, 1, 1)
        dana.parent_email = "parent@mail.com"
        session.add(dana)
        session.commit()

        CompetitionService(session).set_payment_status(trainer, competition.id, 0, "requested")

        assert [n.type for n in NotificationRepository(session).get_for_user("parent@mail.com")] == ["payment_request"]

    def test_rider_costs(self, session, trainer, competition):
        rates = BillingRateRepository(session)
        rates.upsert("coach@mail.com", "Lesson", "USD", 100.0)
        rates.upsert("coach@mail.com", "Horse Transport", "EUR", 40.0)
        service = CompetitionService(session)
        service.toggle_service(trainer, competition.id, "dana@mail.com", "Lesson")
        service.toggle_service(trainer, competition.id, "dana@mail.com", "Horse Transport")

        [cost] = service.rider_costs(trainer, competition.id)

        assert cost.rider_index == 0
        assert cost.total == 140.0
        assert cost.currency == "USD"
        assert cost.mixed_currency is True
