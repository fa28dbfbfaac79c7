"""Tests for monthly billing summaries and payment requests."""

import datetime

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.db.repositories.billing_rate import BillingRateRepository
from app.db.repositories.notification import NotificationRepository
from app.models.competition import Competition
from app.models.guardian_link import GuardianLink
from app.schemas.billing import BillingSummaryCreate, BillingSummaryUpdate
from app.schemas.training_session import TrainingSessionCreate
from app.services.billing_service import BillingService, month_label, payment_recipient
from app.services.training_session_service import TrainingSessionService

MARCH_2 = datetime.datetime(2026, 3, 2, 9, 0)


@pytest.fixture
def trainer(session, make_user):
    trainer = make_user("coach@mail.com", roles=["Trainer"], first_name="Avi")
    rates = BillingRateRepository(session)
    rates.upsert(trainer.email, "Lesson", "ILS", 200)
    rates.upsert(trainer.email, "Horse Transport", "ILS", 300)
    return trainer


@pytest.fixture
def rider(make_user):
    return make_user("dana@mail.com", first_name="Dana", last_name="Rider")


@pytest.fixture
def minor(session, make_user):
    user = make_user("kid@mail.com", first_name="Kid")
    user.birthday = datetime.date.today().replace(year=datetime.date.today().year - 12, day=1)
    user.parent_email = "parent@mail.com"
    session.add(user)
    session.commit()
    return user


def _payment_requests(session, email):
    return [n for n in NotificationRepository(session).get_for_user(email) if n.type == "payment_request"]


def _verified_session(session, trainer, rider, when=MARCH_2):
    created = TrainingSessionService(session).create(trainer, TrainingSessionCreate(
        rider_email=rider.email, session_date=when)).created[0]
    return TrainingSessionService(session).verify(rider, created.id)


# ======================================================================
# Recipient
# ======================================================================


class TestRecipient:
    def test_adult_rider_is_billed(self, rider):
        rider.parent_email = "parent@mail.com"
        assert payment_recipient(rider, rider.email) == "dana@mail.com"

    def test_minor_with_parent_email(self, minor):
        assert payment_recipient(minor, minor.email) == "parent@mail.com"

    def test_minor_without_parent_email(self, minor):
        minor.parent_email = None
        assert payment_recipient(minor, minor.email) == "kid@mail.com"

    def test_unknown_rider(self):
        assert payment_recipient(None, "ghost@mail.com") == "ghost@mail.com"

    def test_month_label(self):
        assert month_label("2026-03") == "March 2026"


# ======================================================================
# Manual summaries
# ======================================================================


class TestCreateSummary:
    def test_total_defaults_to_sum(self, session, trainer, rider):
        summary = BillingService(session).create_summary(trainer, BillingSummaryCreate(
            rider_email="Dana@mail.com", month="2026-03", sessions_revenue=400, competitions_revenue=300))

        assert summary.rider_email == "dana@mail.com"
        assert summary.total_revenue == 700
        assert _payment_requests(session, "dana@mail.com") == []

    def test_requested_summary_notifies_rider(self, session, trainer, rider):
        BillingService(session).create_summary(trainer, BillingSummaryCreate(
            rider_email="dana@mail.com", month="2026-03", sessions_revenue=400, payment_requested=True))

        notification = _payment_requests(session, "dana@mail.com")[0]
        assert notification.title == "Payment Request from Avi"
        assert notification.message == "Payment request for March 2026: ILS 400.00"

    def test_minor_request_goes_to_parent(self, session, trainer, minor):
        BillingService(session).create_summary(trainer, BillingSummaryCreate(
            rider_email=minor.email, month="2026-03", sessions_revenue=200, payment_requested=True))

        assert _payment_requests(session, "kid@mail.com") == []
        assert len(_payment_requests(session, "parent@mail.com")) == 1

    def test_duplicate_month_conflicts(self, session, trainer, rider):
        service = BillingService(session)
        data = BillingSummaryCreate(rider_email="dana@mail.com", month="2026-03")
        service.create_summary(trainer, data)
        with pytest.raises(HTTPException) as exc:
            service.create_summary(trainer, data)
        assert exc.value.status_code == 409

    def test_rider_cannot_bill(self, session, rider):
        with pytest.raises(HTTPException) as exc:
            BillingService(session).create_summary(rider, BillingSummaryCreate(
                rider_email="dana@mail.com", month="2026-03"))
        assert exc.value.status_code == 403

    @pytest.mark.parametrize("month", ["2026-13", "2026-3", "March"])
    def test_month_format(self, month):
        with pytest.raises(ValidationError):
            BillingSummaryCreate(rider_email="dana@mail.com", month=month)


class TestUpdateSummary:
    @pytest.fixture
    def summary(self, session, trainer, rider):
        return BillingService(session).create_summary(trainer, BillingSummaryCreate(
            rider_email="dana@mail.com", month="2026-03", sessions_revenue=400, competitions_revenue=100))

    def test_total_follows_parts(self, session, trainer, summary):
        updated = BillingService(session).update_summary(trainer, summary.id,
                                                         BillingSummaryUpdate(sessions_revenue=600))
        assert updated.total_revenue == 700

    def test_explicit_total_kept(self, session, trainer, summary):
        updated = BillingService(session).update_summary(
            trainer, summary.id, BillingSummaryUpdate(sessions_revenue=600, total_revenue=650))
        assert updated.total_revenue == 650

    def test_requesting_payment_notifies_once(self, session, trainer, summary):
        service = BillingService(session)
        service.update_summary(trainer, summary.id, BillingSummaryUpdate(payment_requested=True))
        service.update_summary(trainer, summary.id, BillingSummaryUpdate(payment_status="requested"))
        assert len(_payment_requests(session, "dana@mail.com")) == 1

    def test_other_trainer_forbidden(self, session, make_user, summary):
        other = make_user("other@mail.com", roles=["Trainer"])
        with pytest.raises(HTTPException) as exc:
            BillingService(session).update_summary(other, summary.id, BillingSummaryUpdate(session_count=1))
        assert exc.value.status_code == 403

    def test_null_payment_status_rejected(self):
        with pytest.raises(ValidationError, match="payment_status cannot be null"):
            BillingSummaryUpdate.model_validate({ "payment_status": None })


# ======================================================================
# Generation
# ======================================================================


class TestGenerateMonth:
    def test_bills_verified_sessions_and_paid_entries(self, session, trainer, rider):
        _verified_session(session, trainer, rider)
        _verified_session(session, trainer, rider, when=MARCH_2 + datetime.timedelta(days=7))
        TrainingSessionService(session).create(trainer, TrainingSessionCreate(
            rider_email=rider.email, session_date=MARCH_2 + datetime.timedelta(days=14)))
        session.add(Competition(trainer_email=trainer.email, name="Spring Cup",
                                competition_date=datetime.datetime(2026, 3, 20, 8, 0),
                                riders=[{ "rider_email": rider.email, "services": ["Horse Transport"],
                                          "payment_status": "paid" }]))
        session.commit()

        created = BillingService(session).generate_month(trainer, "2026-03")

        assert len(created) == 1
        summary = created[0]
        assert (summary.session_count, summary.sessions_revenue) == (2, 400)
        assert summary.competitions_revenue == 300
        assert summary.total_revenue == 700
        assert summary.payment_requested is True
        assert summary.payment_status == "requested"
        assert _payment_requests(session, "dana@mail.com")[0].message == "Payment request for March 2026: ILS 700.00"

    def test_other_months_ignored(self, session, trainer, rider):
        _verified_session(session, trainer, rider, when=datetime.datetime(2026, 4, 1, 9, 0))
        assert BillingService(session).generate_month(trainer, "2026-03") == []

    def test_cancelled_after_verification_not_billed(self, session, trainer, rider):
        verified = _verified_session(session, trainer, rider)
        TrainingSessionService(session).cancel(trainer, verified.id)
        assert BillingService(session).generate_month(trainer, "2026-03") == []

    def test_existing_summary_skipped(self, session, trainer, rider):
        _verified_session(session, trainer, rider)
        service = BillingService(session)
        service.generate_month(trainer, "2026-03")
        assert service.generate_month(trainer, "2026-03") == []
        assert len(_payment_requests(session, "dana@mail.com")) == 1


# ======================================================================
# Visibility
# ======================================================================


class TestListSummaries:
    @pytest.fixture
    def summary(self, session, trainer, minor):
        return BillingService(session).create_summary(trainer, BillingSummaryCreate(
            rider_email=minor.email, month="2026-03", sessions_revenue=200))

    def test_trainer_sees_own(self, session, trainer, summary):
        assert [s.id for s in BillingService(session).list_summaries(trainer)] == [summary.id]

    def test_rider_sees_own(self, session, minor, summary):
        listed = BillingService(session).list_summaries(minor, rider_email=minor.email)
        assert [s.id for s in listed] == [summary.id]

    def test_active_guardian_sees_minor(self, session, make_user, minor, summary):
        parent = make_user("parent@mail.com", roles=["Parent/Guardian"])
        session.add(GuardianLink(guardian_email=parent.email, minor_email=minor.email))
        session.commit()

        listed = BillingService(session).list_summaries(parent, rider_email=minor.email)
        assert [s.id for s in listed] == [summary.id]

    def test_inactive_guardian_forbidden(self, session, make_user, minor, summary):
        parent = make_user("parent@mail.com")
        session.add(GuardianLink(guardian_email=parent.email, minor_email=minor.email, status="inactive"))
        session.commit()

        with pytest.raises(HTTPException) as exc:
            BillingService(session).list_summaries(parent, rider_email=minor.email)
        assert exc.value.status_code == 403
