"""Tests for session creation batches, edits and rider notifications."""

import datetime

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.db.repositories.notification import NotificationRepository
from app.schemas.training_session import SessionDraft, TrainingSessionCreate, TrainingSessionUpdate
from app.services.training_session_service import TrainingSessionService, format_when

JAN_10 = datetime.datetime(2026, 1, 10, 14, 0)


@pytest.fixture
def trainer(make_user):
    return make_user("coach@mail.com", roles=["Rider", "Trainer"], first_name="Avi")


@pytest.fixture
def rider(make_user):
    return make_user("dana@mail.com", first_name="Dana", last_name="Rider")


def _inbox(session, email):
    return NotificationRepository(session).get_for_user(email)


# ======================================================================
# Creation
# ======================================================================


class TestCreate:
    def test_single_session(self, session, trainer, rider):
        result = TrainingSessionService(session).create(
            trainer, TrainingSessionCreate(rider_email="Dana@mail.com", session_date=JAN_10))

        assert result.errors == []
        assert len(result.created) == 1
        created = result.created[0]
        assert created.rider_email == "dana@mail.com"
        assert created.rider_name == "Dana Rider"
        assert created.is_recurring is False
        assert created.status == "scheduled"

    def test_recurring_three_weeks(self, session, trainer, rider):
        result = TrainingSessionService(session).create(trainer, TrainingSessionCreate(
            rider_email="dana@mail.com", session_date=JAN_10, is_recurring=True, recurrence_weeks=3))

        dates = [s.session_date for s in result.created]
        assert dates == [JAN_10, JAN_10 + datetime.timedelta(days=7), JAN_10 + datetime.timedelta(days=14)]
        assert len({ s.recurring_group_id for s in result.created }) == 1
        assert all(s.is_recurring for s in result.created)

    def test_rider_notified_per_session(self, session, trainer, rider):
        TrainingSessionService(session).create(trainer, TrainingSessionCreate(
            rider_email="dana@mail.com", session_date=JAN_10, is_recurring=True, recurrence_weeks=2))

        inbox = _inbox(session, "dana@mail.com")
        assert len(inbox) == 2
        assert all(n.title == "New Training Session Scheduled" for n in inbox)
        assert any("Avi scheduled a Lesson session for Jan 10, 2026 at 2:00 PM." == n.message for n in inbox)

    def test_non_trainer_forbidden(self, session, rider):
        with pytest.raises(HTTPException) as exc:
            TrainingSessionService(session).create(
                rider, TrainingSessionCreate(rider_email="dana@mail.com", session_date=JAN_10))
        assert exc.value.status_code == 403

    def test_partial_batch_keeps_successes(self, session, trainer, rider, monkeypatch):
        service = TrainingSessionService(session)
        real_stage = service.repository.stage
        calls = { "n": 0 }

        def flaky_stage(entry):
            calls["n"] += 1
            if calls["n"] == 2:
                raise RuntimeError("database unavailable")
            return real_stage(entry)

        monkeypatch.setattr(service.repository, "stage", flaky_stage)
        drafts = [SessionDraft(rider_email="dana@mail.com", session_date=JAN_10 + datetime.timedelta(days=d))
                  for d in range(3)]

        result = service.create_batch(trainer, drafts)

        assert len(result.created) == 2
        assert result.errors == ["2026-01-11 14:00: database unavailable"]
        assert len(service.list_for_user(trainer)) == 2
        assert len(_inbox(session, "dana@mail.com")) == 2


# ======================================================================
# Edits
# ======================================================================


class TestEdit:
    def _create(self, session, trainer, weeks=1):
        return TrainingSessionService(session).create(trainer, TrainingSessionCreate(
            rider_email="dana@mail.com", session_date=JAN_10, is_recurring=weeks > 1,
            recurrence_weeks=weeks)).created

    def test_update_touches_one_occurrence(self, session, trainer, rider):
        created = self._create(session, trainer, weeks=3)
        service = TrainingSessionService(session)

        service.update(trainer, created[1].id, TrainingSessionUpdate(duration=90))

        durations = sorted((s.session_date, s.duration) for s in service.list_for_user(trainer))
        assert [d for _, d in durations] == [60, 90, 60]

    def test_update_notifies(self, session, trainer, rider):
        created = self._create(session, trainer)
        TrainingSessionService(session).update(trainer, created[0].id, TrainingSessionUpdate(notes="Arena 2"))
        notification = _inbox(session, "dana@mail.com")[0]
        assert notification.title == "Training Session Updated"
        assert notification.type == "session_updated"

    def test_cancel_via_update_sends_cancellation(self, session, trainer, rider):
        created = self._create(session, trainer)
        updated = TrainingSessionService(session).update(trainer, created[0].id,
                                                         TrainingSessionUpdate(status="cancelled"))
        assert updated.status == "cancelled"
        assert _inbox(session, "dana@mail.com")[0].type == "session_cancelled"

    def test_cancel_twice_notifies_once(self, session, trainer, rider):
        created = self._create(session, trainer)
        service = TrainingSessionService(session)
        service.cancel(trainer, created[0].id)
        service.cancel(trainer, created[0].id)
        cancelled = [n for n in _inbox(session, "dana@mail.com") if n.type == "session_cancelled"]
        assert len(cancelled) == 1

    def test_delete_leaves_rest_of_group(self, session, trainer, rider):
        created = self._create(session, trainer, weeks=3)
        service = TrainingSessionService(session)
        service.delete(trainer, created[0].id)

        remaining = service.list_for_user(trainer)
        assert len(remaining) == 2
        assert { s.recurring_group_id for s in remaining } == { created[0].recurring_group_id }

    def test_other_trainer_cannot_edit(self, session, make_user, trainer, rider):
        created = self._create(session, trainer)
        other = make_user("other@mail.com", roles=["Trainer"])
        with pytest.raises(HTTPException) as exc:
            TrainingSessionService(session).delete(other, created[0].id)
        assert exc.value.status_code == 404

    def test_rider_can_read_own_session(self, session, trainer, rider):
        created = self._create(session, trainer)
        entry = TrainingSessionService(session).get_by_id(rider, created[0].id)
        assert entry.trainer_email == "coach@mail.com"
        assert len(TrainingSessionService(session).list_for_user(rider, as_rider=True)) == 1

    @pytest.mark.parametrize("field", ["session_date", "duration", "session_type", "status"])
    def test_null_required_field_rejected(self, field):
        with pytest.raises(ValidationError, match=f"{field} cannot be null"):
            TrainingSessionUpdate.model_validate({ field: None })

    def test_omitted_fields_are_kept(self, session, trainer, rider):
        created = self._create(session, trainer)
        updated = TrainingSessionService(session).update(
            trainer, created[0].id, TrainingSessionUpdate.model_validate({ "notes": None, "horse_name": "Comet" }))

        assert updated.session_date == JAN_10
        assert updated.horse_name == "Comet"
        assert updated.notes is None


# ======================================================================
# Rider verification
# ======================================================================


class TestVerify:
    def _create(self, session, trainer):
        return TrainingSessionService(session).create(trainer, TrainingSessionCreate(
            rider_email="dana@mail.com", session_date=JAN_10)).created[0]

    def test_rider_marks_completed(self, session, trainer, rider):
        created = self._create(session, trainer)
        verified = TrainingSessionService(session).verify(rider, created.id)

        assert verified.status == "completed"
        assert verified.rider_verified is True
        assert verified.rider_verified_at is not None

    def test_trainer_cannot_verify(self, session, trainer, rider):
        created = self._create(session, trainer)
        with pytest.raises(HTTPException) as exc:
            TrainingSessionService(session).verify(trainer, created.id)
        assert exc.value.status_code == 403

    def test_cancelled_session_cannot_be_verified(self, session, trainer, rider):
        created = self._create(session, trainer)
        service = TrainingSessionService(session)
        service.cancel(trainer, created.id)
        with pytest.raises(HTTPException) as exc:
            service.verify(rider, created.id)
        assert exc.value.status_code == 409

    def test_missing_session(self, session, rider):
        with pytest.raises(HTTPException) as exc:
            TrainingSessionService(session).verify(rider, 999)
        assert exc.value.status_code == 404


@pytest.mark.parametrize("moment, expected", [
    (datetime.datetime(2026, 1, 10, 14, 0), "Jan 10, 2026 at 2:00 PM"),
    (datetime.datetime(2026, 3, 5, 0, 5), "Mar 5, 2026 at 12:05 AM"),
    (datetime.datetime(2026, 12, 25, 12, 30), "Dec 25, 2026 at 12:30 PM"),
])
def test_format_when(moment, expected):
    assert format_when(moment) == expected
