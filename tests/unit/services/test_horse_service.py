"""Tests for horses, their care events and care reminders."""

import datetime

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.db.repositories.horse import HorseEventRepository
from app.db.repositories.notification import NotificationRepository
from app.schemas.horse import HorseCreate, HorseEventCreate, HorseEventUpdate, HorseUpdate
from app.services.horse_service import HorseService, format_due

MARCH_2 = datetime.datetime(2026, 3, 2, 10, 0)


@pytest.fixture
def owner(make_user):
    return make_user("dana@mail.com", first_name="Dana")


@pytest.fixture
def horse(session, owner):
    return HorseService(session).create(owner, HorseCreate(name="Thunder"))


def _reminders(session, email):
    return [n for n in NotificationRepository(session).get_for_user(email) if n.type == "horse_care_reminder"]


class TestHorses:
    def test_null_name_rejected(self):
        with pytest.raises(ValidationError, match="name cannot be null"):
            HorseUpdate.model_validate({ "name": None })

    def test_update_keeps_omitted_fields(self, session, owner, horse):
        updated = HorseService(session).update(owner, horse.id, HorseUpdate(color="Bay"))
        assert (updated.name, updated.color) == ("Thunder", "Bay")

    def test_delete_removes_events(self, session, owner, horse):
        service = HorseService(session)
        service.create_event(owner, horse.id, HorseEventCreate(event_type="Farrier", event_date=MARCH_2))
        service.delete(owner, horse.id)
        assert HorseEventRepository(session).get_by_horse(horse.id) == []


# ======================================================================
# Care events
# ======================================================================


class TestEvents:
    def test_due_date_reminds_owner(self, session, owner, horse):
        event = HorseService(session).create_event(owner, horse.id, HorseEventCreate(
            event_type="Farrier", event_date=MARCH_2, next_due_date=datetime.datetime(2026, 4, 13, 9, 0)))

        assert event.status == "scheduled"
        [reminder] = _reminders(session, "dana@mail.com")
        assert reminder.title == "Reminder: Farrier due for Thunder"
        assert reminder.message == "Hi Dana, Thunder has a Farrier appointment due on Monday, April 13, 2026."
        assert reminder.related_entity_id == str(event.id)

    def test_reminder_email_overrides_owner(self, session, owner, horse):
        HorseService(session).create_event(owner, horse.id, HorseEventCreate(
            event_type="Vaccination", event_date=MARCH_2, next_due_date=MARCH_2 + datetime.timedelta(weeks=26),
            reminder_email="Groom@mail.com"))

        assert _reminders(session, "dana@mail.com") == []
        assert len(_reminders(session, "groom@mail.com")) == 1

    def test_no_due_date_no_reminder(self, session, owner, horse):
        HorseService(session).create_event(owner, horse.id, HorseEventCreate(event_type="Other", event_date=MARCH_2))
        assert _reminders(session, "dana@mail.com") == []

    def test_completion_stamps_time(self, session, owner, horse):
        service = HorseService(session)
        event = service.create_event(owner, horse.id, HorseEventCreate(event_type="Veterinarian", event_date=MARCH_2))

        completed = service.update_event(owner, event.id, HorseEventUpdate(status="completed"))

        assert completed.status == "completed"
        assert completed.completed_at is not None
        assert completed.event_date == MARCH_2

    def test_new_due_date_reminds_again(self, session, owner, horse):
        service = HorseService(session)
        due = datetime.datetime(2026, 4, 13, 9, 0)
        event = service.create_event(owner, horse.id, HorseEventCreate(
            event_type="Farrier", event_date=MARCH_2, next_due_date=due))

        service.update_event(owner, event.id, HorseEventUpdate(notes="Front shoes only"))
        assert len(_reminders(session, "dana@mail.com")) == 1

        service.update_event(owner, event.id, HorseEventUpdate(next_due_date=due + datetime.timedelta(weeks=1)))
        assert len(_reminders(session, "dana@mail.com")) == 2

    def test_events_newest_first(self, session, owner, horse):
        service = HorseService(session)
        for days in (0, 30, 10):
            service.create_event(owner, horse.id, HorseEventCreate(
                event_type="Other", event_date=MARCH_2 + datetime.timedelta(days=days)))
        dates = [e.event_date.day for e in service.list_events(horse.id)]
        assert dates == [1, 12, 2]

    def test_other_user_forbidden(self, session, make_user, owner, horse):
        event = HorseService(session).create_event(owner, horse.id, HorseEventCreate(
            event_type="Other", event_date=MARCH_2))
        stranger = make_user("noa@mail.com")
        with pytest.raises(HTTPException) as exc:
            HorseService(session).delete_event(stranger, event.id)
        assert exc.value.status_code == 403

    def test_missing_horse_404(self, session):
        with pytest.raises(HTTPException) as exc:
            HorseService(session).list_events(999)
        assert exc.value.status_code == 404

    @pytest.mark.parametrize("field", ["event_type", "event_date", "status", "is_recurring"])
    def test_null_required_field_rejected(self, field):
        with pytest.raises(ValidationError, match=f"{field} cannot be null"):
            HorseEventUpdate.model_validate({ field: None })


def test_format_due():
    assert format_due(datetime.datetime(2026, 3, 2)) == "Monday, March 2, 2026"
