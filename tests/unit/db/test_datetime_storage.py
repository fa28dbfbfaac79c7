"""Naive wall-clock datetimes are stored and read back unchanged."""

import datetime

from app.models.horse import Horse, HorseEvent
from app.models.training_session import TrainingSession


def test_session_date_round_trips_naive(session):
    moment = datetime.datetime(2026, 3, 2, 9, 30)
    session.add(TrainingSession(trainer_email="coach@mail.com", rider_email="dana@mail.com",
                                rider_name="Dana", session_date=moment))
    session.commit()
    session.expire_all()

    stored = session.get(TrainingSession, 1)
    assert stored.session_date == moment
    assert stored.session_date.tzinfo is None


def test_care_dates_round_trip_naive(session):
    horse = Horse(owner_email="dana@mail.com", name="Thunder")
    session.add(horse)
    session.commit()
    due = datetime.datetime(2026, 4, 13, 9, 0)
    session.add(HorseEvent(horse_id=horse.id, event_type="Farrier", event_date=due, next_due_date=due))
    session.commit()
    session.expire_all()

    stored = session.get(HorseEvent, 1)
    assert (stored.event_date, stored.next_due_date) == (due, due)
    assert stored.next_due_date.tzinfo is None
