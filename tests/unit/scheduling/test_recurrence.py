"""Tests for the weekly recurrence generator."""

import datetime

import pytest

from app.scheduling.recurrence import generate_recurring, new_group_id
from app.schemas.training_session import MAX_RECURRENCE_WEEKS, SessionDraft


def _draft(**overrides) -> SessionDraft:
    values = {
        "rider_email": "rider@mail.com",
        "rider_name": "Dana Rider",
        "horse_name": "Thunder",
        "session_date": datetime.datetime(2026, 1, 10, 14, 0),
        "session_type": "Lesson",
    }
    values.update(overrides)
    return SessionDraft(**values)


# ======================================================================
# generate_recurring
# ======================================================================


class TestGenerateRecurring:
    def test_three_weeks_from_jan_10(self):
        drafts = generate_recurring(_draft(), 3)

        assert [d.session_date for d in drafts] == [
            datetime.datetime(2026, 1, 10, 14, 0),
            datetime.datetime(2026, 1, 17, 14, 0),
            datetime.datetime(2026, 1, 24, 14, 0),
        ]
        assert all(d.is_recurring for d in drafts)
        assert len({ d.recurring_group_id for d in drafts }) == 1
        assert drafts[0].recurring_group_id.startswith("recurring-")

    def test_single_week_is_still_recurring(self):
        drafts = generate_recurring(_draft(), 1)
        assert len(drafts) == 1
        assert drafts[0].is_recurring
        assert drafts[0].recurring_group_id

    def test_copies_every_other_field(self):
        base = _draft(notes="Bring boots", duration=45, session_type="Training")
        for d in generate_recurring(base, 4):
            assert d.rider_email == base.rider_email
            assert d.horse_name == "Thunder"
            assert d.notes == "Bring boots"
            assert d.duration == 45
            assert d.session_type == "Training"

    def test_base_is_not_modified(self):
        base = _draft()
        generate_recurring(base, 5)
        assert base.is_recurring is False
        assert base.recurring_group_id is None

    def test_time_of_day_preserved_across_month_end(self):
        drafts = generate_recurring(_draft(session_date=datetime.datetime(2026, 1, 28, 18, 30)), 2)
        assert drafts[1].session_date == datetime.datetime(2026, 2, 4, 18, 30)

    def test_maximum_weeks(self):
        drafts = generate_recurring(_draft(), MAX_RECURRENCE_WEEKS)
        assert len(drafts) == MAX_RECURRENCE_WEEKS
        assert drafts[-1].session_date - drafts[0].session_date == datetime.timedelta(weeks=51)

    @pytest.mark.parametrize("weeks", [0, -1, MAX_RECURRENCE_WEEKS + 1])
    def test_out_of_range_weeks_rejected(self, weeks):
        with pytest.raises(ValueError):
            generate_recurring(_draft(), weeks)

    def test_each_call_gets_a_new_group(self):
        first = generate_recurring(_draft(), 2)
        second = generate_recurring(_draft(), 2)
        assert first[0].recurring_group_id != second[0].recurring_group_id


class TestNewGroupId:
    def test_unique(self):
        assert len({ new_group_id() for _ in range(100) }) == 100
