"""Tests for calendar range selection and navigation."""

import datetime
from types import SimpleNamespace

import pytest

from app.scheduling.calendar import ViewMode, in_range, shift_anchor, todays_sessions, view_range


def _session(when: datetime.datetime, status: str = "scheduled"):
    return SimpleNamespace(session_date=when, status=status)


# ======================================================================
# view_range
# ======================================================================


class TestViewRange:
    def test_day(self):
        start, end = view_range(ViewMode.DAY, datetime.date(2026, 3, 15))
        assert start == datetime.datetime(2026, 3, 15, 0, 0)
        assert end == datetime.datetime(2026, 3, 15, 23, 59, 59, 999999)

    def test_week_starts_on_sunday(self):
        # 2026-03-18 is a Wednesday
        start, end = view_range(ViewMode.WEEK, datetime.date(2026, 3, 18))
        assert start == datetime.datetime(2026, 3, 15)
        assert start.weekday() == 6
        assert end.date() == datetime.date(2026, 3, 21)

    def test_week_anchor_on_sunday(self):
        start, _ = view_range(ViewMode.WEEK, datetime.date(2026, 3, 15))
        assert start.date() == datetime.date(2026, 3, 15)

    def test_week_anchor_on_saturday(self):
        start, end = view_range(ViewMode.WEEK, datetime.date(2026, 3, 21))
        assert start.date() == datetime.date(2026, 3, 15)
        assert end.date() == datetime.date(2026, 3, 21)

    def test_month(self):
        start, end = view_range(ViewMode.MONTH, datetime.date(2026, 2, 14))
        assert start == datetime.datetime(2026, 2, 1)
        assert end == datetime.datetime(2026, 2, 28, 23, 59, 59, 999999)

    def test_leap_february(self):
        _, end = view_range(ViewMode.MONTH, datetime.date(2028, 2, 3))
        assert end.date() == datetime.date(2028, 2, 29)

    def test_december(self):
        start, end = view_range(ViewMode.MONTH, datetime.date(2026, 12, 31))
        assert start.date() == datetime.date(2026, 12, 1)
        assert end.date() == datetime.date(2026, 12, 31)

    def test_accepts_datetime_anchor_and_string_mode(self):
        start, _ = view_range("day", datetime.datetime(2026, 3, 15, 17, 45))
        assert start == datetime.datetime(2026, 3, 15)


# ======================================================================
# in_range / todays_sessions
# ======================================================================


class TestInRange:
    def test_inclusive_boundaries_and_sorted(self):
        start, end = view_range(ViewMode.DAY, datetime.date(2026, 3, 15))
        late = _session(datetime.datetime(2026, 3, 15, 23, 59, 59))
        early = _session(datetime.datetime(2026, 3, 15, 0, 0))
        outside = _session(datetime.datetime(2026, 3, 16, 0, 0))

        assert in_range([late, outside, early], start, end) == [early, late]

    def test_cancelled_excluded(self):
        start, end = view_range(ViewMode.MONTH, datetime.date(2026, 3, 1))
        kept = _session(datetime.datetime(2026, 3, 2, 10))
        cancelled = _session(datetime.datetime(2026, 3, 3, 10), status="cancelled")
        assert in_range([kept, cancelled], start, end) == [kept]

    def test_custom_date_accessor(self):
        start, end = view_range(ViewMode.MONTH, datetime.date(2026, 3, 1))
        comp = SimpleNamespace(competition_date=datetime.datetime(2026, 3, 9), status="scheduled")
        assert in_range([comp], start, end, date_of=lambda c: c.competition_date) == [comp]


class TestTodaysSessions:
    def test_uses_now_not_anchor(self):
        now = datetime.datetime(2026, 3, 15, 9, 0)
        today = _session(datetime.datetime(2026, 3, 15, 18, 0))
        tomorrow = _session(datetime.datetime(2026, 3, 16, 8, 0))
        assert todays_sessions([tomorrow, today], now=now) == [today]


# ======================================================================
# shift_anchor
# ======================================================================


class TestShiftAnchor:
    @pytest.mark.parametrize("mode, steps, expected", [
        (ViewMode.DAY, 1, datetime.date(2026, 3, 16)),
        (ViewMode.DAY, -15, datetime.date(2026, 2, 28)),
        (ViewMode.WEEK, 1, datetime.date(2026, 3, 22)),
        (ViewMode.WEEK, -2, datetime.date(2026, 3, 1)),
        (ViewMode.MONTH, 1, datetime.date(2026, 4, 15)),
        (ViewMode.MONTH, -3, datetime.date(2025, 12, 15)),
    ])
    def test_steps(self, mode, steps, expected):
        assert shift_anchor(mode, datetime.date(2026, 3, 15), steps) == expected

    def test_month_end_clamps(self):
        assert shift_anchor(ViewMode.MONTH, datetime.date(2026, 1, 31)) == datetime.date(2026, 2, 28)
