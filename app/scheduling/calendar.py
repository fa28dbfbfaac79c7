"""
Calendar range selection.

All datetimes are naive local wall-clock values.  Intervals are
inclusive on both ends: a day ends at ``23:59:59.999999``.

Weeks start on Sunday.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Callable, Iterable, Optional, TypeVar, Union

from dateutil.relativedelta import relativedelta

from app.models.enums import EventStatus

T = TypeVar("T")

DateLike = Union[datetime.date, datetime.datetime]


class ViewMode(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


def _as_date(anchor: DateLike) -> datetime.date:
    if isinstance(anchor, datetime.datetime):
        return anchor.date()
    return anchor


def _start_of(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time.min)


def _end_of(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time.max)


def view_range(mode: ViewMode, anchor: DateLike) -> tuple[datetime.datetime, datetime.datetime]:
    """Inclusive ``(start, end)`` of the day, week or month containing ``anchor``."""
    day = _as_date(anchor)
    mode = ViewMode(mode)

    if mode is ViewMode.DAY:
        return _start_of(day), _end_of(day)

    if mode is ViewMode.WEEK:
        # date.weekday(): Monday=0 .. Sunday=6
        sunday = day - datetime.timedelta(days=(day.weekday() + 1) % 7)
        return _start_of(sunday), _end_of(sunday + datetime.timedelta(days=6))

    first = day.replace(day=1)
    last = first + relativedelta(months=1) - datetime.timedelta(days=1)
    return _start_of(first), _end_of(last)


def in_range(items: Iterable[T], start: datetime.datetime, end: datetime.datetime,
             date_of: Callable[[T], datetime.datetime] = lambda item: item.session_date, ) -> list[T]:
    """Non-cancelled items dated within ``[start, end]``, ascending by date."""
    selected = [
        item for item in items
        if start <= date_of(item) <= end and item.status != EventStatus.CANCELLED.value
    ]
    return sorted(selected, key=date_of)


def todays_sessions(sessions: Iterable[T], now: Optional[datetime.datetime] = None) -> list[T]:
    """Sessions on the current wall-clock day, regardless of any selected anchor."""
    now = now or datetime.datetime.now()
    start, end = view_range(ViewMode.DAY, now)
    return in_range(sessions, start, end)


def shift_anchor(mode: ViewMode, anchor: datetime.date, steps: int = 1) -> datetime.date:
    """Move the anchor by ``steps`` days, weeks or calendar months.

    Month steps clamp to the last valid day (Jan 31 + 1 month -> Feb 28/29).
    """
    mode = ViewMode(mode)
    if mode is ViewMode.DAY:
        return anchor + datetime.timedelta(days=steps)
    if mode is ViewMode.WEEK:
        return anchor + datetime.timedelta(weeks=steps)
    return anchor + relativedelta(months=steps)
