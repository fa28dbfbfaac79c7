"""Scheduling core: weekly recurrence, calendar ranges, competition costs, spreadsheets."""

from app.scheduling.calendar import ViewMode, in_range, shift_anchor, todays_sessions, view_range
from app.scheduling.costs import RiderCost, rider_cost
from app.scheduling.recurrence import generate_recurring, new_group_id

__all__ = [
    "ViewMode",
    "in_range",
    "shift_anchor",
    "todays_sessions",
    "view_range",
    "RiderCost",
    "rider_cost",
    "generate_recurring",
    "new_group_id",
]
