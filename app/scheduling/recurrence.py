"""
Weekly recurrence generator.

Expands one session draft into ``weeks`` drafts spaced exactly seven
calendar days apart.  The time of day is preserved because the offset is
applied as a whole number of days to a wall-clock datetime.

The shared ``recurring_group_id`` is descriptive only: updating or
deleting one occurrence never touches the others.
"""

from __future__ import annotations

import datetime
import uuid

from app.schemas.training_session import MAX_RECURRENCE_WEEKS, SessionDraft


def new_group_id() -> str:
    """A fresh, globally unique recurrence group identifier."""
    return f"recurring-{uuid.uuid4().hex}"


def generate_recurring(base: SessionDraft, weeks: int) -> list[SessionDraft]:
    """Produce ``weeks`` occurrences of ``base``, the k-th at ``base + 7k days``.

    Raises:
        ValueError: if ``weeks`` is outside ``[1, MAX_RECURRENCE_WEEKS]``
    """
    if not 1 <= weeks <= MAX_RECURRENCE_WEEKS:
        raise ValueError(f"weeks must be between 1 and {MAX_RECURRENCE_WEEKS}, got {weeks}")

    group_id = new_group_id()
    return [
        base.model_copy(update={
            "session_date": base.session_date + datetime.timedelta(days=7 * k),
            "is_recurring": True,
            "recurring_group_id": group_id,
        })
        for k in range(weeks)
    ]
