"""
Horse and horse care event database models.

A care event (farrier, vaccination, vet visit) belongs to one horse and
is deleted with it.  ``next_due_date`` is when the next visit of the same
kind is due; setting it sends the owner a reminder notification.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from app.models.enums import EventStatus, HorseEventType


class Horse(SQLModel, table=True):
    """A horse owned by a rider (keyed by owner email)."""

    __tablename__ = "horses"

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_email: str = Field(nullable=False, max_length=255, index=True)
    name: str = Field(nullable=False, max_length=255)
    breed: Optional[str] = Field(default=None, max_length=120)
    birth_year: Optional[int] = Field(default=None)
    color: Optional[str] = Field(default=None, max_length=60)
    notes: Optional[str] = Field(default=None, max_length=2000)
    stable_id: Optional[int] = Field(default=None, foreign_key="stables.id", ondelete="SET NULL")

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class HorseEvent(SQLModel, table=True):
    """One care appointment for a horse."""

    __tablename__ = "horse_events"

    id: Optional[int] = Field(default=None, primary_key=True)
    horse_id: int = Field(foreign_key="horses.id", nullable=False, index=True, ondelete="CASCADE")
    event_type: str = Field(default=HorseEventType.OTHER.value, max_length=30, nullable=False)
    event_date: datetime.datetime = Field(nullable=False, index=True)
    provider_name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    cost: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=2000)
    status: str = Field(default=EventStatus.SCHEDULED.value, max_length=20, nullable=False)
    completed_at: Optional[datetime.datetime] = Field(default=None)

    # Follow-up
    next_due_date: Optional[datetime.datetime] = Field(default=None)
    is_recurring: bool = Field(default=False)
    recurrence_weeks: Optional[int] = Field(default=None)
    reminder_weeks_before: Optional[int] = Field(default=None)
    reminder_email: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
