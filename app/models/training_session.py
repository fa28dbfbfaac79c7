"""
Training session database model.

A session is scheduled by a trainer for a rider.  Sessions created by a
single recurrence request share a ``recurring_group_id``; the id is
descriptive only and carries no referential constraint.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from app.models.enums import EventStatus, SessionType


class TrainingSession(SQLModel, table=True):
    """A single scheduled training session."""

    __tablename__ = "training_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    trainer_email: str = Field(nullable=False, max_length=255, index=True)
    rider_email: str = Field(nullable=False, max_length=255, index=True)
    rider_name: Optional[str] = Field(default=None, max_length=255)
    horse_name: Optional[str] = Field(default=None, max_length=255)

    session_date: datetime.datetime = Field(nullable=False, index=True)
    duration: int = Field(default=60, nullable=False)
    session_type: str = Field(default=SessionType.LESSON.value, max_length=50, nullable=False)
    notes: Optional[str] = Field(default=None, max_length=2000)
    status: str = Field(default=EventStatus.SCHEDULED.value, max_length=20, nullable=False)

    # Recurrence
    is_recurring: bool = Field(default=False)
    recurring_group_id: Optional[str] = Field(default=None, max_length=64, index=True)

    # Rider confirmation
    rider_verified: bool = Field(default=False)
    rider_verified_at: Optional[datetime.datetime] = Field(default=None)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
