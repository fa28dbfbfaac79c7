"""
Training session API schemas.

``SessionDraft`` is the unit passed between the recurrence generator,
the spreadsheet importer and :class:`TrainingSessionService`; it carries
everything needed to create one session except the trainer.
"""

import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.enums import EventStatus, SessionType
from app.schemas.partial import PartialUpdate

MAX_RECURRENCE_WEEKS = 52


class SessionDraft(BaseModel):
    """One session ready to be created."""

    rider_email: str
    rider_name: Optional[str] = None
    horse_name: Optional[str] = None
    session_date: datetime.datetime
    duration: int = Field(60, ge=1, le=24 * 60, description="Duration in minutes")
    session_type: SessionType = SessionType.LESSON
    notes: Optional[str] = Field(None, max_length=2000)
    is_recurring: bool = False
    recurring_group_id: Optional[str] = None

    class Config:
        use_enum_values = True
        validate_default = True


class TrainingSessionCreate(BaseModel):
    """Schema for scheduling a session, optionally repeating weekly."""

    rider_email: EmailStr
    rider_name: Optional[str] = Field(None, max_length=255)
    horse_name: Optional[str] = Field(None, max_length=255)
    session_date: datetime.datetime = Field(..., description="Local wall-clock start time")
    duration: int = Field(60, ge=1, le=24 * 60, description="Duration in minutes")
    session_type: SessionType = SessionType.LESSON
    notes: Optional[str] = Field(None, max_length=2000)
    is_recurring: bool = False
    recurrence_weeks: int = Field(
        1,
        ge=1,
        le=MAX_RECURRENCE_WEEKS,
        description="Number of weekly occurrences when is_recurring is set",
    )

    class Config:
        use_enum_values = True
        validate_default = True

    def to_draft(self) -> SessionDraft:
        return SessionDraft(
            rider_email=self.rider_email.lower(),
            rider_name=self.rider_name,
            horse_name=self.horse_name,
            session_date=self.session_date,
            duration=self.duration,
            session_type=self.session_type,
            notes=self.notes,
        )


class TrainingSessionUpdate(PartialUpdate):
    """Schema for editing a single session (never the whole group)."""

    non_nullable: ClassVar[tuple[str, ...]] = ("session_date", "duration", "session_type", "status")

    rider_name: Optional[str] = Field(None, max_length=255)
    horse_name: Optional[str] = Field(None, max_length=255)
    session_date: Optional[datetime.datetime] = None
    duration: Optional[int] = Field(None, ge=1, le=24 * 60)
    session_type: Optional[SessionType] = None
    notes: Optional[str] = Field(None, max_length=2000)
    status: Optional[EventStatus] = None

    class Config:
        use_enum_values = True
        validate_default = True


class TrainingSessionResponse(BaseModel):
    """Schema for training session in API responses."""

    id: int
    trainer_email: str
    rider_email: str
    rider_name: Optional[str]
    horse_name: Optional[str]
    session_date: datetime.datetime
    duration: int
    session_type: str
    notes: Optional[str]
    status: str
    is_recurring: bool
    recurring_group_id: Optional[str]
    rider_verified: bool
    rider_verified_at: Optional[datetime.datetime]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


class BatchCreateResult(BaseModel):
    """Outcome of a best-effort batch: what was created and what failed."""

    created: list[TrainingSessionResponse] = []
    errors: list[str] = []
