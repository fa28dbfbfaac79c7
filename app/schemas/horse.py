"""
Horse API schemas.
"""

import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.enums import EventStatus, HorseEventType
from app.schemas.partial import PartialUpdate


class HorseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    breed: Optional[str] = Field(None, max_length=120)
    birth_year: Optional[int] = Field(None, ge=1950, le=2100)
    color: Optional[str] = Field(None, max_length=60)
    notes: Optional[str] = Field(None, max_length=2000)
    stable_id: Optional[int] = None


class HorseUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    breed: Optional[str] = Field(None, max_length=120)
    birth_year: Optional[int] = Field(None, ge=1950, le=2100)
    color: Optional[str] = Field(None, max_length=60)
    notes: Optional[str] = Field(None, max_length=2000)
    stable_id: Optional[int] = None


class HorseResponse(HorseCreate):
    id: int
    owner_email: str
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


class HorseEventCreate(BaseModel):
    event_type: HorseEventType
    event_date: datetime.datetime
    provider_name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    cost: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=2000)
    next_due_date: Optional[datetime.datetime] = None
    is_recurring: bool = False
    recurrence_weeks: Optional[int] = Field(None, ge=1, le=520)
    reminder_weeks_before: Optional[int] = Field(None, ge=0, le=52)
    reminder_email: Optional[EmailStr] = None

    class Config:
        use_enum_values = True
        validate_default = True


class HorseEventUpdate(PartialUpdate):
    """Edit a care event.  Setting ``status`` to ``completed`` stamps ``completed_at``."""

    non_nullable: ClassVar[tuple[str, ...]] = ("event_type", "event_date", "status", "is_recurring")

    event_type: Optional[HorseEventType] = None
    event_date: Optional[datetime.datetime] = None
    provider_name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    cost: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=2000)
    status: Optional[EventStatus] = None
    next_due_date: Optional[datetime.datetime] = None
    is_recurring: Optional[bool] = None
    recurrence_weeks: Optional[int] = Field(None, ge=1, le=520)
    reminder_weeks_before: Optional[int] = Field(None, ge=0, le=52)
    reminder_email: Optional[EmailStr] = None

    class Config:
        use_enum_values = True
        validate_default = True


class HorseEventResponse(BaseModel):
    id: int
    horse_id: int
    event_type: str
    event_date: datetime.datetime
    provider_name: Optional[str]
    description: Optional[str]
    cost: Optional[float]
    notes: Optional[str]
    status: str
    completed_at: Optional[datetime.datetime]
    next_due_date: Optional[datetime.datetime]
    is_recurring: bool
    recurrence_weeks: Optional[int]
    reminder_weeks_before: Optional[int]
    reminder_email: Optional[str]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True
