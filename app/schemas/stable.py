"""
Stable and stable event API schemas.
"""

import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, EmailStr, Field

from app.core.config import settings
from app.models.enums import StableEventType
from app.schemas.partial import PartialUpdate


class StableBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=120)
    state: Optional[str] = Field(None, max_length=120)
    country: Optional[str] = Field(None, max_length=120)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    description: Optional[str] = Field(None, max_length=5000)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class StableCreate(StableBase):
    """Register a stable.  The requesting user becomes its manager once approved."""
    images: list[str] = Field(default_factory=list, max_length=settings.MAX_STABLE_IMAGES)


class StableUpdate(PartialUpdate):
    """Manager/admin edit of stable details."""
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "images")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=120)
    state: Optional[str] = Field(None, max_length=120)
    country: Optional[str] = Field(None, max_length=120)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    description: Optional[str] = Field(None, max_length=5000)
    images: Optional[list[str]] = Field(None, max_length=settings.MAX_STABLE_IMAGES)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class ManagerChange(BaseModel):
    new_manager_email: EmailStr


class TrainerAdd(BaseModel):
    trainer_email: EmailStr


class StableResponse(StableBase):
    id: int
    email: Optional[str] = None
    manager_email: str
    trainer_emails: list[str]
    approval_status: str
    images: list[str]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------


class StableEventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    event_type: StableEventType
    description: Optional[str] = Field(None, max_length=5000)
    event_date: datetime.datetime
    location: Optional[str] = Field(None, max_length=500)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    class Config:
        use_enum_values = True
        validate_default = True


class StableEventUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "event_type", "event_date")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    event_type: Optional[StableEventType] = None
    description: Optional[str] = Field(None, max_length=5000)
    event_date: Optional[datetime.datetime] = None
    location: Optional[str] = Field(None, max_length=500)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    class Config:
        use_enum_values = True
        validate_default = True


class StableEventResponse(BaseModel):
    id: int
    stable_id: int
    title: str
    event_type: str
    description: Optional[str]
    event_date: datetime.datetime
    location: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    created_at: datetime.datetime

    class Config:
        from_attributes = True
