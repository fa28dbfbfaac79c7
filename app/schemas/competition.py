"""
Competition API schemas.

Rider entries are addressed by email for horse/service toggles and by
list index for payment status, matching how the entries are stored.
"""

import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.enums import EventStatus, PaymentStatus
from app.schemas.partial import PartialUpdate


class RiderEntry(BaseModel):
    rider_email: str
    rider_name: Optional[str] = None
    horses: list[str] = []
    services: list[str] = []
    payment_status: PaymentStatus = PaymentStatus.PENDING

    class Config:
        use_enum_values = True
        validate_default = True


class CompetitionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    competition_date: datetime.datetime
    location: str = Field("", max_length=500)
    stable_id: Optional[int] = None
    notes: Optional[str] = Field(None, max_length=2000)


class CompetitionUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "competition_date", "location", "status")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    competition_date: Optional[datetime.datetime] = None
    location: Optional[str] = Field(None, max_length=500)
    stable_id: Optional[int] = None
    notes: Optional[str] = Field(None, max_length=2000)
    status: Optional[EventStatus] = None

    class Config:
        use_enum_values = True
        validate_default = True


class RiderAdd(BaseModel):
    rider_email: EmailStr
    rider_name: Optional[str] = Field(None, max_length=255)


class ItemToggle(BaseModel):
    """Horse name or service name to add if absent, remove if present."""
    name: str = Field(..., min_length=1, max_length=255)


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus

    class Config:
        use_enum_values = True
        validate_default = True


class CompetitionResponse(BaseModel):
    id: int
    trainer_email: str
    name: str
    competition_date: datetime.datetime
    location: str
    stable_id: Optional[int]
    notes: Optional[str]
    status: str
    riders: list[RiderEntry]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


class RiderCost(BaseModel):
    """Sum of the trainer's rates for one rider's selected services."""
    total: float
    currency: str
    mixed_currency: bool = False


class RiderCostResponse(RiderCost):
    rider_index: int
    rider_email: str
    services: list[str]
