"""
Billing rate and monthly summary API schemas.
"""

import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.enums import Currency, PaymentStatus
from app.schemas.partial import PartialUpdate


class BillingRateUpsert(BaseModel):
    """Price of one session type (or competition service) for the current trainer."""
    session_type: str = Field(..., min_length=1, max_length=50)
    currency: Currency = Currency.ILS
    rate: float = Field(..., ge=0)

    class Config:
        use_enum_values = True
        validate_default = True


class BillingRateResponse(BaseModel):
    id: int
    trainer_email: str
    session_type: str
    currency: str
    rate: float
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class BillingSummaryCreate(BaseModel):
    """A summary entered by the trainer.  ``total_revenue`` defaults to the sum of both parts."""
    rider_email: EmailStr
    month: str = Field(..., pattern=MONTH_PATTERN, description="YYYY-MM")
    sessions_revenue: float = Field(0.0, ge=0)
    competitions_revenue: float = Field(0.0, ge=0)
    total_revenue: Optional[float] = Field(None, ge=0)
    currency: Currency = Currency.ILS
    session_count: int = Field(0, ge=0)
    payment_requested: bool = False
    payment_status: PaymentStatus = PaymentStatus.PENDING

    class Config:
        use_enum_values = True
        validate_default = True


class BillingSummaryUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "sessions_revenue", "competitions_revenue", "total_revenue", "session_count", "payment_requested",
        "payment_status",
    )

    sessions_revenue: Optional[float] = Field(None, ge=0)
    competitions_revenue: Optional[float] = Field(None, ge=0)
    total_revenue: Optional[float] = Field(None, ge=0)
    session_count: Optional[int] = Field(None, ge=0)
    payment_requested: Optional[bool] = None
    payment_status: Optional[PaymentStatus] = None

    class Config:
        use_enum_values = True
        validate_default = True


class BillingSummaryGenerate(BaseModel):
    """Generate summaries for every rider billed in ``month`` and request payment."""
    month: str = Field(..., pattern=MONTH_PATTERN, description="YYYY-MM")


class BillingSummaryResponse(BaseModel):
    id: int
    trainer_email: str
    rider_email: str
    month: str
    sessions_revenue: float
    competitions_revenue: float
    total_revenue: float
    currency: str
    session_count: int
    payment_requested: bool
    payment_status: str
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True
