"""
Billing rate database model.

One rate per trainer per session type (also used as the price of a
competition service with the same name).
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class BillingRate(SQLModel, table=True):
    __tablename__ = "billing_rates"
    __table_args__ = (UniqueConstraint("trainer_email", "session_type", name="uq_billing_trainer_type"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    trainer_email: str = Field(nullable=False, max_length=255, index=True)
    session_type: str = Field(nullable=False, max_length=50)
    currency: str = Field(default="ILS", max_length=3, nullable=False)
    rate: float = Field(default=0.0, ge=0, nullable=False)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
