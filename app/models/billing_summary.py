"""
Monthly billing summary database model.

One summary per trainer, rider and month (``YYYY-MM``).  Revenue fields
are snapshots taken when the summary was generated; later rate changes
do not rewrite them.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.enums import PaymentStatus


class MonthlyBillingSummary(SQLModel, table=True):
    __tablename__ = "monthly_billing_summaries"
    __table_args__ = (
        UniqueConstraint("trainer_email", "rider_email", "month", name="uq_billing_summary_trainer_rider_month"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    trainer_email: str = Field(nullable=False, max_length=255, index=True)
    rider_email: str = Field(nullable=False, max_length=255, index=True)
    month: str = Field(nullable=False, max_length=7, index=True)

    sessions_revenue: float = Field(default=0.0, nullable=False)
    competitions_revenue: float = Field(default=0.0, nullable=False)
    total_revenue: float = Field(default=0.0, nullable=False)
    currency: str = Field(default="ILS", max_length=3, nullable=False)
    session_count: int = Field(default=0, nullable=False)

    payment_requested: bool = Field(default=False)
    payment_status: str = Field(default=PaymentStatus.PENDING.value, max_length=20, nullable=False)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
