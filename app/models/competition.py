"""
Competition database model.

``riders`` is an ordered JSON list of rider entries::

    {"rider_email": str, "rider_name": str, "horses": [str],
     "services": [str], "payment_status": "pending|requested|paid"}

The list is mutated in place by index (payment status) or by rider email
(horse/service toggles), always by reassigning a new list.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from app.models.enums import EventStatus


class Competition(SQLModel, table=True):
    """A competition a trainer brings riders to."""

    __tablename__ = "competitions"

    id: Optional[int] = Field(default=None, primary_key=True)
    trainer_email: str = Field(nullable=False, max_length=255, index=True)
    name: str = Field(nullable=False, max_length=255)
    competition_date: datetime.datetime = Field(nullable=False, index=True)
    location: str = Field(default="", max_length=500)
    stable_id: Optional[int] = Field(default=None, foreign_key="stables.id", ondelete="SET NULL")
    notes: Optional[str] = Field(default=None, max_length=2000)
    status: str = Field(default=EventStatus.SCHEDULED.value, max_length=20, nullable=False)
    riders: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
