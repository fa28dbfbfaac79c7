"""
Stable and stable event database models.

``approval_status`` is controlled by admins through
:class:`app.services.stable_service.StableService`.  Membership in
``trainer_emails`` implies the ``Trainer`` role on the referenced user.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from app.models.enums import ApprovalStatus


class Stable(SQLModel, table=True):
    """A registered stable."""

    __tablename__ = "stables"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=255)
    manager_email: str = Field(nullable=False, max_length=255, index=True)
    trainer_emails: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    approval_status: str = Field(default=ApprovalStatus.PENDING.value, max_length=20, index=True)

    # Contact / location
    address: Optional[str] = Field(default=None, max_length=500)
    city: Optional[str] = Field(default=None, max_length=120)
    state: Optional[str] = Field(default=None, max_length=120)
    country: Optional[str] = Field(default=None, max_length=120)
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    images: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    latitude: Optional[float] = Field(default=None)
    longitude: Optional[float] = Field(default=None)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class StableEvent(SQLModel, table=True):
    """A public event published by a stable."""

    __tablename__ = "stable_events"

    id: Optional[int] = Field(default=None, primary_key=True)
    stable_id: int = Field(foreign_key="stables.id", nullable=False, index=True, ondelete="CASCADE")
    title: str = Field(nullable=False, max_length=255)
    event_type: str = Field(nullable=False, max_length=30)
    description: Optional[str] = Field(default=None, max_length=5000)
    event_date: datetime.datetime = Field(nullable=False, index=True)
    location: Optional[str] = Field(default=None, max_length=500)
    latitude: Optional[float] = Field(default=None)
    longitude: Optional[float] = Field(default=None)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
