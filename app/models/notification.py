"""
Notification and notification preference models.

``notifications`` doubles as the delivery outbox: a row is written in the
same unit of work as the mutation that caused it, and
:class:`app.services.notification_service.NotificationDispatcher` sends
the email copy later, recording attempts on the row.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class Notification(SQLModel, table=True):
    """In-app notification for one user."""

    __tablename__ = "notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_email: str = Field(nullable=False, max_length=255, index=True)
    type: str = Field(nullable=False, max_length=50)
    title: str = Field(nullable=False, max_length=255)
    message: str = Field(nullable=False, max_length=2000)
    related_entity_type: Optional[str] = Field(default=None, max_length=50)
    related_entity_id: Optional[str] = Field(default=None, max_length=64)
    link: Optional[str] = Field(default=None, max_length=500)
    read: bool = Field(default=False, index=True)

    # Outbox bookkeeping
    email_sent_at: Optional[datetime.datetime] = Field(default=None)
    delivery_attempts: int = Field(default=0, nullable=False)
    last_error: Optional[str] = Field(default=None, max_length=1000)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class NotificationPreference(SQLModel, table=True):
    """Per-user, per-type delivery switches.  Missing row means both enabled."""

    __tablename__ = "notification_preferences"
    __table_args__ = (UniqueConstraint("user_email", "notification_type", name="uq_notification_pref_user_type"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_email: str = Field(nullable=False, max_length=255, index=True)
    notification_type: str = Field(nullable=False, max_length=50)
    email_enabled: bool = Field(default=True)
    in_app_enabled: bool = Field(default=True)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
