"""
Contact message database model (admin inbox).
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from app.models.enums import ContactMessageStatus, ContactMessageType


class ContactMessage(SQLModel, table=True):
    __tablename__ = "contact_messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    type: str = Field(default=ContactMessageType.GENERAL.value, max_length=30, nullable=False)
    subject: str = Field(nullable=False, max_length=255)
    message: str = Field(nullable=False, max_length=5000)
    sender_name: Optional[str] = Field(default=None, max_length=255)
    sender_email: Optional[str] = Field(default=None, max_length=255)
    status: str = Field(default=ContactMessageStatus.NEW.value, max_length=20, index=True)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
