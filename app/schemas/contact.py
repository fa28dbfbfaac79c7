"""
Contact message API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.enums import ContactMessageStatus, ContactMessageType


class ContactMessageCreate(BaseModel):
    type: ContactMessageType = ContactMessageType.GENERAL
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=5000)
    sender_name: Optional[str] = Field(None, max_length=255)
    sender_email: Optional[EmailStr] = None

    class Config:
        use_enum_values = True
        validate_default = True


class ContactStatusUpdate(BaseModel):
    status: ContactMessageStatus

    class Config:
        use_enum_values = True
        validate_default = True


class ContactMessageResponse(BaseModel):
    id: int
    type: str
    subject: str
    message: str
    sender_name: Optional[str]
    sender_email: Optional[str]
    status: str
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True
