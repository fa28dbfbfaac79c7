"""
Notification API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel

from app.models.enums import NotificationType


class NotificationResponse(BaseModel):
    id: int
    user_email: str
    type: str
    title: str
    message: str
    related_entity_type: Optional[str]
    related_entity_id: Optional[str]
    link: Optional[str]
    read: bool
    created_at: datetime.datetime

    class Config:
        from_attributes = True


class UnreadCount(BaseModel):
    unread: int


class NotificationPreferenceUpdate(BaseModel):
    notification_type: NotificationType
    email_enabled: bool = True
    in_app_enabled: bool = True

    class Config:
        use_enum_values = True
        validate_default = True


class NotificationPreferenceResponse(BaseModel):
    notification_type: str
    email_enabled: bool
    in_app_enabled: bool

    class Config:
        from_attributes = True
