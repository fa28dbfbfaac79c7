"""
User connection and guardian link API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.enums import GuardianStatus


class ConnectionCreate(BaseModel):
    to_user_email: EmailStr
    connection_type: str = Field("Trainer-Rider", max_length=50)
    message: Optional[str] = Field(None, max_length=1000)


class ConnectionResponse(BaseModel):
    id: int
    from_user_email: str
    to_user_email: str
    connection_type: str
    status: str
    message: Optional[str]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


class GuardianLinkCreate(BaseModel):
    """Link the current user, as guardian, to a minor who lists them as ``parent_email``."""
    minor_email: EmailStr


class GuardianStatusUpdate(BaseModel):
    status: GuardianStatus

    class Config:
        use_enum_values = True


class GuardianLinkResponse(BaseModel):
    id: int
    guardian_email: str
    minor_email: str
    status: str
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True
