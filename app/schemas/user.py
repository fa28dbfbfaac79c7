"""
User API schemas.

Pydantic models for user-related request/response validation.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.enums import Role
from app.schemas.partial import PartialUpdate


# Shared properties
class UserBase(BaseModel):
    """Base user schema with common fields."""
    email: EmailStr
    first_name: Optional[str] = Field(None, max_length=120)
    last_name: Optional[str] = Field(None, max_length=120)


# Request schemas
class UserCreate(UserBase):
    """Schema for user registration."""
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class GoogleProfile(BaseModel):
    """Profile returned by Google Sign-In on the client."""
    email: Optional[EmailStr] = None
    sub: Optional[str] = None
    name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    picture: Optional[str] = None


class GoogleLogin(BaseModel):
    """Schema for Google login.  The ID token is accepted but not verified here."""
    id_token: Optional[str] = None
    profile: GoogleProfile


class UserUpdate(PartialUpdate):
    """Schema for updating the current user's profile."""
    first_name: Optional[str] = Field(None, max_length=120)
    last_name: Optional[str] = Field(None, max_length=120)
    full_name: Optional[str] = Field(None, max_length=255)
    profile_image: Optional[str] = None
    birthday: Optional[date] = None
    parent_email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8)


class UserRolesUpdate(BaseModel):
    """Admin replacement of a user's role set."""
    roles: list[Role]

    class Config:
        use_enum_values = True
        validate_default = True


# Response schemas
class UserResponse(UserBase):
    """Schema for user data in API responses (no sensitive data)."""
    id: int
    email: str
    full_name: Optional[str] = None
    profile_image: Optional[str] = None
    birthday: Optional[date] = None
    parent_email: Optional[str] = None
    roles: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True  # Allows creation from SQLModel objects


class UserSummary(BaseModel):
    """Minimal public view of a user (e.g. connected riders)."""
    email: str
    display_name: str
    roles: list[str]

    class Config:
        from_attributes = True
