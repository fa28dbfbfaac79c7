"""
User database model.

Defines the User table for authentication, profile and role membership.
Email is the identity used by every other table; it is stored lower-cased.
"""

from datetime import date, datetime
from typing import Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

ADULT_AGE = 18


class User(SQLModel, table=True):
    """
    User account.

    ``roles`` is a JSON list of :class:`app.models.enums.Role` values.
    Only :class:`app.services.role_service.RoleService` should mutate it.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    # Google-only accounts have no password
    hashed_password: Optional[str] = Field(default=None)
    google_id: Optional[str] = Field(default=None, max_length=255, index=True)

    # Profile
    first_name: Optional[str] = Field(default=None, max_length=120)
    last_name: Optional[str] = Field(default=None, max_length=120)
    full_name: Optional[str] = Field(default=None, max_length=255)
    profile_image: Optional[str] = Field(default=None)
    birthday: Optional[date] = Field(default=None)
    # Guardian who receives payment requests while the user is a minor
    parent_email: Optional[str] = Field(default=None, max_length=255)
    roles: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        """First + last name, else full name, else the email."""
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.full_name or self.email

    def has_role(self, role: str) -> bool:
        return role in (self.roles or [])

    def is_minor(self, today: Optional[date] = None) -> bool:
        if not self.birthday:
            return False
        return relativedelta(today or date.today(), self.birthday).years < ADULT_AGE
