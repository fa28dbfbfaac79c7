"""
Guardian link database model.

Links a parent or guardian to a minor rider.  Unique per (guardian,
minor); an ``inactive`` link is kept but grants nothing.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.enums import GuardianStatus


class GuardianLink(SQLModel, table=True):
    __tablename__ = "guardian_links"
    __table_args__ = (
        UniqueConstraint("guardian_email", "minor_email", name="uq_guardian_link_guardian_minor"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    guardian_email: str = Field(nullable=False, max_length=255, index=True)
    minor_email: str = Field(nullable=False, max_length=255, index=True)
    status: str = Field(default=GuardianStatus.ACTIVE.value, max_length=20, nullable=False)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
