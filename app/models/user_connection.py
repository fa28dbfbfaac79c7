"""
User connection database model.

A directed relationship request (e.g. trainer -> rider).  Unique per
(from, to, type).
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.enums import ConnectionStatus


class UserConnection(SQLModel, table=True):
    __tablename__ = "user_connections"
    __table_args__ = (
        UniqueConstraint("from_user_email", "to_user_email", "connection_type", name="uq_connection_from_to_type"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    from_user_email: str = Field(nullable=False, max_length=255, index=True)
    to_user_email: str = Field(nullable=False, max_length=255, index=True)
    connection_type: str = Field(default="Trainer-Rider", max_length=50, nullable=False)
    status: str = Field(default=ConnectionStatus.PENDING.value, max_length=20, nullable=False)
    message: Optional[str] = Field(default=None, max_length=1000)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
