"""Shared fixtures.

The environment is configured before any ``app`` module is imported so
that settings resolve to an in-memory SQLite database.
"""

import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="ridersos-uploads-"))
os.environ.setdefault("SMTP_HOST", "")

import pytest
from sqlmodel import Session, SQLModel

import app.db.base  # noqa: F401
from app.core.security import get_password_hash
from app.db.session import create_db_engine
from app.models.user import User


@pytest.fixture
def engine():
    test_engine = create_db_engine("sqlite://")
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as db:
        yield db


@pytest.fixture
def make_user(session):
    """Create and return a user with the given roles."""

    def _make(email: str, roles=("Rider",), first_name=None, last_name=None, password=None) -> User:
        user = User(
            email=email.lower(),
            first_name=first_name,
            last_name=last_name,
            roles=list(roles),
            hashed_password=get_password_hash(password) if password else None,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make
