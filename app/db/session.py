"""
Database session management.

Provides SQLModel engine and session creation.
"""

from typing import Generator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from app.core.config import settings

DATABASE_URL: str = settings.DATABASE_URL


def create_db_engine(url: str) -> Engine:
    """
    Build an engine for ``url``.

    SQLite gets explicit transaction control so that SAVEPOINTs (used for
    best-effort batches) behave as on PostgreSQL; an in-memory SQLite URL
    shares one connection so every session sees the same database.
    """
    if not url.startswith("sqlite"):
        return create_engine(
            url,
            echo=settings.DEBUG,  # Log SQL queries in debug mode
            pool_pre_ping=True,   # Verify connections before using
            pool_size=5,          # Connection pool size
            max_overflow=10       # Max connections beyond pool_size
        )

    kwargs = { "connect_args": { "check_same_thread": False } }
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    sqlite_engine = create_engine(url, echo=settings.DEBUG, **kwargs)

    @event.listens_for(sqlite_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    return sqlite_engine


engine = create_db_engine(DATABASE_URL)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get database session.

    Yields:
        SQLModel Session instance
    """
    with Session(engine) as session:
        yield session
