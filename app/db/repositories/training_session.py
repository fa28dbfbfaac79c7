"""
Training session repository.

Handles database operations for :class:`TrainingSession`.
"""

import datetime
from typing import Optional

from sqlmodel import Session, select

from app.models.training_session import TrainingSession


class TrainingSessionRepository:
    """Repository for TrainingSession database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: TrainingSession) -> TrainingSession:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def stage(self, entry: TrainingSession) -> TrainingSession:
        """Add without committing; the caller owns the transaction."""
        self.session.add(entry)
        self.session.flush()
        return entry

    def get_by_id(self, entry_id: int) -> Optional[TrainingSession]:
        return self.session.get(TrainingSession, entry_id)

    def filter(self, trainer_email: Optional[str] = None, rider_email: Optional[str] = None,
               start: Optional[datetime.datetime] = None, end: Optional[datetime.datetime] = None,
               ) -> list[TrainingSession]:
        """Sessions matching every given criterion, most recent first."""
        statement = select(TrainingSession)
        if trainer_email:
            statement = statement.where(TrainingSession.trainer_email == trainer_email.lower())
        if rider_email:
            statement = statement.where(TrainingSession.rider_email == rider_email.lower())
        if start:
            statement = statement.where(TrainingSession.session_date >= start)
        if end:
            statement = statement.where(TrainingSession.session_date <= end)
        statement = statement.order_by(TrainingSession.session_date.desc())
        return list(self.session.exec(statement).all())

    def get_by_group(self, group_id: str) -> list[TrainingSession]:
        statement = (select(TrainingSession).where(TrainingSession.recurring_group_id == group_id)
                     .order_by(TrainingSession.session_date))
        return list(self.session.exec(statement).all())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, entry: TrainingSession) -> TrainingSession:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def delete(self, entry_id: int) -> bool:
        entry = self.get_by_id(entry_id)
        if entry:
            self.session.delete(entry)
            self.session.commit()
            return True
        return False
