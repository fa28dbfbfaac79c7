"""
Competition repository.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.competition import Competition


class CompetitionRepository:
    """Repository for Competition database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: Competition) -> Competition:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def get_by_id(self, entry_id: int) -> Optional[Competition]:
        return self.session.get(Competition, entry_id)

    def filter(self, trainer_email: Optional[str] = None) -> list[Competition]:
        statement = select(Competition)
        if trainer_email:
            statement = statement.where(Competition.trainer_email == trainer_email.lower())
        statement = statement.order_by(Competition.competition_date.desc())
        return list(self.session.exec(statement).all())

    def update(self, entry: Competition) -> Competition:
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
