"""
Horse and horse care event repositories.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.horse import Horse, HorseEvent


class HorseRepository:
    """Repository for Horse database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, horse: Horse) -> Horse:
        self.session.add(horse)
        self.session.commit()
        self.session.refresh(horse)
        return horse

    def get_by_id(self, horse_id: int) -> Optional[Horse]:
        return self.session.get(Horse, horse_id)

    def filter(self, owner_email: Optional[str] = None, stable_id: Optional[int] = None) -> list[Horse]:
        statement = select(Horse)
        if owner_email:
            statement = statement.where(Horse.owner_email == owner_email.lower())
        if stable_id is not None:
            statement = statement.where(Horse.stable_id == stable_id)
        return list(self.session.exec(statement.order_by(Horse.name)).all())

    def update(self, horse: Horse) -> Horse:
        self.session.add(horse)
        self.session.commit()
        self.session.refresh(horse)
        return horse

    def delete(self, horse_id: int) -> bool:
        horse = self.get_by_id(horse_id)
        if horse:
            self.session.delete(horse)
            self.session.commit()
            return True
        return False


class HorseEventRepository:
    """Repository for HorseEvent database operations."""

    def __init__(self, session: Session):
        self.session = session

    def stage(self, event: HorseEvent) -> HorseEvent:
        """Add and flush without committing."""
        self.session.add(event)
        self.session.flush()
        return event

    def get_by_id(self, event_id: int) -> Optional[HorseEvent]:
        return self.session.get(HorseEvent, event_id)

    def get_by_horse(self, horse_id: int) -> list[HorseEvent]:
        """Events of one horse, most recent first."""
        statement = (select(HorseEvent).where(HorseEvent.horse_id == horse_id)
                     .order_by(HorseEvent.event_date.desc(), HorseEvent.id.desc()))
        return list(self.session.exec(statement).all())

    def update(self, event: HorseEvent) -> HorseEvent:
        self.session.add(event)
        self.session.commit()
        self.session.refresh(event)
        return event

    def delete(self, event_id: int) -> bool:
        event = self.get_by_id(event_id)
        if event:
            self.session.delete(event)
            self.session.commit()
            return True
        return False
