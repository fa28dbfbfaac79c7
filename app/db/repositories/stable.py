"""
Stable repository.

Handles database operations for :class:`Stable` and :class:`StableEvent`.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.stable import Stable, StableEvent


class StableRepository:
    """Repository for Stable database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, stable: Stable) -> Stable:
        self.session.add(stable)
        self.session.commit()
        self.session.refresh(stable)
        return stable

    def get_by_id(self, stable_id: int) -> Optional[Stable]:
        return self.session.get(Stable, stable_id)

    def filter(self, approval_status: Optional[str] = None, manager_email: Optional[str] = None, ) -> list[Stable]:
        statement = select(Stable)
        if approval_status:
            statement = statement.where(Stable.approval_status == approval_status.lower())
        if manager_email:
            statement = statement.where(Stable.manager_email == manager_email.lower())
        statement = statement.order_by(Stable.name)
        return list(self.session.exec(statement).all())

    def get_all(self) -> list[Stable]:
        return list(self.session.exec(select(Stable).order_by(Stable.id)).all())

    def manages_other_stable(self, manager_email: str, exclude_stable_id: int) -> bool:
        """Whether ``manager_email`` manages any stable (any status) besides the excluded one.

        Scans the full stable set; there is no index on (manager_email, status)
        and the table is small.
        """
        email = manager_email.lower()
        return any(s.manager_email == email and s.id != exclude_stable_id for s in self.get_all())

    def update(self, stable: Stable) -> Stable:
        self.session.add(stable)
        self.session.commit()
        self.session.refresh(stable)
        return stable

    def stage(self, stable: Stable) -> Stable:
        """Add without committing; the caller owns the transaction."""
        self.session.add(stable)
        self.session.flush()
        return stable

    def delete(self, stable_id: int) -> bool:
        """Delete a stable together with its events."""
        stable = self.get_by_id(stable_id)
        if not stable:
            return False
        for event in self.get_events(stable_id):
            self.session.delete(event)
        self.session.delete(stable)
        self.session.commit()
        return True

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def get_events(self, stable_id: int) -> list[StableEvent]:
        statement = (select(StableEvent).where(StableEvent.stable_id == stable_id)
                     .order_by(StableEvent.event_date))
        return list(self.session.exec(statement).all())

    def get_event(self, event_id: int) -> Optional[StableEvent]:
        return self.session.get(StableEvent, event_id)

    def save_event(self, event: StableEvent) -> StableEvent:
        self.session.add(event)
        self.session.commit()
        self.session.refresh(event)
        return event

    def delete_event(self, event_id: int) -> bool:
        event = self.get_event(event_id)
        if event:
            self.session.delete(event)
            self.session.commit()
            return True
        return False
