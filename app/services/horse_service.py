"""
Horse service.

Horses and their care events belong to the owner.  Recording an event
with a ``next_due_date`` queues a care reminder for the owner, or for
the event's ``reminder_email`` when one is given.
"""

import datetime
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.horse import HorseEventRepository, HorseRepository
from app.db.repositories.user import UserRepository
from app.models.enums import EventStatus, NotificationType, Role
from app.models.horse import Horse, HorseEvent
from app.models.user import User
from app.schemas.horse import HorseCreate, HorseEventCreate, HorseEventUpdate, HorseUpdate
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def format_due(moment: datetime.datetime) -> str:
    """``Monday, March 2, 2026``"""
    return f"{moment:%A, %B} {moment.day}, {moment.year}"


class HorseService:
    """CRUD for horses owned by the current user and their care events."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = HorseRepository(session)
        self.events = HorseEventRepository(session)
        self.users = UserRepository(session)
        self.notifications = NotificationService(session)

    def list_for_owner(self, owner_email: str) -> list[Horse]:
        return self.repository.filter(owner_email=owner_email)

    def get(self, horse_id: int) -> Horse:
        horse = self.repository.get_by_id(horse_id)
        if not horse:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Horse not found")
        return horse

    def create(self, owner: User, data: HorseCreate) -> Horse:
        return self.repository.create(Horse(owner_email=owner.email, **data.model_dump()))

    def update(self, owner: User, horse_id: int, data: HorseUpdate) -> Horse:
        horse = self._get_owned_entry(owner, horse_id)
        for key, value in data.changes().items():
            setattr(horse, key, value)
        horse.updated_at = datetime.datetime.utcnow()
        return self.repository.update(horse)

    def delete(self, owner: User, horse_id: int) -> None:
        self._get_owned_entry(owner, horse_id)
        for event in self.events.get_by_horse(horse_id):
            self.session.delete(event)
        self.repository.delete(horse_id)

    # ------------------------------------------------------------------
    # Care events
    # ------------------------------------------------------------------

    def list_events(self, horse_id: int) -> list[HorseEvent]:
        self.get(horse_id)
        return self.events.get_by_horse(horse_id)

    def create_event(self, owner: User, horse_id: int, data: HorseEventCreate) -> HorseEvent:
        horse = self._get_owned_entry(owner, horse_id)
        values = data.model_dump()
        if values["reminder_email"]:
            values["reminder_email"] = values["reminder_email"].lower()

        event = self.events.stage(HorseEvent(horse_id=horse.id, **values))
        if event.next_due_date:
            self._remind(horse, event)
        self.session.commit()
        self.session.refresh(event)
        logger.info("Recorded %s event %s for horse %s", event.event_type, event.id, horse.id)
        return event

    def update_event(self, owner: User, event_id: int, data: HorseEventUpdate) -> HorseEvent:
        event, horse = self._get_owned_event(owner, event_id)
        changes = data.changes()
        if changes.get("reminder_email"):
            changes["reminder_email"] = changes["reminder_email"].lower()
        previous_due = event.next_due_date

        for key, value in changes.items():
            setattr(event, key, value)
        now = datetime.datetime.utcnow()
        if changes.get("status") == EventStatus.COMPLETED.value and not event.completed_at:
            event.completed_at = now
        event.updated_at = now

        if event.next_due_date and event.next_due_date != previous_due:
            self._remind(horse, event)
        return self.events.update(event)

    def delete_event(self, owner: User, event_id: int) -> None:
        self._get_owned_event(owner, event_id)
        self.events.delete(event_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _remind(self, horse: Horse, event: HorseEvent) -> None:
        owner = self.users.get_by_email(horse.owner_email)
        name = (owner.first_name or owner.full_name) if owner else None
        self.notifications.notify(
            event.reminder_email or horse.owner_email,
            NotificationType.HORSE_CARE_REMINDER,
            f"Reminder: {event.event_type} due for {horse.name}",
            f"Hi {name or 'there'}, {horse.name} has a {event.event_type} appointment due on "
            f"{format_due(event.next_due_date)}.",
            related_entity_type="HorseEvent",
            related_entity_id=event.id,
            link="/MyHorses",
        )

    def _get_owned_entry(self, user: User, horse_id: int) -> Horse:
        horse = self.repository.get_by_id(horse_id)
        if not horse or (horse.owner_email != user.email and not user.has_role(Role.ADMIN.value)):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Horse not found")
        return horse

    def _get_owned_event(self, user: User, event_id: int) -> tuple[HorseEvent, Horse]:
        event = self.events.get_by_id(event_id)
        if not event:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Horse event not found")
        horse = self.repository.get_by_id(event.horse_id)
        if not horse or (horse.owner_email != user.email and not user.has_role(Role.ADMIN.value)):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
        return event, horse
