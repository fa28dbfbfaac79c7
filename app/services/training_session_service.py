"""
Training session service.

Sessions are created singly, as a weekly recurrence or from a
spreadsheet import.  Every multi-session request is best-effort: each
creation runs in its own savepoint, failures are reported per item and
never undo the sessions that succeeded.

The rider is notified of every creation, update, cancellation and
deletion through :class:`NotificationService`.  Only the rider can verify
a session, which marks it ``completed``.
"""

import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.training_session import TrainingSessionRepository
from app.db.repositories.user import UserRepository
from app.models.enums import EventStatus, NotificationType, Role
from app.models.training_session import TrainingSession
from app.models.user import User
from app.scheduling.recurrence import generate_recurring
from app.schemas.training_session import (BatchCreateResult, SessionDraft, TrainingSessionCreate,
                                          TrainingSessionResponse, TrainingSessionUpdate, )
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def format_when(moment: datetime.datetime) -> str:
    """``Jan 10, 2026 at 2:00 PM``"""
    return f"{moment:%b} {moment.day}, {moment.year} at {moment.hour % 12 or 12}:{moment:%M %p}"


def trainer_label(user: User) -> str:
    return user.first_name or user.full_name or "Your trainer"


class TrainingSessionService:
    """Service for training session business logic."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = TrainingSessionRepository(session)
        self.users = UserRepository(session)
        self.notifications = NotificationService(session)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_for_user(self, user: User, as_rider: bool = False, start: Optional[datetime.datetime] = None,
                      end: Optional[datetime.datetime] = None, ) -> list[TrainingSession]:
        if as_rider:
            return self.repository.filter(rider_email=user.email, start=start, end=end)
        return self.repository.filter(trainer_email=user.email, start=start, end=end)

    def get_by_id(self, user: User, entry_id: int) -> TrainingSession:
        entry = self.repository.get_by_id(entry_id)
        if not entry or (user.email not in (entry.trainer_email, entry.rider_email)
                         and not user.has_role(Role.ADMIN.value)):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Training session not found")
        return entry

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create(self, trainer: User, data: TrainingSessionCreate) -> BatchCreateResult:
        """Schedule one session, or ``recurrence_weeks`` weekly sessions when recurring."""
        draft = data.to_draft()
        drafts = generate_recurring(draft, data.recurrence_weeks) if data.is_recurring else [draft]
        return self.create_batch(trainer, drafts)

    def create_batch(self, trainer: User, drafts: list[SessionDraft]) -> BatchCreateResult:
        """Create every draft independently and report what failed."""
        self._require_trainer(trainer)

        created: list[TrainingSession] = []
        errors: list[str] = []
        names = { email: u.display_name
                  for email, u in self.users.get_by_emails([d.rider_email for d in drafts]).items() }

        for draft in drafts:
            try:
                with self.session.begin_nested():
                    entry = self.repository.stage(TrainingSession(
                        trainer_email=trainer.email,
                        rider_email=draft.rider_email.lower(),
                        rider_name=draft.rider_name or names.get(draft.rider_email.lower(), draft.rider_email),
                        horse_name=draft.horse_name,
                        session_date=draft.session_date,
                        duration=draft.duration,
                        session_type=draft.session_type,
                        notes=draft.notes,
                        is_recurring=draft.is_recurring,
                        recurring_group_id=draft.recurring_group_id,
                    ))
            except Exception as e:
                logger.warning("Could not create session on %s for %s: %s",
                               draft.session_date, draft.rider_email, e)
                errors.append(f"{draft.session_date:%Y-%m-%d %H:%M}: {e}")
                continue

            created.append(entry)
            self.notifications.notify(
                entry.rider_email,
                NotificationType.SESSION_SCHEDULED,
                "New Training Session Scheduled",
                f"{trainer_label(trainer)} scheduled a {entry.session_type} session for "
                f"{format_when(entry.session_date)}.",
                related_entity_type="TrainingSession",
                related_entity_id=entry.id,
                link=f"/RiderProfile?highlight={entry.id}",
            )

        self.session.commit()
        for entry in created:
            self.session.refresh(entry)

        logger.info("Trainer %s created %s session(s), %s failed", trainer.email, len(created), len(errors))
        return BatchCreateResult(created=[self._to_response(e) for e in created], errors=errors)

    # ------------------------------------------------------------------
    # Mutation (one occurrence at a time)
    # ------------------------------------------------------------------

    def update(self, trainer: User, entry_id: int, data: TrainingSessionUpdate) -> TrainingSession:
        entry = self._get_owned_entry(trainer, entry_id)
        changes = data.changes()
        for key, value in changes.items():
            setattr(entry, key, value)
        entry.updated_at = datetime.datetime.utcnow()

        if changes.get("status") == EventStatus.CANCELLED.value:
            self._notify_cancelled(trainer, entry)
        else:
            self.notifications.notify(
                entry.rider_email,
                NotificationType.SESSION_UPDATED,
                "Training Session Updated",
                f"{trainer_label(trainer)} updated your {entry.session_type} session. "
                f"New time: {format_when(entry.session_date)}.",
                related_entity_type="TrainingSession",
                related_entity_id=entry.id,
                link=f"/RiderProfile?highlight={entry.id}",
            )
        return self.repository.update(entry)

    def verify(self, rider: User, entry_id: int) -> TrainingSession:
        """The rider confirms the session took place; it becomes ``completed``."""
        entry = self.repository.get_by_id(entry_id)
        if not entry:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Training session not found")
        if entry.rider_email != rider.email:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the rider can verify a session")
        if entry.status == EventStatus.CANCELLED.value:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Cancelled sessions cannot be verified")

        now = datetime.datetime.utcnow()
        entry.rider_verified = True
        entry.rider_verified_at = now
        entry.status = EventStatus.COMPLETED.value
        entry.updated_at = now
        logger.info("Rider %s verified session %s", rider.email, entry.id)
        return self.repository.update(entry)

    def cancel(self, trainer: User, entry_id: int) -> TrainingSession:
        entry = self._get_owned_entry(trainer, entry_id)
        if entry.status == EventStatus.CANCELLED.value:
            return entry
        entry.status = EventStatus.CANCELLED.value
        entry.updated_at = datetime.datetime.utcnow()
        self._notify_cancelled(trainer, entry)
        return self.repository.update(entry)

    def delete(self, trainer: User, entry_id: int) -> None:
        """Delete one occurrence; the rest of its recurrence group is untouched."""
        entry = self._get_owned_entry(trainer, entry_id)
        if entry.status != EventStatus.CANCELLED.value:
            self._notify_cancelled(trainer, entry)
        self.repository.delete(entry_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _notify_cancelled(self, trainer: User, entry: TrainingSession) -> None:
        self.notifications.notify(
            entry.rider_email,
            NotificationType.SESSION_CANCELLED,
            "Training Session Cancelled",
            f"Your {entry.session_type} session on {format_when(entry.session_date)} has been cancelled by "
            f"{trainer.first_name or trainer.full_name or 'your trainer'}.",
            related_entity_type="TrainingSession",
            related_entity_id=entry.id,
            link="/RiderProfile",
        )

    @staticmethod
    def _require_trainer(user: User) -> None:
        if not (user.has_role(Role.TRAINER.value) or user.has_role(Role.ADMIN.value)):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only trainers can schedule sessions")

    def _get_owned_entry(self, user: User, entry_id: int) -> TrainingSession:
        entry = self.repository.get_by_id(entry_id)
        if not entry or (entry.trainer_email != user.email and not user.has_role(Role.ADMIN.value)):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Training session not found", )
        return entry

    @staticmethod
    def _to_response(entry: TrainingSession) -> TrainingSessionResponse:
        return TrainingSessionResponse.model_validate(entry)
