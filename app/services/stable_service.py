"""
Stable service.

Approval workflow::

    pending  --approve--> approved
    pending  --reject---> rejected
    rejected --approve--> approved

Any other transition is a 409.  Deletion is allowed from every state and
does not revoke roles.

Role side effects go through :class:`RoleService` and are committed in
the same transaction as the stable change.
"""

import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.stable import StableRepository
from app.db.repositories.user import UserRepository
from app.models.enums import ApprovalStatus, Role
from app.models.stable import Stable, StableEvent
from app.models.user import User
from app.schemas.stable import (StableCreate, StableEventCreate, StableEventUpdate, StableUpdate, )
from app.services.role_service import RoleService

logger = logging.getLogger(__name__)

_ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    ApprovalStatus.PENDING.value: { ApprovalStatus.APPROVED.value, ApprovalStatus.REJECTED.value },
    ApprovalStatus.REJECTED.value: { ApprovalStatus.APPROVED.value },
    ApprovalStatus.APPROVED.value: set(),
}


class StableService:
    """Service for stable registration, approval and management."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = StableRepository(session)
        self.users = UserRepository(session)
        self.roles = RoleService(session)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_stables(self, approval_status: Optional[str] = None, manager_email: Optional[str] = None) -> list[Stable]:
        return self.repository.filter(approval_status=approval_status, manager_email=manager_email)

    def get(self, stable_id: int) -> Stable:
        stable = self.repository.get_by_id(stable_id)
        if not stable:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stable not found")
        return stable

    # ------------------------------------------------------------------
    # Registration / editing
    # ------------------------------------------------------------------

    def create(self, manager: User, data: StableCreate) -> Stable:
        """Register a stable as pending.  Roles are granted on approval."""
        stable = Stable(manager_email=manager.email, **data.model_dump())
        stable = self.repository.create(stable)
        logger.info("Stable %s registered by %s (pending)", stable.id, manager.email)
        return stable

    def update(self, user: User, stable_id: int, data: StableUpdate) -> Stable:
        stable = self._get_managed(user, stable_id)
        for key, value in data.changes().items():
            setattr(stable, key, value)
        stable.updated_at = datetime.datetime.utcnow()
        return self.repository.update(stable)

    def add_trainer(self, user: User, stable_id: int, trainer_email: str) -> Stable:
        """Add a trainer to the stable and grant them ``Trainer``."""
        stable = self._get_managed(user, stable_id)
        email = trainer_email.lower()
        if not self.users.get_by_email(email):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trainer user not found")
        if email not in stable.trainer_emails:
            stable.trainer_emails = [*stable.trainer_emails, email]
            stable.updated_at = datetime.datetime.utcnow()
        return self._commit(stable, lambda: self.roles.grant(email, Role.TRAINER))

    def remove_trainer(self, user: User, stable_id: int, trainer_email: str) -> Stable:
        """Remove a trainer.  Their ``Trainer`` role is kept."""
        stable = self._get_managed(user, stable_id)
        email = trainer_email.lower()
        if email not in stable.trainer_emails:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trainer not assigned to this stable")
        stable.trainer_emails = [e for e in stable.trainer_emails if e != email]
        stable.updated_at = datetime.datetime.utcnow()
        return self.repository.update(stable)

    # ------------------------------------------------------------------
    # Admin workflow
    # ------------------------------------------------------------------

    def approve(self, stable_id: int) -> Stable:
        stable = self.get(stable_id)
        self._transition(stable, ApprovalStatus.APPROVED)
        return self._commit(stable, lambda: self.roles.grant(stable.manager_email, Role.STABLE_MANAGER))

    def reject(self, stable_id: int) -> Stable:
        stable = self.get(stable_id)
        self._transition(stable, ApprovalStatus.REJECTED)
        return self.repository.update(stable)

    def change_manager(self, stable_id: int, new_manager_email: str) -> Stable:
        """Reassign the manager in one transaction.

        The previous manager loses ``StableManager`` unless they still manage
        another stable (in any approval state); the new manager gains it.
        """
        stable = self.get(stable_id)
        new_email = new_manager_email.lower()
        old_email = stable.manager_email

        if new_email == old_email:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail="New manager is already the manager of this stable")
        if not self.users.get_by_email(new_email):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="New manager user not found")

        stable.manager_email = new_email
        stable.updated_at = datetime.datetime.utcnow()

        def _roles() -> None:
            if not self.repository.manages_other_stable(old_email, exclude_stable_id=stable.id):
                self.roles.revoke(old_email, Role.STABLE_MANAGER)
            self.roles.grant(new_email, Role.STABLE_MANAGER)

        stable = self._commit(stable, _roles)
        logger.info("Stable %s manager changed %s -> %s", stable.id, old_email, new_email)
        return stable

    def delete(self, stable_id: int) -> None:
        self.get(stable_id)
        self.repository.delete(stable_id)
        logger.info("Stable %s deleted", stable_id)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def list_events(self, stable_id: int) -> list[StableEvent]:
        self.get(stable_id)
        return self.repository.get_events(stable_id)

    def create_event(self, user: User, stable_id: int, data: StableEventCreate) -> StableEvent:
        self._get_managed(user, stable_id)
        event = StableEvent(stable_id=stable_id, **data.model_dump())
        return self.repository.save_event(event)

    def update_event(self, user: User, stable_id: int, event_id: int, data: StableEventUpdate) -> StableEvent:
        self._get_managed(user, stable_id)
        event = self._get_event(stable_id, event_id)
        for key, value in data.changes().items():
            setattr(event, key, value)
        return self.repository.save_event(event)

    def delete_event(self, user: User, stable_id: int, event_id: int) -> None:
        self._get_managed(user, stable_id)
        self._get_event(stable_id, event_id)
        self.repository.delete_event(event_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _transition(stable: Stable, target: ApprovalStatus) -> None:
        if target.value not in _ALLOWED_TRANSITIONS.get(stable.approval_status, set()):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail=f"Cannot change stable from '{stable.approval_status}' to '{target.value}'", )
        stable.approval_status = target.value
        stable.updated_at = datetime.datetime.utcnow()

    def _commit(self, stable: Stable, side_effects) -> Stable:
        """Stage the stable and its role side effects, then commit once."""
        try:
            self.repository.stage(stable)
            side_effects()
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(stable)
        return stable

    def _get_managed(self, user: User, stable_id: int) -> Stable:
        stable = self.get(stable_id)
        if stable.manager_email != user.email and not user.has_role(Role.ADMIN.value):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to manage this stable")
        return stable

    def _get_event(self, stable_id: int, event_id: int) -> StableEvent:
        event = self.repository.get_event(event_id)
        if not event or event.stable_id != stable_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stable event not found")
        return event
