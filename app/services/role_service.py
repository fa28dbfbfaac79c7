"""
Role service.

The only place that changes ``User.roles``.  Grants and revokes are
idempotent and staged in the caller's unit of work: nothing here
commits, so a caller can combine several role changes with other writes
and commit them together.
"""

import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.user import UserRepository
from app.models.enums import Role
from app.models.user import User

logger = logging.getLogger(__name__)


class RoleService:
    """Idempotent role grant/revoke by user email."""

    def __init__(self, session: Session):
        self.repository = UserRepository(session)

    def grant(self, email: str, role: Role) -> Optional[User]:
        """Add ``role`` to the user if absent.

        Returns:
            The user, or None when no account exists for ``email``
        """
        user = self.repository.get_by_email(email)
        if not user:
            logger.warning("Cannot grant %s: no user %s", role.value, email)
            return None
        if role.value not in user.roles:
            # reassign so the JSON column is flagged dirty
            user.roles = [*user.roles, role.value]
            user.updated_at = datetime.datetime.utcnow()
            self.repository.stage(user)
            logger.info("Granted %s to %s", role.value, user.email)
        return user

    def revoke(self, email: str, role: Role) -> Optional[User]:
        """Remove ``role`` from the user if present."""
        user = self.repository.get_by_email(email)
        if not user:
            return None
        if role.value in user.roles:
            user.roles = [r for r in user.roles if r != role.value]
            user.updated_at = datetime.datetime.utcnow()
            self.repository.stage(user)
            logger.info("Revoked %s from %s", role.value, user.email)
        return user

    def set_roles(self, email: str, roles: list[Role]) -> User:
        """Replace the role set (admin edit).  Commits."""
        user = self.repository.get_by_email(email)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        # de-duplicate, keep first-seen order
        user.roles = list(dict.fromkeys(Role(r).value for r in roles))
        user.updated_at = datetime.datetime.utcnow()
        return self.repository.update(user)
