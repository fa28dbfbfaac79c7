"""
User connection service.

A connection is a request from one user to another (usually trainer to
rider).  Only the recipient may approve or reject it; either party may
delete it.

Guardian links let a parent or guardian follow a minor rider's monthly
billing summaries.
"""

import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.guardian_link import GuardianLinkRepository
from app.db.repositories.user import UserRepository
from app.db.repositories.user_connection import UserConnectionRepository
from app.models.enums import ConnectionStatus, NotificationType, Role
from app.models.guardian_link import GuardianLink
from app.models.user import User
from app.models.user_connection import UserConnection
from app.schemas.connection import ConnectionCreate, GuardianLinkCreate, GuardianStatusUpdate
from app.services.notification_service import NotificationService
from app.services.role_service import RoleService

logger = logging.getLogger(__name__)

TRAINER_RIDER = "Trainer-Rider"


class ConnectionService:
    """Service for user connection business logic."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = UserConnectionRepository(session)
        self.users = UserRepository(session)
        self.notifications = NotificationService(session)

    def list_for_user(self, user: User, status_filter: Optional[str] = None,
                      connection_type: Optional[str] = None, ) -> list[UserConnection]:
        """Connections the user sent or received."""
        sent = self.repository.filter(from_user_email=user.email, status=status_filter,
                                      connection_type=connection_type)
        received = self.repository.filter(to_user_email=user.email, status=status_filter,
                                          connection_type=connection_type)
        return sorted({ c.id: c for c in sent + received }.values(), key=lambda c: c.id)

    def request(self, user: User, data: ConnectionCreate) -> UserConnection:
        to_email = data.to_user_email.lower()
        if to_email == user.email:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot connect to yourself")
        if self.repository.get_by_key(user.email, to_email, data.connection_type):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Connection already exists")

        connection = UserConnection(from_user_email=user.email, to_user_email=to_email,
                                    connection_type=data.connection_type, message=data.message)
        self.session.add(connection)
        self.session.flush()
        self.notifications.notify(
            to_email,
            NotificationType.CONNECTION_REQUEST,
            "New Connection Request",
            f"{user.display_name} wants to connect with you.",
            related_entity_type="UserConnection",
            related_entity_id=connection.id,
            link="/Connections",
        )
        self.session.commit()
        self.session.refresh(connection)
        return connection

    def approve(self, user: User, connection_id: int) -> UserConnection:
        return self._respond(user, connection_id, ConnectionStatus.APPROVED)

    def reject(self, user: User, connection_id: int) -> UserConnection:
        return self._respond(user, connection_id, ConnectionStatus.REJECTED)

    def delete(self, user: User, connection_id: int) -> None:
        connection = self.repository.get_by_id(connection_id)
        if not connection or user.email not in (connection.from_user_email, connection.to_user_email):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection not found")
        self.repository.delete(connection_id)

    def approved_riders(self, trainer: User) -> dict[str, str]:
        """Approved riders of a trainer: lower-cased email -> display name."""
        connections = self.repository.filter(from_user_email=trainer.email, status=ConnectionStatus.APPROVED.value,
                                             connection_type=TRAINER_RIDER)
        emails = [c.to_user_email for c in connections]
        users = self.users.get_by_emails(emails)
        return { e.lower(): users[e.lower()].display_name if e.lower() in users else e for e in emails }

    def _respond(self, user: User, connection_id: int, new_status: ConnectionStatus) -> UserConnection:
        connection = self.repository.get_by_id(connection_id)
        if not connection or user.email not in (connection.from_user_email, connection.to_user_email):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection not found")
        if connection.to_user_email != user.email:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                detail="Only the recipient can respond to a connection request")
        connection.status = new_status.value
        connection.updated_at = datetime.datetime.utcnow()
        logger.info("Connection %s %s by %s", connection.id, new_status.value, user.email)
        return self.repository.update(connection)


class GuardianService:
    """Links between a parent or guardian and a minor rider.

    Only the user the minor lists as ``parent_email`` can create the link.
    Creating it grants the guardian role; removing the guardian's last
    link revokes it.
    """

    def __init__(self, session: Session):
        self.session = session
        self.repository = GuardianLinkRepository(session)
        self.users = UserRepository(session)
        self.roles = RoleService(session)
        self.notifications = NotificationService(session)

    def list_for_user(self, user: User) -> list[GuardianLink]:
        if user.has_role(Role.ADMIN.value):
            return self.repository.list_all()
        return self.repository.for_user(user.email)

    def link(self, guardian: User, data: GuardianLinkCreate) -> GuardianLink:
        minor_email = data.minor_email.lower()
        if minor_email == guardian.email:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot be your own guardian")
        minor = self.users.get_by_email(minor_email)
        if not minor:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        if (minor.parent_email or "").lower() != guardian.email:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                detail="Only the parent email on the rider's profile can link to them")
        if self.repository.get_by_key(guardian.email, minor_email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Guardian link already exists")

        link = self.repository.stage(GuardianLink(guardian_email=guardian.email, minor_email=minor_email))
        self.roles.grant(guardian.email, Role.GUARDIAN)
        self.notifications.notify(
            minor_email,
            NotificationType.GUARDIAN_INVITE,
            "Guardian Linked",
            f"{guardian.display_name} is now linked to your account as your parent or guardian.",
            related_entity_type="GuardianLink",
            related_entity_id=link.id,
            link="/Connections",
        )
        self.session.commit()
        self.session.refresh(link)
        logger.info("Guardian %s linked to %s", guardian.email, minor_email)
        return link

    def set_status(self, guardian: User, link_id: int, data: GuardianStatusUpdate) -> GuardianLink:
        link = self._get_own_link(guardian, link_id)
        link.status = data.status
        link.updated_at = datetime.datetime.utcnow()
        return self.repository.update(link)

    def unlink(self, guardian: User, link_id: int) -> None:
        link = self._get_own_link(guardian, link_id)
        self.session.delete(link)
        self.session.flush()
        remaining = self.repository.for_user(link.guardian_email)
        if not any(other.guardian_email == link.guardian_email for other in remaining):
            self.roles.revoke(link.guardian_email, Role.GUARDIAN)
        self.session.commit()

    def _get_own_link(self, user: User, link_id: int) -> GuardianLink:
        link = self.repository.get_by_id(link_id)
        if not link or user.email not in (link.guardian_email, link.minor_email):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Guardian link not found")
        if link.guardian_email != user.email:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                detail="Only the guardian can change this link")
        return link
