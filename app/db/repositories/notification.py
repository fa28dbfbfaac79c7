"""
Notification repository.

Covers in-app notifications, the delivery outbox view over the same
table, and per-type notification preferences.
"""

import datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.notification import Notification, NotificationPreference


class NotificationRepository:
    """Repository for Notification and NotificationPreference operations."""

    def __init__(self, session: Session):
        self.session = session

    def stage(self, notification: Notification) -> Notification:
        """Queue a notification in the caller's unit of work."""
        self.session.add(notification)
        self.session.flush()
        return notification

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        return self.session.get(Notification, notification_id)

    def get_for_user(self, user_email: str, unread_only: bool = False, limit: int = 100) -> list[Notification]:
        statement = select(Notification).where(Notification.user_email == user_email.lower())
        if unread_only:
            statement = statement.where(Notification.read == False)  # noqa: E712
        statement = statement.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit)
        return list(self.session.exec(statement).all())

    def count_unread(self, user_email: str) -> int:
        statement = (select(func.count()).select_from(Notification)
                     .where(Notification.user_email == user_email.lower(), Notification.read == False))  # noqa: E712
        return self.session.exec(statement).first() or 0

    def mark_all_read(self, user_email: str) -> int:
        entries = self.get_for_user(user_email, unread_only=True, limit=10_000)
        for entry in entries:
            entry.read = True
            self.session.add(entry)
        self.session.commit()
        return len(entries)

    def update(self, notification: Notification) -> Notification:
        self.session.add(notification)
        self.session.commit()
        self.session.refresh(notification)
        return notification

    def delete(self, notification_id: int) -> bool:
        entry = self.get_by_id(notification_id)
        if entry:
            self.session.delete(entry)
            self.session.commit()
            return True
        return False

    # ------------------------------------------------------------------
    # Outbox
    # ------------------------------------------------------------------

    def get_undelivered(self, max_attempts: int, limit: int = 100) -> list[Notification]:
        """Rows whose email copy has not been sent and still has attempts left."""
        statement = (select(Notification)
                     .where(Notification.email_sent_at == None,  # noqa: E711
                            Notification.delivery_attempts < max_attempts)
                     .order_by(Notification.id).limit(limit))
        return list(self.session.exec(statement).all())

    def record_attempt(self, notification: Notification, error: Optional[str] = None) -> Notification:
        notification.delivery_attempts += 1
        if error is None:
            notification.email_sent_at = datetime.datetime.utcnow()
            notification.last_error = None
        else:
            notification.last_error = error[:1000]
        return self.update(notification)

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def get_preferences(self, user_email: str) -> list[NotificationPreference]:
        statement = (select(NotificationPreference)
                     .where(NotificationPreference.user_email == user_email.lower())
                     .order_by(NotificationPreference.notification_type))
        return list(self.session.exec(statement).all())

    def get_preference(self, user_email: str, notification_type: str) -> Optional[NotificationPreference]:
        statement = select(NotificationPreference).where(
            NotificationPreference.user_email == user_email.lower(),
            NotificationPreference.notification_type == notification_type, )
        return self.session.exec(statement).first()

    def save_preference(self, preference: NotificationPreference) -> NotificationPreference:
        self.session.add(preference)
        self.session.commit()
        self.session.refresh(preference)
        return preference
