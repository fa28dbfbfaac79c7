"""
Notification service and email dispatcher.

``NotificationService.notify`` writes a :class:`Notification` row inside
the caller's transaction.  The row is both the in-app notification and
the outbox entry for email delivery.  Notifying is best-effort: a
failure is logged and never aborts the mutation that triggered it.

``NotificationDispatcher`` runs separately (see
``scripts/dispatch_notifications.py``) and sends the email copy of
undelivered rows, retrying up to ``NOTIFICATION_MAX_ATTEMPTS`` times.
Delivery is at-least-once.
"""

import datetime
import logging
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import Optional, Protocol

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import settings
from app.db.repositories.notification import NotificationRepository
from app.models.enums import NotificationType
from app.models.notification import Notification, NotificationPreference
from app.models.user import User
from app.schemas.notification import NotificationPreferenceUpdate

logger = logging.getLogger(__name__)


class NotificationService:
    """In-app notifications, preferences and the outbox writer."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = NotificationRepository(session)

    def notify(self, user_email: str, type: NotificationType, title: str, message: str,
               related_entity_type: Optional[str] = None, related_entity_id: Optional[object] = None,
               link: Optional[str] = None, ) -> Optional[Notification]:
        """Queue a notification in the current transaction.

        Does not commit.  Returns None if the user disabled both channels
        for this type or if the row could not be written.
        """
        try:
            with self.session.begin_nested():
                preference = self.repository.get_preference(user_email, type.value)
                if preference and not preference.in_app_enabled and not preference.email_enabled:
                    return None
                return self.repository.stage(Notification(
                    user_email=user_email.lower(),
                    type=type.value,
                    title=title,
                    message=message,
                    related_entity_type=related_entity_type,
                    related_entity_id=str(related_entity_id) if related_entity_id is not None else None,
                    link=link,
                ))
        except Exception:
            logger.exception("Failed to queue %s notification for %s", type.value, user_email)
            return None

    # ------------------------------------------------------------------
    # Inbox
    # ------------------------------------------------------------------

    def list_for_user(self, user: User, unread_only: bool = False) -> list[Notification]:
        hidden = { p.notification_type for p in self.repository.get_preferences(user.email) if not p.in_app_enabled }
        return [n for n in self.repository.get_for_user(user.email, unread_only=unread_only) if n.type not in hidden]

    def unread_count(self, user: User) -> int:
        return self.repository.count_unread(user.email)

    def mark_read(self, user: User, notification_id: int) -> Notification:
        entry = self._get_owned_entry(user, notification_id)
        entry.read = True
        return self.repository.update(entry)

    def mark_all_read(self, user: User) -> int:
        return self.repository.mark_all_read(user.email)

    def delete(self, user: User, notification_id: int) -> None:
        self._get_owned_entry(user, notification_id)
        self.repository.delete(notification_id)

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def get_preferences(self, user: User) -> list[NotificationPreference]:
        """One preference per notification type; missing rows default to enabled."""
        stored = { p.notification_type: p for p in self.repository.get_preferences(user.email) }
        return [
            stored.get(t.value) or NotificationPreference(user_email=user.email, notification_type=t.value)
            for t in NotificationType
        ]

    def set_preference(self, user: User, data: NotificationPreferenceUpdate) -> NotificationPreference:
        preference = self.repository.get_preference(user.email, data.notification_type)
        if not preference:
            preference = NotificationPreference(user_email=user.email, notification_type=data.notification_type)
        preference.email_enabled = data.email_enabled
        preference.in_app_enabled = data.in_app_enabled
        preference.updated_at = datetime.datetime.utcnow()
        return self.repository.save_preference(preference)

    def _get_owned_entry(self, user: User, notification_id: int) -> Notification:
        entry = self.repository.get_by_id(notification_id)
        if not entry or entry.user_email != user.email:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
        return entry


# ======================================================================
# Delivery
# ======================================================================


class EmailSender(Protocol):
    def send(self, to_email: str, subject: str, body: str) -> None:
        ...


class SmtpEmailSender:
    """Plain-text email over SMTP using the ``SMTP_*`` settings."""

    def send(self, to_email: str, subject: str, body: str) -> None:
        msg = MIMEText(body, "plain")
        msg["Subject"] = subject
        msg["From"] = settings.EMAIL_FROM
        msg["To"] = to_email

        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
            if settings.SMTP_USE_TLS:
                server.starttls()
            if settings.SMTP_USER:
                server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            server.send_message(msg)


class LoggingEmailSender:
    """Development sender: logs instead of sending."""

    def send(self, to_email: str, subject: str, body: str) -> None:
        logger.info("Would send email to %s: %s", to_email, subject)


def default_sender() -> EmailSender:
    return SmtpEmailSender() if settings.SMTP_HOST else LoggingEmailSender()


@dataclass
class DispatchReport:
    sent: int = 0
    failed: int = 0
    skipped: int = 0


class NotificationDispatcher:
    """Delivers the email copy of queued notifications."""

    def __init__(self, session: Session, sender: Optional[EmailSender] = None,
                 max_attempts: Optional[int] = None):
        self.repository = NotificationRepository(session)
        self.sender = sender or default_sender()
        self.max_attempts = max_attempts or settings.NOTIFICATION_MAX_ATTEMPTS

    def dispatch_pending(self, limit: int = 100) -> DispatchReport:
        report = DispatchReport()
        for entry in self.repository.get_undelivered(self.max_attempts, limit=limit):
            preference = self.repository.get_preference(entry.user_email, entry.type)
            if preference and not preference.email_enabled:
                # exhaust attempts so the row leaves the outbox
                entry.delivery_attempts = self.max_attempts
                entry.last_error = "email disabled by user preference"
                self.repository.update(entry)
                report.skipped += 1
                continue

            try:
                self.sender.send(entry.user_email, entry.title, self._body(entry))
            except Exception as e:
                logger.warning("Delivery of notification %s failed (attempt %s): %s",
                               entry.id, entry.delivery_attempts + 1, e)
                self.repository.record_attempt(entry, error=str(e) or e.__class__.__name__)
                report.failed += 1
            else:
                self.repository.record_attempt(entry)
                report.sent += 1

        logger.info("Notification dispatch: %s sent, %s failed, %s skipped",
                    report.sent, report.failed, report.skipped)
        return report

    @staticmethod
    def _body(entry: Notification) -> str:
        body = entry.message
        if entry.link:
            body = f"{body}\n\n{settings.FRONTEND_URL.rstrip('/')}{entry.link}"
        return body
