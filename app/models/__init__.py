"""SQLModel database models."""

from app.models.user import User
from app.models.stable import Stable, StableEvent
from app.models.horse import Horse, HorseEvent
from app.models.training_session import TrainingSession
from app.models.competition import Competition
from app.models.billing_rate import BillingRate
from app.models.billing_summary import MonthlyBillingSummary
from app.models.user_connection import UserConnection
from app.models.guardian_link import GuardianLink
from app.models.notification import Notification, NotificationPreference
from app.models.contact_message import ContactMessage

__all__ = [
    "User",
    "Stable",
    "StableEvent",
    "Horse",
    "HorseEvent",
    "TrainingSession",
    "Competition",
    "BillingRate",
    "MonthlyBillingSummary",
    "UserConnection",
    "GuardianLink",
    "Notification",
    "NotificationPreference",
    "ContactMessage",
]
