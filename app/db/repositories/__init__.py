"""Database repositories."""

from app.db.repositories.user import UserRepository
from app.db.repositories.stable import StableRepository
from app.db.repositories.horse import HorseRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.db.repositories.competition import CompetitionRepository
from app.db.repositories.billing_rate import BillingRateRepository
from app.db.repositories.user_connection import UserConnectionRepository
from app.db.repositories.notification import NotificationRepository
from app.db.repositories.contact_message import ContactMessageRepository

__all__ = [
    "UserRepository",
    "StableRepository",
    "HorseRepository",
    "TrainingSessionRepository",
    "CompetitionRepository",
    "BillingRateRepository",
    "UserConnectionRepository",
    "NotificationRepository",
    "ContactMessageRepository",
]
