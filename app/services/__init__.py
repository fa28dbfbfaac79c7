"""Business logic services."""

from app.services.user_service import UserService
from app.services.role_service import RoleService
from app.services.stable_service import StableService
from app.services.horse_service import HorseService
from app.services.notification_service import NotificationDispatcher, NotificationService
from app.services.training_session_service import TrainingSessionService
from app.services.competition_service import CompetitionService
from app.services.billing_service import BillingService
from app.services.connection_service import ConnectionService
from app.services.contact_service import ContactService
from app.services.schedule_service import ScheduleService
from app.services.upload_service import UploadService

__all__ = [
    "UserService",
    "RoleService",
    "StableService",
    "HorseService",
    "NotificationDispatcher",
    "NotificationService",
    "TrainingSessionService",
    "CompetitionService",
    "BillingService",
    "ConnectionService",
    "ContactService",
    "ScheduleService",
    "UploadService",
]
