"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.user import User  # noqa: F401
from app.models.stable import Stable, StableEvent  # noqa: F401
from app.models.horse import Horse, HorseEvent  # noqa: F401
from app.models.training_session import TrainingSession  # noqa: F401
from app.models.competition import Competition  # noqa: F401
from app.models.billing_rate import BillingRate  # noqa: F401
from app.models.billing_summary import MonthlyBillingSummary  # noqa: F401
from app.models.user_connection import UserConnection  # noqa: F401
from app.models.guardian_link import GuardianLink  # noqa: F401
from app.models.notification import Notification, NotificationPreference  # noqa: F401
from app.models.contact_message import ContactMessage  # noqa: F401
