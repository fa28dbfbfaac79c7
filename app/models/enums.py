"""
Shared enumerations.

Values are the wire/storage representation; columns store ``.value``.
"""

from enum import Enum


class Role(str, Enum):
    ADMIN = "Admin"
    TRAINER = "Trainer"
    RIDER = "Rider"
    STABLE_MANAGER = "StableManager"
    GUARDIAN = "Parent/Guardian"


class ApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SessionType(str, Enum):
    LESSON = "Lesson"
    TRAINING = "Training"
    HORSE_TRAINING = "Horse Training"
    HORSE_TRANSPORT = "Horse Transport"
    COMPETITION_PREP = "Competition Prep"
    EVALUATION = "Evaluation"
    OTHER = "Other"


class EventStatus(str, Enum):
    """Status shared by training sessions and competitions."""

    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    REQUESTED = "requested"
    PAID = "paid"


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    CAD = "CAD"
    AUD = "AUD"
    ILS = "ILS"


class ConnectionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationType(str, Enum):
    SESSION_SCHEDULED = "session_scheduled"
    SESSION_UPDATED = "session_updated"
    SESSION_CANCELLED = "session_cancelled"
    PAYMENT_REQUEST = "payment_request"
    CONNECTION_REQUEST = "connection_request"
    HORSE_CARE_REMINDER = "horse_care_reminder"
    GUARDIAN_INVITE = "guardian_invite"


class ContactMessageType(str, Enum):
    GENERAL = "general"
    BUG_REPORT = "bug_report"
    FEATURE_SUGGESTION = "feature_suggestion"


class ContactMessageStatus(str, Enum):
    NEW = "new"
    READ = "read"
    RESOLVED = "resolved"


class StableEventType(str, Enum):
    COMPETITION = "Competition"
    TRAINING = "Training"
    CLINIC = "Clinic"
    SHOW = "Show"
    OTHER = "Other"


class HorseEventType(str, Enum):
    FARRIER = "Farrier"
    VACCINATION = "Vaccination"
    VETERINARIAN = "Veterinarian"
    OTHER = "Other"


class GuardianStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
