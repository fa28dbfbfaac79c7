"""Pydantic schemas for request/response validation."""

from app.schemas.user import (
    GoogleLogin,
    GoogleProfile,
    UserCreate,
    UserLogin,
    UserResponse,
    UserRolesUpdate,
    UserSummary,
    UserUpdate,
)
from app.schemas.token import AuthResponse, Token, TokenData
from app.schemas.stable import (
    ManagerChange,
    StableCreate,
    StableEventCreate,
    StableEventResponse,
    StableEventUpdate,
    StableResponse,
    StableUpdate,
    TrainerAdd,
)
from app.schemas.horse import (
    HorseCreate,
    HorseEventCreate,
    HorseEventResponse,
    HorseEventUpdate,
    HorseResponse,
    HorseUpdate,
)
from app.schemas.training_session import (
    BatchCreateResult,
    SessionDraft,
    TrainingSessionCreate,
    TrainingSessionResponse,
    TrainingSessionUpdate,
)
from app.schemas.competition import (
    CompetitionCreate,
    CompetitionResponse,
    CompetitionUpdate,
    ItemToggle,
    PaymentStatusUpdate,
    RiderAdd,
    RiderCost,
    RiderCostResponse,
    RiderEntry,
)
from app.schemas.billing import (
    BillingRateResponse,
    BillingRateUpsert,
    BillingSummaryCreate,
    BillingSummaryGenerate,
    BillingSummaryResponse,
    BillingSummaryUpdate,
)
from app.schemas.connection import (
    ConnectionCreate,
    ConnectionResponse,
    GuardianLinkCreate,
    GuardianLinkResponse,
    GuardianStatusUpdate,
)
from app.schemas.partial import PartialUpdate
from app.schemas.notification import (
    NotificationPreferenceResponse,
    NotificationPreferenceUpdate,
    NotificationResponse,
    UnreadCount,
)
from app.schemas.contact import ContactMessageCreate, ContactMessageResponse, ContactStatusUpdate
from app.schemas.schedule import ImportResult, NavigateResponse, ScheduleView, UploadResponse

__all__ = [
    "GoogleLogin",
    "GoogleProfile",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserRolesUpdate",
    "UserSummary",
    "UserUpdate",
    "AuthResponse",
    "Token",
    "TokenData",
    "ManagerChange",
    "StableCreate",
    "StableEventCreate",
    "StableEventResponse",
    "StableEventUpdate",
    "StableResponse",
    "StableUpdate",
    "TrainerAdd",
    "HorseCreate",
    "HorseEventCreate",
    "HorseEventResponse",
    "HorseEventUpdate",
    "HorseResponse",
    "HorseUpdate",
    "BatchCreateResult",
    "SessionDraft",
    "TrainingSessionCreate",
    "TrainingSessionResponse",
    "TrainingSessionUpdate",
    "CompetitionCreate",
    "CompetitionResponse",
    "CompetitionUpdate",
    "ItemToggle",
    "PaymentStatusUpdate",
    "RiderAdd",
    "RiderCost",
    "RiderCostResponse",
    "RiderEntry",
    "BillingRateResponse",
    "BillingRateUpsert",
    "BillingSummaryCreate",
    "BillingSummaryGenerate",
    "BillingSummaryResponse",
    "BillingSummaryUpdate",
    "ConnectionCreate",
    "ConnectionResponse",
    "GuardianLinkCreate",
    "GuardianLinkResponse",
    "GuardianStatusUpdate",
    "PartialUpdate",
    "NotificationPreferenceResponse",
    "NotificationPreferenceUpdate",
    "NotificationResponse",
    "UnreadCount",
    "ContactMessageCreate",
    "ContactMessageResponse",
    "ContactStatusUpdate",
    "ImportResult",
    "NavigateResponse",
    "ScheduleView",
    "UploadResponse",
]
