"""
Billing service.

Per-trainer rates by session type, and the monthly summaries built from
them.  A summary with ``payment_requested`` set sends a payment request
to the rider, or to the rider's guardian (``parent_email``) while the
rider is a minor.
"""

import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.billing_rate import BillingRateRepository
from app.db.repositories.billing_summary import BillingSummaryRepository
from app.db.repositories.competition import CompetitionRepository
from app.db.repositories.guardian_link import GuardianLinkRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.db.repositories.user import UserRepository
from app.models.billing_rate import BillingRate
from app.models.billing_summary import MonthlyBillingSummary
from app.models.enums import NotificationType, PaymentStatus, Role
from app.models.user import User
from app.scheduling.calendar import ViewMode, in_range, view_range
from app.scheduling.costs import monthly_totals, rate_currency
from app.schemas.billing import BillingRateUpsert, BillingSummaryCreate, BillingSummaryUpdate
from app.services.notification_service import NotificationService
from app.services.training_session_service import trainer_label

logger = logging.getLogger(__name__)


def payment_recipient(rider: Optional[User], rider_email: str) -> str:
    """The guardian's email for a minor with one on file, otherwise the rider's."""
    if rider and rider.parent_email and rider.is_minor():
        return rider.parent_email
    return rider_email


def month_label(month: str) -> str:
    """``2026-03`` -> ``March 2026``"""
    return f"{datetime.date.fromisoformat(month + '-01'):%B %Y}"


class BillingService:
    """Per-trainer prices by session type and monthly billing summaries."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = BillingRateRepository(session)
        self.summaries = BillingSummaryRepository(session)
        self.sessions = TrainingSessionRepository(session)
        self.competitions = CompetitionRepository(session)
        self.guardians = GuardianLinkRepository(session)
        self.users = UserRepository(session)
        self.notifications = NotificationService(session)

    # ------------------------------------------------------------------
    # Rates
    # ------------------------------------------------------------------

    def list_rates(self, trainer: User) -> list[BillingRate]:
        return self.repository.get_by_trainer(trainer.email)

    def upsert(self, trainer: User, data: BillingRateUpsert) -> BillingRate:
        return self.repository.upsert(trainer.email, data.session_type, data.currency, data.rate)

    def upsert_many(self, trainer: User, items: list[BillingRateUpsert]) -> list[BillingRate]:
        """Save several rates in one transaction."""
        try:
            entries = [
                self.repository.upsert(trainer.email, item.session_type, item.currency, item.rate, commit=False)
                for item in items
            ]
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        for entry in entries:
            self.session.refresh(entry)
        currencies = { e.currency for e in self.repository.get_by_trainer(trainer.email) }
        if len(currencies) > 1:
            logger.warning("Trainer %s has rates in several currencies: %s", trainer.email, sorted(currencies))
        return entries

    def delete(self, trainer: User, session_type: str) -> None:
        if not self.repository.delete_by_key(trainer.email, session_type):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Billing rate not found")

    # ------------------------------------------------------------------
    # Monthly summaries
    # ------------------------------------------------------------------

    def list_summaries(self, user: User, trainer_email: Optional[str] = None, rider_email: Optional[str] = None,
                       month: Optional[str] = None, ) -> list[MonthlyBillingSummary]:
        """Summaries visible to ``user``: as trainer, as rider, or as an active guardian of the rider."""
        if user.has_role(Role.ADMIN.value):
            return self.summaries.filter(trainer_email=trainer_email, rider_email=rider_email, month=month)
        if rider_email and rider_email.lower() != user.email:
            if not self.guardians.is_active_guardian(user.email, rider_email):
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
            return self.summaries.filter(trainer_email=trainer_email, rider_email=rider_email, month=month)
        if rider_email:
            return self.summaries.filter(trainer_email=trainer_email, rider_email=user.email, month=month)
        return self.summaries.filter(trainer_email=user.email, month=month)

    def create_summary(self, trainer: User, data: BillingSummaryCreate) -> MonthlyBillingSummary:
        self._require_trainer(trainer)
        rider_email = data.rider_email.lower()
        if self.summaries.get_by_key(trainer.email, rider_email, data.month):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail=f"A summary for {rider_email} in {data.month} already exists")

        values = data.model_dump()
        values["rider_email"] = rider_email
        if values["total_revenue"] is None:
            values["total_revenue"] = values["sessions_revenue"] + values["competitions_revenue"]

        summary = self.summaries.stage(MonthlyBillingSummary(trainer_email=trainer.email, **values))
        if summary.payment_requested:
            self._request_payment(trainer, summary)
        self.session.commit()
        self.session.refresh(summary)
        return summary

    def update_summary(self, trainer: User, summary_id: int, data: BillingSummaryUpdate) -> MonthlyBillingSummary:
        summary = self.summaries.get_by_id(summary_id)
        if not summary:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Billing summary not found")
        if summary.trainer_email != trainer.email and not trainer.has_role(Role.ADMIN.value):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")

        changes = data.changes()
        was_requested = summary.payment_requested
        for key, value in changes.items():
            setattr(summary, key, value)
        if "total_revenue" not in changes and {"sessions_revenue", "competitions_revenue"} & changes.keys():
            summary.total_revenue = summary.sessions_revenue + summary.competitions_revenue
        summary.updated_at = datetime.datetime.utcnow()

        if summary.payment_requested and not was_requested:
            self._request_payment(trainer, summary)
        return self.summaries.update(summary)

    def generate_month(self, trainer: User, month: str) -> list[MonthlyBillingSummary]:
        """Create a summary per billable rider in ``month`` and request payment.

        Riders that already have a summary for the month are skipped.
        """
        self._require_trainer(trainer)
        start, end = view_range(ViewMode.MONTH, datetime.date.fromisoformat(month + "-01"))

        sessions = in_range(self.sessions.filter(trainer_email=trainer.email, start=start, end=end), start, end)
        competitions = in_range(self.competitions.filter(trainer_email=trainer.email), start, end,
                                date_of=lambda c: c.competition_date)
        rates = self.repository.get_by_trainer(trainer.email)
        currency, mixed = rate_currency(rates, trainer.email)
        if mixed:
            logger.warning("Trainer %s bills %s with rates in several currencies", trainer.email, month)

        created = []
        for rider_email, totals in sorted(monthly_totals(sessions, competitions, rates, trainer.email).items()):
            if self.summaries.get_by_key(trainer.email, rider_email, month):
                continue
            summary = self.summaries.stage(MonthlyBillingSummary(
                trainer_email=trainer.email,
                rider_email=rider_email,
                month=month,
                sessions_revenue=totals.sessions_revenue,
                competitions_revenue=totals.competitions_revenue,
                total_revenue=totals.total,
                currency=currency,
                session_count=totals.session_count,
                payment_requested=True,
                payment_status=PaymentStatus.REQUESTED.value,
            ))
            self._request_payment(trainer, summary)
            created.append(summary)

        self.session.commit()
        for summary in created:
            self.session.refresh(summary)
        logger.info("Trainer %s generated %s summary(ies) for %s", trainer.email, len(created), month)
        return created

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _request_payment(self, trainer: User, summary: MonthlyBillingSummary) -> None:
        rider = self.users.get_by_email(summary.rider_email)
        self.notifications.notify(
            payment_recipient(rider, summary.rider_email),
            NotificationType.PAYMENT_REQUEST,
            f"Payment Request from {trainer_label(trainer)}",
            f"Payment request for {month_label(summary.month)}: {summary.currency} {summary.total_revenue:.2f}",
            related_entity_type="MonthlyBillingSummary",
            related_entity_id=summary.id,
            link="/RiderProfile",
        )

    @staticmethod
    def _require_trainer(user: User) -> None:
        if not (user.has_role(Role.TRAINER.value) or user.has_role(Role.ADMIN.value)):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only trainers can bill riders")
