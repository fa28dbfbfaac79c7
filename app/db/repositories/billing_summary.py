"""
Monthly billing summary repository.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.billing_summary import MonthlyBillingSummary


class BillingSummaryRepository:
    """Repository for MonthlyBillingSummary database operations."""

    def __init__(self, session: Session):
        self.session = session

    def stage(self, summary: MonthlyBillingSummary) -> MonthlyBillingSummary:
        """Add and flush without committing."""
        self.session.add(summary)
        self.session.flush()
        return summary

    def get_by_id(self, summary_id: int) -> Optional[MonthlyBillingSummary]:
        return self.session.get(MonthlyBillingSummary, summary_id)

    def get_by_key(self, trainer_email: str, rider_email: str, month: str) -> Optional[MonthlyBillingSummary]:
        statement = select(MonthlyBillingSummary).where(
            MonthlyBillingSummary.trainer_email == trainer_email.lower(),
            MonthlyBillingSummary.rider_email == rider_email.lower(),
            MonthlyBillingSummary.month == month,
        )
        return self.session.exec(statement).first()

    def filter(self, trainer_email: Optional[str] = None, rider_email: Optional[str] = None,
               month: Optional[str] = None, ) -> list[MonthlyBillingSummary]:
        """Newest month first."""
        statement = select(MonthlyBillingSummary)
        if trainer_email:
            statement = statement.where(MonthlyBillingSummary.trainer_email == trainer_email.lower())
        if rider_email:
            statement = statement.where(MonthlyBillingSummary.rider_email == rider_email.lower())
        if month:
            statement = statement.where(MonthlyBillingSummary.month == month)
        statement = statement.order_by(MonthlyBillingSummary.month.desc(), MonthlyBillingSummary.id)
        return list(self.session.exec(statement).all())

    def update(self, summary: MonthlyBillingSummary) -> MonthlyBillingSummary:
        self.session.add(summary)
        self.session.commit()
        self.session.refresh(summary)
        return summary
