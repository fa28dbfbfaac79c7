"""
Billing rate repository.

Rates are unique per (trainer_email, session_type); ``upsert`` relies on
that key.
"""

import datetime
from typing import Optional

from sqlmodel import Session, select

from app.models.billing_rate import BillingRate


class BillingRateRepository:
    """Repository for BillingRate database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_trainer(self, trainer_email: str) -> list[BillingRate]:
        """All rates of a trainer, in insertion order."""
        statement = (select(BillingRate).where(BillingRate.trainer_email == trainer_email.lower())
                     .order_by(BillingRate.id))
        return list(self.session.exec(statement).all())

    def get_by_key(self, trainer_email: str, session_type: str) -> Optional[BillingRate]:
        statement = select(BillingRate).where(BillingRate.trainer_email == trainer_email.lower(),
                                              BillingRate.session_type == session_type, )
        return self.session.exec(statement).first()

    def upsert(self, trainer_email: str, session_type: str, currency: str, rate: float,
               commit: bool = True) -> BillingRate:
        entry = self.get_by_key(trainer_email, session_type)
        if entry is None:
            entry = BillingRate(trainer_email=trainer_email.lower(), session_type=session_type)
        entry.currency = currency
        entry.rate = rate
        entry.updated_at = datetime.datetime.utcnow()
        self.session.add(entry)
        if commit:
            self.session.commit()
            self.session.refresh(entry)
        else:
            self.session.flush()
        return entry

    def delete_by_key(self, trainer_email: str, session_type: str) -> bool:
        entry = self.get_by_key(trainer_email, session_type)
        if entry:
            self.session.delete(entry)
            self.session.commit()
            return True
        return False
