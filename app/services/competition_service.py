"""
Competition service.

Manages competitions and their ordered rider entries.  Entries are
edited by rider email (add/remove rider, toggle horse, toggle service)
or by list index (payment status), always by writing back a new list.
"""

import copy
import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.billing_rate import BillingRateRepository
from app.db.repositories.competition import CompetitionRepository
from app.db.repositories.user import UserRepository
from app.models.competition import Competition
from app.models.enums import NotificationType, PaymentStatus, Role
from app.models.user import User
from app.scheduling.costs import rider_cost
from app.schemas.competition import (CompetitionCreate, CompetitionUpdate, RiderAdd, RiderCostResponse, RiderEntry, )
from app.services.billing_service import payment_recipient
from app.services.notification_service import NotificationService
from app.services.training_session_service import format_when, trainer_label

logger = logging.getLogger(__name__)


class CompetitionService:
    """Service for competition business logic."""

    def __init__(self, session: Session):
        self.repository = CompetitionRepository(session)
        self.rates = BillingRateRepository(session)
        self.users = UserRepository(session)
        self.notifications = NotificationService(session)

    def list_for_trainer(self, trainer: User) -> list[Competition]:
        return self.repository.filter(trainer_email=trainer.email)

    def get(self, user: User, competition_id: int) -> Competition:
        competition = self.repository.get_by_id(competition_id)
        if not competition or not self._can_view(user, competition):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Competition not found")
        return competition

    def create(self, trainer: User, data: CompetitionCreate) -> Competition:
        competition = Competition(trainer_email=trainer.email, **data.model_dump())
        return self.repository.create(competition)

    def update(self, trainer: User, competition_id: int, data: CompetitionUpdate) -> Competition:
        competition = self._get_owned_entry(trainer, competition_id)
        for key, value in data.changes().items():
            setattr(competition, key, value)
        return self._save(competition)

    def delete(self, trainer: User, competition_id: int) -> None:
        self._get_owned_entry(trainer, competition_id)
        self.repository.delete(competition_id)

    # ------------------------------------------------------------------
    # Rider entries
    # ------------------------------------------------------------------

    def add_rider(self, trainer: User, competition_id: int, data: RiderAdd) -> Competition:
        competition = self._get_owned_entry(trainer, competition_id)
        email = data.rider_email.lower()
        if any(r["rider_email"] == email for r in competition.riders):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Rider already entered")

        rider = self.users.get_by_email(email)
        name = data.rider_name or (rider.display_name if rider else email)
        entry = RiderEntry(rider_email=email, rider_name=name)
        competition.riders = [*competition.riders, entry.model_dump()]

        self.notifications.notify(
            email,
            NotificationType.SESSION_SCHEDULED,
            "Competition Entry",
            f"{trainer_label(trainer)} entered you in {competition.name} on {format_when(competition.competition_date)}.",
            related_entity_type="Competition",
            related_entity_id=competition.id,
            link="/RiderProfile",
        )
        return self._save(competition)

    def remove_rider(self, trainer: User, competition_id: int, rider_email: str) -> Competition:
        competition = self._get_owned_entry(trainer, competition_id)
        email = rider_email.lower()
        riders = [r for r in competition.riders if r["rider_email"] != email]
        if len(riders) == len(competition.riders):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rider not entered")
        competition.riders = riders
        return self._save(competition)

    def toggle_horse(self, trainer: User, competition_id: int, rider_email: str, horse: str) -> Competition:
        return self._toggle(trainer, competition_id, rider_email, "horses", horse)

    def toggle_service(self, trainer: User, competition_id: int, rider_email: str, service: str) -> Competition:
        return self._toggle(trainer, competition_id, rider_email, "services", service)

    def set_payment_status(self, trainer: User, competition_id: int, index: int,
                           payment_status: str) -> Competition:
        competition = self._get_owned_entry(trainer, competition_id)
        riders = copy.deepcopy(competition.riders)
        if not 0 <= index < len(riders):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rider index out of range")
        riders[index]["payment_status"] = PaymentStatus(payment_status).value
        competition.riders = riders

        if payment_status == PaymentStatus.REQUESTED.value:
            cost = rider_cost(riders[index].get("services", []), self.rates.get_by_trainer(trainer.email),
                              trainer.email)
            rider_email = riders[index]["rider_email"]
            self.notifications.notify(
                payment_recipient(self.users.get_by_email(rider_email), rider_email),
                NotificationType.PAYMENT_REQUEST,
                f"Payment Request from {trainer_label(trainer)}",
                f"Payment for {competition.name}: {cost.currency} {cost.total:.2f}",
                related_entity_type="Competition",
                related_entity_id=competition.id,
            )
        return self._save(competition)

    def rider_costs(self, user: User, competition_id: int) -> list[RiderCostResponse]:
        """Cost of every rider entry, in entry order."""
        competition = self.get(user, competition_id)
        rates = self.rates.get_by_trainer(competition.trainer_email)
        result = []
        for index, rider in enumerate(competition.riders):
            services = rider.get("services", [])
            cost = rider_cost(services, rates, competition.trainer_email)
            result.append(RiderCostResponse(rider_index=index, rider_email=rider["rider_email"], services=services,
                                            **cost.model_dump()))
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _toggle(self, trainer: User, competition_id: int, rider_email: str, field: str,
                value: str) -> Competition:
        competition = self._get_owned_entry(trainer, competition_id)
        riders = copy.deepcopy(competition.riders)
        email = rider_email.lower()
        entry: Optional[dict] = next((r for r in riders if r["rider_email"] == email), None)
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rider not entered")
        items = entry.get(field, [])
        entry[field] = [i for i in items if i != value] if value in items else [*items, value]
        competition.riders = riders
        return self._save(competition)

    def _save(self, competition: Competition) -> Competition:
        competition.updated_at = datetime.datetime.utcnow()
        return self.repository.update(competition)

    @staticmethod
    def _can_view(user: User, competition: Competition) -> bool:
        if competition.trainer_email == user.email or user.has_role(Role.ADMIN.value):
            return True
        return any(r["rider_email"] == user.email for r in competition.riders)

    def _get_owned_entry(self, trainer: User, competition_id: int) -> Competition:
        competition = self.repository.get_by_id(competition_id)
        if not competition or (competition.trainer_email != trainer.email and not trainer.has_role(Role.ADMIN.value)):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Competition not found")
        return competition
