"""
Competition and monthly cost aggregation.

A rider's competition cost is the sum of the trainer's billing rate for
every service selected on the rider entry.  A service with no matching
rate costs nothing.

The currency label is the first of the trainer's rates, which is wrong
when those rates use more than one currency.  That case is reported via
``mixed_currency`` rather than converted.

``monthly_totals`` groups one trainer's month by rider: verified
sessions priced by session type, plus the services of competition
entries already marked paid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol

from app.core.config import settings
from app.models.enums import PaymentStatus
from app.schemas.competition import RiderCost


class _Rate(Protocol):
    trainer_email: str
    session_type: str
    currency: str
    rate: float


class _Session(Protocol):
    rider_email: str
    session_type: str
    rider_verified: bool


class _Competition(Protocol):
    riders: list[dict[str, Any]]


def _own_rates(rates: Iterable[_Rate], trainer_email: str) -> tuple[list[_Rate], dict[str, float]]:
    """The trainer's rates in the order given, and the first rate per type."""
    trainer = trainer_email.lower()
    own = [r for r in rates if r.trainer_email.lower() == trainer]
    by_type: dict[str, float] = {}
    for r in own:
        by_type.setdefault(r.session_type, r.rate)
    return own, by_type


def rate_currency(rates: Iterable[_Rate], trainer_email: str) -> tuple[str, bool]:
    """``(currency, mixed_currency)`` of the trainer's rates."""
    own, _ = _own_rates(rates, trainer_email)
    currency = own[0].currency if own else settings.DEFAULT_CURRENCY
    return currency, len({r.currency for r in own}) > 1


def rider_cost(services: Iterable[str], rates: Iterable[_Rate], trainer_email: str) -> RiderCost:
    """Sum the trainer's rates for ``services``.

    ``rates`` may contain other trainers' rates; only those belonging to
    ``trainer_email`` are considered, in the order given.
    """
    rates = list(rates)
    _, by_type = _own_rates(rates, trainer_email)

    # fsum is exactly rounded, so the total does not depend on service order
    total = math.fsum(by_type.get(service, 0.0) for service in services)

    currency, mixed = rate_currency(rates, trainer_email)
    return RiderCost(total=max(total, 0.0), currency=currency, mixed_currency=mixed)


@dataclass
class MonthlyTotals:
    rider_email: str
    session_fees: list[float] = field(default_factory=list)
    competition_fees: list[float] = field(default_factory=list)

    @property
    def session_count(self) -> int:
        return len(self.session_fees)

    @property
    def sessions_revenue(self) -> float:
        return math.fsum(self.session_fees)

    @property
    def competitions_revenue(self) -> float:
        return math.fsum(self.competition_fees)

    @property
    def total(self) -> float:
        return math.fsum(self.session_fees + self.competition_fees)


def monthly_totals(sessions: Iterable[_Session], competitions: Iterable[_Competition], rates: Iterable[_Rate],
                   trainer_email: str) -> dict[str, MonthlyTotals]:
    """Per-rider revenue, keyed by lower-cased rider email.

    The caller restricts ``sessions`` and ``competitions`` to the month.
    Unverified sessions and sessions whose type has no rate are not
    billed.  Riders with nothing billable are left out.
    """
    _, by_type = _own_rates(rates, trainer_email)
    totals: dict[str, MonthlyTotals] = {}

    def _for(email: str) -> MonthlyTotals:
        key = email.lower()
        return totals.setdefault(key, MonthlyTotals(rider_email=key))

    for s in sessions:
        fee = by_type.get(s.session_type)
        if s.rider_verified and fee:
            _for(s.rider_email).session_fees.append(fee)

    for c in competitions:
        for entry in c.riders or []:
            if entry.get("payment_status") != PaymentStatus.PAID.value:
                continue
            fees = [by_type[service] for service in entry.get("services") or [] if by_type.get(service)]
            if fees:
                _for(entry["rider_email"]).competition_fees.extend(fees)

    return { email: t for email, t in totals.items() if t.total > 0 }
