"""
Billing rate and monthly summary endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.billing import (MONTH_PATTERN, BillingRateResponse, BillingRateUpsert, BillingSummaryCreate,
                                 BillingSummaryGenerate, BillingSummaryResponse, BillingSummaryUpdate, )
from app.services.billing_service import BillingService

router = APIRouter()


@router.get("/rates", summary="List my billing rates.", response_model=list[BillingRateResponse])
def list_rates(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return BillingService(db).list_rates(user)


@router.put("/rates", summary="Create or update one rate.", response_model=BillingRateResponse)
def upsert_rate(data: BillingRateUpsert, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return BillingService(db).upsert(user, data)


@router.put("/rates/bulk", summary="Create or update several rates at once.",
            response_model=list[BillingRateResponse], )
def upsert_rates(data: list[BillingRateUpsert], db: Session = Depends(get_db),
                 user: User = Depends(get_current_user), ):
    return BillingService(db).upsert_many(user, data)


@router.delete("/rates/{session_type}", summary="Delete a rate.", status_code=status.HTTP_204_NO_CONTENT)
def delete_rate(session_type: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    BillingService(db).delete(user, session_type)


@router.get("/summaries", summary="List monthly billing summaries.", response_model=list[BillingSummaryResponse])
def list_summaries(trainer_email: Optional[str] = Query(None, description="Filter by trainer"),
                   rider_email: Optional[str] = Query(None, description="Summaries billed to this rider"),
                   month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM"),
                   db: Session = Depends(get_db), user: User = Depends(get_current_user), ):
    return BillingService(db).list_summaries(user, trainer_email=trainer_email, rider_email=rider_email, month=month)


@router.post("/summaries", summary="Record a monthly summary for one rider.", response_model=BillingSummaryResponse,
             status_code=status.HTTP_201_CREATED, )
def create_summary(data: BillingSummaryCreate, db: Session = Depends(get_db),
                   user: User = Depends(get_current_user), ):
    return BillingService(db).create_summary(user, data)


@router.post("/summaries/generate", summary="Bill every rider for a month and request payment.",
             response_model=list[BillingSummaryResponse], status_code=status.HTTP_201_CREATED, )
def generate_summaries(data: BillingSummaryGenerate, db: Session = Depends(get_db),
                       user: User = Depends(get_current_user), ):
    return BillingService(db).generate_month(user, data.month)


@router.patch("/summaries/{summary_id}", summary="Update a monthly summary.", response_model=BillingSummaryResponse)
def update_summary(summary_id: int, data: BillingSummaryUpdate, db: Session = Depends(get_db),
                   user: User = Depends(get_current_user), ):
    return BillingService(db).update_summary(user, summary_id, data)
