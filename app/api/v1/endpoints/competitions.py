"""
Competition endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.competition import (CompetitionCreate, CompetitionResponse, CompetitionUpdate, ItemToggle,
                                     PaymentStatusUpdate, RiderAdd, RiderCostResponse, )
from app.services.competition_service import CompetitionService

router = APIRouter()


@router.get("", summary="List my competitions.", response_model=list[CompetitionResponse])
def list_competitions(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return CompetitionService(db).list_for_trainer(user)


@router.post("", summary="Create a competition.", response_model=CompetitionResponse,
             status_code=status.HTTP_201_CREATED, )
def create_competition(data: CompetitionCreate, db: Session = Depends(get_db),
                       user: User = Depends(get_current_user), ):
    return CompetitionService(db).create(user, data)


@router.get("/{competition_id}", summary="Get a competition.", response_model=CompetitionResponse)
def get_competition(competition_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return CompetitionService(db).get(user, competition_id)


@router.put("/{competition_id}", summary="Edit a competition.", response_model=CompetitionResponse)
def update_competition(competition_id: int, data: CompetitionUpdate, db: Session = Depends(get_db),
                       user: User = Depends(get_current_user), ):
    return CompetitionService(db).update(user, competition_id, data)


@router.delete("/{competition_id}", summary="Delete a competition.", status_code=status.HTTP_204_NO_CONTENT)
def delete_competition(competition_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    CompetitionService(db).delete(user, competition_id)


# ----------------------------------------------------------------------
# Rider entries
# ----------------------------------------------------------------------


@router.post("/{competition_id}/riders", summary="Enter a rider.", response_model=CompetitionResponse)
def add_rider(competition_id: int, data: RiderAdd, db: Session = Depends(get_db),
              user: User = Depends(get_current_user), ):
    return CompetitionService(db).add_rider(user, competition_id, data)


@router.delete("/{competition_id}/riders/{rider_email}", summary="Remove a rider.",
               response_model=CompetitionResponse, )
def remove_rider(competition_id: int, rider_email: str, db: Session = Depends(get_db),
                 user: User = Depends(get_current_user), ):
    return CompetitionService(db).remove_rider(user, competition_id, rider_email)


@router.post("/{competition_id}/riders/{rider_email}/horses", summary="Toggle a horse on a rider entry.",
             response_model=CompetitionResponse, )
def toggle_horse(competition_id: int, rider_email: str, data: ItemToggle, db: Session = Depends(get_db),
                 user: User = Depends(get_current_user), ):
    return CompetitionService(db).toggle_horse(user, competition_id, rider_email, data.name)


@router.post("/{competition_id}/riders/{rider_email}/services", summary="Toggle a service on a rider entry.",
             response_model=CompetitionResponse, )
def toggle_service(competition_id: int, rider_email: str, data: ItemToggle, db: Session = Depends(get_db),
                   user: User = Depends(get_current_user), ):
    return CompetitionService(db).toggle_service(user, competition_id, rider_email, data.name)


@router.put("/{competition_id}/riders/{index}/payment-status", summary="Set a rider's payment status.",
            response_model=CompetitionResponse, )
def set_payment_status(competition_id: int, index: int, data: PaymentStatusUpdate, db: Session = Depends(get_db),
                       user: User = Depends(get_current_user), ):
    return CompetitionService(db).set_payment_status(user, competition_id, index, data.payment_status)


@router.get("/{competition_id}/costs", summary="Cost of every rider entry.", response_model=list[RiderCostResponse])
def rider_costs(competition_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return CompetitionService(db).rider_costs(user, competition_id)
