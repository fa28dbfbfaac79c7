"""
Horse and horse care event endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.horse import (HorseCreate, HorseEventCreate, HorseEventResponse, HorseEventUpdate, HorseResponse,
                               HorseUpdate, )
from app.services.horse_service import HorseService

router = APIRouter()


@router.get("", summary="List horses (own by default).", response_model=list[HorseResponse])
def list_horses(owner_email: Optional[str] = Query(None), db: Session = Depends(get_db),
                user: User = Depends(get_current_user), ):
    return HorseService(db).list_for_owner(owner_email or user.email)


@router.get("/{horse_id}", summary="Get a horse.", response_model=HorseResponse)
def get_horse(horse_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return HorseService(db).get(horse_id)


@router.post("", summary="Add a horse.", response_model=HorseResponse, status_code=status.HTTP_201_CREATED)
def create_horse(data: HorseCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return HorseService(db).create(user, data)


@router.put("/{horse_id}", summary="Edit a horse.", response_model=HorseResponse)
def update_horse(horse_id: int, data: HorseUpdate, db: Session = Depends(get_db),
                 user: User = Depends(get_current_user), ):
    return HorseService(db).update(user, horse_id, data)


@router.delete("/{horse_id}", summary="Delete a horse.", status_code=status.HTTP_204_NO_CONTENT)
def delete_horse(horse_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    HorseService(db).delete(user, horse_id)


# ======================================================================
# Care events
# ======================================================================


@router.get("/{horse_id}/events", summary="Care events of a horse, newest first.",
            response_model=list[HorseEventResponse], )
def list_events(horse_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return HorseService(db).list_events(horse_id)


@router.post("/{horse_id}/events", summary="Record a care event.", response_model=HorseEventResponse,
             status_code=status.HTTP_201_CREATED, )
def create_event(horse_id: int, data: HorseEventCreate, db: Session = Depends(get_db),
                 user: User = Depends(get_current_user), ):
    return HorseService(db).create_event(user, horse_id, data)


@router.put("/events/{event_id}", summary="Edit a care event.", response_model=HorseEventResponse)
def update_event(event_id: int, data: HorseEventUpdate, db: Session = Depends(get_db),
                 user: User = Depends(get_current_user), ):
    return HorseService(db).update_event(user, event_id, data)


@router.delete("/events/{event_id}", summary="Delete a care event.", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    HorseService(db).delete_event(user, event_id)
