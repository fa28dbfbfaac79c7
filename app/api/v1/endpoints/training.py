"""
Training session endpoints.

Creation returns the batch result: a recurring request creates one
session per week and reports any occurrence that failed.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.training_session import (BatchCreateResult, TrainingSessionCreate, TrainingSessionResponse,
                                          TrainingSessionUpdate, )
from app.services.training_session_service import TrainingSessionService

router = APIRouter()


@router.get("", summary="List my sessions (as trainer, or as rider).", response_model=list[TrainingSessionResponse], )
def list_sessions(as_rider: bool = Query(False, description="List sessions where I am the rider"),
                  start: Optional[datetime.datetime] = Query(None, description="Range start (inclusive)"),
                  end: Optional[datetime.datetime] = Query(None, description="Range end (inclusive)"),
                  db: Session = Depends(get_db), user: User = Depends(get_current_user), ):
    service = TrainingSessionService(db)
    return service.list_for_user(user, as_rider=as_rider, start=start, end=end)


@router.post("", summary="Schedule a session, optionally weekly.", response_model=BatchCreateResult,
             status_code=status.HTTP_201_CREATED, )
def create_session(data: TrainingSessionCreate, db: Session = Depends(get_db),
                   user: User = Depends(get_current_user), ):
    service = TrainingSessionService(db)
    return service.create(user, data)


@router.get("/{session_id}", summary="Get a training session.", response_model=TrainingSessionResponse)
def get_session(session_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return TrainingSessionService(db).get_by_id(user, session_id)


@router.put("/{session_id}", summary="Update one session occurrence.", response_model=TrainingSessionResponse, )
def update_session(session_id: int, data: TrainingSessionUpdate, db: Session = Depends(get_db),
                   user: User = Depends(get_current_user), ):
    service = TrainingSessionService(db)
    return service.update(user, session_id, data)


@router.post("/{session_id}/cancel", summary="Cancel one session occurrence.",
             response_model=TrainingSessionResponse, )
def cancel_session(session_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return TrainingSessionService(db).cancel(user, session_id)


@router.post("/{session_id}/verify", summary="Confirm, as the rider, that a session took place.",
             response_model=TrainingSessionResponse, )
def verify_session(session_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return TrainingSessionService(db).verify(user, session_id)


@router.delete("/{session_id}", summary="Delete one session occurrence.", status_code=status.HTTP_204_NO_CONTENT, )
def delete_session(session_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user), ):
    service = TrainingSessionService(db)
    service.delete(user, session_id)
