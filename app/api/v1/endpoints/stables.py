"""
Stable endpoints.

Listing and details are public.  Approval, rejection, manager changes
and deletion are admin-only; everything else needs the stable's manager
or an admin.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user, require_admin
from app.db.session import get_db
from app.models.enums import ApprovalStatus
from app.models.user import User
from app.schemas.stable import (ManagerChange, StableCreate, StableEventCreate, StableEventResponse,
                                StableEventUpdate, StableResponse, StableUpdate, TrainerAdd, )
from app.services.stable_service import StableService

router = APIRouter()


@router.get("", summary="List stables.", response_model=list[StableResponse])
def list_stables(approval_status: Optional[ApprovalStatus] = Query(None),
                 manager_email: Optional[str] = Query(None), db: Session = Depends(get_db), ):
    return StableService(db).list_stables(approval_status=approval_status.value if approval_status else None,
                                          manager_email=manager_email)


@router.get("/{stable_id}", summary="Get a stable.", response_model=StableResponse)
def get_stable(stable_id: int, db: Session = Depends(get_db)):
    return StableService(db).get(stable_id)


@router.post("", summary="Register a stable (pending approval).", response_model=StableResponse,
             status_code=status.HTTP_201_CREATED, )
def create_stable(data: StableCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return StableService(db).create(user, data)


@router.put("/{stable_id}", summary="Edit stable details.", response_model=StableResponse)
def update_stable(stable_id: int, data: StableUpdate, db: Session = Depends(get_db),
                  user: User = Depends(get_current_user), ):
    return StableService(db).update(user, stable_id, data)


@router.delete("/{stable_id}", summary="Delete a stable (admin).", status_code=status.HTTP_204_NO_CONTENT)
def delete_stable(stable_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    StableService(db).delete(stable_id)


# ----------------------------------------------------------------------
# Approval workflow
# ----------------------------------------------------------------------


@router.post("/{stable_id}/approve", summary="Approve a stable (admin).", response_model=StableResponse)
def approve_stable(stable_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return StableService(db).approve(stable_id)


@router.post("/{stable_id}/reject", summary="Reject a stable (admin).", response_model=StableResponse)
def reject_stable(stable_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return StableService(db).reject(stable_id)


@router.put("/{stable_id}/manager", summary="Change the stable manager (admin).", response_model=StableResponse)
def change_manager(stable_id: int, data: ManagerChange, db: Session = Depends(get_db),
                   admin: User = Depends(require_admin), ):
    return StableService(db).change_manager(stable_id, data.new_manager_email)


# ----------------------------------------------------------------------
# Trainers
# ----------------------------------------------------------------------


@router.post("/{stable_id}/trainers", summary="Add a trainer to the stable.", response_model=StableResponse)
def add_trainer(stable_id: int, data: TrainerAdd, db: Session = Depends(get_db),
                user: User = Depends(get_current_user), ):
    return StableService(db).add_trainer(user, stable_id, data.trainer_email)


@router.delete("/{stable_id}/trainers/{trainer_email}", summary="Remove a trainer from the stable.",
               response_model=StableResponse, )
def remove_trainer(stable_id: int, trainer_email: str, db: Session = Depends(get_db),
                   user: User = Depends(get_current_user), ):
    return StableService(db).remove_trainer(user, stable_id, trainer_email)


# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------


@router.get("/{stable_id}/events", summary="List stable events.", response_model=list[StableEventResponse])
def list_events(stable_id: int, db: Session = Depends(get_db)):
    return StableService(db).list_events(stable_id)


@router.post("/{stable_id}/events", summary="Publish a stable event.", response_model=StableEventResponse,
             status_code=status.HTTP_201_CREATED, )
def create_event(stable_id: int, data: StableEventCreate, db: Session = Depends(get_db),
                 user: User = Depends(get_current_user), ):
    return StableService(db).create_event(user, stable_id, data)


@router.put("/{stable_id}/events/{event_id}", summary="Edit a stable event.", response_model=StableEventResponse)
def update_event(stable_id: int, event_id: int, data: StableEventUpdate, db: Session = Depends(get_db),
                 user: User = Depends(get_current_user), ):
    return StableService(db).update_event(user, stable_id, event_id, data)


@router.delete("/{stable_id}/events/{event_id}", summary="Delete a stable event.",
               status_code=status.HTTP_204_NO_CONTENT, )
def delete_event(stable_id: int, event_id: int, db: Session = Depends(get_db),
                 user: User = Depends(get_current_user), ):
    StableService(db).delete_event(user, stable_id, event_id)
