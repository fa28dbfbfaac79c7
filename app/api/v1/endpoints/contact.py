"""
Contact endpoints: public submission and the admin inbox.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import require_admin
from app.db.session import get_db
from app.models.enums import ContactMessageStatus, ContactMessageType
from app.models.user import User
from app.schemas.contact import ContactMessageCreate, ContactMessageResponse, ContactStatusUpdate
from app.services.contact_service import ContactService

router = APIRouter()


@router.post("", summary="Send a message to the administrators.", response_model=ContactMessageResponse,
             status_code=status.HTTP_201_CREATED, )
def submit_message(data: ContactMessageCreate, db: Session = Depends(get_db)):
    return ContactService(db).submit(data)


@router.get("", summary="List contact messages (admin).", response_model=list[ContactMessageResponse])
def list_messages(status_filter: Optional[ContactMessageStatus] = Query(None, alias="status"),
                  type_filter: Optional[ContactMessageType] = Query(None, alias="type"),
                  db: Session = Depends(get_db), admin: User = Depends(require_admin), ):
    return ContactService(db).list_messages(status_filter=status_filter.value if status_filter else None,
                                            type_filter=type_filter.value if type_filter else None)


@router.get("/{message_id}", summary="Get a contact message (admin).", response_model=ContactMessageResponse)
def get_message(message_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return ContactService(db).get(message_id)


@router.put("/{message_id}/status", summary="Set message status (admin).", response_model=ContactMessageResponse)
def set_status(message_id: int, data: ContactStatusUpdate, db: Session = Depends(get_db),
               admin: User = Depends(require_admin), ):
    return ContactService(db).set_status(message_id, data.status)


@router.delete("/{message_id}", summary="Delete a contact message (admin).", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(message_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    ContactService(db).delete(message_id)
