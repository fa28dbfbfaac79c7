"""
User connection and guardian link endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.enums import ConnectionStatus
from app.models.user import User
from app.schemas.connection import (ConnectionCreate, ConnectionResponse, GuardianLinkCreate, GuardianLinkResponse,
                                    GuardianStatusUpdate, )
from app.services.connection_service import ConnectionService, GuardianService

router = APIRouter()


@router.get("", summary="Connections I sent or received.", response_model=list[ConnectionResponse])
def list_connections(status_filter: Optional[ConnectionStatus] = Query(None, alias="status"),
                     connection_type: Optional[str] = Query(None), db: Session = Depends(get_db),
                     user: User = Depends(get_current_user), ):
    return ConnectionService(db).list_for_user(user, status_filter=status_filter.value if status_filter else None,
                                               connection_type=connection_type)


@router.post("", summary="Request a connection.", response_model=ConnectionResponse,
             status_code=status.HTTP_201_CREATED, )
def request_connection(data: ConnectionCreate, db: Session = Depends(get_db),
                       user: User = Depends(get_current_user), ):
    return ConnectionService(db).request(user, data)


@router.get("/guardians", summary="Guardian links where I am the guardian or the minor.",
            response_model=list[GuardianLinkResponse], )
def list_guardian_links(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return GuardianService(db).list_for_user(user)


@router.post("/guardians", summary="Link myself as guardian of a minor rider.", response_model=GuardianLinkResponse,
             status_code=status.HTTP_201_CREATED, )
def link_guardian(data: GuardianLinkCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return GuardianService(db).link(user, data)


@router.patch("/guardians/{link_id}", summary="Activate or deactivate a guardian link.",
              response_model=GuardianLinkResponse, )
def update_guardian_link(link_id: int, data: GuardianStatusUpdate, db: Session = Depends(get_db),
                         user: User = Depends(get_current_user), ):
    return GuardianService(db).set_status(user, link_id, data)


@router.delete("/guardians/{link_id}", summary="Remove a guardian link.", status_code=status.HTTP_204_NO_CONTENT)
def unlink_guardian(link_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    GuardianService(db).unlink(user, link_id)


@router.post("/{connection_id}/approve", summary="Approve a request sent to me.", response_model=ConnectionResponse)
def approve_connection(connection_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return ConnectionService(db).approve(user, connection_id)


@router.post("/{connection_id}/reject", summary="Reject a request sent to me.", response_model=ConnectionResponse)
def reject_connection(connection_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return ConnectionService(db).reject(user, connection_id)


@router.delete("/{connection_id}", summary="Delete a connection.", status_code=status.HTTP_204_NO_CONTENT)
def delete_connection(connection_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    ConnectionService(db).delete(user, connection_id)
