"""
Notification endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.notification import (NotificationPreferenceResponse, NotificationPreferenceUpdate,
                                      NotificationResponse, UnreadCount, )
from app.services.notification_service import NotificationService

router = APIRouter()


@router.get("", summary="My notifications, newest first.", response_model=list[NotificationResponse])
def list_notifications(unread_only: bool = Query(False), db: Session = Depends(get_db),
                       user: User = Depends(get_current_user), ):
    return NotificationService(db).list_for_user(user, unread_only=unread_only)


@router.get("/unread-count", summary="Number of unread notifications.", response_model=UnreadCount)
def unread_count(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return UnreadCount(unread=NotificationService(db).unread_count(user))


@router.post("/read-all", summary="Mark all notifications read.", response_model=UnreadCount)
def mark_all_read(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    NotificationService(db).mark_all_read(user)
    return UnreadCount(unread=0)


@router.get("/preferences", summary="My notification preferences.",
            response_model=list[NotificationPreferenceResponse], )
def get_preferences(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return NotificationService(db).get_preferences(user)


@router.put("/preferences", summary="Set a notification preference.", response_model=NotificationPreferenceResponse)
def set_preference(data: NotificationPreferenceUpdate, db: Session = Depends(get_db),
                   user: User = Depends(get_current_user), ):
    return NotificationService(db).set_preference(user, data)


@router.post("/{notification_id}/read", summary="Mark a notification read.", response_model=NotificationResponse)
def mark_read(notification_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return NotificationService(db).mark_read(user, notification_id)


@router.delete("/{notification_id}", summary="Delete a notification.", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(notification_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    NotificationService(db).delete(user, notification_id)
