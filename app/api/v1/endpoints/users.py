"""
User administration endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user, require_admin
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import UserResponse, UserRolesUpdate, UserSummary
from app.services.role_service import RoleService
from app.services.user_service import UserService

router = APIRouter()


@router.get("", summary="List all users (admin).", response_model=list[UserResponse])
def list_users(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1, le=500), db: Session = Depends(get_db),
               admin: User = Depends(require_admin), ):
    return UserService(db).list_users(skip=skip, limit=limit)


@router.get("/{email}", summary="Public summary of a user.", response_model=UserSummary)
def get_user(email: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    found = UserService(db).get_user_by_email(email)
    if not found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return found


@router.put("/{email}/roles", summary="Replace a user's roles (admin).", response_model=UserResponse)
def set_roles(email: str, data: UserRolesUpdate, db: Session = Depends(get_db),
              admin: User = Depends(require_admin), ):
    return RoleService(db).set_roles(email, data.roles)


@router.delete("/{email}", summary="Delete a user (admin).", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(email: str, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    UserService(db).delete_user(email)
