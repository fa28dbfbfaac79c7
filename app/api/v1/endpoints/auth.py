"""
Authentication endpoints.

Handles registration, password and Google login, and the current user's
profile.  Login and register answer with ``{token, user}``.
"""

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.token import AuthResponse, Token
from app.schemas.user import GoogleLogin, UserCreate, UserLogin, UserResponse, UserUpdate
from app.services.user_service import UserService

router = APIRouter()


@router.post("/register",
             summary="User registration endpoint.",
             response_model=AuthResponse,
             status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user.

    Args:
        user_data: User registration data (email, password, first/last name)
        db: Database session

    Returns:
        Access token and created user data (without password)

    Raises:
        HTTPException 400: If email already registered
    """
    service = UserService(db)
    user = service.register(user_data)
    return service.auth_response(user)


@router.post("/login",
             summary="User login endpoint via JSON.",
             response_model=AuthResponse)
def login(login_data: UserLogin, db: Session = Depends(get_db)):
    service = UserService(db)
    user = service.authenticate(login_data)
    return service.auth_response(user)


@router.post("/token",
             summary="User login endpoint via OAuth2 form (for Swagger UI).",
             response_model=Token)
def login_form(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """
    Authenticate user via OAuth2 form (for Swagger UI).

    Use email as username.
    """
    service = UserService(db)
    user = service.authenticate(UserLogin(email=form_data.username, password=form_data.password))
    return Token(access_token=service.issue_token(user))


@router.post("/google",
             summary="Login or sign up with a Google profile.",
             response_model=AuthResponse)
def login_google(data: GoogleLogin, db: Session = Depends(get_db)):
    service = UserService(db)
    user = service.login_with_google(data.profile)
    return service.auth_response(user)


@router.get("/me",
            summary="User info endpoint.",
            response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me",
              summary="Update the current user's profile.",
              response_model=UserResponse)
def update_me(data: UserUpdate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return UserService(db).update_me(user, data)


@router.post("/logout",
             summary="Logout (tokens are stateless; the client discards its token).",
             status_code=status.HTTP_204_NO_CONTENT)
def logout(user: User = Depends(get_current_user)):
    return None


@router.get("/verify",
            summary="Check that the bearer token is valid.")
def verify(user: User = Depends(get_current_user)):
    return { "valid": True, "email": user.email }
