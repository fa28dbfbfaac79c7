"""
User service.

Business logic for user management and authentication.
"""

import datetime
import logging
from datetime import timedelta
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import settings
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.repositories.user import UserRepository
from app.models.enums import Role
from app.models.user import User
from app.schemas.token import AuthResponse
from app.schemas.user import GoogleProfile, UserCreate, UserLogin, UserResponse, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service for user-related business logic."""

    def __init__(self, session: Session):
        """
        Initialize service with database session.

        Args:
            session: SQLModel database session
        """
        self.repository = UserRepository(session)

    def register(self, user_data: UserCreate) -> User:
        """
        Register a new user with the default ``Rider`` role.

        Args:
            user_data: User registration data

        Returns:
            Created user

        Raises:
            HTTPException: If email already exists
        """
        # Check if user already exists
        if self.repository.exists_by_email(user_data.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already registered")

        full_name = " ".join(p for p in (user_data.first_name, user_data.last_name) if p) or None
        user = User(email=user_data.email.lower(), hashed_password=get_password_hash(user_data.password),
                    first_name=user_data.first_name, last_name=user_data.last_name, full_name=full_name,
                    roles=[Role.RIDER.value], )
        user = self.repository.create(user)
        logger.info("Registered user %s", user.email)
        return user

    def authenticate(self, login_data: UserLogin) -> User:
        """
        Check credentials.

        Args:
            login_data: User login credentials

        Returns:
            The authenticated user

        Raises:
            HTTPException: If credentials are invalid or the account is inactive
        """
        user = self.repository.get_by_email(login_data.email)

        # Google-only accounts have no password and cannot log in this way
        if not user or not user.hashed_password or not verify_password(login_data.password, user.hashed_password):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password",
                                headers={ "WWW-Authenticate": "Bearer" }, )

        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")

        return user

    def login_with_google(self, profile: GoogleProfile) -> User:
        """
        Find or create the user described by a Google profile.

        The profile is trusted as given; verifying the Google ID token is
        the identity provider integration's job.

        Raises:
            HTTPException: If the profile carries no email
        """
        if not profile.email:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Google profile has no email")

        user = self.repository.get_by_email(profile.email)
        if user is None:
            user = User(email=profile.email.lower(), google_id=profile.sub, first_name=profile.given_name,
                        last_name=profile.family_name, full_name=profile.name, profile_image=profile.picture,
                        roles=[Role.RIDER.value], )
            user = self.repository.create(user)
            logger.info("Created user %s from Google profile", user.email)
            return user

        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")
        changed = False
        if profile.sub and not user.google_id:
            user.google_id = profile.sub
            changed = True
        if profile.picture and not user.profile_image:
            user.profile_image = profile.picture
            changed = True
        return self.repository.update(user) if changed else user

    @staticmethod
    def issue_token(user: User) -> str:
        """Create a signed access token whose subject is the user's email."""
        expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        return create_access_token(data={ "sub": user.email }, expires_delta=expires)

    def auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(token=self.issue_token(user), user=UserResponse.model_validate(user))

    def update_me(self, user: User, data: UserUpdate) -> User:
        """
        Update the current user's profile.

        Args:
            user: The authenticated user
            data: Fields to change; ``password`` is re-hashed

        Returns:
            Updated user
        """
        changes = data.changes()
        password = changes.pop("password", None)
        if changes.get("parent_email"):
            changes["parent_email"] = changes["parent_email"].lower()
        for key, value in changes.items():
            setattr(user, key, value)
        if password:
            user.hashed_password = get_password_hash(password)
        user.updated_at = datetime.datetime.utcnow()
        return self.repository.update(user)

    def list_users(self, skip: int = 0, limit: int = 100) -> list[User]:
        return self.repository.get_all(skip=skip, limit=limit)

    def get_user_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email.

        Args:
            email: User email

        Returns:
            User if found, None otherwise
        """
        return self.repository.get_by_email(email)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        return self.repository.get_by_id(user_id)

    def delete_user(self, email: str) -> None:
        user = self.repository.get_by_email(email)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        self.repository.delete(user.id)
        logger.info("Deleted user %s", email)
