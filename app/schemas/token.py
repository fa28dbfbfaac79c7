"""
Token schemas.
"""

from typing import Optional

from pydantic import BaseModel

from app.schemas.user import UserResponse


class Token(BaseModel):
    """OAuth2 token response (used by the Swagger password flow)."""
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    """Schema for decoded token data."""
    email: Optional[str] = None


class AuthResponse(BaseModel):
    """Login/register response: the bearer token and the signed-in user."""
    token: str
    user: UserResponse
