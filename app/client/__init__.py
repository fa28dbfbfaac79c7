"""
HTTP client for the RidersOS API.
"""

from app.client.auth import AuthClient
from app.client.http import ApiClient, ApiError, EntityResource
from app.client.token_store import TokenStore, token_store

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthClient",
    "EntityResource",
    "TokenStore",
    "token_store",
]
