"""
Authentication client.

Login, registration and Google sign-in store the returned token; logout
forgets it.
"""

from typing import Optional

from app.client.http import ApiClient, ApiError


class AuthClient:
    """Account operations on top of an ``ApiClient``."""

    def __init__(self, client: ApiClient):
        self.client = client

    @property
    def store(self):
        return self.client.store

    def login(self, email: str, password: str) -> dict:
        return self._keep_token(self.client.post("auth/login", json={ "email": email, "password": password }))

    def register(self, email: str, password: str, first_name: Optional[str] = None,
                 last_name: Optional[str] = None, ) -> dict:
        payload = { "email": email, "password": password, "first_name": first_name, "last_name": last_name }
        return self._keep_token(self.client.post("auth/register", json=payload))

    def login_with_google(self, id_token: str, profile: dict) -> dict:
        return self._keep_token(self.client.post("auth/google", json={ "id_token": id_token, "profile": profile }))

    def me(self) -> dict:
        return self.client.get("auth/me")

    def update_me(self, **changes) -> dict:
        return self.client.patch("auth/me", json=changes)

    def logout(self) -> None:
        try:
            if self.store.get():
                self.client.post("auth/logout")
        except ApiError:
            # The token is dropped either way
            pass
        finally:
            self.store.clear()

    def is_authenticated(self) -> bool:
        return self.store.get() is not None

    def _keep_token(self, result: dict) -> dict:
        self.store.set(result["token"])
        return result
