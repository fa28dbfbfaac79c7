"""Fixtures for HTTP-level tests against the FastAPI app."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.db.session import get_db
from app.main import app
from app.models.enums import Role
from app.services.role_service import RoleService


@pytest.fixture
def client(engine):
    def _get_db():
        with Session(engine) as db:
            yield db

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user and return bearer headers for them."""

    def _register(email: str, password: str = "saddle-up-123", first_name: str = "Test", last_name: str = "User"):
        response = client.post("/api/v1/auth/register", json={
            "email": email, "password": password, "first_name": first_name, "last_name": last_name,
        })
        assert response.status_code == 201, response.text
        return { "Authorization": f"Bearer {response.json()['token']}" }

    return _register


@pytest.fixture
def grant(engine):
    """Replace a user's roles directly in the database."""

    def _grant(email: str, *roles: Role):
        with Session(engine) as db:
            RoleService(db).set_roles(email, list(roles))

    return _grant
