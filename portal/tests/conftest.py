"""
Shared fixtures: a freshly seeded store per test and an app built around it.
Seed accounts use their id as password.
"""

import os

# cheap hashes for the seed accounts; must be set before portal is imported
os.environ.setdefault("PORTAL_BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from portal import config
from portal.models import Role
from portal.server import create_app
from portal.services import auth
from portal.store import Store


@pytest.fixture
def store():
    return Store.seeded()


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


@pytest.fixture
def login(client):
    """Log in over HTTP and return the bearer headers"""
    def _login(role: str, user_id: str = "", password: str = None):
        if password is None:
            password = config.ADMIN_PASSWORD if role == "admin" else user_id
        response = client.post("/api/auth/login", json={
            "role": role,
            "user_id": user_id,
            "password": password
        })
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login


@pytest.fixture
def guest_headers(client):
    response = client.post("/api/auth/guest")
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def member_session(store):
    """Service-level login for a seed account"""
    def _session(role: Role, user_id: str):
        return auth.handle_login(store, role, user_id, user_id)
    return _session


@pytest.fixture
def admin_session(store):
    return auth.handle_login(store, Role.ADMIN, "", config.ADMIN_PASSWORD)
