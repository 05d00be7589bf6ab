import pytest
from fastapi.testclient import TestClient

from core.auth import get_password_hash
from core.content_generator import ContentGenerator
from core.mock_transport import instant_transport
from core.permissions import Role
from core.session import Session
from database import MemoryKeyValueStore
from models.auth import SessionUser, StoredUser

PASSWORD = "secret123"

ACCOUNTS = {
    Role.AGENCY_ADMIN: {"id": "user-admin", "name": "John Doe", "email": "admin@agency.io"},
    Role.AGENCY_STAFF: {"id": "user-staff", "name": "Alice Smith", "email": "staff@agency.io"},
    Role.CLIENT_ADMIN: {"id": "user-client-admin", "name": "Emma Wilson", "email": "admin@techcorp.com", "client_id": "client-1"},
    Role.CLIENT_USER: {"id": "user-client-user", "name": "Tom Baker", "email": "user@techcorp.com", "client_id": "client-1"},
}


def make_user(role: Role, onboarded: bool = True, **overrides) -> SessionUser:
    data = {**ACCOUNTS[role], "role": role, "has_completed_onboarding": onboarded, **overrides}
    return SessionUser(**data)


def make_session(role: Role = None, onboarded: bool = True, demo_mode: bool = False, **overrides) -> Session:
    user = make_user(role, onboarded, **overrides) if role else None
    return Session(user=user, demo_mode=demo_mode)


@pytest.fixture
def store():
    hashed = get_password_hash(PASSWORD)
    users = [
        StoredUser(password=hashed, role=role, has_completed_onboarding=True, **account).model_dump(mode="json")
        for role, account in ACCOUNTS.items()
    ]
    return MemoryKeyValueStore({"agency_users": users})


@pytest.fixture
def generator():
    return ContentGenerator(seed=7)


@pytest.fixture
def app(store, generator):
    from server import create_app
    return create_app(store=store, transport=instant_transport(), demo_mode=False, generator=generator)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def login(client, role: Role) -> dict:
    response = client.post("/api/auth/login", json={"email": ACCOUNTS[role]["email"], "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
