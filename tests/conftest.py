import os
import tempfile
from pathlib import Path
from uuid import uuid4

import pytest

DEFAULT_TEST_DB_URL = f"sqlite:///{Path(tempfile.gettempdir()) / 'visaconnect_test.db'}"
TEST_DB_URL = os.getenv("TEST_DB_URL", DEFAULT_TEST_DB_URL)
os.environ["DATABASE_URL"] = TEST_DB_URL

from fastapi.testclient import TestClient
from sqlmodel import Session

from visaconnect.core.config import settings
from visaconnect.db.init_db import init_db
from visaconnect.db.session import engine
from visaconnect.main import app
from visaconnect.models.enums import UserRole
from visaconnect.services.auth_service import get_user_by_email, set_user_role

settings.DATABASE_URL = TEST_DB_URL


@pytest.fixture(autouse=True)
def _reset_database():
    init_db(drop_all=True)
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    with Session(engine) as session:
        yield session


def register(client: TestClient, role: UserRole = UserRole.USER, first_name: str = "Test") -> dict:
    email = f"{uuid4()}@example.com"
    created = client.post(
        "/api/auth/register",
        json={"email": email, "password": "secret123", "first_name": first_name, "last_name": "User"},
    )
    assert created.status_code == 201
    if role == UserRole.ADMIN:
        with Session(engine) as session:
            set_user_role(session, get_user_by_email(session, email), UserRole.ADMIN)
    login = client.post("/api/auth/login", json={"email": email, "password": "secret123"})
    token = login.json()["access_token"]
    return {
        "id": created.json()["id"],
        "email": email,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture
def user(client):
    return register(client)


@pytest.fixture
def admin(client):
    return register(client, role=UserRole.ADMIN, first_name="Admin")


@pytest.fixture
def job(client):
    poster = register(client, first_name="Poster")
    response = client.post(
        "/api/jobs",
        json={
            "title": "Warehouse associate",
            "company": "Acme Logistics",
            "location": "Austin, TX",
            "description": "Night shift, H-1B transfer welcome.",
        },
        headers=poster["headers"],
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def meetup(client):
    host = register(client, first_name="Host")
    response = client.post(
        "/api/meetups",
        json={"title": "F-1 students coffee", "description": "Weekly meetup downtown.", "location": "Boston, MA"},
        headers=host["headers"],
    )
    assert response.status_code == 201
    return response.json()
