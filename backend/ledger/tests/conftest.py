"""Pytest configuration and fixtures."""
import os

# Set test environment variables before importing app modules
os.environ.setdefault("AUTH_SECRET", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import ledger.models  # noqa: F401
from ledger.core.config import settings
from ledger.db.base import Base
from ledger.db.session import get_db
from ledger.api.dependencies import get_notifier
from ledger.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"


class FakeNotifier:
    """Records messages instead of calling LINE."""

    def __init__(self, result=True):
        self.config = settings
        self.result = result
        self.messages = []

    async def send(self, message, recipient=None):
        self.messages.append(message)
        return self.result


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def client(db, notifier):
    """Test client bound to the test database and fake notifier."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, email="alice@example.com", password=PASSWORD, name="Alice"):
    return client.post(
        "/api/auth/register",
        json={
            "name": name,
            "email": email,
            "password": password,
            "confirmPassword": password
        }
    )


@pytest.fixture
def auth_client(client):
    """Client signed in as alice@example.com."""
    response = register(client)
    assert response.status_code == 201
    return client


@pytest.fixture
def other_client(auth_client):
    """Second client signed in as a different user, sharing the same database."""
    with TestClient(app) as second:
        response = register(second, email="bob@example.com", name="Bob")
        assert response.status_code == 201
        yield second


def create_person(client, name="Alice"):
    response = client.post("/api/people", json={"name": name})
    assert response.status_code == 201
    return response.json()["data"]


def create_category(client, name="Travel", description=None):
    response = client.post("/api/categories", json={"name": name, "description": description})
    assert response.status_code == 201
    return response.json()["data"]


def create_entry(client, person_id, amount="100", entry_type="deposit", category_id=None, label="Savings"):
    payload = {
        "personId": person_id,
        "amount": amount,
        "label": label,
        "type": entry_type,
        "transactionDate": "2024-01-15T10:00:00",
    }
    if category_id is not None:
        payload["categoryId"] = category_id
    return client.post("/api/entries", json=payload)
