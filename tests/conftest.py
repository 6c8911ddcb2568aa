"""Pytest fixtures for the Taskboard tests."""

import os

# Settings are read at import time - point everything at an in-memory database first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"
os.environ["AUTO_CREATE_TABLES"] = "false"

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from taskboard.database import Base, SessionLocal, engine
from taskboard.main import app
from taskboard.repositories import SqlTaskRepository
from taskboard.services import TaskService
from taskboard.utils.timeutils import utcnow

USER_PAYLOAD = {
    "username": "alice",
    "email": "alice@taskboard.io",
    "password": "Secret123",
}


class FakeClock:
    """Controllable replacement for utcnow()"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repository(db) -> SqlTaskRepository:
    return SqlTaskRepository(db)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(utcnow())


@pytest.fixture
def service(repository, clock) -> TaskService:
    return TaskService(repository, clock=clock)


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


@pytest.fixture
def auth_token(client: TestClient) -> str:
    response = client.post("/api/auth/register", json=USER_PAYLOAD)
    assert response.status_code == 201
    return response.json()["data"]["token"]


@pytest.fixture
def auth_headers(auth_token: str) -> dict:
    return {"Authorization": f"Bearer {auth_token}"}
