"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import os
from typing import Callable, Dict, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

os.environ["SECRET_KEY"] = os.environ.get("SECRET_KEY") or "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"

from fitness_platform.logging_config import configure_logging

configure_logging()

from fitness_platform.database import SessionLocal, reset_db
from fitness_platform.main import app
from fitness_platform.models.database_models import User
from fitness_platform.services.seed_service import seed_demo_data

DEMO_CREDENTIALS = {
    "admin": ("admin@fitness.com", "admin123"),
    "trainer": ("trainer@fitness.com", "trainer123"),
    "trainee": ("trainee@fitness.com", "trainee123"),
    "john": ("john.doe@fitness.com", "trainee123"),
}


@pytest.fixture(scope="session")
def test_client() -> TestClient:
    """Provide a FastAPI test client."""

    return TestClient(app)


@pytest.fixture(autouse=True)
def demo_store() -> Iterator[None]:
    """Start every test from a freshly seeded in-memory store."""

    reset_db()
    db = SessionLocal()
    try:
        seed_demo_data(db)
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture
def db_session() -> Iterator[Session]:
    """Session for calling services directly."""

    db = SessionLocal()
    try:
        yield db
        db.commit()
    finally:
        db.close()


@pytest.fixture
def users_by_email(db_session: Session) -> Dict[str, User]:
    return {user.email: user for user in db_session.query(User).all()}


@pytest.fixture
def login(test_client: TestClient) -> Callable[[str, str], Dict[str, str]]:
    """Return a helper logging a user in and building the auth header."""

    def _login(email: str, password: str) -> Dict[str, str]:
        response = test_client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"x-access-token": response.json()["access_token"]}

    return _login


@pytest.fixture
def admin_headers(login) -> Dict[str, str]:
    return login(*DEMO_CREDENTIALS["admin"])


@pytest.fixture
def trainer_headers(login) -> Dict[str, str]:
    return login(*DEMO_CREDENTIALS["trainer"])


@pytest.fixture
def trainee_headers(login) -> Dict[str, str]:
    return login(*DEMO_CREDENTIALS["trainee"])


@pytest.fixture
def john_headers(login) -> Dict[str, str]:
    return login(*DEMO_CREDENTIALS["john"])
