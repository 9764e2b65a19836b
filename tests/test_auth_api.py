"""Integration tests for login, registration and token handling."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
from fastapi.testclient import TestClient

from fitness_platform.config import get_settings


def test_login_returns_token_and_user(test_client: TestClient):
    response = test_client.post(
        "/api/auth/login",
        json={"email": "trainer@fitness.com", "password": "trainer123"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["name"] == "John Trainer"
    assert data["user"]["role"] == "trainer"
    assert len(data["user"]["trainee_ids"]) == 4


def test_login_wrong_password(test_client: TestClient):
    response = test_client.post(
        "/api/auth/login",
        json={"email": "trainer@fitness.com", "password": "not-the-password"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_unknown_email(test_client: TestClient):
    response = test_client.post(
        "/api/auth/login",
        json={"email": "nobody@fitness.com", "password": "whatever"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_me_requires_token(test_client: TestClient):
    response = test_client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["detail"] == "Token is missing"


def test_me_with_token(test_client: TestClient, trainee_headers):
    response = test_client.get("/api/auth/me", headers=trainee_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "trainee@fitness.com"
    assert data["role"] == "trainee"
    assert data["trainer_id"] is not None


def test_invalid_token_rejected(test_client: TestClient):
    response = test_client.get("/api/auth/me", headers={"x-access-token": "garbage"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_expired_token_rejected(test_client: TestClient, users_by_email):
    user = users_by_email["admin@fitness.com"]
    token = jwt.encode(
        {"user_id": user.id, "role": "admin", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        get_settings().secret_key,
        algorithm="HS256",
    )

    response = test_client.get("/api/auth/me", headers={"x-access-token": token})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token expired"


def test_token_signed_with_other_key_rejected(test_client: TestClient, users_by_email):
    user = users_by_email["admin@fitness.com"]
    token = jwt.encode(
        {"user_id": user.id, "role": "admin", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "some-other-key",
        algorithm="HS256",
    )

    response = test_client.get("/api/auth/me", headers={"x-access-token": token})

    assert response.status_code == 401


def test_register_then_login(test_client: TestClient):
    payload = {
        "name": "  New Trainee ",
        "email": "new.trainee@fitness.com",
        "password": "secret1",
    }

    response = test_client.post("/api/auth/register", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["name"] == "New Trainee"
    assert data["user"]["role"] == "trainee"

    login = test_client.post(
        "/api/auth/login",
        json={"email": "new.trainee@fitness.com", "password": "secret1"},
    )
    assert login.status_code == 200


def test_register_duplicate_email(test_client: TestClient):
    response = test_client.post(
        "/api/auth/register",
        json={"name": "Copy Cat", "email": "trainee@fitness.com", "password": "secret1"},
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "User with this email already exists"


def test_register_as_admin_forbidden(test_client: TestClient):
    response = test_client.post(
        "/api/auth/register",
        json={"name": "Sneaky", "email": "sneaky@fitness.com", "password": "secret1", "role": "admin"},
    )

    assert response.status_code == 403


def test_register_validation(test_client: TestClient):
    bad_email = test_client.post(
        "/api/auth/register",
        json={"name": "Bad Email", "email": "not-an-email", "password": "secret1"},
    )
    short_password = test_client.post(
        "/api/auth/register",
        json={"name": "Short", "email": "short@fitness.com", "password": "123"},
    )
    short_name = test_client.post(
        "/api/auth/register",
        json={"name": " A ", "email": "a@fitness.com", "password": "secret1"},
    )

    assert bad_email.status_code == 422
    assert short_password.status_code == 422
    assert short_name.status_code == 422
