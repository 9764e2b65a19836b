"""Integration tests for user administration."""
from __future__ import annotations

from fastapi.testclient import TestClient


def create_user(test_client: TestClient, headers, **overrides):
    payload = {
        "name": "Sam Coach",
        "email": "sam.coach@fitness.com",
        "password": "coach123",
        "role": "trainer",
    }
    payload.update(overrides)
    return test_client.post("/api/users", json=payload, headers=headers)


def test_admin_lists_users(test_client: TestClient, admin_headers):
    response = test_client.get("/api/users", headers=admin_headers)

    assert response.status_code == 200
    assert len(response.json()) == 6

    trainees = test_client.get("/api/users", params={"role": "trainee"}, headers=admin_headers)
    assert len(trainees.json()) == 4


def test_non_admin_cannot_list_users(test_client: TestClient, trainer_headers, trainee_headers):
    assert test_client.get("/api/users", headers=trainer_headers).status_code == 403
    assert test_client.get("/api/users", headers=trainee_headers).status_code == 403


def test_admin_creates_trainer_and_trainee(test_client: TestClient, admin_headers):
    trainer = create_user(test_client, admin_headers)
    assert trainer.status_code == 201
    trainer_id = trainer.json()["id"]

    trainee = create_user(
        test_client,
        admin_headers,
        name="Tina Trainee",
        email="tina@fitness.com",
        role="trainee",
        trainer_id=trainer_id,
    )
    assert trainee.status_code == 201
    assert trainee.json()["trainer_id"] == trainer_id

    fetched = test_client.get(f"/api/users/{trainer_id}", headers=admin_headers)
    assert fetched.json()["trainee_ids"] == [trainee.json()["id"]]


def test_trainer_assignment_dropped_for_non_trainees(test_client: TestClient, admin_headers, users_by_email):
    trainer_id = users_by_email["trainer@fitness.com"].id

    response = create_user(test_client, admin_headers, trainer_id=trainer_id)

    assert response.status_code == 201
    assert response.json()["trainer_id"] is None


def test_create_user_with_unknown_trainer(test_client: TestClient, admin_headers):
    response = create_user(test_client, admin_headers, role="trainee", trainer_id="missing")

    assert response.status_code == 400


def test_create_user_duplicate_email(test_client: TestClient, admin_headers):
    response = create_user(test_client, admin_headers, email="trainer@fitness.com")

    assert response.status_code == 409
    assert response.json()["detail"] == "User with this email already exists"


def test_update_user_keeps_password_when_empty(test_client: TestClient, admin_headers, users_by_email, login):
    user_id = users_by_email["john.doe@fitness.com"].id

    response = test_client.put(
        f"/api/users/{user_id}",
        json={"name": "Johnny Doe", "password": ""},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Johnny Doe"
    login("john.doe@fitness.com", "trainee123")


def test_update_user_changes_password(test_client: TestClient, admin_headers, users_by_email, login):
    user_id = users_by_email["john.doe@fitness.com"].id

    response = test_client.put(
        f"/api/users/{user_id}",
        json={"password": "brand-new"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    login("john.doe@fitness.com", "brand-new")


def test_update_user_email_must_stay_unique(test_client: TestClient, admin_headers, users_by_email):
    user_id = users_by_email["john.doe@fitness.com"].id

    response = test_client.put(
        f"/api/users/{user_id}",
        json={"email": "jane.smith@fitness.com"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already in use by another user"


def test_update_user_to_trainer_drops_assignment(test_client: TestClient, admin_headers, users_by_email):
    user_id = users_by_email["john.doe@fitness.com"].id

    response = test_client.put(f"/api/users/{user_id}", json={"role": "trainer"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["role"] == "trainer"
    assert response.json()["trainer_id"] is None


def test_delete_trainer_unassigns_trainees(test_client: TestClient, admin_headers, users_by_email):
    trainer_id = users_by_email["trainer@fitness.com"].id
    trainee_id = users_by_email["trainee@fitness.com"].id

    response = test_client.delete(f"/api/users/{trainer_id}", headers=admin_headers)
    assert response.status_code == 204

    trainee = test_client.get(f"/api/users/{trainee_id}", headers=admin_headers)
    assert trainee.json()["trainer_id"] is None
    assert test_client.get(f"/api/users/{trainer_id}", headers=admin_headers).status_code == 404


def test_admin_cannot_delete_self(test_client: TestClient, admin_headers, users_by_email):
    admin_id = users_by_email["admin@fitness.com"].id

    response = test_client.delete(f"/api/users/{admin_id}", headers=admin_headers)

    assert response.status_code == 400


def test_assign_trainer(test_client: TestClient, admin_headers, users_by_email):
    new_trainer = create_user(test_client, admin_headers).json()
    trainee_id = users_by_email["mike.johnson@fitness.com"].id

    response = test_client.put(
        f"/api/users/{trainee_id}/trainer",
        json={"trainer_id": new_trainer["id"]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["trainer_id"] == new_trainer["id"]


def test_trainer_sees_own_trainees(test_client: TestClient, trainer_headers):
    response = test_client.get("/api/users/trainees", headers=trainer_headers)

    assert response.status_code == 200
    names = [user["name"] for user in response.json()]
    assert names == sorted(["Jane Trainee", "John Doe", "Jane Smith", "Mike Johnson"])


def test_list_trainers(test_client: TestClient, trainer_headers):
    response = test_client.get("/api/users/trainers", headers=trainer_headers)

    assert [user["email"] for user in response.json()] == ["trainer@fitness.com"]


def test_trainee_can_view_own_trainer(test_client: TestClient, trainee_headers, users_by_email):
    trainer_id = users_by_email["trainer@fitness.com"].id
    other_trainee_id = users_by_email["john.doe@fitness.com"].id

    assert test_client.get(f"/api/users/{trainer_id}", headers=trainee_headers).status_code == 200
    assert test_client.get(f"/api/users/{other_trainee_id}", headers=trainee_headers).status_code == 403
