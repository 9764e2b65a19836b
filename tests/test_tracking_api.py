"""Integration tests for goals, measurements, steps and nutrition tracking."""
from __future__ import annotations

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient


def create_goal(test_client: TestClient, headers, trainee_id, **overrides):
    payload = {
        "trainee_id": trainee_id,
        "name": "Lose 5kg",
        "type": "weight",
        "target_value": 5,
        "unit": "kg",
        "deadline": "2030-01-31T12:00:00+01:00",
    }
    payload.update(overrides)
    response = test_client.post("/api/goals", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestGoals:
    def test_trainer_creates_goal(self, test_client: TestClient, trainer_headers, trainee_headers, users_by_email):
        trainee_id = users_by_email["trainee@fitness.com"].id

        goal = create_goal(test_client, trainer_headers, trainee_id)

        assert goal["trainer_id"] == users_by_email["trainer@fitness.com"].id
        assert goal["deadline"] == "2030-01-31T11:00:00"
        assert goal["progress_percentage"] == 0.0
        assert [item["id"] for item in test_client.get("/api/goals", headers=trainee_headers).json()] == [goal["id"]]
        assert [item["id"] for item in test_client.get("/api/goals", headers=trainer_headers).json()] == [goal["id"]]

    def test_progress_reaching_target_completes_goal(self, test_client: TestClient, trainer_headers, trainee_headers, users_by_email):
        goal = create_goal(test_client, trainer_headers, users_by_email["trainee@fitness.com"].id)

        halfway = test_client.put(f"/api/goals/{goal['id']}/progress", json={"current_value": 2.5}, headers=trainee_headers)
        done = test_client.put(f"/api/goals/{goal['id']}/progress", json={"current_value": 6}, headers=trainee_headers)

        assert halfway.json()["progress_percentage"] == pytest.approx(50.0)
        assert halfway.json()["is_completed"] is False
        assert done.json()["is_completed"] is True
        assert done.json()["progress_percentage"] == 100.0

    def test_mark_completed_sets_current_to_target(self, test_client: TestClient, trainer_headers, users_by_email):
        goal = create_goal(test_client, trainer_headers, users_by_email["trainee@fitness.com"].id, type="performance", target_value=100, unit="reps")

        response = test_client.post(f"/api/goals/{goal['id']}/complete", headers=trainer_headers)

        assert response.json()["is_completed"] is True
        assert response.json()["current_value"] == 100

    def test_update_and_delete_goal(self, test_client: TestClient, trainer_headers, users_by_email):
        goal = create_goal(test_client, trainer_headers, users_by_email["trainee@fitness.com"].id)

        updated = test_client.put(f"/api/goals/{goal['id']}", json={"name": "Lose 6kg", "target_value": 6}, headers=trainer_headers)
        deleted = test_client.delete(f"/api/goals/{goal['id']}", headers=trainer_headers)

        assert updated.json()["name"] == "Lose 6kg"
        assert updated.json()["unit"] == "kg"
        assert deleted.status_code == 204
        assert test_client.get(f"/api/goals/{goal['id']}", headers=trainer_headers).status_code == 404

    def test_other_trainee_cannot_see_goal(self, test_client: TestClient, trainer_headers, john_headers, users_by_email):
        goal = create_goal(test_client, trainer_headers, users_by_email["trainee@fitness.com"].id)

        assert test_client.get(f"/api/goals/{goal['id']}", headers=john_headers).status_code == 403

    def test_trainee_cannot_create_goal(self, test_client: TestClient, trainee_headers, users_by_email):
        response = test_client.post(
            "/api/goals",
            json={
                "trainee_id": users_by_email["trainee@fitness.com"].id,
                "name": "Self goal",
                "type": "weight",
                "target_value": 1,
                "unit": "kg",
                "deadline": "2030-01-01T00:00:00",
            },
            headers=trainee_headers,
        )

        assert response.status_code == 403


class TestMeasurements:
    def test_same_day_measurement_is_replaced(self, test_client: TestClient, trainee_headers):
        first = test_client.post(
            "/api/measurements",
            json={"weight": 72.5, "body_measurements": {"waist": 80}},
            headers=trainee_headers,
        )
        second = test_client.post("/api/measurements", json={"weight": 72.0}, headers=trainee_headers)

        assert first.status_code == 201
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["body_measurements"] == {}

        listed = test_client.get("/api/measurements", headers=trainee_headers).json()
        assert len(listed) == 1
        latest = test_client.get("/api/measurements/latest-weight", headers=trainee_headers).json()
        assert latest["weight"] == 72.0
        today = test_client.get("/api/measurements/today", headers=trainee_headers).json()
        assert today["id"] == first.json()["id"]

    def test_latest_weight_without_measurements(self, test_client: TestClient, trainee_headers):
        response = test_client.get("/api/measurements/latest-weight", headers=trainee_headers)

        assert response.json()["weight"] is None

    def test_update_body_measurements(self, test_client: TestClient, trainee_headers, john_headers):
        measurement = test_client.post("/api/measurements", json={"weight": 70}, headers=trainee_headers).json()

        own = test_client.put(
            f"/api/measurements/{measurement['id']}/body-measurements",
            json={"body_measurements": {"chest": 100, "waist": 79.5}},
            headers=trainee_headers,
        )
        foreign = test_client.put(
            f"/api/measurements/{measurement['id']}/body-measurements",
            json={"body_measurements": {"chest": 1}},
            headers=john_headers,
        )

        assert own.json()["body_measurements"] == {"chest": 100, "waist": 79.5}
        assert foreign.status_code == 403

    def test_trainer_reads_and_deletes_trainee_measurements(self, test_client: TestClient, trainer_headers, trainee_headers, users_by_email):
        trainee_id = users_by_email["trainee@fitness.com"].id
        measurement = test_client.post("/api/measurements", json={"weight": 70}, headers=trainee_headers).json()

        listed = test_client.get("/api/measurements", params={"trainee_id": trainee_id}, headers=trainer_headers)
        missing_id = test_client.get("/api/measurements", headers=trainer_headers)
        deleted = test_client.delete(f"/api/measurements/{measurement['id']}", headers=trainer_headers)

        assert len(listed.json()) == 1
        assert missing_id.status_code == 400
        assert deleted.status_code == 204

    def test_weight_must_be_positive(self, test_client: TestClient, trainee_headers):
        assert test_client.post("/api/measurements", json={"weight": 0}, headers=trainee_headers).status_code == 422


class TestSteps:
    def test_manual_steps_overwrite_day(self, test_client: TestClient, trainee_headers):
        today = date.today().isoformat()

        first = test_client.post("/api/steps", json={"date": today, "steps": 4000}, headers=trainee_headers)
        second = test_client.post("/api/steps", json={"date": today, "steps": 8500}, headers=trainee_headers)

        assert first.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["is_manual"] is True
        assert test_client.get("/api/steps/today", headers=trainee_headers).json()["steps"] == 8500
        assert test_client.get(f"/api/steps/date/{today}/manual", headers=trainee_headers).json() == {
            "has_manual_entry": True
        }

    def test_steps_listed_newest_first(self, test_client: TestClient, trainee_headers):
        today = date.today()
        for offset, steps in ((2, 3000), (0, 5000), (1, 4000)):
            day = (today - timedelta(days=offset)).isoformat()
            test_client.post("/api/steps", json={"date": day, "steps": steps}, headers=trainee_headers)

        listed = test_client.get("/api/steps", headers=trainee_headers).json()

        assert [entry["steps"] for entry in listed] == [5000, 4000, 3000]

    def test_no_steps_for_day(self, test_client: TestClient, trainee_headers):
        day = (date.today() - timedelta(days=30)).isoformat()

        assert test_client.get(f"/api/steps/date/{day}", headers=trainee_headers).json() is None
        assert test_client.get(f"/api/steps/date/{day}/manual", headers=trainee_headers).json() == {
            "has_manual_entry": False
        }

    def test_delete_steps(self, test_client: TestClient, trainee_headers, john_headers):
        entry = test_client.post(
            "/api/steps",
            json={"date": date.today().isoformat(), "steps": 1000},
            headers=trainee_headers,
        ).json()

        assert test_client.delete(f"/api/steps/{entry['id']}", headers=john_headers).status_code == 403
        assert test_client.delete(f"/api/steps/{entry['id']}", headers=trainee_headers).status_code == 204
        assert test_client.delete(f"/api/steps/{entry['id']}", headers=trainee_headers).status_code == 404

    def test_trainer_views_trainee_steps(self, test_client: TestClient, trainer_headers, trainee_headers, users_by_email):
        test_client.post("/api/steps", json={"date": date.today().isoformat(), "steps": 1234}, headers=trainee_headers)

        response = test_client.get(
            "/api/steps/today",
            params={"trainee_id": users_by_email["trainee@fitness.com"].id},
            headers=trainer_headers,
        )

        assert response.json()["steps"] == 1234


class TestNutrition:
    def test_plan_and_daily_summary(self, test_client: TestClient, trainer_headers, trainee_headers, users_by_email):
        trainee_id = users_by_email["trainee@fitness.com"].id
        plan = test_client.post(
            "/api/nutrition/plans",
            json={
                "trainee_id": trainee_id,
                "name": "Lean Bulk",
                "daily_calories": 2500,
                "macros": {"protein": 180, "carbs": 280, "fat": 70},
                "meals": [
                    {
                        "name": "Breakfast",
                        "foods": [{"name": "Oats", "quantity": 80, "unit": "g", "calories": 300}],
                        "calories": 300,
                    }
                ],
                "recipes": [{"name": "Protein Pancakes", "calories": 450}],
            },
            headers=trainer_headers,
        )
        assert plan.status_code == 201
        assert plan.json()["meals"][0]["id"]
        assert plan.json()["recipes"][0]["id"]

        entry = test_client.post(
            "/api/nutrition/entries",
            json={
                "consumed_foods": [
                    {"name": "Oats", "quantity": 80, "unit": "g", "calories": 300},
                    {"name": "Banana", "quantity": 1, "unit": "piece", "calories": 105},
                ]
            },
            headers=trainee_headers,
        )
        assert entry.status_code == 201
        assert entry.json()["total_calories"] == 405
        assert entry.json()["date"] == date.today().isoformat()

        summary = test_client.get("/api/nutrition/summary", headers=trainee_headers).json()
        assert summary["consumed_calories"] == 405
        assert summary["target_calories"] == 2500
        assert summary["remaining_calories"] == 2095
        assert len(summary["entries"]) == 1

        plans = test_client.get("/api/nutrition/plans", headers=trainee_headers).json()
        assert [item["name"] for item in plans] == ["Lean Bulk"]

    def test_summary_without_plan(self, test_client: TestClient, trainee_headers):
        summary = test_client.get("/api/nutrition/summary", headers=trainee_headers).json()

        assert summary["consumed_calories"] == 0
        assert summary["target_calories"] is None
        assert summary["remaining_calories"] is None

    def test_entries_for_other_day(self, test_client: TestClient, trainee_headers):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        test_client.post(
            "/api/nutrition/entries",
            json={"date": yesterday, "consumed_foods": [{"name": "Rice", "quantity": 200, "unit": "g", "calories": 260}]},
            headers=trainee_headers,
        )

        today_entries = test_client.get("/api/nutrition/entries", headers=trainee_headers).json()
        yesterday_entries = test_client.get(
            "/api/nutrition/entries",
            params={"day": yesterday},
            headers=trainee_headers,
        ).json()

        assert today_entries == []
        assert [entry["total_calories"] for entry in yesterday_entries] == [260]

    def test_empty_food_log_rejected(self, test_client: TestClient, trainee_headers):
        response = test_client.post("/api/nutrition/entries", json={"consumed_foods": []}, headers=trainee_headers)

        assert response.status_code == 422

    def test_trainer_cannot_plan_for_unassigned_trainee(self, test_client: TestClient, trainer_headers, admin_headers):
        outsider = test_client.post(
            "/api/users",
            json={"name": "Free Agent", "email": "free.agent@fitness.com", "password": "agent123", "role": "trainee"},
            headers=admin_headers,
        ).json()

        response = test_client.post(
            "/api/nutrition/plans",
            json={"trainee_id": outsider["id"], "name": "Cut", "daily_calories": 1800},
            headers=trainer_headers,
        )

        assert response.status_code == 403
