"""Service-level tests for seeding, recurrence groups and history."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import Session

from fitness_platform.errors import InvalidOperationError, NotFoundError
from fitness_platform.models.database_models import ExerciseTemplate, User, WorkoutTemplate
from fitness_platform.models.schemas import ActualSet, ExerciseIn, ExercisePerformance, WorkoutDraft
from fitness_platform.services.auth_service import verify_password
from fitness_platform.services.exercise_history_service import ExerciseHistoryService
from fitness_platform.services.measurement_service import MeasurementService
from fitness_platform.services.seed_service import seed_demo_data
from fitness_platform.services.training_service import TrainingService


def weekly_draft(trainee_ids, count=4) -> WorkoutDraft:
    return WorkoutDraft(
        name="Conditioning",
        description="Weekly conditioning",
        trainee_ids=trainee_ids,
        scheduled_date=datetime(2030, 1, 7, 8, 0),
        exercises=[ExerciseIn(template_id="11", sets=3, reps=30), ExerciseIn(name="Row Sprint")],
        frequency="weekly",
        count=count,
    )


class TestSeed:
    def test_seed_is_idempotent(self, db_session: Session):
        assert seed_demo_data(db_session) == {"users": 0, "exercises": 0, "templates": 0}
        assert db_session.query(User).count() == 6
        assert db_session.query(ExerciseTemplate).count() == 13
        assert db_session.query(WorkoutTemplate).count() == 2

    def test_seeded_passwords_are_hashed(self, users_by_email):
        admin = users_by_email["admin@fitness.com"]

        assert admin.password_hash != "admin123"
        assert verify_password(admin, "admin123")
        assert not verify_password(admin, "trainer123")

    def test_trainees_assigned_to_demo_trainer(self, users_by_email):
        trainer = users_by_email["trainer@fitness.com"]

        assert sorted(trainer.trainee_ids) == sorted(
            user.id for user in users_by_email.values() if user.trainer_id == trainer.id
        )
        assert len(trainer.trainee_ids) == 4


class TestRecurrenceGroups:
    def test_create_from_draft(self, db_session: Session, users_by_email):
        trainer = users_by_email["trainer@fitness.com"]
        trainee = users_by_email["trainee@fitness.com"]

        created = TrainingService(db_session).create_from_draft(weekly_draft([trainee.id, trainee.id]), trainer)

        assert len(created) == 4
        assert [training.recurrence_index for training in created] == [0, 1, 2, 3]
        assert created[3].scheduled_date == datetime(2030, 1, 28, 8, 0)
        assert created[0].exercises[0].name == "Jumping Jacks"
        assert created[0].exercises[0].category == "cardio"
        assert created[0].exercises[1].position == 1

    def test_group_edit_keeps_completion_and_positions(self, db_session: Session, users_by_email):
        service = TrainingService(db_session)
        trainer = users_by_email["trainer@fitness.com"]
        trainee = users_by_email["trainee@fitness.com"]
        created = service.create_from_draft(weekly_draft([trainee.id], count=3), trainer)
        service.complete_training(
            created[0].id,
            [ExercisePerformance(exercise_id=created[0].exercises[0].id, actual_sets=[ActualSet(reps=30)])],
        )

        updated = service.update_recurrence_group(
            created[1].id,
            {"description": "Harder", "scheduled_date": datetime(2030, 2, 1, 9, 0)},
        )

        assert [training.description for training in updated] == ["Harder"] * 3
        assert updated[0].is_completed is True
        assert [training.recurrence_index for training in updated] == [0, 1, 2]
        assert updated[1].scheduled_date == datetime(2030, 2, 1, 9, 0)
        assert updated[2].scheduled_date == datetime(2030, 1, 21, 8, 0)

    def test_delete_missing_group(self, db_session: Session):
        with pytest.raises(NotFoundError):
            TrainingService(db_session).delete_recurrence_group("no-such-group")

    def test_exercise_without_name_rejected(self, db_session: Session):
        with pytest.raises(InvalidOperationError):
            TrainingService(db_session).build_exercises([{"name": "   "}])


class TestMeasurements:
    def test_default_timestamp_is_utc(self, db_session: Session, users_by_email):
        trainee_id = users_by_email["trainee@fitness.com"].id
        service = MeasurementService(db_session)

        before = datetime.utcnow()
        measurement = service.add_measurement(trainee_id, 70.5)
        after = datetime.utcnow()

        assert before <= measurement.date <= after
        assert service.get_today_measurement(trainee_id).id == measurement.id


class TestHistory:
    def test_history_requires_completed_training(self, db_session: Session, users_by_email):
        service = TrainingService(db_session)
        training = service.create_training(
            trainer_id=users_by_email["trainer@fitness.com"].id,
            trainee_id=users_by_email["trainee@fitness.com"].id,
            name="Open",
            scheduled_date=datetime(2030, 1, 1),
            exercises=service.build_exercises([ExerciseIn(template_id="1")]),
        )

        with pytest.raises(InvalidOperationError, match="Training must be completed to save history"):
            ExerciseHistoryService(db_session).save_training_history(training)

    def test_history_queries_and_clear(self, db_session: Session, users_by_email):
        service = TrainingService(db_session)
        history = ExerciseHistoryService(db_session)
        trainee_id = users_by_email["trainee@fitness.com"].id
        trainer_id = users_by_email["trainer@fitness.com"].id
        completed_at = datetime(2030, 1, 1, 18, 0)

        for week, kg in enumerate((40.0, 45.0, 42.5)):
            training = service.create_training(
                trainer_id=trainer_id,
                trainee_id=trainee_id,
                name=f"Week {week + 1}",
                scheduled_date=completed_at + timedelta(weeks=week),
                exercises=service.build_exercises([ExerciseIn(template_id="2"), ExerciseIn(template_id="1")]),
            )
            bench = training.exercises[0]
            service.complete_training(
                training.id,
                [ExercisePerformance(exercise_id=bench.id, actual_sets=[ActualSet(reps=8, kg=kg)])],
                completed_at=completed_at + timedelta(weeks=week),
            )

        latest = history.get_last_exercise_history(trainee_id, "Bench Press")
        assert latest.max_weight == 42.5
        assert [entry.max_weight for entry in history.get_exercise_history(trainee_id, "Bench Press", limit=2)] == [
            42.5,
            45.0,
        ]
        assert history.get_trainee_exercise_names(trainee_id) == ["Bench Press"]
        assert history.get_last_exercise_history(trainee_id, "Push-ups") is None

        stats = history.get_exercise_stats(trainee_id, "Bench Press")
        assert stats["total_sessions"] == 3
        assert stats["max_weight"] == 45.0
        assert stats["first_performed"] == completed_at

        assert history.clear_history() == 3
        assert history.history_count() == 0
        assert history.get_exercise_stats(trainee_id, "Bench Press")["total_sessions"] == 0
