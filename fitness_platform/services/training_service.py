"""Training CRUD, completion and recurrence group management."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Iterable

from sqlalchemy.orm import Session

from fitness_platform.errors import InvalidOperationError, NotFoundError, PermissionDeniedError
from fitness_platform.models.database_models import Training, TrainingExercise, User, UserRole, new_id
from fitness_platform.models.schemas import ExerciseIn, ExercisePerformance, WorkoutDraft
from fitness_platform.services.exercise_history_service import ExerciseHistoryService
from fitness_platform.services.exercise_library_service import ExerciseLibraryService, to_exercise
from fitness_platform.services.workout_scheduler import plan_occurrences, validate_draft


logger = logging.getLogger(__name__)

# Fields an "edit all occurrences" copies onto every member of the group
GROUP_SHARED_FIELDS = ("name", "description", "difficulty", "estimated_duration", "category", "notes")


class TrainingService:
    """Manage scheduled trainings and their exercises."""

    def __init__(self, db: Session):
        self.db = db

    def get_trainings_for_trainee(self, trainee_id: str) -> list[Training]:
        return (
            self.db.query(Training)
            .filter(Training.trainee_id == trainee_id)
            .order_by(Training.scheduled_date)
            .all()
        )

    def get_trainings_for_trainer(self, trainer_id: str) -> list[Training]:
        return (
            self.db.query(Training)
            .filter(Training.trainer_id == trainer_id)
            .order_by(Training.scheduled_date)
            .all()
        )

    def get_training_by_id(self, training_id: str) -> Training | None:
        return self.db.get(Training, training_id)

    def require_training(self, training_id: str) -> Training:
        training = self.get_training_by_id(training_id)
        if training is None:
            raise NotFoundError(f"Training {training_id} not found")
        return training

    def get_trainings_by_recurrence_group(self, recurrence_group_id: str) -> list[Training]:
        return (
            self.db.query(Training)
            .filter(Training.recurrence_group_id == recurrence_group_id)
            .order_by(Training.recurrence_index, Training.scheduled_date)
            .all()
        )

    def build_exercises(self, exercises: Iterable[ExerciseIn]) -> list[TrainingExercise]:
        """Turn exercise payloads into unsaved exercise rows, resolving library ids."""

        library = ExerciseLibraryService(self.db)
        built = []
        for item in exercises:
            if isinstance(item, dict):
                item = ExerciseIn(**item)
            if item.template_id:
                exercise = to_exercise(
                    library.require_exercise(item.template_id),
                    sets=item.sets,
                    reps=item.reps,
                    weight=item.weight,
                    notes=item.notes,
                    rest_time_seconds=item.rest_time_seconds,
                )
                if item.name:
                    exercise.name = item.name
            else:
                if not (item.name or "").strip():
                    raise InvalidOperationError("Exercise name is required")
                exercise = TrainingExercise(
                    id=new_id(),
                    name=item.name.strip(),
                    sets=item.sets,
                    reps=item.reps,
                    weight=item.weight,
                    notes=item.notes,
                    is_completed=False,
                    actual_sets=[],
                    category=item.category,
                    target_muscle=item.target_muscle,
                    equipment=item.equipment,
                    instructions=item.instructions,
                    rest_time_seconds=item.rest_time_seconds,
                )
            built.append(exercise)
        return built

    def create_training(
        self,
        trainer_id: str | None,
        trainee_id: str,
        name: str,
        scheduled_date: datetime,
        exercises: list[TrainingExercise],
        description: str = "",
        difficulty: str = "beginner",
        estimated_duration: int = 60,
        category: str = "strength",
        notes: str | None = None,
        recurrence_group_id: str | None = None,
        recurrence_index: int | None = None,
        total_recurrences: int | None = None,
    ) -> Training:
        training = Training(
            name=name,
            description=description,
            trainee_id=trainee_id,
            trainer_id=trainer_id,
            scheduled_date=scheduled_date,
            difficulty=difficulty,
            estimated_duration=estimated_duration,
            category=category,
            notes=notes,
            recurrence_group_id=recurrence_group_id,
            recurrence_index=recurrence_index,
            total_recurrences=total_recurrences,
        )
        self._attach_exercises(training, exercises)
        self.db.add(training)
        self.db.flush()

        logger.info("Created training %s (%s) for trainee %s", training.id, name, trainee_id)
        return training

    def update_training(self, training_id: str, changes: dict[str, Any]) -> Training:
        """
        Apply a partial edit to a single training.

        ``changes`` holds the submitted fields; ``exercises`` (if present) is a
        list of :class:`ExerciseIn` that replaces the current exercises.
        """
        training = self.require_training(training_id)
        changes = dict(changes)
        exercises = changes.pop("exercises", None)

        for field_name, value in changes.items():
            if value is None and field_name not in ("notes",):
                continue
            setattr(training, field_name, value)
        if exercises is not None:
            self._attach_exercises(training, self.build_exercises(exercises))

        self.db.flush()
        logger.info("Updated training %s", training.id)
        return training

    def update_recurrence_group(self, training_id: str, changes: dict[str, Any]) -> list[Training]:
        """
        Apply an edit to every occurrence in a training's recurrence group.

        Shared fields and exercises are copied onto all members. Each member
        keeps its id, recurrence position and completion status; only the
        edited training takes a new scheduled date. A training outside any
        group is updated on its own.
        """
        training = self.require_training(training_id)
        if not training.is_recurring:
            return [self.update_training(training_id, changes)]

        changes = dict(changes)
        exercises = changes.pop("exercises", None)
        scheduled_date = changes.pop("scheduled_date", None)

        members = self.get_trainings_by_recurrence_group(training.recurrence_group_id)
        for member in members:
            for field_name in GROUP_SHARED_FIELDS:
                if field_name not in changes:
                    continue
                value = changes[field_name]
                if value is None and field_name != "notes":
                    continue
                setattr(member, field_name, value)
            if exercises is not None:
                self._attach_exercises(member, self.build_exercises(exercises))

        if scheduled_date is not None:
            training.scheduled_date = scheduled_date

        self.db.flush()
        logger.info(
            "Updated recurrence group %s (%d trainings)",
            training.recurrence_group_id,
            len(members),
        )
        return members

    def complete_training(
        self,
        training_id: str,
        performances: list[ExercisePerformance],
        completed_at: datetime | None = None,
    ) -> Training:
        """
        Mark a training completed, store the actual sets per exercise and
        record them in the exercise history.

        Raises:
            InvalidOperationError: If the training is already completed or a
                performance names an exercise outside the training
        """
        training = self.require_training(training_id)
        if training.is_completed:
            raise InvalidOperationError("Training is already completed")

        by_id = {exercise.id: exercise for exercise in training.exercises}
        for performance in performances:
            exercise = by_id.get(performance.exercise_id)
            if exercise is None:
                raise InvalidOperationError(
                    f"Exercise {performance.exercise_id} is not part of training {training.id}"
                )
            sets = [performed.model_dump() for performed in performance.actual_sets]
            exercise.actual_sets = sets
            exercise.is_completed = bool(sets)
            if sets:
                exercise.actual_weight = max(s["kg"] for s in sets)
                exercise.actual_reps = max(s["reps"] for s in sets)
            if performance.notes is not None:
                exercise.notes = performance.notes

        training.is_completed = True
        training.completed_at = completed_at or datetime.utcnow()
        self.db.flush()

        ExerciseHistoryService(self.db).save_training_history(training)
        logger.info("Training %s completed by trainee %s", training.id, training.trainee_id)
        return training

    def delete_training(self, training_id: str) -> list[str]:
        training = self.require_training(training_id)
        self.db.delete(training)
        self.db.flush()
        logger.info("Deleted training %s", training_id)
        return [training_id]

    def delete_recurrence_group(self, recurrence_group_id: str) -> list[str]:
        members = self.get_trainings_by_recurrence_group(recurrence_group_id)
        if not members:
            raise NotFoundError(f"Recurrence group {recurrence_group_id} not found")

        deleted_ids = [member.id for member in members]
        for member in members:
            self.db.delete(member)
        self.db.flush()
        logger.info("Deleted recurrence group %s (%d trainings)", recurrence_group_id, len(deleted_ids))
        return deleted_ids

    def create_from_draft(self, draft: WorkoutDraft, trainer: User, monthly_step_days: int = 30) -> list[Training]:
        """
        Persist everything the workout creation wizard collected.

        One training per selected trainee and occurrence, each with its own
        copy of the exercises.

        Raises:
            InvalidOperationError: If a wizard step is incomplete
            PermissionDeniedError: If a selected trainee is not the trainer's
        """
        validation = validate_draft(draft)
        if not validation.valid:
            raise InvalidOperationError(f"{validation.step_title}: {'; '.join(validation.errors)}")

        for trainee_id in dict.fromkeys(draft.trainee_ids):
            trainee = self.db.get(User, trainee_id)
            if trainee is None or trainee.role != UserRole.trainee:
                raise NotFoundError(f"Trainee {trainee_id} not found")
            if trainer.role != UserRole.admin and trainee.trainer_id != trainer.id:
                raise PermissionDeniedError(f"Trainee {trainee_id} is not assigned to you")

        start = draft.scheduled_date or datetime.utcnow() + timedelta(days=1)
        plan = plan_occurrences(
            list(dict.fromkeys(draft.trainee_ids)),
            start,
            draft.frequency,
            draft.count,
            monthly_step_days=monthly_step_days,
        )

        created = []
        for occurrence in plan:
            created.append(
                self.create_training(
                    trainer_id=trainer.id,
                    trainee_id=occurrence.trainee_id,
                    name=draft.name.strip(),
                    scheduled_date=occurrence.scheduled_date,
                    exercises=self.build_exercises(draft.exercises),
                    description=draft.description.strip(),
                    difficulty=draft.difficulty,
                    estimated_duration=draft.estimated_duration,
                    category=draft.category,
                    notes=draft.notes,
                    recurrence_group_id=occurrence.recurrence_group_id,
                    recurrence_index=occurrence.recurrence_index,
                    total_recurrences=occurrence.total_recurrences,
                )
            )

        logger.info(
            "Wizard created %d trainings for %d trainees (%s)",
            len(created),
            len(set(draft.trainee_ids)),
            draft.frequency.value,
        )
        return created

    def _attach_exercises(self, training: Training, exercises: list[TrainingExercise]) -> None:
        training.exercises.clear()
        for position, exercise in enumerate(exercises):
            exercise.position = position
            training.exercises.append(exercise)
