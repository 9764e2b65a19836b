"""Per-exercise performance history and progress reports."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from fitness_platform.errors import InvalidOperationError
from fitness_platform.models.database_models import ExerciseHistoryEntry, Training
from fitness_platform.services.progress import ExerciseProgressComparison, TrainingProgressReport


logger = logging.getLogger(__name__)


class ExerciseHistoryService:
    """Record what trainees actually lifted and compare sessions."""

    def __init__(self, db: Session):
        self.db = db

    def save_training_history(self, training: Training) -> list[ExerciseHistoryEntry]:
        """
        Store one history entry per exercise that has recorded sets.

        Args:
            training: A completed training

        Returns:
            The entries created, in exercise order

        Raises:
            InvalidOperationError: If the training is not completed
        """
        if not training.is_completed or training.completed_at is None:
            raise InvalidOperationError("Training must be completed to save history")

        entries = []
        for exercise in training.exercises:
            if not exercise.actual_sets:
                continue
            entry = ExerciseHistoryEntry(
                exercise_name=exercise.name,
                trainee_id=training.trainee_id,
                training_id=training.id,
                completed_at=training.completed_at,
                actual_sets=[dict(s) for s in exercise.actual_sets],
                notes=exercise.notes,
            )
            self.db.add(entry)
            entries.append(entry)

        self.db.flush()
        logger.info("Saved %d history entries for training %s", len(entries), training.id)
        return entries

    def get_exercise_history(
        self,
        trainee_id: str,
        exercise_name: str,
        limit: int | None = None,
    ) -> list[ExerciseHistoryEntry]:
        """History of one exercise for one trainee, newest first."""

        query = (
            self.db.query(ExerciseHistoryEntry)
            .filter(
                ExerciseHistoryEntry.trainee_id == trainee_id,
                ExerciseHistoryEntry.exercise_name == exercise_name,
            )
            .order_by(ExerciseHistoryEntry.completed_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_last_exercise_history(self, trainee_id: str, exercise_name: str) -> ExerciseHistoryEntry | None:
        entries = self.get_exercise_history(trainee_id, exercise_name, limit=1)
        return entries[0] if entries else None

    def get_trainee_history(self, trainee_id: str) -> list[ExerciseHistoryEntry]:
        return (
            self.db.query(ExerciseHistoryEntry)
            .filter(ExerciseHistoryEntry.trainee_id == trainee_id)
            .order_by(ExerciseHistoryEntry.completed_at.desc())
            .all()
        )

    def get_trainee_exercise_names(self, trainee_id: str) -> list[str]:
        rows = (
            self.db.query(ExerciseHistoryEntry.exercise_name)
            .filter(ExerciseHistoryEntry.trainee_id == trainee_id)
            .distinct()
            .all()
        )
        return sorted(name for (name,) in rows)

    def get_exercise_stats(self, trainee_id: str, exercise_name: str) -> dict[str, Any]:
        """Summary of every recorded session of one exercise."""

        history = self.get_exercise_history(trainee_id, exercise_name)
        if not history:
            return {
                "total_sessions": 0,
                "max_weight": 0.0,
                "max_reps": 0,
                "average_volume": 0.0,
                "last_performed": None,
                "first_performed": None,
            }

        return {
            "total_sessions": len(history),
            "max_weight": max(entry.max_weight for entry in history),
            "max_reps": max(entry.max_reps for entry in history),
            "average_volume": sum(entry.total_volume for entry in history) / len(history),
            "last_performed": history[0].completed_at,
            "first_performed": history[-1].completed_at,
        }

    def generate_progress_report(self, training: Training, trainee_name: str) -> TrainingProgressReport:
        """
        Compare every performed exercise of a completed training with the
        trainee's previous session of the same exercise.

        The previous session is the newest history entry from a different
        training, so a training is never compared with itself.

        Raises:
            InvalidOperationError: If the training is not completed
        """
        if not training.is_completed or training.completed_at is None:
            raise InvalidOperationError("Training must be completed to generate progress report")

        comparisons = []
        for exercise in training.exercises:
            if not exercise.actual_sets:
                continue
            previous = (
                self.db.query(ExerciseHistoryEntry)
                .filter(
                    ExerciseHistoryEntry.trainee_id == training.trainee_id,
                    ExerciseHistoryEntry.exercise_name == exercise.name,
                    ExerciseHistoryEntry.training_id != training.id,
                )
                .order_by(ExerciseHistoryEntry.completed_at.desc())
                .first()
            )
            comparisons.append(
                ExerciseProgressComparison(
                    exercise_name=exercise.name,
                    previous=previous,
                    current=list(exercise.actual_sets),
                    current_date=training.completed_at,
                )
            )

        report = TrainingProgressReport(
            training_id=training.id,
            training_name=training.name,
            trainee_id=training.trainee_id,
            trainee_name=trainee_name,
            completed_at=training.completed_at,
            exercise_comparisons=comparisons,
        )
        logger.info(
            "Progress report for training %s: %d/%d exercises improved",
            training.id,
            report.exercises_with_improvement,
            report.total_exercises,
        )
        return report

    def clear_history(self) -> int:
        deleted = self.db.query(ExerciseHistoryEntry).delete()
        self.db.flush()
        logger.info("Cleared %d exercise history entries", deleted)
        return deleted

    def history_count(self) -> int:
        return self.db.query(ExerciseHistoryEntry).count()
