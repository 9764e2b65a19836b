"""Exercise progress comparison between training sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, Sequence


class PerformanceRecord(Protocol):
    """Anything exposing the aggregate metrics of a past session."""

    max_weight: float
    max_reps: int
    total_volume: float


def _set_value(performed_set: Any, key: str) -> Any:
    if isinstance(performed_set, dict):
        return performed_set[key]
    return getattr(performed_set, key)


def max_weight(sets: Sequence[Any]) -> float:
    """Heaviest load across performed sets, 0.0 for no sets."""
    return max((float(_set_value(s, "kg")) for s in sets), default=0.0)


def max_reps(sets: Sequence[Any]) -> int:
    """Highest rep count across performed sets, 0 for no sets."""
    return max((int(_set_value(s, "reps")) for s in sets), default=0)


def total_volume(sets: Sequence[Any]) -> float:
    """Sum of kg x reps across performed sets."""
    return sum(float(_set_value(s, "kg")) * int(_set_value(s, "reps")) for s in sets)


@dataclass
class ExerciseProgressComparison:
    """
    Compare the current performance of one exercise with the previous session.

    All deltas are ``current - previous``: positive values are improvements,
    negative values declines. Without a previous session, or without any
    current sets, every delta is zero.

    Args:
        exercise_name: Exercise the comparison covers
        previous: Most recent earlier session, ``None`` on first performance
        current: Sets performed now, as ``{"reps", "kg"}`` dicts or objects
        current_date: When the current session was completed

    Example:
        >>> previous = SimpleNamespace(max_weight=50.0, max_reps=10, total_volume=1500.0)
        >>> comparison = ExerciseProgressComparison(
        ...     "Bench Press", previous, [{"reps": 10, "kg": 55.0}] * 3, datetime.utcnow()
        ... )
        >>> comparison.progress_description
        '5.0kg weight increase'
    """

    exercise_name: str
    previous: PerformanceRecord | None
    current: Sequence[Any]
    current_date: datetime

    @property
    def weight_progress(self) -> float:
        if self.previous is None or not self.current:
            return 0.0
        return max_weight(self.current) - self.previous.max_weight

    @property
    def reps_progress(self) -> int:
        if self.previous is None or not self.current:
            return 0
        return max_reps(self.current) - self.previous.max_reps

    @property
    def volume_progress(self) -> float:
        if self.previous is None or not self.current:
            return 0.0
        return total_volume(self.current) - self.previous.total_volume

    @property
    def weight_progress_percentage(self) -> float:
        """Weight change relative to the previous max, 0.0 when that max was 0."""
        if self.previous is None or not self.previous.max_weight or not self.current:
            return 0.0
        return (max_weight(self.current) - self.previous.max_weight) / self.previous.max_weight * 100

    @property
    def has_improved(self) -> bool:
        return self.weight_progress > 0 or self.reps_progress > 0 or self.volume_progress > 0

    @property
    def status(self) -> str:
        if self.previous is None:
            return "new"
        return "improved" if self.has_improved else "same"

    @property
    def progress_description(self) -> str:
        if self.previous is None:
            return "First time doing this exercise"

        changes = []
        weight = self.weight_progress
        if weight > 0:
            changes.append(f"{weight:.1f}kg weight increase")
        elif weight < 0:
            changes.append(f"{-weight:.1f}kg weight decrease")

        reps = self.reps_progress
        if reps > 0:
            changes.append(f"{reps} more reps")
        elif reps < 0:
            changes.append(f"{-reps} fewer reps")

        if not changes:
            return "Performance maintained"
        return ", ".join(changes)


@dataclass
class TrainingProgressReport:
    """Aggregate of per-exercise comparisons for one completed training."""

    training_id: str
    training_name: str
    trainee_id: str
    trainee_name: str
    completed_at: datetime
    exercise_comparisons: list[ExerciseProgressComparison] = field(default_factory=list)

    @property
    def exercises_with_improvement(self) -> int:
        return sum(1 for comparison in self.exercise_comparisons if comparison.has_improved)

    @property
    def total_exercises(self) -> int:
        return len(self.exercise_comparisons)

    @property
    def improvement_percentage(self) -> float:
        if not self.total_exercises:
            return 0.0
        return self.exercises_with_improvement / self.total_exercises * 100

    @property
    def total_volume_increase(self) -> float:
        return sum(comparison.volume_progress for comparison in self.exercise_comparisons)

    @property
    def overall_progress_summary(self) -> str:
        improved = self.exercises_with_improvement
        if improved == 0:
            return "Performance maintained across all exercises"
        if improved == self.total_exercises:
            return "Improvement in all exercises!"
        return f"Improvement in {improved} out of {self.total_exercises} exercises"
