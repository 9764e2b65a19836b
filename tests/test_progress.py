"""Tests for exercise progress comparison and training reports."""
from datetime import datetime

import pytest

from fitness_platform.services.progress import (
    ExerciseProgressComparison,
    TrainingProgressReport,
    max_reps,
    max_weight,
    total_volume,
)


NOW = datetime(2025, 3, 10, 18, 0)


class MockHistoryEntry:
    """Mock previous session exposing aggregate metrics."""

    def __init__(self, max_weight: float, max_reps: int, total_volume: float):
        self.max_weight = max_weight
        self.max_reps = max_reps
        self.total_volume = total_volume


def sets(*pairs):
    return [{"reps": reps, "kg": kg} for reps, kg in pairs]


def comparison(previous, current, name="Bench Press"):
    return ExerciseProgressComparison(
        exercise_name=name,
        previous=previous,
        current=current,
        current_date=NOW,
    )


class TestSetMetrics:
    def test_metrics_over_sets(self):
        performed = sets((10, 50.0), (8, 55.0), (6, 60.0))

        assert max_weight(performed) == 60.0
        assert max_reps(performed) == 10
        assert total_volume(performed) == pytest.approx(500 + 440 + 360)

    def test_metrics_default_to_zero(self):
        assert max_weight([]) == 0.0
        assert max_reps([]) == 0
        assert total_volume([]) == 0


class TestExerciseProgressComparison:
    """Test per-exercise deltas and descriptions."""

    def test_first_time(self):
        result = comparison(None, sets((10, 20.0)))

        assert result.weight_progress == 0.0
        assert result.reps_progress == 0
        assert result.volume_progress == 0.0
        assert result.has_improved is False
        assert result.status == "new"
        assert result.progress_description == "First time doing this exercise"

    def test_weight_increase(self):
        previous = MockHistoryEntry(max_weight=50.0, max_reps=10, total_volume=1500.0)
        result = comparison(previous, sets((10, 55.0), (10, 55.0), (10, 55.0)))

        assert result.weight_progress == pytest.approx(5.0)
        assert result.reps_progress == 0
        assert result.volume_progress == pytest.approx(150.0)
        assert result.weight_progress_percentage == pytest.approx(10.0)
        assert result.has_improved is True
        assert result.status == "improved"
        assert result.progress_description == "5.0kg weight increase"

    def test_weight_decrease_with_more_reps(self):
        previous = MockHistoryEntry(max_weight=60.0, max_reps=8, total_volume=480.0)
        result = comparison(previous, sets((12, 57.5)))

        assert result.weight_progress == pytest.approx(-2.5)
        assert result.reps_progress == 4
        assert result.progress_description == "2.5kg weight decrease, 4 more reps"

    def test_fewer_reps(self):
        previous = MockHistoryEntry(max_weight=0.0, max_reps=20, total_volume=0.0)
        result = comparison(previous, sets((15, 0.0)), name="Push-ups")

        assert result.reps_progress == -5
        assert result.weight_progress_percentage == 0.0
        assert result.has_improved is False
        assert result.status == "same"
        assert result.progress_description == "5 fewer reps"

    def test_performance_maintained(self):
        previous = MockHistoryEntry(max_weight=40.0, max_reps=10, total_volume=400.0)
        result = comparison(previous, sets((10, 40.0)))

        assert result.has_improved is False
        assert result.progress_description == "Performance maintained"

    def test_empty_current_sets_report_no_change(self):
        previous = MockHistoryEntry(max_weight=40.0, max_reps=10, total_volume=400.0)
        result = comparison(previous, [])

        assert result.weight_progress == 0.0
        assert result.volume_progress == 0.0
        assert result.weight_progress_percentage == 0.0

    def test_volume_only_improvement_counts(self):
        previous = MockHistoryEntry(max_weight=40.0, max_reps=10, total_volume=400.0)
        result = comparison(previous, sets((10, 40.0), (10, 40.0)))

        assert result.weight_progress == 0.0
        assert result.reps_progress == 0
        assert result.has_improved is True
        assert result.progress_description == "Performance maintained"


class TestTrainingProgressReport:
    """Test aggregation across a training."""

    def build_report(self, comparisons):
        return TrainingProgressReport(
            training_id="training-1",
            training_name="Upper Body",
            trainee_id="trainee-1",
            trainee_name="Jane Trainee",
            completed_at=NOW,
            exercise_comparisons=comparisons,
        )

    def test_empty_report(self):
        report = self.build_report([])

        assert report.total_exercises == 0
        assert report.improvement_percentage == 0.0
        assert report.total_volume_increase == 0
        assert report.overall_progress_summary == "Performance maintained across all exercises"

    def test_partial_improvement(self):
        improved = comparison(MockHistoryEntry(50.0, 10, 500.0), sets((10, 55.0)))
        same = comparison(MockHistoryEntry(20.0, 10, 200.0), sets((10, 20.0)), name="Rows")
        declined = comparison(MockHistoryEntry(30.0, 10, 300.0), sets((8, 30.0)), name="Curls")
        report = self.build_report([improved, same, declined])

        assert report.total_exercises == 3
        assert report.exercises_with_improvement == 1
        assert report.improvement_percentage == pytest.approx(100 / 3)
        assert report.total_volume_increase == pytest.approx(50.0 + 0.0 - 60.0)
        assert report.overall_progress_summary == "Improvement in 1 out of 3 exercises"

    def test_all_improved(self):
        report = self.build_report(
            [
                comparison(MockHistoryEntry(50.0, 10, 500.0), sets((10, 52.5))),
                comparison(MockHistoryEntry(0.0, 10, 0.0), sets((12, 0.0)), name="Push-ups"),
            ]
        )

        assert report.improvement_percentage == 100.0
        assert report.overall_progress_summary == "Improvement in all exercises!"

    def test_first_sessions_do_not_count_as_improvement(self):
        report = self.build_report([comparison(None, sets((10, 40.0)))])

        assert report.exercises_with_improvement == 0
        assert report.overall_progress_summary == "Performance maintained across all exercises"
