"""Recurrence planning and step validation for the workout creation wizard."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Sequence

from fitness_platform.errors import InvalidOperationError
from fitness_platform.models.database_models import new_id
from fitness_platform.models.schemas import RecurrenceFrequency, WizardValidation, WorkoutDraft


logger = logging.getLogger(__name__)

STEP_TITLES = ("Basic Information", "Select Trainee", "Add Exercises", "Review & Create")

# "Repeat for (days)" offers one week; weekly and monthly offer one year
MAX_DAILY_OCCURRENCES = 7
MAX_OCCURRENCES = 52


@dataclass(frozen=True)
class PlannedOccurrence:
    """One training instance the wizard will create."""

    trainee_id: str
    scheduled_date: datetime
    recurrence_group_id: str | None = None
    recurrence_index: int | None = None
    total_recurrences: int | None = None


def step_days(frequency: RecurrenceFrequency, monthly_step_days: int = 30) -> int:
    """
    Days between consecutive occurrences.

    Args:
        frequency: Recurrence frequency chosen in the wizard
        monthly_step_days: Length of a "month" step

    Returns:
        0 for none, 1 for daily, 7 for weekly, ``monthly_step_days`` for monthly
    """
    return {
        RecurrenceFrequency.none: 0,
        RecurrenceFrequency.daily: 1,
        RecurrenceFrequency.weekly: 7,
        RecurrenceFrequency.monthly: monthly_step_days,
    }[frequency]


def occurrence_count(frequency: RecurrenceFrequency, count: int) -> int:
    """
    Number of trainings to create per trainee.

    Raises:
        InvalidOperationError: If ``count`` is outside the range the frequency allows
    """
    if frequency == RecurrenceFrequency.none:
        return 1

    limit = MAX_DAILY_OCCURRENCES if frequency == RecurrenceFrequency.daily else MAX_OCCURRENCES
    if not 1 <= count <= limit:
        raise InvalidOperationError(f"A {frequency.value} workout can repeat between 1 and {limit} times")
    return count


def plan_occurrences(
    trainee_ids: Sequence[str],
    start: datetime,
    frequency: RecurrenceFrequency,
    count: int = 1,
    monthly_step_days: int = 30,
    id_factory: Callable[[], str] = new_id,
) -> list[PlannedOccurrence]:
    """
    Expand a wizard selection into individual training occurrences.

    Every trainee gets ``occurrences`` trainings scheduled at
    ``start + step * i``. When a trainee gets more than one, they share a
    recurrence group id of their own, so editing or deleting "all" only
    touches that trainee's series.

    Args:
        trainee_ids: Selected trainees, in selection order
        start: Date and time of the first occurrence
        frequency: Recurrence frequency
        count: Requested repetitions, ignored for ``none``
        monthly_step_days: Length of a "month" step
        id_factory: Generator for recurrence group ids

    Returns:
        ``len(trainee_ids) * occurrences`` planned occurrences, grouped by trainee

    Example:
        >>> plan = plan_occurrences(["a", "b"], datetime(2025, 1, 1), RecurrenceFrequency.weekly, 3)
        >>> len(plan), plan[2].scheduled_date
        (6, datetime.datetime(2025, 1, 15, 0, 0))
    """
    occurrences = occurrence_count(frequency, count)
    step = timedelta(days=step_days(frequency, monthly_step_days))

    plan: list[PlannedOccurrence] = []
    for trainee_id in trainee_ids:
        group_id = id_factory() if occurrences > 1 else None
        for index in range(occurrences):
            plan.append(
                PlannedOccurrence(
                    trainee_id=trainee_id,
                    scheduled_date=start + step * index,
                    recurrence_group_id=group_id,
                    recurrence_index=index if group_id else None,
                    total_recurrences=occurrences if group_id else None,
                )
            )

    logger.debug(
        "Planned %d occurrences for %d trainees (%s x%d)",
        len(plan),
        len(trainee_ids),
        frequency.value,
        occurrences,
    )
    return plan


def step_errors(draft: WorkoutDraft, step: int) -> list[str]:
    """Return the problems preventing the wizard from leaving ``step``."""
    errors: list[str] = []
    if step == 0:
        for field_name in ("name", "description", "category", "difficulty"):
            if not str(getattr(draft, field_name) or "").strip():
                errors.append(f"{field_name.capitalize()} is required")
    elif step == 1:
        if not draft.trainee_ids:
            errors.append("Select at least one trainee")
    elif step == 2:
        if not draft.exercises:
            errors.append("Add at least one exercise")
        for position, exercise in enumerate(draft.exercises, start=1):
            if not exercise.template_id and not (exercise.name or "").strip():
                errors.append(f"Exercise {position} needs a name or a library exercise")
    elif step == 3:
        try:
            occurrence_count(draft.frequency, draft.count)
        except InvalidOperationError as exc:
            errors.append(exc.message)
    return errors


def validate_draft(draft: WorkoutDraft) -> WizardValidation:
    """Walk the wizard steps in order and report the first one that fails."""
    for step, title in enumerate(STEP_TITLES):
        errors = step_errors(draft, step)
        if errors:
            return WizardValidation(valid=False, failed_step=step, step_title=title, errors=errors)
    return WizardValidation(valid=True)
