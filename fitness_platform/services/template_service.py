"""Workout templates: reusable programs trainers can share and instantiate."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from fitness_platform.errors import NotFoundError
from fitness_platform.models.database_models import (
    ExerciseTemplate,
    Training,
    TrainingExercise,
    WorkoutTemplate,
    new_id,
)
from fitness_platform.services.exercise_library_service import to_exercise
from fitness_platform.services.training_service import TrainingService


logger = logging.getLogger(__name__)

DEFAULT_SETS = 3
DEFAULT_REPS = 10
DEFAULT_REST_SECONDS = 60


def _exercise_payloads(exercises: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Snapshot exercise-template payloads, giving each one an id."""
    payloads = []
    for exercise in exercises:
        payload = dict(exercise)
        payload["id"] = payload.get("id") or new_id()
        payload.setdefault("tips", [])
        payloads.append(payload)
    return payloads


class TemplateService:
    """Create, search and instantiate workout templates."""

    def __init__(self, db: Session):
        self.db = db

    def get_templates_for_trainer(self, trainer_id: str) -> list[WorkoutTemplate]:
        return (
            self.db.query(WorkoutTemplate)
            .filter(WorkoutTemplate.created_by == trainer_id)
            .order_by(WorkoutTemplate.created_at.desc())
            .all()
        )

    def get_public_templates(self) -> list[WorkoutTemplate]:
        return (
            self.db.query(WorkoutTemplate)
            .filter(WorkoutTemplate.is_public.is_(True))
            .order_by(WorkoutTemplate.created_at.desc())
            .all()
        )

    def get_visible_templates(self, trainer_id: str) -> list[WorkoutTemplate]:
        """The trainer's own templates plus everyone's public ones."""

        return (
            self.db.query(WorkoutTemplate)
            .filter(or_(WorkoutTemplate.created_by == trainer_id, WorkoutTemplate.is_public.is_(True)))
            .order_by(WorkoutTemplate.created_at.desc())
            .all()
        )

    def get_template_by_id(self, template_id: str) -> WorkoutTemplate | None:
        return self.db.get(WorkoutTemplate, template_id)

    def require_template(self, template_id: str) -> WorkoutTemplate:
        template = self.get_template_by_id(template_id)
        if template is None:
            raise NotFoundError("Template not found")
        return template

    def create_template(self, created_by: str, data: dict[str, Any]) -> WorkoutTemplate:
        data = dict(data)
        template = WorkoutTemplate(
            created_by=created_by,
            name=data["name"],
            description=data.get("description", ""),
            exercises=_exercise_payloads(data.get("exercises", [])),
            difficulty=data.get("difficulty", "beginner"),
            estimated_duration=data.get("estimated_duration", 60),
            category=data.get("category", "strength"),
            notes=data.get("notes"),
            is_public=data.get("is_public", False),
            tags=list(data.get("tags", [])),
        )
        self.db.add(template)
        self.db.flush()
        logger.info("Trainer %s created workout template %s (%s)", created_by, template.id, template.name)
        return template

    def update_template(self, template_id: str, data: dict[str, Any]) -> WorkoutTemplate:
        """Replace a template's content. Owner and creation time are kept."""

        template = self.require_template(template_id)
        template.name = data["name"]
        template.description = data.get("description", "")
        template.exercises = _exercise_payloads(data.get("exercises", []))
        template.difficulty = data.get("difficulty", "beginner")
        template.estimated_duration = data.get("estimated_duration", 60)
        template.category = data.get("category", "strength")
        template.notes = data.get("notes")
        template.is_public = data.get("is_public", False)
        template.tags = list(data.get("tags", []))
        self.db.flush()
        logger.info("Updated workout template %s", template.id)
        return template

    def delete_template(self, template_id: str) -> None:
        template = self.require_template(template_id)
        self.db.delete(template)
        self.db.flush()
        logger.info("Deleted workout template %s", template_id)

    def search_templates(
        self,
        query: str | None = None,
        category: str | None = None,
        difficulty: str | None = None,
        tags: list[str] | None = None,
    ) -> list[WorkoutTemplate]:
        """
        Filter public templates.

        ``query`` matches name or description case-insensitively; ``tags``
        matches templates carrying any of the given tags.
        """
        results = []
        needle = (query or "").strip().lower()
        wanted_tags = set(tags or [])
        for template in self.get_public_templates():
            if needle and needle not in template.name.lower() and needle not in template.description.lower():
                continue
            if category and template.category != category:
                continue
            if difficulty and template.difficulty != difficulty:
                continue
            if wanted_tags and not wanted_tags.intersection(template.tags):
                continue
            results.append(template)
        return results

    def to_training(
        self,
        template: WorkoutTemplate,
        trainee_id: str,
        scheduled_date: datetime,
        trainer_id: str | None = None,
        exercise_overrides: dict[str, dict[str, Any]] | None = None,
    ) -> Training:
        """
        Schedule a training for a trainee from a template.

        ``exercise_overrides`` maps a template exercise id to the sets, reps,
        weight, notes and rest time to use; anything not overridden falls back
        to 3 sets of 10 reps with 60 seconds rest.
        """
        overrides = exercise_overrides or {}
        exercises: list[TrainingExercise] = []
        for payload in template.exercises:
            override = {key: value for key, value in overrides.get(payload.get("id"), {}).items() if value is not None}
            library_entry = ExerciseTemplate(
                name=payload["name"],
                category=payload.get("category", "strength"),
                target_muscle=payload.get("target_muscle", "general"),
                equipment=payload.get("equipment", "bodyweight"),
                instructions=payload.get("instructions", ""),
            )
            exercises.append(
                to_exercise(
                    library_entry,
                    sets=override.get("sets", DEFAULT_SETS),
                    reps=override.get("reps", DEFAULT_REPS),
                    weight=override.get("weight"),
                    notes=override.get("notes"),
                    rest_time_seconds=override.get("rest_time_seconds", DEFAULT_REST_SECONDS),
                )
            )

        training = TrainingService(self.db).create_training(
            trainer_id=trainer_id or template.created_by,
            trainee_id=trainee_id,
            name=template.name,
            scheduled_date=scheduled_date,
            exercises=exercises,
            description=template.description,
            difficulty=template.difficulty,
            estimated_duration=template.estimated_duration,
            category=template.category,
            notes=template.notes,
        )
        logger.info("Instantiated template %s as training %s", template.id, training.id)
        return training
