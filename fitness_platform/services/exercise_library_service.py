"""Exercise library lookups and conversion into workout exercises."""
from __future__ import annotations

import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from fitness_platform.errors import NotFoundError
from fitness_platform.models.database_models import ExerciseTemplate, TrainingExercise, new_id


logger = logging.getLogger(__name__)


class ExerciseLibraryService:
    """Browse the system exercise library and trainers' custom exercises."""

    def __init__(self, db: Session):
        self.db = db

    def get_all_exercises(self) -> list[ExerciseTemplate]:
        return self.db.query(ExerciseTemplate).order_by(ExerciseTemplate.is_custom, ExerciseTemplate.created_at).all()

    def get_exercises(
        self,
        category: str | None = None,
        target_muscle: str | None = None,
        equipment: str | None = None,
        difficulty_level: str | None = None,
    ) -> list[ExerciseTemplate]:
        """Return library entries matching every filter that is given."""

        query = self.db.query(ExerciseTemplate)
        if category:
            query = query.filter(ExerciseTemplate.category == category)
        if target_muscle:
            query = query.filter(ExerciseTemplate.target_muscle == target_muscle)
        if equipment:
            query = query.filter(ExerciseTemplate.equipment == equipment)
        if difficulty_level:
            query = query.filter(ExerciseTemplate.difficulty_level == difficulty_level)
        return query.order_by(ExerciseTemplate.is_custom, ExerciseTemplate.created_at).all()

    def get_exercise_by_id(self, exercise_id: str) -> ExerciseTemplate | None:
        return self.db.get(ExerciseTemplate, exercise_id)

    def require_exercise(self, exercise_id: str) -> ExerciseTemplate:
        template = self.get_exercise_by_id(exercise_id)
        if template is None:
            raise NotFoundError(f"Exercise {exercise_id} not found")
        return template

    def get_available_categories(self) -> list[str]:
        return self._distinct(ExerciseTemplate.category)

    def get_available_muscles(self) -> list[str]:
        return self._distinct(ExerciseTemplate.target_muscle)

    def get_available_equipment(self) -> list[str]:
        return self._distinct(ExerciseTemplate.equipment)

    def search_exercises(self, query: str) -> list[ExerciseTemplate]:
        """Case-insensitive substring search over name, target muscle and category."""

        needle = f"%{query.strip().lower()}%"
        return (
            self.db.query(ExerciseTemplate)
            .filter(
                or_(
                    func.lower(ExerciseTemplate.name).like(needle),
                    func.lower(ExerciseTemplate.target_muscle).like(needle),
                    func.lower(ExerciseTemplate.category).like(needle),
                )
            )
            .order_by(ExerciseTemplate.is_custom, ExerciseTemplate.created_at)
            .all()
        )

    def add_custom_exercise(
        self,
        trainer_id: str,
        name: str,
        category: str,
        target_muscle: str,
        equipment: str,
        instructions: str = "",
        difficulty_level: str = "beginner",
        tips: list[str] | None = None,
        video_url: str | None = None,
    ) -> ExerciseTemplate:
        template = ExerciseTemplate(
            name=name,
            category=category,
            target_muscle=target_muscle,
            equipment=equipment,
            instructions=instructions,
            difficulty_level=difficulty_level,
            tips=list(tips or []),
            video_url=video_url,
            created_by=trainer_id,
            is_custom=True,
        )
        self.db.add(template)
        self.db.flush()
        logger.info("Trainer %s added custom exercise %s (%s)", trainer_id, template.id, name)
        return template

    def _distinct(self, column) -> list[str]:
        return sorted({value for (value,) in self.db.query(column).distinct().all() if value})


def to_exercise(
    template: ExerciseTemplate,
    sets: int,
    reps: int,
    weight: float | None = None,
    notes: str | None = None,
    rest_time_seconds: int = 60,
) -> TrainingExercise:
    """Build a workout-specific exercise from a library entry.

    The result gets a fresh id and copies the entry's category, target muscle,
    equipment and instructions; it is not attached to any training yet.
    """
    return TrainingExercise(
        id=new_id(),
        name=template.name,
        sets=sets,
        reps=reps,
        weight=weight,
        notes=notes,
        is_completed=False,
        actual_sets=[],
        category=template.category,
        target_muscle=template.target_muscle,
        equipment=template.equipment,
        instructions=template.instructions or "",
        rest_time_seconds=rest_time_seconds,
    )
