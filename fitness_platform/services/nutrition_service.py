"""Nutrition plans assigned by trainers and food logged by trainees."""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from fitness_platform.models.database_models import NutritionEntry, NutritionPlan, new_id


logger = logging.getLogger(__name__)


def _with_ids(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{**item, "id": item.get("id") or new_id()} for item in items]


class NutritionService:
    def __init__(self, db: Session):
        self.db = db

    def get_nutrition_plans(self, trainee_id: str) -> list[NutritionPlan]:
        return (
            self.db.query(NutritionPlan)
            .filter(NutritionPlan.trainee_id == trainee_id)
            .order_by(NutritionPlan.created_at.desc())
            .all()
        )

    def create_nutrition_plan(
        self,
        trainer_id: str | None,
        trainee_id: str,
        name: str,
        daily_calories: int,
        macros: dict[str, int] | None = None,
        meals: list[dict[str, Any]] | None = None,
        recipes: list[dict[str, Any]] | None = None,
    ) -> NutritionPlan:
        plan = NutritionPlan(
            trainee_id=trainee_id,
            trainer_id=trainer_id,
            name=name,
            daily_calories=daily_calories,
            macros=dict(macros or {}),
            meals=_with_ids(meals or []),
            recipes=_with_ids(recipes or []),
        )
        self.db.add(plan)
        self.db.flush()
        logger.info("Created nutrition plan %s for trainee %s (%d kcal)", plan.id, trainee_id, daily_calories)
        return plan

    def log_nutrition_entry(
        self,
        trainee_id: str,
        consumed_foods: list[dict[str, Any]],
        entry_date: date | None = None,
    ) -> NutritionEntry:
        """Record foods eaten; the entry's total is the sum of their calories."""

        entry = NutritionEntry(
            trainee_id=trainee_id,
            date=entry_date or date.today(),
            consumed_foods=[dict(food) for food in consumed_foods],
            total_calories=sum(int(food.get("calories", 0)) for food in consumed_foods),
        )
        self.db.add(entry)
        self.db.flush()
        logger.info("Trainee %s logged %d kcal for %s", trainee_id, entry.total_calories, entry.date)
        return entry

    def get_nutrition_entries(self, trainee_id: str, entry_date: date) -> list[NutritionEntry]:
        return (
            self.db.query(NutritionEntry)
            .filter(NutritionEntry.trainee_id == trainee_id, NutritionEntry.date == entry_date)
            .order_by(NutritionEntry.created_at)
            .all()
        )

    def get_daily_summary(self, trainee_id: str, entry_date: date) -> dict[str, Any]:
        """Calories consumed on a day against the latest plan's daily target."""

        entries = self.get_nutrition_entries(trainee_id, entry_date)
        consumed = sum(entry.total_calories for entry in entries)
        plans = self.get_nutrition_plans(trainee_id)
        target = plans[0].daily_calories if plans else None
        return {
            "date": entry_date,
            "consumed_calories": consumed,
            "target_calories": target,
            "remaining_calories": target - consumed if target is not None else None,
            "entries": entries,
        }
