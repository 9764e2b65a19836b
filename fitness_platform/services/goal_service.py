"""Trainee goals and their progress."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from fitness_platform.errors import NotFoundError
from fitness_platform.models.database_models import Goal, GoalType


logger = logging.getLogger(__name__)


class GoalService:
    """Track weight, measurement and performance goals."""

    def __init__(self, db: Session):
        self.db = db

    def get_goals_for_trainer(self, trainer_id: str) -> list[Goal]:
        return self.db.query(Goal).filter(Goal.trainer_id == trainer_id).order_by(Goal.created_at.desc()).all()

    def get_goals_for_trainee(self, trainee_id: str) -> list[Goal]:
        return self.db.query(Goal).filter(Goal.trainee_id == trainee_id).order_by(Goal.created_at.desc()).all()

    def get_goal_by_id(self, goal_id: str) -> Goal | None:
        return self.db.get(Goal, goal_id)

    def require_goal(self, goal_id: str) -> Goal:
        goal = self.get_goal_by_id(goal_id)
        if goal is None:
            raise NotFoundError(f"Goal {goal_id} not found")
        return goal

    def create_goal(
        self,
        trainer_id: str | None,
        trainee_id: str,
        name: str,
        goal_type: GoalType,
        target_value: float,
        unit: str,
        deadline: datetime,
        current_value: float = 0.0,
    ) -> Goal:
        goal = Goal(
            trainer_id=trainer_id,
            trainee_id=trainee_id,
            name=name,
            type=goal_type,
            target_value=target_value,
            current_value=current_value,
            unit=unit,
            deadline=deadline,
            is_completed=False,
        )
        self.db.add(goal)
        self.db.flush()
        logger.info("Created %s goal %s for trainee %s", goal_type.value, goal.id, trainee_id)
        return goal

    def update_goal(self, goal_id: str, changes: dict[str, Any]) -> Goal:
        goal = self.require_goal(goal_id)
        for field_name, value in changes.items():
            if value is not None:
                setattr(goal, field_name, value)
        self.db.flush()
        logger.info("Updated goal %s", goal.id)
        return goal

    def delete_goal(self, goal_id: str) -> None:
        goal = self.require_goal(goal_id)
        self.db.delete(goal)
        self.db.flush()
        logger.info("Deleted goal %s", goal_id)

    def update_progress(self, goal_id: str, current_value: float) -> Goal:
        """Record a new current value; reaching the target completes the goal."""

        goal = self.require_goal(goal_id)
        goal.current_value = current_value
        if current_value >= goal.target_value:
            goal.is_completed = True
        self.db.flush()
        logger.info("Goal %s progress %.1f/%.1f %s", goal.id, current_value, goal.target_value, goal.unit)
        return goal

    def mark_completed(self, goal_id: str) -> Goal:
        goal = self.require_goal(goal_id)
        goal.is_completed = True
        goal.current_value = goal.target_value
        self.db.flush()
        logger.info("Goal %s marked completed", goal.id)
        return goal
