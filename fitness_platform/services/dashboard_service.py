"""Role-specific dashboard aggregates."""
from __future__ import annotations

from datetime import datetime, time
from typing import Any

from sqlalchemy.orm import Session

from fitness_platform.models.database_models import Training, User
from fitness_platform.services.goal_service import GoalService
from fitness_platform.services.measurement_service import MeasurementService
from fitness_platform.services.nutrition_service import NutritionService
from fitness_platform.services.steps_service import StepsService
from fitness_platform.services.training_service import TrainingService
from fitness_platform.services.user_service import UserService

RECENT_COMPLETED_LIMIT = 10


def _split_trainings(trainings: list[Training], now: datetime | None = None) -> tuple[list[Training], list[Training]]:
    """Split into upcoming (open, scheduled today or later) and completed, newest completion first."""
    today_start = datetime.combine((now or datetime.utcnow()).date(), time.min)
    upcoming = [t for t in trainings if not t.is_completed and t.scheduled_date >= today_start]
    completed = sorted(
        (t for t in trainings if t.is_completed),
        key=lambda t: t.completed_at or t.scheduled_date,
        reverse=True,
    )
    return upcoming, completed


class DashboardService:
    def __init__(self, db: Session):
        self.db = db

    def admin_dashboard(self) -> dict[str, Any]:
        users = UserService(self.db)
        return {
            "user_counts": users.count_by_role(),
            "users": users.get_all_users(),
        }

    def trainer_dashboard(self, trainer: User) -> dict[str, Any]:
        upcoming, completed = _split_trainings(TrainingService(self.db).get_trainings_for_trainer(trainer.id))
        return {
            "trainer": trainer,
            "trainees": UserService(self.db).get_trainees(trainer.id),
            "upcoming_trainings": upcoming,
            "recently_completed": completed[:RECENT_COMPLETED_LIMIT],
            "goals": GoalService(self.db).get_goals_for_trainer(trainer.id),
        }

    def trainee_dashboard(self, trainee: User) -> dict[str, Any]:
        upcoming, completed = _split_trainings(TrainingService(self.db).get_trainings_for_trainee(trainee.id))
        today_steps = StepsService(self.db).get_today_steps(trainee.id)
        return {
            "trainee": trainee,
            "upcoming_trainings": upcoming,
            "completed_trainings": completed,
            "goals": GoalService(self.db).get_goals_for_trainee(trainee.id),
            "latest_weight": MeasurementService(self.db).get_latest_weight(trainee.id),
            "today_steps": today_steps.steps if today_steps else None,
            "nutrition_plans": NutritionService(self.db).get_nutrition_plans(trainee.id),
        }
