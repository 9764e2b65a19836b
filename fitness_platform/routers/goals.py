"""Trainee goals."""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.dependencies import CurrentUser, StaffUser, ensure_trainee_access
from fitness_platform.models.database_models import Goal, User, UserRole
from fitness_platform.models.schemas import GoalCreate, GoalProgressUpdate, GoalResponse, GoalUpdate
from fitness_platform.services.goal_service import GoalService


router = APIRouter(prefix="/api/goals", tags=["goals"])


def _load_goal(db: Session, user: User, goal_id: str) -> Goal:
    goal = GoalService(db).require_goal(goal_id)
    ensure_trainee_access(db, user, goal.trainee_id)
    return goal


@router.get("", response_model=list[GoalResponse])
async def list_goals(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
):
    """Goals of one trainee, or by default the caller's own (trainee) or set (trainer) goals."""
    service = GoalService(db)
    if trainee_id is not None:
        ensure_trainee_access(db, user, trainee_id)
        return service.get_goals_for_trainee(trainee_id)
    if user.role == UserRole.trainer:
        return service.get_goals_for_trainer(user.id)
    if user.role == UserRole.trainee:
        return service.get_goals_for_trainee(user.id)
    return db.query(Goal).order_by(Goal.created_at.desc()).all()


@router.post("", response_model=GoalResponse, status_code=201)
async def create_goal(
    payload: GoalCreate,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
):
    ensure_trainee_access(db, user, payload.trainee_id)
    return GoalService(db).create_goal(
        trainer_id=user.id,
        trainee_id=payload.trainee_id,
        name=payload.name,
        goal_type=payload.type,
        target_value=payload.target_value,
        current_value=payload.current_value,
        unit=payload.unit,
        deadline=payload.deadline,
    )


@router.get("/{goal_id}", response_model=GoalResponse)
async def get_goal(goal_id: str, user: CurrentUser, db: Annotated[Session, Depends(get_db)]):
    return _load_goal(db, user, goal_id)


@router.put("/{goal_id}", response_model=GoalResponse)
async def update_goal(
    goal_id: str,
    payload: GoalUpdate,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
):
    _load_goal(db, user, goal_id)
    return GoalService(db).update_goal(goal_id, payload.model_dump(exclude_unset=True))


@router.delete("/{goal_id}", status_code=204)
async def delete_goal(goal_id: str, user: StaffUser, db: Annotated[Session, Depends(get_db)]):
    _load_goal(db, user, goal_id)
    GoalService(db).delete_goal(goal_id)
    return Response(status_code=204)


@router.put("/{goal_id}/progress", response_model=GoalResponse)
async def update_progress(
    goal_id: str,
    payload: GoalProgressUpdate,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Set the current value; reaching the target completes the goal."""
    _load_goal(db, user, goal_id)
    return GoalService(db).update_progress(goal_id, payload.current_value)


@router.post("/{goal_id}/complete", response_model=GoalResponse)
async def mark_completed(goal_id: str, user: CurrentUser, db: Annotated[Session, Depends(get_db)]):
    _load_goal(db, user, goal_id)
    return GoalService(db).mark_completed(goal_id)
