"""Exercise history and per-exercise statistics."""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.dependencies import AdminUser, CurrentUser, ensure_trainee_access
from fitness_platform.models.schemas import ExerciseStatsResponse, HistoryEntryResponse
from fitness_platform.services.exercise_history_service import ExerciseHistoryService


router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("/trainees/{trainee_id}", response_model=list[HistoryEntryResponse])
async def get_trainee_history(
    trainee_id: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    ensure_trainee_access(db, user, trainee_id)
    return ExerciseHistoryService(db).get_trainee_history(trainee_id)


@router.get("/trainees/{trainee_id}/exercises", response_model=list[str])
async def get_trainee_exercise_names(
    trainee_id: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    ensure_trainee_access(db, user, trainee_id)
    return ExerciseHistoryService(db).get_trainee_exercise_names(trainee_id)


@router.get("/trainees/{trainee_id}/exercises/{exercise_name}", response_model=list[HistoryEntryResponse])
async def get_exercise_history(
    trainee_id: str,
    exercise_name: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int | None, Query(ge=1)] = None,
):
    """History of one exercise, newest first."""
    ensure_trainee_access(db, user, trainee_id)
    return ExerciseHistoryService(db).get_exercise_history(trainee_id, exercise_name, limit=limit)


@router.get("/trainees/{trainee_id}/exercises/{exercise_name}/last", response_model=HistoryEntryResponse)
async def get_last_exercise_history(
    trainee_id: str,
    exercise_name: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    ensure_trainee_access(db, user, trainee_id)
    entry = ExerciseHistoryService(db).get_last_exercise_history(trainee_id, exercise_name)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No history for {exercise_name}")
    return entry


@router.get("/trainees/{trainee_id}/exercises/{exercise_name}/stats", response_model=ExerciseStatsResponse)
async def get_exercise_stats(
    trainee_id: str,
    exercise_name: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    ensure_trainee_access(db, user, trainee_id)
    return ExerciseHistoryService(db).get_exercise_stats(trainee_id, exercise_name)


@router.get("/count")
async def history_count(admin: AdminUser, db: Annotated[Session, Depends(get_db)]) -> dict[str, int]:
    return {"count": ExerciseHistoryService(db).history_count()}


@router.delete("")
async def clear_history(admin: AdminUser, db: Annotated[Session, Depends(get_db)]) -> dict[str, int]:
    """Remove every history entry."""
    return {"deleted": ExerciseHistoryService(db).clear_history()}
