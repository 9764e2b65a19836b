"""Exercise library browsing and custom exercises."""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.dependencies import CurrentUser, TrainerUser
from fitness_platform.models.schemas import ExerciseTemplateCreate, ExerciseTemplateResponse
from fitness_platform.services.exercise_library_service import ExerciseLibraryService


router = APIRouter(prefix="/api/exercises", tags=["exercises"])


@router.get("", response_model=list[ExerciseTemplateResponse])
async def list_exercises(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    category: str | None = None,
    target_muscle: str | None = None,
    equipment: str | None = None,
    difficulty_level: str | None = None,
):
    """List library exercises, filtered by any combination of attributes."""
    return ExerciseLibraryService(db).get_exercises(
        category=category,
        target_muscle=target_muscle,
        equipment=equipment,
        difficulty_level=difficulty_level,
    )


@router.get("/categories", response_model=list[str])
async def list_categories(user: CurrentUser, db: Annotated[Session, Depends(get_db)]):
    return ExerciseLibraryService(db).get_available_categories()


@router.get("/muscles", response_model=list[str])
async def list_muscles(user: CurrentUser, db: Annotated[Session, Depends(get_db)]):
    return ExerciseLibraryService(db).get_available_muscles()


@router.get("/equipment", response_model=list[str])
async def list_equipment(user: CurrentUser, db: Annotated[Session, Depends(get_db)]):
    return ExerciseLibraryService(db).get_available_equipment()


@router.get("/search", response_model=list[ExerciseTemplateResponse])
async def search_exercises(
    q: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Case-insensitive search over name, target muscle and category."""
    return ExerciseLibraryService(db).search_exercises(q)


@router.get("/{exercise_id}", response_model=ExerciseTemplateResponse)
async def get_exercise(
    exercise_id: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    exercise = ExerciseLibraryService(db).get_exercise_by_id(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail=f"Exercise {exercise_id} not found")
    return exercise


@router.post("", response_model=ExerciseTemplateResponse, status_code=201)
async def add_custom_exercise(
    payload: ExerciseTemplateCreate,
    trainer: TrainerUser,
    db: Annotated[Session, Depends(get_db)],
):
    return ExerciseLibraryService(db).add_custom_exercise(trainer_id=trainer.id, **payload.model_dump())
