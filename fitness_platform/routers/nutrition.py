"""Nutrition plans and food logging."""
from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.dependencies import CurrentUser, StaffUser, TraineeUser, ensure_trainee_access, resolve_trainee_id
from fitness_platform.models.schemas import (
    DailyNutritionSummary,
    NutritionEntryCreate,
    NutritionEntryResponse,
    NutritionPlanCreate,
    NutritionPlanResponse,
)
from fitness_platform.services.nutrition_service import NutritionService


router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])


@router.get("/plans", response_model=list[NutritionPlanResponse])
async def list_plans(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
):
    return NutritionService(db).get_nutrition_plans(resolve_trainee_id(db, user, trainee_id))


@router.post("/plans", response_model=NutritionPlanResponse, status_code=201)
async def create_plan(
    payload: NutritionPlanCreate,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
):
    ensure_trainee_access(db, user, payload.trainee_id)
    return NutritionService(db).create_nutrition_plan(
        trainer_id=user.id,
        trainee_id=payload.trainee_id,
        name=payload.name,
        daily_calories=payload.daily_calories,
        macros=payload.macros,
        meals=[meal.model_dump() for meal in payload.meals],
        recipes=[recipe.model_dump() for recipe in payload.recipes],
    )


@router.post("/entries", response_model=NutritionEntryResponse, status_code=201)
async def log_entry(
    payload: NutritionEntryCreate,
    trainee: TraineeUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Log eaten foods; the entry total is the sum of their calories."""
    return NutritionService(db).log_nutrition_entry(
        trainee.id,
        [food.model_dump() for food in payload.consumed_foods],
        entry_date=payload.date,
    )


@router.get("/entries", response_model=list[NutritionEntryResponse])
async def list_entries(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
    day: date | None = None,
):
    return NutritionService(db).get_nutrition_entries(resolve_trainee_id(db, user, trainee_id), day or date.today())


@router.get("/summary", response_model=DailyNutritionSummary)
async def daily_summary(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
    day: date | None = None,
):
    """Calories consumed on ``day`` (default today) against the latest plan."""
    return NutritionService(db).get_daily_summary(resolve_trainee_id(db, user, trainee_id), day or date.today())
