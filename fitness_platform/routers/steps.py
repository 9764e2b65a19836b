"""Daily step counts."""
from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.dependencies import CurrentUser, TraineeUser, resolve_trainee_id
from fitness_platform.models.database_models import StepEntry
from fitness_platform.models.schemas import StepEntryResponse, StepsLog
from fitness_platform.services.steps_service import StepsService


router = APIRouter(prefix="/api/steps", tags=["steps"])


@router.get("", response_model=list[StepEntryResponse])
async def list_steps(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
):
    return StepsService(db).get_all_steps(resolve_trainee_id(db, user, trainee_id))


@router.get("/today", response_model=StepEntryResponse | None)
async def today_steps(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
):
    return StepsService(db).get_today_steps(resolve_trainee_id(db, user, trainee_id))


@router.get("/date/{day}", response_model=StepEntryResponse | None)
async def steps_for_date(
    day: date,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
):
    return StepsService(db).get_steps_for_date(resolve_trainee_id(db, user, trainee_id), day)


@router.get("/date/{day}/manual")
async def has_manual_entry(
    day: date,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
) -> dict[str, bool]:
    return {"has_manual_entry": StepsService(db).has_manual_entry(resolve_trainee_id(db, user, trainee_id), day)}


@router.post("", response_model=StepEntryResponse)
async def log_steps(
    payload: StepsLog,
    trainee: TraineeUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Set the manual step count for a day, overwriting that day's entry."""
    return StepsService(db).log_manual_steps(trainee.id, payload.date, payload.steps)


@router.delete("/{entry_id}", status_code=204)
async def delete_steps(
    entry_id: str,
    trainee: TraineeUser,
    db: Annotated[Session, Depends(get_db)],
):
    entry = db.get(StepEntry, entry_id)
    if entry is not None and entry.trainee_id != trainee.id:
        raise HTTPException(status_code=403, detail="You can only delete your own step entries")
    StepsService(db).delete_steps(entry_id)
    return Response(status_code=204)
