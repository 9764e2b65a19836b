"""Workout template management and instantiation."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.dependencies import StaffUser, TrainerUser, ensure_trainee_access
from fitness_platform.errors import PlatformError
from fitness_platform.models.database_models import User, UserRole, WorkoutTemplate
from fitness_platform.models.schemas import (
    TemplateInstantiation,
    TrainingResponse,
    WorkoutTemplateCreate,
    WorkoutTemplateResponse,
)
from fitness_platform.services.template_service import TemplateService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/templates", tags=["templates"])


def _load_template(db: Session, user: User, template_id: str, owner_only: bool = False) -> WorkoutTemplate:
    template = TemplateService(db).require_template(template_id)
    if user.role == UserRole.admin or template.created_by == user.id:
        return template
    if template.is_public and not owner_only:
        return template
    raise HTTPException(status_code=403, detail="You do not have access to this template")


@router.get("", response_model=list[WorkoutTemplateResponse])
async def list_templates(
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
    mine: bool = False,
):
    """The caller's templates plus public ones, or only their own with ``mine=true``."""
    service = TemplateService(db)
    if mine:
        return service.get_templates_for_trainer(user.id)
    return service.get_visible_templates(user.id)


@router.get("/public", response_model=list[WorkoutTemplateResponse])
async def list_public_templates(user: StaffUser, db: Annotated[Session, Depends(get_db)]):
    return TemplateService(db).get_public_templates()


@router.get("/search", response_model=list[WorkoutTemplateResponse])
async def search_templates(
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
    q: str | None = None,
    category: str | None = None,
    difficulty: str | None = None,
    tags: Annotated[list[str] | None, Query()] = None,
):
    """Search public templates by text, category, difficulty and tags."""
    return TemplateService(db).search_templates(query=q, category=category, difficulty=difficulty, tags=tags)


@router.get("/{template_id}", response_model=WorkoutTemplateResponse)
async def get_template(
    template_id: str,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
):
    return _load_template(db, user, template_id)


@router.post("", response_model=WorkoutTemplateResponse, status_code=201)
async def create_template(
    payload: WorkoutTemplateCreate,
    trainer: TrainerUser,
    db: Annotated[Session, Depends(get_db)],
):
    return TemplateService(db).create_template(trainer.id, payload.model_dump())


@router.put("/{template_id}", response_model=WorkoutTemplateResponse)
async def update_template(
    template_id: str,
    payload: WorkoutTemplateCreate,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
):
    _load_template(db, user, template_id, owner_only=True)
    return TemplateService(db).update_template(template_id, payload.model_dump())


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: str,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
):
    _load_template(db, user, template_id, owner_only=True)
    TemplateService(db).delete_template(template_id)
    return Response(status_code=204)


@router.post("/{template_id}/instantiate", response_model=TrainingResponse, status_code=201)
async def instantiate_template(
    template_id: str,
    payload: TemplateInstantiation,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Schedule a training for a trainee from this template."""
    try:
        template = _load_template(db, user, template_id)
        ensure_trainee_access(db, user, payload.trainee_id)
        overrides = {
            exercise_id: override.model_dump(exclude_none=True)
            for exercise_id, override in payload.exercise_overrides.items()
        }
        return TemplateService(db).to_training(
            template,
            trainee_id=payload.trainee_id,
            scheduled_date=payload.scheduled_date,
            trainer_id=user.id,
            exercise_overrides=overrides,
        )
    except (HTTPException, PlatformError):
        raise
    except Exception as e:
        logger.exception("Failed to instantiate template %s", template_id)
        raise HTTPException(status_code=500, detail=f"Failed to instantiate template: {str(e)}")
