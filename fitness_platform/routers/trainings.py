"""API endpoints for scheduled trainings and the workout creation wizard."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fitness_platform.config import get_settings
from fitness_platform.database import get_db
from fitness_platform.dependencies import CurrentUser, StaffUser, TraineeUser, ensure_trainee_access
from fitness_platform.errors import PermissionDeniedError, PlatformError
from fitness_platform.models.database_models import Training, User, UserRole
from fitness_platform.models.schemas import (
    ChangeScope,
    DeletionResult,
    ProgressReportResponse,
    TrainingCompletion,
    TrainingCreate,
    TrainingResponse,
    TrainingUpdate,
    WizardValidation,
    WorkoutCreationResult,
    WorkoutDraft,
)
from fitness_platform.services.exercise_history_service import ExerciseHistoryService
from fitness_platform.services.progress import TrainingProgressReport
from fitness_platform.services.training_service import TrainingService
from fitness_platform.services.workout_scheduler import validate_draft


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trainings", tags=["trainings"])


def _load_training(db: Session, user: User, training_id: str) -> Training:
    training = TrainingService(db).require_training(training_id)
    ensure_trainee_access(db, user, training.trainee_id)
    return training


def _report_payload(report: TrainingProgressReport) -> dict:
    return {
        "training_id": report.training_id,
        "training_name": report.training_name,
        "trainee_id": report.trainee_id,
        "trainee_name": report.trainee_name,
        "completed_at": report.completed_at,
        "exercise_comparisons": [
            {
                "exercise_name": comparison.exercise_name,
                "status": comparison.status,
                "previous": comparison.previous,
                "current": comparison.current,
                "current_date": comparison.current_date,
                "weight_progress": comparison.weight_progress,
                "reps_progress": comparison.reps_progress,
                "volume_progress": comparison.volume_progress,
                "weight_progress_percentage": comparison.weight_progress_percentage,
                "has_improved": comparison.has_improved,
                "progress_description": comparison.progress_description,
            }
            for comparison in report.exercise_comparisons
        ],
        "total_exercises": report.total_exercises,
        "exercises_with_improvement": report.exercises_with_improvement,
        "improvement_percentage": report.improvement_percentage,
        "total_volume_increase": report.total_volume_increase,
        "overall_progress_summary": report.overall_progress_summary,
    }


@router.get("", response_model=list[TrainingResponse])
async def list_trainings(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
):
    """
    List trainings ordered by scheduled date.

    Without ``trainee_id`` trainees get their own trainings, trainers the
    trainings they assigned and admins every training.
    """
    service = TrainingService(db)
    if trainee_id is not None:
        ensure_trainee_access(db, user, trainee_id)
        return service.get_trainings_for_trainee(trainee_id)
    if user.role == UserRole.trainee:
        return service.get_trainings_for_trainee(user.id)
    if user.role == UserRole.trainer:
        return service.get_trainings_for_trainer(user.id)
    return db.query(Training).order_by(Training.scheduled_date).all()


@router.post("", response_model=TrainingResponse, status_code=201)
async def create_training(
    payload: TrainingCreate,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Schedule a single, non-recurring training."""
    try:
        ensure_trainee_access(db, user, payload.trainee_id)
        service = TrainingService(db)
        return service.create_training(
            trainer_id=user.id,
            trainee_id=payload.trainee_id,
            name=payload.name,
            scheduled_date=payload.scheduled_date,
            exercises=service.build_exercises(payload.exercises),
            description=payload.description,
            difficulty=payload.difficulty,
            estimated_duration=payload.estimated_duration,
            category=payload.category,
            notes=payload.notes,
        )
    except (HTTPException, PlatformError):
        raise
    except Exception as e:
        logger.exception("Failed to create training for trainee %s", payload.trainee_id)
        raise HTTPException(status_code=500, detail=f"Failed to create training: {str(e)}")


@router.post("/wizard/validate", response_model=WizardValidation)
async def validate_workout_draft(draft: WorkoutDraft, user: StaffUser):
    """Report the first wizard step the draft does not satisfy yet."""
    return validate_draft(draft)


@router.post("/wizard", response_model=WorkoutCreationResult, status_code=201)
async def create_workout(
    draft: WorkoutDraft,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Create the wizard's workout for every selected trainee.

    A recurring workout yields ``count`` trainings per trainee, each offset
    by one day, week or month from the previous one.

    Returns:
        WorkoutCreationResult: Number created and the trainings themselves
    """
    try:
        trainings = TrainingService(db).create_from_draft(
            draft,
            trainer=user,
            monthly_step_days=get_settings().monthly_step_days,
        )
        return {"total_created": len(trainings), "trainings": trainings}
    except (HTTPException, PlatformError):
        raise
    except Exception as e:
        logger.exception("Failed to create workout from wizard")
        raise HTTPException(status_code=500, detail=f"Failed to create workout: {str(e)}")


@router.get("/groups/{recurrence_group_id}", response_model=list[TrainingResponse])
async def get_recurrence_group(
    recurrence_group_id: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    trainings = TrainingService(db).get_trainings_by_recurrence_group(recurrence_group_id)
    if not trainings:
        raise HTTPException(status_code=404, detail=f"Recurrence group {recurrence_group_id} not found")
    ensure_trainee_access(db, user, trainings[0].trainee_id)
    return trainings


@router.get("/{training_id}", response_model=TrainingResponse)
async def get_training(
    training_id: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    return _load_training(db, user, training_id)


@router.put("/{training_id}", response_model=list[TrainingResponse])
async def update_training(
    training_id: str,
    payload: TrainingUpdate,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
    scope: ChangeScope = ChangeScope.this,
):
    """
    Edit a training, or with ``scope=all`` every occurrence of its series.

    Returns:
        list[TrainingResponse]: Every training that was changed
    """
    try:
        _load_training(db, user, training_id)
        changes = payload.model_dump(exclude_unset=True)
        if payload.exercises is not None:
            changes["exercises"] = payload.exercises

        service = TrainingService(db)
        if scope == ChangeScope.all:
            return service.update_recurrence_group(training_id, changes)
        return [service.update_training(training_id, changes)]
    except (HTTPException, PlatformError):
        raise
    except Exception as e:
        logger.exception("Failed to update training %s", training_id)
        raise HTTPException(status_code=500, detail=f"Failed to update training: {str(e)}")


@router.delete("/{training_id}", response_model=DeletionResult)
async def delete_training(
    training_id: str,
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
    scope: ChangeScope = ChangeScope.this,
):
    """Delete a training, or with ``scope=all`` its whole recurrence group."""
    try:
        training = _load_training(db, user, training_id)
        service = TrainingService(db)
        if scope == ChangeScope.all and training.is_recurring:
            deleted = service.delete_recurrence_group(training.recurrence_group_id)
        else:
            deleted = service.delete_training(training_id)
        return {"deleted_ids": deleted}
    except (HTTPException, PlatformError):
        raise
    except Exception as e:
        logger.exception("Failed to delete training %s", training_id)
        raise HTTPException(status_code=500, detail=f"Failed to delete training: {str(e)}")


@router.post("/{training_id}/complete", response_model=TrainingResponse)
async def complete_training(
    training_id: str,
    payload: TrainingCompletion,
    trainee: TraineeUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Record the sets the trainee performed and mark the training done."""
    try:
        training = _load_training(db, trainee, training_id)
        if training.trainee_id != trainee.id:
            raise PermissionDeniedError("Only the assigned trainee can complete this training")
        return TrainingService(db).complete_training(training_id, payload.exercises, payload.completed_at)
    except (HTTPException, PlatformError):
        raise
    except Exception as e:
        logger.exception("Failed to complete training %s", training_id)
        raise HTTPException(status_code=500, detail=f"Failed to complete training: {str(e)}")


@router.get("/{training_id}/progress-report", response_model=ProgressReportResponse)
async def get_progress_report(
    training_id: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Compare each performed exercise with the trainee's previous session."""
    training = _load_training(db, user, training_id)
    report = ExerciseHistoryService(db).generate_progress_report(training, training.trainee.name)
    return _report_payload(report)
