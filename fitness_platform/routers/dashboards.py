"""Role dashboards as JSON."""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.dependencies import AdminUser, TraineeUser, TrainerUser
from fitness_platform.models.schemas import AdminDashboard, TraineeDashboard, TrainerDashboard
from fitness_platform.services.dashboard_service import DashboardService


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/admin", response_model=AdminDashboard)
async def admin_dashboard(admin: AdminUser, db: Annotated[Session, Depends(get_db)]):
    """User counts per role and every account."""
    return DashboardService(db).admin_dashboard()


@router.get("/trainer", response_model=TrainerDashboard)
async def trainer_dashboard(trainer: TrainerUser, db: Annotated[Session, Depends(get_db)]):
    """Trainees, upcoming and recently completed trainings, and goals."""
    return DashboardService(db).trainer_dashboard(trainer)


@router.get("/trainee", response_model=TraineeDashboard)
async def trainee_dashboard(trainee: TraineeUser, db: Annotated[Session, Depends(get_db)]):
    return DashboardService(db).trainee_dashboard(trainee)
