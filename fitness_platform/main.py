"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from fitness_platform.config import get_settings
from fitness_platform.database import SessionLocal, init_db
from fitness_platform.errors import PlatformError
from fitness_platform.logging_config import configure_logging
from fitness_platform.models.database_models import Training, User, UserRole, WorkoutTemplate
from fitness_platform.routers import (
    auth,
    dashboards,
    exercises,
    goals,
    health,
    history,
    measurements,
    nutrition,
    steps,
    templates as workout_templates,
    trainings,
    users,
)
from fitness_platform.services.seed_service import seed_demo_data


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    settings = get_settings()
    init_db()
    if settings.seed_demo_data:
        db = SessionLocal()
        try:
            seed_demo_data(db)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
    logger.info("Fitness platform ready (database=%s)", settings.database_url)
    yield


app = FastAPI(title="Fitness Training Platform API", lifespan=lifespan)
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


@app.exception_handler(PlatformError)
async def platform_error_handler(request: Request, exc: PlatformError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/dashboard", response_class=HTMLResponse, tags=["dashboard"])
async def dashboard(request: Request) -> HTMLResponse:
    """Overview page of the platform's current data."""
    db = SessionLocal()
    try:
        counts = {role.value: db.query(User).filter(User.role == role).count() for role in UserRole}
        open_trainings = db.query(Training).filter(Training.is_completed.is_(False)).count()
        completed_trainings = db.query(Training).filter(Training.is_completed.is_(True)).count()
        public_templates = (
            db.query(WorkoutTemplate)
            .filter(WorkoutTemplate.is_public.is_(True))
            .order_by(WorkoutTemplate.name)
            .all()
        )
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "user_counts": counts,
                "open_trainings": open_trainings,
                "completed_trainings": completed_trainings,
                "public_templates": public_templates,
            },
        )
    finally:
        db.close()


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple health probe for liveness checks."""
    return {"status": "ok"}


# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(exercises.router)
app.include_router(trainings.router)
app.include_router(workout_templates.router)
app.include_router(history.router)
app.include_router(nutrition.router)
app.include_router(goals.router)
app.include_router(measurements.router)
app.include_router(steps.router)
app.include_router(dashboards.router)
