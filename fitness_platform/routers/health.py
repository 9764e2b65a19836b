"""Router exposing basic system endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from fitness_platform.database import SessionLocal
from fitness_platform.models.database_models import Training, User


logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/status")
async def get_status() -> dict[str, str]:
    """Return a minimal status payload."""
    return {"status": "online"}


@router.get("/store")
async def get_store_status() -> dict:
    """
    Report whether the data store is reachable and populated.

    Returns:
        dict: {"users": int, "trainings": int, "seeded": bool}
    """
    db = SessionLocal()

    try:
        users = db.query(User).count()
        trainings = db.query(Training).count()
        return {"users": users, "trainings": trainings, "seeded": users > 0}

    except Exception:
        logger.exception("Store status check failed")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to check store status")
    finally:
        db.close()
