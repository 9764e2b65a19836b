"""Body measurements."""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.dependencies import CurrentUser, TraineeUser, ensure_trainee_access, resolve_trainee_id
from fitness_platform.models.schemas import (
    BodyMeasurementsUpdate,
    LatestWeightResponse,
    MeasurementCreate,
    MeasurementResponse,
)
from fitness_platform.services.measurement_service import MeasurementService


router = APIRouter(prefix="/api/measurements", tags=["measurements"])


@router.get("", response_model=list[MeasurementResponse])
async def list_measurements(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
):
    return MeasurementService(db).get_measurements(resolve_trainee_id(db, user, trainee_id))


@router.get("/today", response_model=MeasurementResponse | None)
async def today_measurement(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
):
    return MeasurementService(db).get_today_measurement(resolve_trainee_id(db, user, trainee_id))


@router.get("/latest-weight", response_model=LatestWeightResponse)
async def latest_weight(
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    trainee_id: str | None = None,
):
    trainee_id = resolve_trainee_id(db, user, trainee_id)
    return {"trainee_id": trainee_id, "weight": MeasurementService(db).get_latest_weight(trainee_id)}


@router.post("", response_model=MeasurementResponse, status_code=201)
async def add_measurement(
    payload: MeasurementCreate,
    trainee: TraineeUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Record today's weight and measurements, replacing any earlier record from today."""
    return MeasurementService(db).add_measurement(trainee.id, payload.weight, payload.body_measurements)


@router.put("/{measurement_id}/body-measurements", response_model=MeasurementResponse)
async def update_body_measurements(
    measurement_id: str,
    payload: BodyMeasurementsUpdate,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    service = MeasurementService(db)
    measurement = service.require_measurement(measurement_id)
    if measurement.trainee_id != user.id:
        raise HTTPException(status_code=403, detail="You can only edit your own measurements")
    return service.update_body_measurements(measurement_id, payload.body_measurements)


@router.delete("/{measurement_id}", status_code=204)
async def delete_measurement(
    measurement_id: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    service = MeasurementService(db)
    ensure_trainee_access(db, user, service.require_measurement(measurement_id).trainee_id)
    service.delete_measurement(measurement_id)
    return Response(status_code=204)
