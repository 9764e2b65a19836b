"""Body weight and measurements, one record per trainee per day."""
from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy.orm import Session

from fitness_platform.errors import NotFoundError
from fitness_platform.models.database_models import Measurement


logger = logging.getLogger(__name__)


class MeasurementService:
    def __init__(self, db: Session):
        self.db = db

    def get_measurements(self, trainee_id: str) -> list[Measurement]:
        return (
            self.db.query(Measurement)
            .filter(Measurement.trainee_id == trainee_id)
            .order_by(Measurement.date.desc())
            .all()
        )

    def get_measurement_for_date(self, trainee_id: str, day: date) -> Measurement | None:
        start = datetime.combine(day, time.min)
        return (
            self.db.query(Measurement)
            .filter(
                Measurement.trainee_id == trainee_id,
                Measurement.date >= start,
                Measurement.date < start + timedelta(days=1),
            )
            .order_by(Measurement.date.desc())
            .first()
        )

    def get_today_measurement(self, trainee_id: str) -> Measurement | None:
        return self.get_measurement_for_date(trainee_id, datetime.utcnow().date())

    def add_measurement(
        self,
        trainee_id: str,
        weight: float,
        body_measurements: dict[str, float] | None = None,
        measured_at: datetime | None = None,
    ) -> Measurement:
        """Store a measurement, replacing the same day's record while keeping its id."""

        measured_at = measured_at or datetime.utcnow()
        existing = self.get_measurement_for_date(trainee_id, measured_at.date())
        if existing is not None:
            existing.date = measured_at
            existing.weight = weight
            existing.body_measurements = dict(body_measurements or {})
            self.db.flush()
            logger.info("Replaced measurement %s for trainee %s", existing.id, trainee_id)
            return existing

        measurement = Measurement(
            trainee_id=trainee_id,
            date=measured_at,
            weight=weight,
            body_measurements=dict(body_measurements or {}),
        )
        self.db.add(measurement)
        self.db.flush()
        logger.info("Added measurement %s for trainee %s (%.1f kg)", measurement.id, trainee_id, weight)
        return measurement

    def get_latest_weight(self, trainee_id: str) -> float | None:
        latest = (
            self.db.query(Measurement)
            .filter(Measurement.trainee_id == trainee_id)
            .order_by(Measurement.date.desc())
            .first()
        )
        return latest.weight if latest else None

    def require_measurement(self, measurement_id: str) -> Measurement:
        measurement = self.db.get(Measurement, measurement_id)
        if measurement is None:
            raise NotFoundError(f"Measurement {measurement_id} not found")
        return measurement

    def delete_measurement(self, measurement_id: str) -> None:
        measurement = self.require_measurement(measurement_id)
        self.db.delete(measurement)
        self.db.flush()
        logger.info("Deleted measurement %s", measurement_id)

    def update_body_measurements(self, measurement_id: str, body_measurements: dict[str, float]) -> Measurement:
        measurement = self.require_measurement(measurement_id)
        measurement.body_measurements = dict(body_measurements)
        self.db.flush()
        return measurement
