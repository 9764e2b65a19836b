"""Daily step counts."""
from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from fitness_platform.errors import NotFoundError
from fitness_platform.models.database_models import StepEntry


logger = logging.getLogger(__name__)


class StepsService:
    def __init__(self, db: Session):
        self.db = db

    def get_steps_for_date(self, trainee_id: str, day: date) -> StepEntry | None:
        return self.db.query(StepEntry).filter(StepEntry.trainee_id == trainee_id, StepEntry.date == day).first()

    def get_today_steps(self, trainee_id: str) -> StepEntry | None:
        return self.get_steps_for_date(trainee_id, date.today())

    def log_manual_steps(self, trainee_id: str, day: date, steps: int) -> StepEntry:
        """Set the step count for a day, updating that day's entry if one exists."""

        entry = self.get_steps_for_date(trainee_id, day)
        if entry is None:
            entry = StepEntry(trainee_id=trainee_id, date=day, steps=steps, is_manual=True)
            self.db.add(entry)
        else:
            entry.steps = steps
            entry.is_manual = True
        self.db.flush()
        logger.info("Trainee %s logged %d steps for %s", trainee_id, steps, day)
        return entry

    def get_all_steps(self, trainee_id: str) -> list[StepEntry]:
        return self.db.query(StepEntry).filter(StepEntry.trainee_id == trainee_id).order_by(StepEntry.date.desc()).all()

    def delete_steps(self, entry_id: str) -> StepEntry:
        entry = self.db.get(StepEntry, entry_id)
        if entry is None:
            raise NotFoundError(f"Step entry {entry_id} not found")
        self.db.delete(entry)
        self.db.flush()
        logger.info("Deleted step entry %s", entry_id)
        return entry

    def has_manual_entry(self, trainee_id: str, day: date) -> bool:
        entry = self.get_steps_for_date(trainee_id, day)
        return entry is not None and entry.is_manual
