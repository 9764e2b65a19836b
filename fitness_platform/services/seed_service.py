"""Load demo accounts, the exercise library and sample templates."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from fitness_platform.models.database_models import ExerciseTemplate, User, UserRole, WorkoutTemplate
from fitness_platform.models.exercise_library import DEMO_USERS, DEMO_WORKOUT_TEMPLATES, EXERCISE_LIBRARY
from fitness_platform.services.auth_service import hash_password


logger = logging.getLogger(__name__)


def seed_demo_data(db: Session) -> dict[str, int]:
    """
    Populate an empty store. Does nothing when users already exist.

    Returns:
        Counts of seeded users, library exercises and workout templates
    """
    if db.query(User).first() is not None:
        logger.info("Store already populated, skipping demo seed")
        return {"users": 0, "exercises": 0, "templates": 0}

    now = datetime.utcnow()

    users: dict[str, User] = {}
    for demo in DEMO_USERS:
        trainer = users.get(demo.get("trainer", ""))
        user = User(
            name=demo["name"],
            email=demo["email"],
            role=UserRole(demo["role"]),
            password_hash=hash_password(demo["password"]),
            trainer_id=trainer.id if trainer else None,
            created_at=now - timedelta(days=demo["days_ago"]),
        )
        db.add(user)
        db.flush()
        users[demo["key"]] = user

    for position, entry in enumerate(EXERCISE_LIBRARY, start=1):
        db.add(
            ExerciseTemplate(
                id=str(position),
                is_custom=False,
                created_at=now + timedelta(microseconds=position),
                **entry,
            )
        )

    trainer = users["trainer"]
    for position, demo in enumerate(DEMO_WORKOUT_TEMPLATES, start=1):
        data = {key: value for key, value in demo.items() if key != "days_ago"}
        data["exercises"] = [
            {"id": f"template-{position}-exercise-{index}", **exercise}
            for index, exercise in enumerate(demo["exercises"], start=1)
        ]
        db.add(
            WorkoutTemplate(
                created_by=trainer.id,
                created_at=now - timedelta(days=demo["days_ago"]),
                **data,
            )
        )

    db.flush()
    counts = {
        "users": len(users),
        "exercises": len(EXERCISE_LIBRARY),
        "templates": len(DEMO_WORKOUT_TEMPLATES),
    }
    logger.info("Seeded demo data: %s", counts)
    return counts
