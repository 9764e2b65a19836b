"""Prepare a file-backed database: apply migrations and load the demo data."""
from pathlib import Path

from fitness_platform.config import get_settings
from fitness_platform.database import SessionLocal, init_db
from fitness_platform.logging_config import configure_logging
from fitness_platform.services.seed_service import seed_demo_data


def main() -> None:
    configure_logging()
    data_dir = Path("data")
    data_dir.mkdir(exist_ok=True)
    init_db()

    db = SessionLocal()
    try:
        counts = seed_demo_data(db)
        db.commit()
    finally:
        db.close()
    print("Database initialised at", get_settings().database_url, counts)


if __name__ == "__main__":
    main()
