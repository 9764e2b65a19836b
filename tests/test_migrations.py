"""Tests for the migrated (file-backed) database path."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest
from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from fitness_platform.database import Base, run_migrations
from fitness_platform.logging_config import configure_logging
from fitness_platform.models.database_models import User
from fitness_platform.services.seed_service import seed_demo_data


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'fitness_platform.db'}"


def test_migrated_schema_matches_models(database_url: str):
    run_migrations(database_url=database_url)
    engine = create_engine(database_url, future=True)
    try:
        with Session(engine) as db:
            counts = seed_demo_data(db)
            db.commit()
            assert counts == {"users": 6, "exercises": 13, "templates": 2}
            assert db.query(User).filter(User.created_at.is_(None)).count() == 0

        with engine.connect() as connection:
            diffs = compare_metadata(MigrationContext.configure(connection), Base.metadata)
        assert diffs == []
    finally:
        engine.dispose()


def test_migrations_keep_application_logging(tmp_path: Path, database_url: str):
    log_dir = tmp_path / "logs"
    configure_logging(log_dir=log_dir, level="INFO", force=True)
    root = logging.getLogger()
    try:
        handlers_before = [type(handler).__name__ for handler in root.handlers]

        run_migrations(database_url=database_url)
        logging.getLogger("fitness_platform.services").info("store ready after migrations")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.INFO
        assert [type(handler).__name__ for handler in root.handlers] == handlers_before
        assert "FileHandler" in handlers_before
        assert "store ready after migrations" in (log_dir / "app.log").read_text(encoding="utf-8")
    finally:
        configure_logging(force=True)
