"""Database session and base model setup."""
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from fitness_platform.config import get_settings


settings = get_settings()

if settings.is_in_memory:
    # One shared connection, otherwise every session would get its own empty database.
    engine = create_engine(
        settings.database_url,
        echo=settings.debug,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(settings.database_url, echo=settings.debug, future=True)


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key enforcement for SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""


SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db():
    """FastAPI dependency yielding a transactional database session."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def _alembic_config(database_url: str | None = None) -> Config:
    """Return a configured Alembic Config instance."""

    root = Path(__file__).resolve().parent.parent
    cfg = Config(str(root / "alembic.ini"))
    cfg.set_main_option("script_location", str(root / "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url or settings.database_url)
    # Keep the handlers installed by configure_logging().
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations(target_revision: str = "head", database_url: str | None = None) -> None:
    """Apply Alembic migrations up to the specified revision."""

    cfg = _alembic_config(database_url)
    command.upgrade(cfg, target_revision)


def init_db() -> None:
    """Prepare the schema: migrations for file databases, direct DDL for in-memory ones."""

    # Imported for its side effect of registering the mapped tables.
    from fitness_platform.models import database_models  # noqa: F401

    if settings.is_in_memory:
        Base.metadata.create_all(bind=engine)
    else:
        run_migrations()


def reset_db() -> None:
    """Drop and recreate every table. Only meaningful for the volatile store."""

    from fitness_platform.models import database_models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
