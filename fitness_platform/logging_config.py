"""Central logging configuration for the fitness platform."""
from __future__ import annotations

from logging.config import dictConfig
from pathlib import Path

from pydantic import ValidationError

from fitness_platform.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Library loggers kept quieter than the application; alembic.ini loggers are not loaded.
LIBRARY_LEVELS = {
    "sqlalchemy.engine": "WARNING",
    "alembic": "INFO",
    "uvicorn.access": "WARNING",
}

_configured = False


def build_logging_config(log_dir: Path, level: str) -> dict:
    """Console plus ``log_dir/app.log`` at ``level``, with library loggers capped."""

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
            "file": {
                "class": "logging.FileHandler",
                "filename": str(log_dir / "app.log"),
                "encoding": "utf-8",
                "formatter": "standard",
                "level": level,
            },
        },
        "loggers": {name: {"level": lib_level} for name, lib_level in LIBRARY_LEVELS.items()},
        "root": {
            "level": level,
            "handlers": ["console", "file"],
        },
    }


def _settings_or_defaults() -> tuple[Path, str]:
    try:
        settings = get_settings()
        return settings.log_dir, settings.log_level
    except ValidationError:
        # SECRET_KEY may be injected after import (tests, one-off scripts).
        fields = Settings.model_fields
        return fields["log_dir"].default, fields["log_level"].default


def configure_logging(log_dir: Path | None = None, level: str | None = None, force: bool = False) -> None:
    """Configure application logging once per process.

    ``log_dir`` and ``level`` override the settings; ``force`` reapplies the
    configuration after an earlier call.
    """

    global _configured
    if _configured and not force:
        return

    default_dir, default_level = _settings_or_defaults()
    log_dir = Path(log_dir or default_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    dictConfig(build_logging_config(log_dir, (level or default_level).upper()))
    _configured = True
