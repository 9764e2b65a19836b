"""Application configuration management."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised application settings derived from environment variables."""

    secret_key: str

    database_url: str = Field(
        default="sqlite://",
        description="SQLAlchemy-compatible database URL. The default is a volatile in-memory store.",
    )
    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=8000, ge=1, le=65535)

    debug: bool = Field(default=False)

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))

    access_token_ttl_minutes: int = Field(default=60 * 24, ge=1)
    seed_demo_data: bool = Field(
        default=True,
        description="Populate demo users, exercise library and templates on start-up.",
    )
    monthly_step_days: int = Field(
        default=30,
        ge=28,
        le=31,
        description="Day offset between occurrences of a monthly recurring workout.",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, value: str) -> str:
        """Ensure the secret key is not left as a placeholder."""

        if value.strip().lower() in {"", "change-me", "changeme"}:
            raise ValueError(
                "SECRET_KEY is required. Update your .env file with a strong secret before running the app."
            )
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        upper = value.upper()
        if upper not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(sorted(valid))}")
        return upper

    @property
    def is_in_memory(self) -> bool:
        """True when the configured database lives only in this process."""

        return self.database_url in {"sqlite://", "sqlite:///:memory:"}


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance so it can be reused across the app."""

    settings = Settings()
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    return settings
