"""Library settings and configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings with flat structure."""

    # UUID scope
    uuid_column: str = "uuid"

    # Deferred pipelines
    default_queue: str = "default"
    queue_max_attempts: int = 1
    queue_progress: bool = False

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Path | None = None

    model_config = SettingsConfigDict(
        env_prefix="MODEL_TRAITS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
