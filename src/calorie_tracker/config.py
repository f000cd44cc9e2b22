"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path.home() / ".calorie_tracker"
    catalog_path: Path | None = None
    storage_prefix: str = "kalorie_"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="CALORIE_TRACKER_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
