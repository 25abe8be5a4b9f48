"""Runtime settings, read from ``RMS_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RMS_", env_file=".env", extra="ignore")

    data_dir: Path = Path("data")
    log_level: str = "INFO"
    invoice_prefix: str = "INV"
    invoice_number_attempts: int = 5


@lru_cache()
def get_settings() -> Settings:
    return Settings()
