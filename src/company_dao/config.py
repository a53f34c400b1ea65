"""Configuration for the company DAO using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """All settings, loaded from ``COMPANY_DAO_*`` environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="COMPANY_DAO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Database
    # ------------------------------------------------------------------
    db_path: Path = Path("data") / "company.sqlite"

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}; expected one of {', '.join(_LOG_LEVELS)}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings singleton."""
    return Settings()
