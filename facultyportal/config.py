"""
Runtime settings.

Values come from environment variables with the FACULTYPORTAL_ prefix
(e.g. FACULTYPORTAL_ADMIN_PASSWORD) or from a .env file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FACULTYPORTAL_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    admin_username: str = "admin"
    admin_password: str = "admin123"

    log_level: str = "WARNING"

    # seconds, for downloading timetable documents
    http_timeout: float = 30.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
