from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="RESOURCE_SCHEDULER_", case_sensitive=False)

    environment: Literal["development", "staging", "production"] = "development"
    project_name: str = "Resource Scheduler"
    version: str = "0.1.0"

    database_url: str = "sqlite+aiosqlite:///./resource_scheduler.db"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Industry preset used to build the shared utilization policy.
    utilization_preset: str = "custom"


@lru_cache
def get_settings() -> Settings:
    return Settings()
