"""
Bootstrap configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Bootstrap settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB
    mongo_uri: str = "mongodb://mongodb:27017"
    database_name: str = "stoatchat"
    server_selection_timeout_ms: int = 5000

    # What happens to channels, messages, etc. when their parent is deleted
    cascade_policy: Literal["cascade", "orphan"] = "cascade"

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
