"""Application settings and configuration management."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings with environment variable support."""

    # Persistence keys
    index_key: str = Field(default="lam_quiz_search_index")
    history_key: str = Field(default="lam_quiz_search_history")
    storage_dir: Optional[str] = Field(default=None)  # directory for JsonFileStore

    # History
    history_limit: int = Field(default=20, ge=1)
    popular_limit: int = Field(default=10, ge=1)
    trending_window: int = Field(default=10, ge=1)
    trending_limit: int = Field(default=8, ge=1)
    trending_min_length: int = Field(default=3, ge=1)

    # Suggestions
    suggestion_limit: int = Field(default=5, ge=1)
    min_suggestion_length: int = Field(default=2, ge=1)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    model_config = SettingsConfigDict(
        env_prefix="FLASHCARD_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
