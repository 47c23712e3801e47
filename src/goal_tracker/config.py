"""Configuration settings for the Goal Tracker."""

from pathlib import Path
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


# __file__ = src/goal_tracker/config.py
# .parent.parent.parent = project root
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173", "http://127.0.0.1:5173"]

    # Logging
    log_level: str = "INFO"

    # Database
    goals_db_path: Path | None = None

    # Dashboard week boundaries, as a Python weekday (0 = Monday, 6 = Sunday)
    week_start_day: int = 6

    # Caller identity when no X-User-Id header is sent
    default_user_id: str = "local"

    @field_validator("week_start_day")
    @classmethod
    def validate_week_start_day(cls, value: int) -> int:
        if not 0 <= value <= 6:
            raise ValueError("week_start_day must be between 0 (Monday) and 6 (Sunday)")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.goals_db_path is None:
            self.goals_db_path = PROJECT_ROOT / "goals.db"

    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"
        env_prefix = "GOAL_TRACKER_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
