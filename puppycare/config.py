"""
Configuration management using pydantic-settings.
All settings loaded from environment variables (12-factor app).
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="json", description="Log format (json|console)")
    dev_mode: bool = Field(default=True, description="Development mode")

    # Potty prediction defaults
    default_gap_minutes: int = Field(
        default=120, ge=15, le=720, description="Expected minutes between pee events"
    )
    post_meal_gap_multiplier: float = Field(
        default=0.5, gt=0.0, le=2.0, description="Gap multiplier shortly after a meal"
    )
    post_sleep_gap_multiplier: float = Field(
        default=0.5, gt=0.0, le=2.0, description="Gap multiplier shortly after a nap"
    )

    # Activity timeline
    timeline_day_start_hour: int = Field(
        default=6, ge=0, le=23, description="Default first hour of the day timeline"
    )
    timeline_day_end_hour: int = Field(
        default=22, ge=1, le=24, description="Default last hour of the day timeline"
    )

    # Sleep
    fallback_nap_minutes: int = Field(
        default=30, ge=15, le=120, description="Nap duration used before enough history exists"
    )

    # Walk schedule
    walk_interval_minutes: int = Field(
        default=120, ge=15, le=720, description="Default minutes between flexible walks"
    )

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Only json and console renderers exist."""
        v = v.lower()
        if v not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure singleton behavior.
    """
    return Settings()
