"""
Day-level summaries: per-day stats for the week overview and the daily digest.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DayStats(BaseModel):
    """Counts for one calendar day of the week overview."""

    model_config = ConfigDict(frozen=True)

    day: date
    outdoor_potty: int = Field(default=0, ge=0)
    indoor_potty: int = Field(default=0, ge=0)
    meals: int = Field(default=0, ge=0)
    walks: int = Field(default=0, ge=0)
    sleep_minutes: int = Field(default=0, ge=0)
    training_sessions: int = Field(default=0, ge=0)

    @property
    def sleep_hours(self) -> float:
        return self.sleep_minutes / 60

    @property
    def outdoor_percentage(self) -> int:
        """Outdoor share of located potty events, rounded half up (0-100)."""
        total = self.outdoor_potty + self.indoor_potty
        if total == 0:
            return 0
        return (self.outdoor_potty * 200 + total) // (2 * total)


class DailyDigest(BaseModel):
    """
    One-line summary of a day.

    Attributes:
        day_number: Day since coming home (homecoming day is 1), None before it
        parts: Display fragments in fixed order: pee, poop, meals, sleep, walks
    """

    model_config = ConfigDict(frozen=True)

    day_number: Optional[int] = None
    pee_count: int = 0
    pee_outdoor_percentage: int = 0
    poop_count: int = 0
    poop_outdoor_percentage: int = 0
    meal_count: int = 0
    sleep_minutes: int = 0
    walk_count: int = 0
    parts: tuple[str, ...] = ()

    @property
    def has_data(self) -> bool:
        return bool(self.parts)

    @classmethod
    def empty(cls) -> "DailyDigest":
        return cls()
