"""
Potty statistics models: gaps, streaks, and trigger patterns.
"""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import EventLocation


class PottyGap(BaseModel):
    """Interval between two consecutive pee events."""

    model_config = ConfigDict(frozen=True)

    start_time: datetime
    end_time: datetime
    duration_minutes: int
    start_location: Optional[EventLocation] = None
    end_location: Optional[EventLocation] = None

    @property
    def is_outdoor_to_outdoor(self) -> bool:
        return (
            self.start_location is EventLocation.OUTDOOR
            and self.end_location is EventLocation.OUTDOOR
        )

    @property
    def ended_outdoor(self) -> bool:
        return self.end_location is EventLocation.OUTDOOR


class GapStats(BaseModel):
    """
    Summary of a gap list.

    outdoor_count counts gaps that ended on an outdoor pee. Every other gap,
    including one ending on a pee with no recorded location, is indoor, so
    the two buckets always add up to count.
    """

    model_config = ConfigDict(frozen=True)

    count: int = Field(default=0, ge=0)
    min_minutes: int = 0
    max_minutes: int = 0
    avg_minutes: int = 0
    median_minutes: int = 0
    outdoor_count: int = Field(default=0, ge=0)
    indoor_count: int = Field(default=0, ge=0)

    @property
    def outdoor_percentage(self) -> int:
        if self.count == 0:
            return 0
        return (self.outdoor_count * 100) // self.count

    @classmethod
    def empty(cls) -> "GapStats":
        return cls()


class StreakInfo(BaseModel):
    """Consecutive outdoor pee streaks."""

    model_config = ConfigDict(frozen=True)

    ON_FIRE_THRESHOLD: ClassVar[int] = 5

    current_streak: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)
    last_outdoor_time: Optional[datetime] = None
    last_indoor_time: Optional[datetime] = None

    @property
    def has_active_streak(self) -> bool:
        return self.current_streak > 0

    @property
    def is_on_fire(self) -> bool:
        return self.current_streak >= self.ON_FIRE_THRESHOLD

    @classmethod
    def empty(cls) -> "StreakInfo":
        return cls()


class PatternTrigger(BaseModel):
    """Outdoor vs indoor outcomes following one trigger category."""

    model_config = ConfigDict(frozen=True)

    trigger_id: str
    name: str
    outdoor_count: int = Field(default=0, ge=0)
    indoor_count: int = Field(default=0, ge=0)

    @property
    def total_count(self) -> int:
        return self.outdoor_count + self.indoor_count

    @property
    def success_rate(self) -> int:
        """Integer outdoor percentage, 0 without data."""
        if self.total_count == 0:
            return 0
        return (self.outdoor_count * 100) // self.total_count

    @property
    def has_data(self) -> bool:
        return self.total_count > 0


class PatternAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    triggers: tuple[PatternTrigger, ...] = ()
    period_days: int = 0

    @property
    def has_triggers(self) -> bool:
        return any(t.has_data for t in self.triggers)

    def trigger(self, trigger_id: str) -> Optional[PatternTrigger]:
        return next((t for t in self.triggers if t.trigger_id == trigger_id), None)

    @classmethod
    def empty(cls) -> "PatternAnalysis":
        return cls()
