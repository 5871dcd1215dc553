"""
Poop status models.

Poop tracking learns from the puppy's own history: a pattern summary over
past days, and a status for today that compares against it.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import PoopUrgencyLevel


class PoopPattern(BaseModel):
    """
    Historical poop pattern.

    Attributes:
        median_daily_count: Median poops per logged day
        median_daytime_gap_minutes: Median daytime gap between consecutive poops
        post_walk_poop_rate: Share of walks with a poop during the walk (0-1)
        days_analyzed: Number of distinct days with at least one poop
    """

    model_config = ConfigDict(frozen=True)

    median_daily_count: float = Field(default=0.0, ge=0.0)
    median_daytime_gap_minutes: int = Field(default=0, ge=0)
    post_walk_poop_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    days_analyzed: int = Field(default=0, ge=0)

    @classmethod
    def empty(cls) -> "PoopPattern":
        return cls()


class PoopStatus(BaseModel):
    """
    Today's poop status.

    expected_min/expected_max bound the expected daily count, from age alone
    or blended with the learned pattern when enough history exists.
    """

    model_config = ConfigDict(frozen=True)

    today_count: int = Field(default=0, ge=0)
    expected_min: int = Field(ge=0)
    expected_max: int = Field(ge=0)
    last_poop_time: Optional[datetime] = None
    daytime_minutes_since_last: Optional[int] = None
    recent_walk_without_poop: bool = False
    urgency: PoopUrgencyLevel
    message: Optional[str] = None
    has_pattern_data: bool = False
    pattern_daily_median: Optional[float] = None

    @model_validator(mode="after")
    def validate_range(self) -> "PoopStatus":
        if self.expected_min > self.expected_max:
            raise ValueError("expected_min cannot exceed expected_max")
        return self

    @property
    def is_below_expected(self) -> bool:
        return self.today_count < self.expected_min

    @property
    def is_visible(self) -> bool:
        return self.urgency is not PoopUrgencyLevel.HIDDEN
