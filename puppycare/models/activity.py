"""
Visual timeline models.

Blocks are built fresh for every day-view request and never persisted.
Point events (potty, meal) have end_time equal to start_time.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from puppycare.utils.dates import minutes_between

from .enums import ActivityBlockKind


class ActivityBlock(BaseModel):
    """
    A typed timeline segment.

    Attributes:
        block_id: Session id for sleep blocks, event id otherwise
        kind: sleep, walk, potty, meal, or awake
        outdoor: For potty blocks, whether it happened outside
        start_time: Segment start
        end_time: Segment end (equal to start for point events)
        contained_event_ids: Events rendered by this block
        is_ongoing: Open sleep session on today's timeline
    """

    model_config = ConfigDict(frozen=True)

    block_id: str
    kind: ActivityBlockKind
    outdoor: Optional[bool] = None
    start_time: datetime
    end_time: datetime
    contained_event_ids: tuple[str, ...] = ()
    is_ongoing: bool = False

    @property
    def duration_minutes(self) -> int:
        return minutes_between(self.start_time, self.end_time)

    @property
    def has_duration(self) -> bool:
        return self.kind in (ActivityBlockKind.SLEEP, ActivityBlockKind.WALK, ActivityBlockKind.AWAKE)


class ActivityBlockSummary(BaseModel):
    """Per-day totals derived from a block list."""

    model_config = ConfigDict(frozen=True)

    total_sleep_minutes: int = Field(default=0, ge=0)
    walk_count: int = Field(default=0, ge=0)
    total_walk_minutes: int = Field(default=0, ge=0)
    outdoor_potty_count: int = Field(default=0, ge=0)
    indoor_potty_count: int = Field(default=0, ge=0)
    meal_count: int = Field(default=0, ge=0)

    @property
    def total_potty_count(self) -> int:
        return self.outdoor_potty_count + self.indoor_potty_count

    @property
    def potty_success_rate(self) -> float:
        """Outdoor share of potty events; a day without any counts as 1.0."""
        if self.total_potty_count == 0:
            return 1.0
        return self.outdoor_potty_count / self.total_potty_count
