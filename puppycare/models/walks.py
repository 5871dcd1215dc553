"""
Walk suggestion and walk session models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .events import DomainEvent


class WalkSuggestion(BaseModel):
    """
    Next suggested walk.

    Attributes:
        suggested_time: When to walk
        label: Slot label, e.g. "Morning walk"
        is_overdue: suggested_time is already in the past
        minutes_since_last_walk: None if no walk happened today
        minutes_until_suggested: Negative when overdue
        walks_completed_today: Walks logged (or simulated) today
        target_walks_per_day: Number of slots in the schedule
        scheduled_walk_index: Slot index this suggestion fills, if any
    """

    model_config = ConfigDict(frozen=True)

    suggested_time: datetime
    label: str
    is_overdue: bool
    minutes_since_last_walk: Optional[int] = None
    minutes_until_suggested: int
    walks_completed_today: int
    target_walks_per_day: int
    scheduled_walk_index: Optional[int] = None

    @property
    def is_day_complete(self) -> bool:
        return self.walks_completed_today >= self.target_walks_per_day


class WalkSession(BaseModel):
    """A walk event with the potty events logged under it."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    walk_event: DomainEvent
    child_potty_events: tuple[DomainEvent, ...] = ()

    @property
    def outdoor_potty_count(self) -> int:
        return sum(1 for e in self.child_potty_events if e.is_outdoor)
