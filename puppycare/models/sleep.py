"""
Sleep state and sleep session models.

Both are derived values: they exist only as return values of the sleep
resolver and are rebuilt from the event snapshot on every call.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from puppycare.utils.dates import minutes_between

from .enums import SleepStateKind

NAP_THRESHOLD_MINUTES = 15


class SleepState(BaseModel):
    """
    Current sleeping/awake state.

    Attributes:
        kind: sleeping, awake, or unknown
        since: Time of the sleep-start or wake event that set the state
        elapsed_minutes: Minutes from `since` to the evaluation time
    """

    model_config = ConfigDict(frozen=True)

    kind: SleepStateKind
    since: Optional[datetime] = None
    elapsed_minutes: int = 0

    @classmethod
    def sleeping(cls, since: datetime, elapsed_minutes: int) -> "SleepState":
        return cls(kind=SleepStateKind.SLEEPING, since=since, elapsed_minutes=elapsed_minutes)

    @classmethod
    def awake(cls, since: datetime, elapsed_minutes: int) -> "SleepState":
        return cls(kind=SleepStateKind.AWAKE, since=since, elapsed_minutes=elapsed_minutes)

    @classmethod
    def unknown(cls) -> "SleepState":
        return cls(kind=SleepStateKind.UNKNOWN)

    @property
    def is_sleeping(self) -> bool:
        return self.kind is SleepStateKind.SLEEPING

    @property
    def is_awake(self) -> bool:
        return self.kind is SleepStateKind.AWAKE


class SleepSession(BaseModel):
    """A sleep-start paired with its wake, or still open."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    start_event_id: str
    end_event_id: Optional[str] = None

    @property
    def is_ongoing(self) -> bool:
        return self.end_time is None

    def duration_minutes(self, now: Optional[datetime] = None) -> int:
        """Length in minutes; ongoing sessions run through `now`. Never negative."""
        end = self.end_time if self.end_time is not None else (now or datetime.now())
        return max(0, minutes_between(self.start_time, end))

    @property
    def is_short_nap(self) -> bool:
        return not self.is_ongoing and self.duration_minutes() < NAP_THRESHOLD_MINUTES


class CompletedSleep(BaseModel):
    """The most recent sleep that has both a start and a wake."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    duration_minutes: int = Field(ge=0)
