"""
Combined sleep + potty display state.

The status card shows exactly one of six states. Which one is decided by
the combined status resolver; this module only defines the shapes and the
visibility flags the presentation layer reads.
"""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict

from puppycare.utils.dates import minutes_between

from .enums import CombinedStateKind
from .prediction import PottyUrgency


class CombinedSleepPottyState(BaseModel):
    """
    One of six mutually exclusive display states.

    Only the fields belonging to `kind` are populated:

    - sleeping_potty_okay: sleeping_since, sleep_duration_min
    - sleeping_potty_urgent: the above plus potty_urgency, minutes_overdue
    - just_woke_needs_potty: woke_at, minutes_since_wake, potty_was_overdue_by
    - assumed_overnight_sleep: suggested_bedtime, minutes_sleeping, last_event_time
    - awake, unknown: nothing
    """

    model_config = ConfigDict(frozen=True)

    kind: CombinedStateKind

    sleeping_since: Optional[datetime] = None
    sleep_duration_min: Optional[int] = None
    potty_urgency: Optional[PottyUrgency] = None
    minutes_overdue: Optional[int] = None

    woke_at: Optional[datetime] = None
    minutes_since_wake: Optional[int] = None
    potty_was_overdue_by: Optional[int] = None

    suggested_bedtime: Optional[datetime] = None
    minutes_sleeping: Optional[int] = None
    last_event_time: Optional[datetime] = None

    @classmethod
    def awake(cls) -> "CombinedSleepPottyState":
        return cls(kind=CombinedStateKind.AWAKE)

    @classmethod
    def unknown(cls) -> "CombinedSleepPottyState":
        return cls(kind=CombinedStateKind.UNKNOWN)

    @classmethod
    def sleeping_potty_okay(cls, sleeping_since: datetime, sleep_duration_min: int) -> "CombinedSleepPottyState":
        return cls(
            kind=CombinedStateKind.SLEEPING_POTTY_OKAY,
            sleeping_since=sleeping_since,
            sleep_duration_min=sleep_duration_min,
        )

    @classmethod
    def sleeping_potty_urgent(
        cls,
        sleeping_since: datetime,
        sleep_duration_min: int,
        potty_urgency: PottyUrgency,
        minutes_overdue: Optional[int],
    ) -> "CombinedSleepPottyState":
        return cls(
            kind=CombinedStateKind.SLEEPING_POTTY_URGENT,
            sleeping_since=sleeping_since,
            sleep_duration_min=sleep_duration_min,
            potty_urgency=potty_urgency,
            minutes_overdue=minutes_overdue,
        )

    @classmethod
    def just_woke_needs_potty(
        cls, woke_at: datetime, minutes_since_wake: int, potty_was_overdue_by: Optional[int]
    ) -> "CombinedSleepPottyState":
        return cls(
            kind=CombinedStateKind.JUST_WOKE_NEEDS_POTTY,
            woke_at=woke_at,
            minutes_since_wake=minutes_since_wake,
            potty_was_overdue_by=potty_was_overdue_by,
        )

    @classmethod
    def assumed_overnight_sleep(
        cls,
        suggested_bedtime: datetime,
        minutes_sleeping: int,
        last_event_time: Optional[datetime],
    ) -> "CombinedSleepPottyState":
        return cls(
            kind=CombinedStateKind.ASSUMED_OVERNIGHT_SLEEP,
            suggested_bedtime=suggested_bedtime,
            minutes_sleeping=minutes_sleeping,
            last_event_time=last_event_time,
        )

    # Visibility flags. At most one of the four card flags is ever true.

    @property
    def is_sleeping(self) -> bool:
        return self.kind in (
            CombinedStateKind.SLEEPING_POTTY_OKAY,
            CombinedStateKind.SLEEPING_POTTY_URGENT,
        )

    @property
    def should_show_post_wake_prompt(self) -> bool:
        return self.kind is CombinedStateKind.JUST_WOKE_NEEDS_POTTY

    @property
    def should_show_combined_card(self) -> bool:
        return self.kind is CombinedStateKind.SLEEPING_POTTY_URGENT

    @property
    def should_show_assumed_sleep_card(self) -> bool:
        return self.kind is CombinedStateKind.ASSUMED_OVERNIGHT_SLEEP

    @property
    def should_show_separate_cards(self) -> bool:
        return self.kind is CombinedStateKind.AWAKE

    @property
    def should_hide_potty_card(self) -> bool:
        return self.kind in (
            CombinedStateKind.SLEEPING_POTTY_OKAY,
            CombinedStateKind.SLEEPING_POTTY_URGENT,
            CombinedStateKind.JUST_WOKE_NEEDS_POTTY,
        )

    @property
    def should_hide_sleep_card(self) -> bool:
        return self.kind in (
            CombinedStateKind.SLEEPING_POTTY_URGENT,
            CombinedStateKind.ASSUMED_OVERNIGHT_SLEEP,
        )


class WakeTimePottyState(BaseModel):
    """
    Potty urgency captured at the moment of waking.

    Valid for PROMPT_DURATION_MINUTES after capture; a potty logged after
    capture also invalidates it.
    """

    model_config = ConfigDict(frozen=True)

    PROMPT_DURATION_MINUTES: ClassVar[int] = 10

    captured_at: datetime
    was_overdue: bool
    minutes_overdue: Optional[int] = None
    minutes_since_last: Optional[int] = None

    def minutes_since_capture(self, now: datetime) -> int:
        return minutes_between(self.captured_at, now)

    def has_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now()
        return self.minutes_since_capture(now) >= self.PROMPT_DURATION_MINUTES
