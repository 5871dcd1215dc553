"""
Potty prediction result models.

Urgency and trigger are tagged variants: a kind plus the one number that
variant carries. Build them through the named constructors so the number
always lands in the right slot.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .enums import TriggerKind, UrgencyKind

URGENT_KINDS = frozenset({UrgencyKind.SOON, UrgencyKind.OVERDUE, UrgencyKind.POST_ACCIDENT})


class PottyUrgency(BaseModel):
    """
    How soon the puppy needs to go out.

    Attributes:
        kind: Urgency classification
        minutes: Minutes remaining (normal/attention/soon) or minutes overdue (overdue)
    """

    model_config = ConfigDict(frozen=True)

    kind: UrgencyKind
    minutes: Optional[int] = None

    @classmethod
    def just_went(cls) -> "PottyUrgency":
        return cls(kind=UrgencyKind.JUST_WENT)

    @classmethod
    def normal(cls, remaining: int) -> "PottyUrgency":
        return cls(kind=UrgencyKind.NORMAL, minutes=remaining)

    @classmethod
    def attention(cls, remaining: int) -> "PottyUrgency":
        return cls(kind=UrgencyKind.ATTENTION, minutes=remaining)

    @classmethod
    def soon(cls, remaining: int) -> "PottyUrgency":
        return cls(kind=UrgencyKind.SOON, minutes=remaining)

    @classmethod
    def overdue(cls, overdue_by: int) -> "PottyUrgency":
        return cls(kind=UrgencyKind.OVERDUE, minutes=overdue_by)

    @classmethod
    def post_accident(cls) -> "PottyUrgency":
        return cls(kind=UrgencyKind.POST_ACCIDENT)

    @classmethod
    def unknown(cls) -> "PottyUrgency":
        return cls(kind=UrgencyKind.UNKNOWN)

    @property
    def is_urgent(self) -> bool:
        return self.kind in URGENT_KINDS

    @property
    def minutes_remaining(self) -> Optional[int]:
        if self.kind in (UrgencyKind.NORMAL, UrgencyKind.ATTENTION, UrgencyKind.SOON):
            return self.minutes
        return None

    @property
    def minutes_overdue(self) -> Optional[int]:
        if self.kind is UrgencyKind.OVERDUE:
            return self.minutes
        return None


class PottyTrigger(BaseModel):
    """Active trigger and how long ago its event happened."""

    model_config = ConfigDict(frozen=True)

    kind: TriggerKind = TriggerKind.NONE
    minutes_ago: Optional[int] = None

    @classmethod
    def post_meal(cls, minutes_ago: int) -> "PottyTrigger":
        return cls(kind=TriggerKind.POST_MEAL, minutes_ago=minutes_ago)

    @classmethod
    def post_sleep(cls, minutes_ago: int) -> "PottyTrigger":
        return cls(kind=TriggerKind.POST_SLEEP, minutes_ago=minutes_ago)

    @classmethod
    def none(cls) -> "PottyTrigger":
        return cls(kind=TriggerKind.NONE)

    @property
    def is_active(self) -> bool:
        return self.kind is not TriggerKind.NONE


class PottyPrediction(BaseModel):
    """
    Full potty prediction.

    Attributes:
        urgency: Classified urgency
        trigger: Trigger that shortened the expected gap, if any
        expected_gap_minutes: Gap used for the countdown (0 after an accident)
        minutes_since_last: Minutes since the last pee, None without history
        last_was_indoor: Whether the last pee was indoors
    """

    model_config = ConfigDict(frozen=True)

    urgency: PottyUrgency
    trigger: PottyTrigger = PottyTrigger()
    expected_gap_minutes: int
    minutes_since_last: Optional[int] = None
    last_was_indoor: bool = False

    @property
    def minutes_overdue(self) -> Optional[int]:
        return self.urgency.minutes_overdue
