"""
Enumeration types for the puppy care engine.

This module defines the enum types shared by the event model and every
computation component. All enums inherit from str to ensure JSON
serialization compatibility with the logging collaborators.
"""

from enum import Enum


class EventType(str, Enum):
    """
    Categorical tag for a logged care event.

    Potty, sleep, and trigger logic key off these tags; the remaining types
    are carried through untouched for timelines and exports.
    """

    # Elimination
    PEE = "pee"
    POOP = "poop"

    # Sleep
    SLEEP = "sleep"
    CRATE = "crate"
    WAKE = "wake"

    # Feeding
    MEAL = "meal"
    DRINK = "drink"

    # Outings and activity
    WALK = "walk"
    GARDEN = "garden"
    TRAINING = "training"
    SOCIAL = "social"

    # Records
    MILESTONE = "milestone"
    BEHAVIOR = "behavior"
    WEIGHT = "weight"
    MOMENT = "moment"
    MEDICATION = "medication"

    # Caregiving handoff window
    COVERAGE_GAP = "coverage_gap"

    @property
    def is_potty_event(self) -> bool:
        return self in (EventType.PEE, EventType.POOP)

    @property
    def requires_location(self) -> bool:
        return self.is_potty_event

    @property
    def is_sleep_start(self) -> bool:
        """Sleep and crate both open a sleep session."""
        return self in (EventType.SLEEP, EventType.CRATE)

    @property
    def is_wake(self) -> bool:
        return self is EventType.WAKE

    @property
    def is_sleep_related(self) -> bool:
        return self.is_sleep_start or self.is_wake

    @property
    def is_coverage_gap(self) -> bool:
        return self is EventType.COVERAGE_GAP


class EventLocation(str, Enum):
    """Where a potty event happened."""

    OUTDOOR = "outdoor"
    INDOOR = "indoor"


class CoverageGapType(str, Enum):
    """Who was looking after the puppy during a coverage gap."""

    DAYCARE = "daycare"
    FAMILY = "family"
    SITTER = "sitter"
    VACATION = "vacation"
    OTHER = "other"


class SleepStateKind(str, Enum):
    SLEEPING = "sleeping"
    AWAKE = "awake"
    UNKNOWN = "unknown"


class UrgencyKind(str, Enum):
    """
    Potty urgency classification.

    Ordered from calmest to most pressing, with the two out-of-band
    states (post_accident, unknown) last.
    """

    JUST_WENT = "just_went"
    NORMAL = "normal"
    ATTENTION = "attention"
    SOON = "soon"
    OVERDUE = "overdue"
    POST_ACCIDENT = "post_accident"
    UNKNOWN = "unknown"


class TriggerKind(str, Enum):
    """Recent event that shortens the expected gap to the next pee."""

    POST_MEAL = "post_meal"
    POST_SLEEP = "post_sleep"
    NONE = "none"


class CombinedStateKind(str, Enum):
    """
    The six mutually exclusive sleep + potty display states.

    Exactly one is active at a time; the status resolver picks it with a
    priority-ordered decision tree.
    """

    AWAKE = "awake"
    SLEEPING_POTTY_OKAY = "sleeping_potty_okay"
    SLEEPING_POTTY_URGENT = "sleeping_potty_urgent"
    JUST_WOKE_NEEDS_POTTY = "just_woke_needs_potty"
    ASSUMED_OVERNIGHT_SLEEP = "assumed_overnight_sleep"
    UNKNOWN = "unknown"


class ActivityBlockKind(str, Enum):
    SLEEP = "sleep"
    WALK = "walk"
    POTTY = "potty"
    MEAL = "meal"
    AWAKE = "awake"


class WalkScheduleMode(str, Enum):
    """
    How walk times are determined.

    flexible: next walk = last walk + interval.
    strict: walks follow the fixed slot times.
    """

    FLEXIBLE = "flexible"
    STRICT = "strict"


class PoopUrgencyLevel(str, Enum):
    """
    Poop status levels, deliberately mild.

    hidden covers night hours; attention is the strongest level and is still
    only a note, never an alarm.
    """

    HIDDEN = "hidden"
    GOOD = "good"
    INFO = "info"
    GENTLE = "gentle"
    ATTENTION = "attention"


class SizeCategory(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extra_large"


class UpcomingItemKind(str, Enum):
    MEAL = "meal"
    WALK = "walk"


class ActionableState(str, Enum):
    """How close a scheduled meal or walk is."""

    OVERDUE = "overdue"
    DUE = "due"
    APPROACHING = "approaching"
