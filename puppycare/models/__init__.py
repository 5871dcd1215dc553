"""
Pydantic v2 data models for the puppy care engine.

This package contains the immutable value types exchanged between the
engine and its collaborators: the domain event the logging layer hands in,
the configuration the profile layer supplies, and every derived result the
presentation layer reads back.

Model Organization:
    - enums: Enumeration types for consistent classification
    - events: Domain event record and collection helpers
    - profile: Prediction config, walk and meal schedules, and profile slice
    - sleep: Sleep state and sleep sessions
    - prediction: Potty urgency, triggers, and predictions
    - combined: Combined sleep + potty display state
    - activity: Visual timeline blocks and day summaries
    - stats: Gap, streak, and trigger pattern statistics
    - walks: Walk suggestions and walk sessions
    - weight: Weight measurements and growth comparisons
    - poop: Poop pattern and daily poop status
    - upcoming: Upcoming and actionable meals and walks
    - summary: Week overview day stats and daily digest

Usage:
    >>> from puppycare.models import DomainEvent, EventType, EventLocation
    >>> event = DomainEvent(
    ...     time=datetime(2024, 3, 1, 8, 0),
    ...     type=EventType.PEE,
    ...     location=EventLocation.OUTDOOR,
    ... )
"""

# Enumerations
from .enums import (
    ActionableState,
    ActivityBlockKind,
    CombinedStateKind,
    CoverageGapType,
    EventLocation,
    EventType,
    PoopUrgencyLevel,
    SizeCategory,
    SleepStateKind,
    TriggerKind,
    UpcomingItemKind,
    UrgencyKind,
    WalkScheduleMode,
)

# Event models
from .events import DomainEvent

# Configuration
from .profile import (
    MaxDurationRule,
    MealPortion,
    MealSchedule,
    PredictionConfig,
    PuppyProfile,
    ScheduledWalk,
    WalkSchedule,
)

# Derived state
from .sleep import CompletedSleep, SleepSession, SleepState
from .prediction import PottyPrediction, PottyTrigger, PottyUrgency
from .combined import CombinedSleepPottyState, WakeTimePottyState
from .activity import ActivityBlock, ActivityBlockSummary
from .stats import GapStats, PatternAnalysis, PatternTrigger, PottyGap, StreakInfo
from .walks import WalkSession, WalkSuggestion
from .weight import GrowthComparison, GrowthReference, WeightMeasurement
from .poop import PoopPattern, PoopStatus
from .upcoming import ActionableItem, UpcomingItem, UpcomingItems
from .summary import DailyDigest, DayStats

__all__ = [
    "ActionableItem",
    "ActionableState",
    "ActivityBlock",
    "ActivityBlockKind",
    "ActivityBlockSummary",
    "CombinedSleepPottyState",
    "CombinedStateKind",
    "CompletedSleep",
    "CoverageGapType",
    "DailyDigest",
    "DayStats",
    "DomainEvent",
    "EventLocation",
    "EventType",
    "GapStats",
    "GrowthComparison",
    "GrowthReference",
    "MaxDurationRule",
    "MealPortion",
    "MealSchedule",
    "PatternAnalysis",
    "PatternTrigger",
    "PoopPattern",
    "PoopStatus",
    "PoopUrgencyLevel",
    "PottyGap",
    "PottyPrediction",
    "PottyTrigger",
    "PottyUrgency",
    "PredictionConfig",
    "PuppyProfile",
    "ScheduledWalk",
    "SizeCategory",
    "SleepSession",
    "SleepState",
    "SleepStateKind",
    "StreakInfo",
    "TriggerKind",
    "UpcomingItem",
    "UpcomingItemKind",
    "UpcomingItems",
    "UrgencyKind",
    "WakeTimePottyState",
    "WalkSchedule",
    "WalkScheduleMode",
    "WalkSession",
    "WalkSuggestion",
    "WeightMeasurement",
]
