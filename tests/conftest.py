"""
Pytest configuration and shared factories for the puppy care engine suite.

All tests run against a fixed clock (NOW) so every time-dependent result is
deterministic. Factories build frozen DomainEvent objects with sensible
defaults; pass keyword overrides for anything else.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

import pytest

from puppycare.config import get_settings
from puppycare.models.enums import CoverageGapType, EventLocation, EventType, WalkScheduleMode
from puppycare.models.events import DomainEvent
from puppycare.models.profile import PredictionConfig, ScheduledWalk, WalkSchedule

# Tuesday morning; yesterday is 2024-03-11
NOW = datetime(2024, 3, 12, 9, 0)
TODAY = NOW.date()
YESTERDAY = TODAY - timedelta(days=1)


def at(hour: int, minute: int = 0, days_ago: int = 0) -> datetime:
    """Time on today's date (or `days_ago` days earlier)."""
    return datetime(2024, 3, 12, hour, minute) - timedelta(days=days_ago)


# ---------------------------------------------------------------------------
# Event factories
# ---------------------------------------------------------------------------


def make_event(event_type: EventType, time: datetime, **overrides) -> DomainEvent:
    """Factory function for creating test DomainEvent objects."""
    return DomainEvent(time=time, type=event_type, **overrides)


def make_pee(
    time: datetime, location: Optional[EventLocation] = EventLocation.OUTDOOR, **overrides
) -> DomainEvent:
    return make_event(EventType.PEE, time, location=location, **overrides)


def make_poop(
    time: datetime, location: Optional[EventLocation] = EventLocation.OUTDOOR, **overrides
) -> DomainEvent:
    return make_event(EventType.POOP, time, location=location, **overrides)


def make_sleep(time: datetime, **overrides) -> DomainEvent:
    return make_event(EventType.SLEEP, time, **overrides)


def make_wake(time: datetime, **overrides) -> DomainEvent:
    return make_event(EventType.WAKE, time, **overrides)


def make_meal(time: datetime, **overrides) -> DomainEvent:
    return make_event(EventType.MEAL, time, **overrides)


def make_walk(time: datetime, duration_min: Optional[int] = None, **overrides) -> DomainEvent:
    return make_event(EventType.WALK, time, duration_min=duration_min, **overrides)


def make_coverage_gap(
    start: datetime,
    end: Optional[datetime] = None,
    gap_type: CoverageGapType = CoverageGapType.DAYCARE,
    **overrides,
) -> DomainEvent:
    return make_event(EventType.COVERAGE_GAP, start, end_time=end, gap_type=gap_type, **overrides)


def make_weight(time: datetime, weight_kg: float, **overrides) -> DomainEvent:
    return make_event(EventType.WEIGHT, time, weight_kg=weight_kg, **overrides)


# ---------------------------------------------------------------------------
# Configuration factories
# ---------------------------------------------------------------------------


def make_config(
    default_gap_minutes: int = 120,
    post_meal_gap_multiplier: float = 0.5,
    post_sleep_gap_multiplier: float = 0.5,
) -> PredictionConfig:
    return PredictionConfig(
        default_gap_minutes=default_gap_minutes,
        post_meal_gap_multiplier=post_meal_gap_multiplier,
        post_sleep_gap_multiplier=post_sleep_gap_multiplier,
    )


def make_schedule(
    times: Iterable[str] = ("07:00", "10:00", "13:00", "16:00", "19:00"),
    mode: WalkScheduleMode = WalkScheduleMode.FLEXIBLE,
    interval_minutes: int = 120,
    day_start_hour: int = 6,
    day_end_hour: int = 22,
) -> WalkSchedule:
    """Factory function for creating test WalkSchedule objects."""
    walks = tuple(
        ScheduledWalk(slot_id=f"slot-{i}", label=f"Walk {i + 1}", target_time=t)
        for i, t in enumerate(times)
    )
    return WalkSchedule(
        mode=mode,
        walks=walks,
        interval_minutes=interval_minutes,
        day_start_hour=day_start_hour,
        day_end_hour=day_end_hour,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Fresh settings per test, unaffected by a developer's environment."""
    for name in (
        "DEFAULT_GAP_MINUTES",
        "POST_MEAL_GAP_MULTIPLIER",
        "POST_SLEEP_GAP_MULTIPLIER",
        "TIMELINE_DAY_START_HOUR",
        "TIMELINE_DAY_END_HOUR",
        "FALLBACK_NAP_MINUTES",
        "WALK_INTERVAL_MINUTES",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "DEV_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def config() -> PredictionConfig:
    return make_config()


@pytest.fixture
def schedule() -> WalkSchedule:
    return make_schedule()
