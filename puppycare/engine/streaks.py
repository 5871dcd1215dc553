"""
Outdoor pee streaks.

A streak is a run of consecutive outdoor pee events. Anything else (an
indoor pee, or one logged without a location) ends the run. Pee events
inside a coverage gap are removed before counting, so a gap neither
extends nor breaks a streak.
"""

from typing import Iterable

from puppycare.models.events import DomainEvent, chronological, pees
from puppycare.models.stats import StreakInfo

from .coverage_gaps import filter_events_outside_gaps


def _countable_pees(
    events: Iterable[DomainEvent], coverage_gaps: Iterable[DomainEvent]
) -> list[DomainEvent]:
    pee_events = pees(events)
    gaps = list(coverage_gaps)
    if gaps:
        pee_events = filter_events_outside_gaps(pee_events, gaps)
    return chronological(pee_events)


def _current_run(ordered: list[DomainEvent]) -> int:
    streak = 0
    for event in reversed(ordered):
        if not event.is_outdoor:
            break
        streak += 1
    return streak


def _best_run(ordered: list[DomainEvent]) -> int:
    best = 0
    running = 0
    for event in ordered:
        if event.is_outdoor:
            running += 1
            best = max(best, running)
        else:
            running = 0
    return best


def calculate_current_streak(
    events: Iterable[DomainEvent], coverage_gaps: Iterable[DomainEvent] = ()
) -> int:
    """Outdoor pees in a row, counting back from the most recent."""
    return _current_run(_countable_pees(events, coverage_gaps))


def calculate_best_streak(
    events: Iterable[DomainEvent], coverage_gaps: Iterable[DomainEvent] = ()
) -> int:
    """Longest outdoor run anywhere in the history."""
    return _best_run(_countable_pees(events, coverage_gaps))


def get_streak_info(
    events: Iterable[DomainEvent], coverage_gaps: Iterable[DomainEvent] = ()
) -> StreakInfo:
    """Current and best streak plus the latest outdoor and indoor times."""
    ordered = _countable_pees(events, coverage_gaps)
    if not ordered:
        return StreakInfo.empty()

    last_outdoor = next((e.time for e in reversed(ordered) if e.is_outdoor), None)
    last_indoor = next((e.time for e in reversed(ordered) if e.is_indoor), None)

    return StreakInfo(
        current_streak=_current_run(ordered),
        best_streak=_best_run(ordered),
        last_outdoor_time=last_outdoor,
        last_indoor_time=last_indoor,
    )
