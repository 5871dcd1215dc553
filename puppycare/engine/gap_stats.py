"""
Potty gap statistics.

A gap is the interval between two consecutive pee events. With the
overnight filter on, gaps longer than 8 hours or touching the night window
are dropped, since they measure sleep rather than bladder capacity.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from puppycare.models.events import DomainEvent, chronological, on_day, pees
from puppycare.models.stats import GapStats, PottyGap
from puppycare.utils.dates import minutes_between, resolve_now
from puppycare.utils.logging import get_logger

from .coverage_gaps import filter_potty_gaps

logger = get_logger(__name__)

MAX_DAYTIME_GAP_MINUTES = 8 * 60
DAYTIME_START_HOUR = 7
DAYTIME_END_HOUR = 23
DEFAULT_RECENT_DAYS = 7


def _is_daytime(moment: datetime) -> bool:
    return DAYTIME_START_HOUR <= moment.hour < DAYTIME_END_HOUR


def calculate_potty_gaps(
    events: Iterable[DomainEvent],
    filter_overnight: bool = True,
    coverage_gaps: Iterable[DomainEvent] = (),
) -> list[PottyGap]:
    """
    Gaps between consecutive pee events, oldest first.

    Args:
        events: Event snapshot in any order
        filter_overnight: Drop gaps over 8 hours or with an endpoint outside 07:00-23:00
        coverage_gaps: Coverage gap markers; gaps spanning one are dropped
    """
    ordered = chronological(pees(events))
    gaps: list[PottyGap] = []

    for previous, current in zip(ordered, ordered[1:]):
        duration = minutes_between(previous.time, current.time)
        if filter_overnight and (
            duration > MAX_DAYTIME_GAP_MINUTES
            or not _is_daytime(previous.time)
            or not _is_daytime(current.time)
        ):
            continue
        gaps.append(
            PottyGap(
                start_time=previous.time,
                end_time=current.time,
                duration_minutes=duration,
                start_location=previous.location,
                end_location=current.location,
            )
        )

    coverage = list(coverage_gaps)
    if coverage:
        gaps, excluded = filter_potty_gaps(gaps, coverage)
        if excluded:
            logger.debug("potty_gaps_excluded_by_coverage", excluded=excluded)

    return gaps


def calculate_gap_stats(gaps: Iterable[PottyGap]) -> GapStats:
    """
    Min/max/average/median over gap durations.

    Average truncates; an even count takes the truncated mean of the two
    middle values as median. Outdoor/indoor counts use each gap's end.
    """
    gaps = list(gaps)
    if not gaps:
        return GapStats.empty()

    durations = sorted(g.duration_minutes for g in gaps)
    n = len(durations)
    outdoor = sum(1 for g in gaps if g.ended_outdoor)
    mid = n // 2
    if n % 2 == 0:
        median = (durations[mid - 1] + durations[mid]) // 2
    else:
        median = durations[mid]

    return GapStats(
        count=n,
        min_minutes=durations[0],
        max_minutes=durations[-1],
        avg_minutes=sum(durations) // n,
        median_minutes=median,
        outdoor_count=outdoor,
        indoor_count=n - outdoor,
    )


def today_gaps(events: Iterable[DomainEvent], now: Optional[datetime] = None) -> list[PottyGap]:
    """Today's gaps, unfiltered."""
    now = resolve_now(now)
    return calculate_potty_gaps(on_day(events, now.date()), filter_overnight=False)


def recent_gaps(
    events: Iterable[DomainEvent],
    days: int = DEFAULT_RECENT_DAYS,
    now: Optional[datetime] = None,
    coverage_gaps: Iterable[DomainEvent] = (),
) -> list[PottyGap]:
    """Daytime gaps over the last `days` days."""
    now = resolve_now(now)
    cutoff = now - timedelta(days=days)
    window = [e for e in events if cutoff <= e.time <= now]
    return calculate_potty_gaps(window, filter_overnight=True, coverage_gaps=coverage_gaps)
