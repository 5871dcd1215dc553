"""
Poop Status — pattern-aware poop tracking.

Learns the puppy's own rhythm from past days and compares today against it:

- expected daily count from age, narrowed to the learned median when at
  least MIN_DAYS_FOR_PATTERN days of history exist
- daytime gap since the last poop, counting only 06:00-23:00
- a walk that just ended without a poop

Levels stay mild (info, gentle, attention) and the status is hidden during
night hours.
"""

from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, Optional

from puppycare.models.enums import PoopUrgencyLevel
from puppycare.models.events import DomainEvent, chronological, poops, reverse_chronological, walks
from puppycare.models.poop import PoopPattern, PoopStatus
from puppycare.utils.dates import minutes_between, resolve_now
from puppycare.utils.logging import get_logger

logger = get_logger(__name__)

NIGHT_START_HOUR = 23
NIGHT_END_HOUR = 6
MIN_DAYS_FOR_PATTERN = 3
PATTERN_ANALYSIS_DAYS = 14
GENTLE_GAP_MULTIPLIER = 1.5
ATTENTION_GAP_MULTIPLIER = 2.0
ABSOLUTE_MAX_DAYTIME_GAP_MINUTES = 8 * 60
MAX_PATTERN_GAP_MINUTES = 12 * 60
POST_WALK_WINDOW_MINUTES = 30
DEFAULT_WALK_MINUTES = 30
GAP_STEP_MINUTES = 15
EARLY_MORNING_HOUR = 9
ASSUMED_FIRST_WALK_HOUR = 10
EVENING_HOUR = 18

MESSAGE_NO_POOP_YET_EARLY = "No poop yet this morning"
MESSAGE_NO_POOP_YET = "No poop yet today"
MESSAGE_WALK_WITHOUT_POOP = "Walk done, no poop logged"
MESSAGE_LONGER_THAN_USUAL = "Longer gap than usual"
MESSAGE_LONG_GAP = "Been a while since last poop"
MESSAGE_BELOW_EXPECTED = "Below usual for this time"

# (age limit in weeks, expected min, expected max)
_AGE_RANGES = (
    (8, 4, 6),
    (12, 3, 5),
    (26, 2, 4),
    (52, 2, 3),
)
_ADULT_RANGE = (1, 2)


def is_night_hour(hour: int) -> bool:
    return hour >= NIGHT_START_HOUR or hour < NIGHT_END_HOUR


def expected_daily_range(age_weeks: int) -> tuple[int, int]:
    """Expected poops per day for a puppy of this age, as (min, max)."""
    for limit, low, high in _AGE_RANGES:
        if age_weeks < limit:
            return low, high
    return _ADULT_RANGE


def daytime_gap_minutes(start: Optional[datetime], end: datetime) -> Optional[int]:
    """
    Minutes between start and end, counting only daytime.

    Walks the interval in 15-minute steps and counts a step when it begins in
    a daytime hour. None when there is no start or no daytime at all.
    """
    if start is None:
        return None
    total = 0
    current = start
    while current < end:
        if not is_night_hour(current.hour):
            total += GAP_STEP_MINUTES
        current += timedelta(minutes=GAP_STEP_MINUTES)
    return total if total > 0 else None


def daytime_gaps(poop_events: Iterable[DomainEvent]) -> list[int]:
    """Daytime gaps between consecutive poops; overnight-length gaps are dropped."""
    ordered = chronological(poop_events)
    gaps = []
    for previous, current in zip(ordered, ordered[1:]):
        gap = daytime_gap_minutes(previous.time, current.time)
        if gap is not None and 0 < gap < MAX_PATTERN_GAP_MINUTES:
            gaps.append(gap)
    return gaps


def _median(values: list[int]) -> float:
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return float(ordered[mid])


def _walk_end(walk: DomainEvent) -> datetime:
    duration = walk.duration_min if walk.duration_min is not None else DEFAULT_WALK_MINUTES
    return walk.time + timedelta(minutes=duration)


def analyze_poop_pattern(
    events: Iterable[DomainEvent], now: Optional[datetime] = None
) -> PoopPattern:
    """
    Learn the poop pattern from history, excluding today.

    Args:
        events: Historical events, typically the last PATTERN_ANALYSIS_DAYS days
        now: Evaluation time; its date is the "today" left out

    Returns:
        PoopPattern, or PoopPattern.empty() without any past poop
    """
    now = resolve_now(now)
    history = [e for e in events if e.time.date() != now.date()]
    past_poops = chronological(poops(history))
    if not past_poops:
        return PoopPattern.empty()

    daily_counts = Counter(e.time.date() for e in past_poops)
    gaps = daytime_gaps(past_poops)
    median_gap = int(_median(gaps)) if gaps else 0

    past_walks = walks(history)
    if past_walks:
        with_poop = sum(
            1 for walk in past_walks
            if any(walk.time <= p.time <= _walk_end(walk) for p in past_poops)
        )
        post_walk_rate = with_poop / len(past_walks)
    else:
        post_walk_rate = 0.0

    return PoopPattern(
        median_daily_count=_median(list(daily_counts.values())),
        median_daytime_gap_minutes=median_gap,
        post_walk_poop_rate=post_walk_rate,
        days_analyzed=len(daily_counts),
    )


def recent_walk_without_poop(
    today_events: Iterable[DomainEvent],
    last_poop_time: Optional[datetime],
    now: Optional[datetime] = None,
    window_minutes: int = POST_WALK_WINDOW_MINUTES,
) -> bool:
    """True if today's latest walk ended within the window and no poop came since it started."""
    now = resolve_now(now)
    todays_walks = reverse_chronological(w for w in walks(today_events) if w.time.date() == now.date())
    if not todays_walks:
        return False

    last_walk = todays_walks[0]
    since_end = minutes_between(_walk_end(last_walk), now)
    if not 0 <= since_end <= window_minutes:
        return False
    return last_poop_time is None or last_poop_time < last_walk.time


def determine_poop_urgency(
    today_count: int,
    expected_min: int,
    daytime_gap: Optional[int],
    pattern: Optional[PoopPattern],
    walk_without_poop: bool,
    hour: int,
) -> tuple[PoopUrgencyLevel, Optional[str]]:
    """
    Pick the level and message. First matching rule wins:

    1. before 09:00 with no poop yet -> info
    2. walk just ended without a poop, still below the expected minimum -> gentle
    3. gap >= 2x learned median -> attention; >= 1.5x -> gentle (no message)
    4. gap >= 8 hours -> attention
    5. 18:00 or later, below the expected minimum -> info
    6. 10:00 or later with no poop at all -> info
    7. otherwise good
    """
    if hour < EARLY_MORNING_HOUR and today_count == 0:
        return PoopUrgencyLevel.INFO, MESSAGE_NO_POOP_YET_EARLY

    if walk_without_poop and today_count < expected_min:
        return PoopUrgencyLevel.GENTLE, MESSAGE_WALK_WITHOUT_POOP

    if daytime_gap is not None and pattern is not None and pattern.median_daytime_gap_minutes > 0:
        median_gap = pattern.median_daytime_gap_minutes
        if daytime_gap >= int(median_gap * ATTENTION_GAP_MULTIPLIER):
            return PoopUrgencyLevel.ATTENTION, MESSAGE_LONGER_THAN_USUAL
        if daytime_gap >= int(median_gap * GENTLE_GAP_MULTIPLIER):
            return PoopUrgencyLevel.GENTLE, None

    if daytime_gap is not None and daytime_gap >= ABSOLUTE_MAX_DAYTIME_GAP_MINUTES:
        return PoopUrgencyLevel.ATTENTION, MESSAGE_LONG_GAP

    if hour >= EVENING_HOUR and today_count < expected_min:
        return PoopUrgencyLevel.INFO, MESSAGE_BELOW_EXPECTED

    if today_count == 0 and hour >= ASSUMED_FIRST_WALK_HOUR:
        return PoopUrgencyLevel.INFO, MESSAGE_NO_POOP_YET

    return PoopUrgencyLevel.GOOD, None


def calculate_poop_status(
    today_events: Iterable[DomainEvent],
    historical_events: Iterable[DomainEvent],
    age_weeks: int,
    now: Optional[datetime] = None,
) -> PoopStatus:
    """
    Calculate today's poop status.

    Args:
        today_events: Today's events
        historical_events: The last PATTERN_ANALYSIS_DAYS days, today included or not
        age_weeks: Puppy age in whole weeks
        now: Evaluation time

    Returns:
        PoopStatus; hidden with empty fields during night hours
    """
    now = resolve_now(now)
    age_min, age_max = expected_daily_range(age_weeks)

    if is_night_hour(now.hour):
        return PoopStatus(
            expected_min=age_min,
            expected_max=age_max,
            urgency=PoopUrgencyLevel.HIDDEN,
        )

    pattern = analyze_poop_pattern(historical_events, now)
    has_pattern = pattern.days_analyzed >= MIN_DAYS_FOR_PATTERN

    today_events = list(today_events)
    todays_poops = chronological(p for p in poops(today_events) if p.time.date() == now.date())
    today_count = len(todays_poops)
    last_poop_time = todays_poops[-1].time if todays_poops else None

    if has_pattern:
        median = pattern.median_daily_count
        expected_min = max(age_min, int(median) - 1)
        expected_max = max(expected_min, int(median + 0.5) + 1)
    else:
        expected_min, expected_max = age_min, age_max

    gap = daytime_gap_minutes(last_poop_time, now)
    walk_without_poop = recent_walk_without_poop(today_events, last_poop_time, now)
    urgency, message = determine_poop_urgency(
        today_count,
        expected_min,
        gap,
        pattern if has_pattern else None,
        walk_without_poop,
        now.hour,
    )

    logger.debug(
        "poop_status_computed",
        urgency=urgency.value,
        today_count=today_count,
        days_analyzed=pattern.days_analyzed,
    )

    return PoopStatus(
        today_count=today_count,
        expected_min=expected_min,
        expected_max=expected_max,
        last_poop_time=last_poop_time,
        daytime_minutes_since_last=gap,
        recent_walk_without_poop=walk_without_poop,
        urgency=urgency,
        message=message,
        has_pattern_data=has_pattern,
        pattern_daily_median=pattern.median_daily_count if has_pattern else None,
    )
