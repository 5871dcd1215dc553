"""
Combined Status Resolver — one display state for sleep + potty.

Merges the sleep state, the potty prediction, a captured post-wake potty
state, and the assumed-overnight-sleep heuristic into exactly one
CombinedSleepPottyState. The decision tree is evaluated in a fixed order and
the first match wins:

1. Post-wake prompt (captured overdue state, unexpired, now awake)
2. Sleeping -> urgent or okay, by potty urgency
3. Awake -> assumed overnight sleep if the heuristic fires, else awake
4. Unknown -> events-only heuristic, else unknown

This guarantees "needs to pee NOW" and "sleeping peacefully" are never shown
together, and the post-wake prompt overrides everything for its window.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from puppycare.models.combined import CombinedSleepPottyState, WakeTimePottyState
from puppycare.models.enums import EventType, SleepStateKind
from puppycare.models.events import DomainEvent
from puppycare.models.prediction import PottyPrediction, PottyUrgency
from puppycare.models.sleep import SleepState
from puppycare.utils.dates import at_time, minutes_between, resolve_now, to_date
from puppycare.utils.logging import get_logger

logger = get_logger(__name__)

MORNING_WINDOW_START_HOUR = 5
MORNING_WINDOW_END_HOUR = 11
MIN_AWAKE_MINUTES_FOR_ASSUMED_SLEEP = 6 * 60
SLEEP_LOOKBACK_HOUR = 21
BEDTIME_SEARCH_START_HOUR = 20
LATE_ACTIVITY_HOUR = 23
BEDTIME_OFFSET_MINUTES = 20
DEFAULT_BEDTIME_HOUR = 23

BEDTIME_ACTIVITY_TYPES = frozenset(
    {EventType.PEE, EventType.POOP, EventType.MEAL, EventType.WALK, EventType.GARDEN}
)


def calculate_combined_state(
    sleep_state: SleepState,
    potty_prediction: PottyPrediction,
    wake_time_potty_state: Optional[WakeTimePottyState] = None,
    recent_events: Iterable[DomainEvent] = (),
    dismissed_assumed_sleep_date: Optional[date | datetime] = None,
    now: Optional[datetime] = None,
) -> CombinedSleepPottyState:
    """
    Resolve the combined display state.

    Args:
        sleep_state: Current sleep state
        potty_prediction: Current potty prediction
        wake_time_potty_state: Potty state captured at the last wake, if any
        recent_events: Yesterday + today events, for the overnight heuristic
        dismissed_assumed_sleep_date: When the assumed-sleep card was last dismissed
        now: Evaluation time

    Returns:
        Exactly one CombinedSleepPottyState
    """
    now = resolve_now(now)
    recent_events = list(recent_events)

    if (
        wake_time_potty_state is not None
        and wake_time_potty_state.was_overdue
        and not wake_time_potty_state.has_expired(now)
        and sleep_state.is_awake
    ):
        return CombinedSleepPottyState.just_woke_needs_potty(
            woke_at=wake_time_potty_state.captured_at,
            minutes_since_wake=wake_time_potty_state.minutes_since_capture(now),
            potty_was_overdue_by=wake_time_potty_state.minutes_overdue,
        )

    if sleep_state.kind is SleepStateKind.SLEEPING:
        urgency = potty_prediction.urgency
        if urgency.is_urgent:
            return CombinedSleepPottyState.sleeping_potty_urgent(
                sleeping_since=sleep_state.since,
                sleep_duration_min=sleep_state.elapsed_minutes,
                potty_urgency=urgency,
                minutes_overdue=urgency.minutes_overdue,
            )
        return CombinedSleepPottyState.sleeping_potty_okay(
            sleeping_since=sleep_state.since,
            sleep_duration_min=sleep_state.elapsed_minutes,
        )

    if sleep_state.kind is SleepStateKind.AWAKE:
        assumed = check_for_assumed_overnight_sleep(
            recent_events,
            dismissed_assumed_sleep_date,
            awake_minutes=sleep_state.elapsed_minutes,
            now=now,
        )
        return assumed or CombinedSleepPottyState.awake()

    assumed = check_for_assumed_overnight_sleep(
        recent_events, dismissed_assumed_sleep_date, awake_minutes=None, now=now
    )
    return assumed or CombinedSleepPottyState.unknown()


def check_for_assumed_overnight_sleep(
    recent_events: Iterable[DomainEvent],
    dismissed_assumed_sleep_date: Optional[date | datetime] = None,
    awake_minutes: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Optional[CombinedSleepPottyState]:
    """
    Suggest that an unlogged overnight sleep happened.

    Fires only in the morning window, when not dismissed today, when no
    sleep-start was logged since 21:00 yesterday, and, if an awake duration
    is known, when the puppy has supposedly been awake for 6+ hours.

    Args:
        recent_events: Yesterday + today events
        dismissed_assumed_sleep_date: Last dismissal, if any
        awake_minutes: Minutes awake per the sleep state; None for the
            events-only variant
        now: Evaluation time

    Returns:
        An assumed_overnight_sleep state, or None if the heuristic does not fire
    """
    now = resolve_now(now)
    recent_events = list(recent_events)

    if not MORNING_WINDOW_START_HOUR <= now.hour < MORNING_WINDOW_END_HOUR:
        return None
    if awake_minutes is not None and awake_minutes < MIN_AWAKE_MINUTES_FOR_ASSUMED_SLEEP:
        return None
    if dismissed_assumed_sleep_date is not None and to_date(dismissed_assumed_sleep_date) == now.date():
        return None

    yesterday = now.date() - timedelta(days=1)
    lookback_start = at_time(yesterday, SLEEP_LOOKBACK_HOUR)
    if any(e.type.is_sleep_start and lookback_start <= e.time <= now for e in recent_events):
        return None

    bedtime = suggested_bedtime(recent_events, yesterday)
    earlier = [e.time for e in recent_events if e.time < now]
    last_event_time = max(earlier) if earlier else None
    minutes_sleeping = minutes_between(bedtime, now)

    logger.debug(
        "assumed_overnight_sleep_detected",
        suggested_bedtime=bedtime.isoformat(),
        minutes_sleeping=minutes_sleeping,
    )

    return CombinedSleepPottyState.assumed_overnight_sleep(
        suggested_bedtime=bedtime,
        minutes_sleeping=minutes_sleeping,
        last_event_time=last_event_time,
    )


def suggested_bedtime(events: Iterable[DomainEvent], yesterday: date) -> datetime:
    """
    Estimate last night's bedtime from the latest evening activity.

    Activity between 20:00 and midnight yesterday sets the bedtime 20
    minutes after it, or 23:59 if it happened in the 23:00 hour. Without
    any evening activity the bedtime defaults to 23:00.
    """
    window_start = at_time(yesterday, BEDTIME_SEARCH_START_HOUR)
    window_end = at_time(yesterday, 24)
    evening = [
        e for e in events
        if e.type in BEDTIME_ACTIVITY_TYPES and window_start <= e.time < window_end
    ]
    if not evening:
        return at_time(yesterday, DEFAULT_BEDTIME_HOUR)

    latest = max(evening, key=lambda e: e.time)
    if latest.time.hour >= LATE_ACTIVITY_HOUR:
        return at_time(yesterday, 23, 59)
    return latest.time + timedelta(minutes=BEDTIME_OFFSET_MINUTES)


def capture_wake_time_potty_state(
    potty_prediction: PottyPrediction, now: Optional[datetime] = None
) -> Optional[WakeTimePottyState]:
    """
    Snapshot the potty state at the moment of waking.

    Only urgent predictions are captured; was_overdue is set when the
    urgency carried a positive overdue count.
    """
    urgency: PottyUrgency = potty_prediction.urgency
    if not urgency.is_urgent:
        return None

    overdue = urgency.minutes_overdue
    return WakeTimePottyState(
        captured_at=resolve_now(now),
        was_overdue=overdue is not None and overdue > 0,
        minutes_overdue=overdue,
        minutes_since_last=potty_prediction.minutes_since_last,
    )


def should_clear_wake_state(
    wake_state: Optional[WakeTimePottyState],
    potty_logged_at: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> bool:
    """True once the captured state expired or a pee was logged after it."""
    if wake_state is None:
        return False
    if wake_state.has_expired(resolve_now(now)):
        return True
    return potty_logged_at is not None and potty_logged_at > wake_state.captured_at
