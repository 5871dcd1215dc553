"""
Sleep State Resolver — current sleep state and sleep durations.

Derives sleeping/awake state, total sleep, completed sessions, and nap
statistics from raw sleep-start and wake events. Every pairing routine is a
single chronological pass carrying one pending sleep-start:

- a sleep-start (sleep or crate) sets the pending start, replacing any
  earlier unclosed one
- a wake closes the pending start, if there is one
- a wake with no pending start is ignored

Durations are clamped at zero so corrupted data (a wake logged before its
sleep) never subtracts from totals. No function here raises; missing data
degrades to unknown, zero, or None.
"""

from datetime import datetime
from typing import Iterable, Optional

from puppycare.config import get_settings
from puppycare.models.events import DomainEvent, chronological
from puppycare.models.sleep import (
    NAP_THRESHOLD_MINUTES,
    CompletedSleep,
    SleepSession,
    SleepState,
)
from puppycare.utils.dates import minutes_between, resolve_now
from puppycare.utils.logging import get_logger

logger = get_logger(__name__)

MAX_AWAKE_MINUTES = 60
AWAKE_WARNING_MINUTES = 45
DEFAULT_NAP_WINDOW_MINUTES = 20
MIN_NAP_SAMPLES = 3
MIN_DEFAULT_NAP_MINUTES = 15
MAX_DEFAULT_NAP_MINUTES = 120


def _sleep_related(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    return chronological(e for e in events if e.type.is_sleep_related)


def _round_to_five(minutes: int) -> int:
    return ((minutes + 2) // 5) * 5


def current_sleep_state(
    events: Iterable[DomainEvent], now: Optional[datetime] = None
) -> SleepState:
    """
    Determine the current sleep state from the latest sleep-related event.

    Args:
        events: Event snapshot in any order
        now: Evaluation time (default: current local time)

    Returns:
        sleeping or awake since the latest sleep-start/wake, else unknown
    """
    now = resolve_now(now)
    sleep_events = _sleep_related(events)
    if not sleep_events:
        return SleepState.unknown()

    last = sleep_events[-1]
    elapsed = minutes_between(last.time, now)
    if last.type.is_sleep_start:
        return SleepState.sleeping(since=last.time, elapsed_minutes=elapsed)
    return SleepState.awake(since=last.time, elapsed_minutes=elapsed)


def is_short_nap(duration_minutes: int) -> bool:
    """
    True for a doze shorter than the nap threshold.

    A sleep of NAP_THRESHOLD_MINUTES or more is a real nap; see
    just_woke_from_significant_nap.
    """
    return duration_minutes < NAP_THRESHOLD_MINUTES


def total_sleep_today(events: Iterable[DomainEvent], now: Optional[datetime] = None) -> int:
    """
    Total sleep minutes across the given events.

    The caller passes the day's events; an unclosed sleep at the end of the
    list is counted through `now`.
    """
    now = resolve_now(now)
    total = 0
    pending: Optional[datetime] = None

    for event in _sleep_related(events):
        if event.type.is_sleep_start:
            pending = event.time
        elif pending is not None:
            total += max(0, minutes_between(pending, event.time))
            pending = None

    if pending is not None:
        total += max(0, minutes_between(pending, now))

    return total


def build_sessions(events: Iterable[DomainEvent]) -> list[SleepSession]:
    """
    Pair sleep-starts with wakes into sessions, oldest first.

    A wake carrying a sleep_session_id only closes a pending start with the
    same id (or one without an id). The last pending start, if unclosed,
    becomes an ongoing session.
    """
    sessions: list[SleepSession] = []
    pending: Optional[DomainEvent] = None

    for event in _sleep_related(events):
        if event.type.is_sleep_start:
            pending = event
            continue
        if pending is None:
            continue
        if (
            event.sleep_session_id is not None
            and pending.sleep_session_id is not None
            and event.sleep_session_id != pending.sleep_session_id
        ):
            continue
        sessions.append(
            SleepSession(
                session_id=pending.sleep_session_id or pending.event_id,
                start_time=pending.time,
                end_time=event.time,
                start_event_id=pending.event_id,
                end_event_id=event.event_id,
            )
        )
        pending = None

    if pending is not None:
        sessions.append(
            SleepSession(
                session_id=pending.sleep_session_id or pending.event_id,
                start_time=pending.time,
                start_event_id=pending.event_id,
            )
        )

    return sessions


def ongoing_session(events: Iterable[DomainEvent]) -> Optional[SleepSession]:
    return next((s for s in build_sessions(events) if s.is_ongoing), None)


def last_complete_sleep(events: Iterable[DomainEvent]) -> Optional[CompletedSleep]:
    """Most recent sleep closed by a wake, or None."""
    completed = [s for s in build_sessions(events) if not s.is_ongoing]
    if not completed:
        return None
    last = completed[-1]
    return CompletedSleep(
        start=last.start_time,
        end=last.end_time,
        duration_minutes=last.duration_minutes(),
    )


def just_woke_from_significant_nap(
    events: Iterable[DomainEvent],
    window_minutes: int = DEFAULT_NAP_WINDOW_MINUTES,
    now: Optional[datetime] = None,
) -> bool:
    """
    True if the last completed sleep was a real nap that ended recently.

    Args:
        events: Event snapshot
        window_minutes: How recent the wake must be
        now: Evaluation time
    """
    now = resolve_now(now)
    last = last_complete_sleep(events)
    if last is None or last.duration_minutes < NAP_THRESHOLD_MINUTES:
        return False
    return minutes_between(last.end, now) <= window_minutes


def average_nap_duration(
    events: Iterable[DomainEvent], min_sessions: int = MIN_NAP_SAMPLES
) -> Optional[int]:
    """
    Mean length of completed sessions, rounded to the nearest 5 minutes.

    Returns None until at least `min_sessions` completed sessions exist.
    """
    completed = [s for s in build_sessions(events) if not s.is_ongoing]
    if len(completed) < max(1, min_sessions):
        return None
    average = sum(s.duration_minutes() for s in completed) // len(completed)
    return _round_to_five(average)


def default_nap_duration(events: Iterable[DomainEvent]) -> int:
    """Nap length to prefill the logging UI, clamped to [15, 120]."""
    average = average_nap_duration(events)
    base = average if average is not None else get_settings().fallback_nap_minutes
    duration = max(MIN_DEFAULT_NAP_MINUTES, min(MAX_DEFAULT_NAP_MINUTES, _round_to_five(base)))
    logger.debug("default_nap_duration_computed", minutes=duration, from_history=average is not None)
    return duration


def awake_warning(state: SleepState) -> bool:
    """Awake long enough to start winding down for a nap."""
    return state.is_awake and state.elapsed_minutes >= AWAKE_WARNING_MINUTES


def awake_too_long(state: SleepState) -> bool:
    """Awake past the recommended maximum for a young puppy."""
    return state.is_awake and state.elapsed_minutes >= MAX_AWAKE_MINUTES
