"""
Walk Suggestion Scheduler — when should the next walk happen.

Two policies share the WalkSuggestion result:

- flexible: next walk = last walk today + interval, or the first slot if
  no walk happened yet, capped at the schedule's day end
- strict: the next unused slot's fixed time, verbatim

The public functions dispatch on WalkSchedule.mode.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from puppycare.models.enums import EventType, WalkScheduleMode
from puppycare.models.events import DomainEvent, chronological, walks
from puppycare.models.profile import WalkSchedule, parse_slot_time
from puppycare.models.walks import WalkSuggestion
from puppycare.utils.dates import at_time, minutes_between, resolve_now
from puppycare.utils.logging import get_logger

logger = get_logger(__name__)

FALLBACK_NEXT_LABEL = "Next walk"
FALLBACK_FIRST_LABEL = "Morning walk"


def calculate_next_suggestion(
    events: Iterable[DomainEvent],
    walk_schedule: WalkSchedule,
    now: Optional[datetime] = None,
) -> Optional[WalkSuggestion]:
    """
    Next walk suggestion for today.

    Args:
        events: Event snapshot; only today's walks are counted
        walk_schedule: Configured schedule
        now: Evaluation time, which also selects the day

    Returns:
        WalkSuggestion, or None once the day's walks are done or the day has ended
    """
    now = resolve_now(now)
    if walk_schedule.mode is WalkScheduleMode.STRICT:
        suggestion = _strict_suggestion(events, walk_schedule, now)
    else:
        suggestion = _flexible_suggestion(events, walk_schedule, now)

    if suggestion is not None:
        logger.debug(
            "walk_suggestion_computed",
            mode=walk_schedule.mode.value,
            suggested_time=suggestion.suggested_time.isoformat(),
            walks_completed=suggestion.walks_completed_today,
        )
    return suggestion


def calculate_remaining_suggestions(
    events: Iterable[DomainEvent],
    walk_schedule: WalkSchedule,
    now: Optional[datetime] = None,
) -> list[WalkSuggestion]:
    """All walks still to come today, in order."""
    now = resolve_now(now)
    if walk_schedule.mode is WalkScheduleMode.STRICT:
        return _remaining_strict(events, walk_schedule, now)
    return _remaining_flexible(events, walk_schedule, now)


def _todays_walks(events: Iterable[DomainEvent], now: datetime) -> list[DomainEvent]:
    return chronological(w for w in walks(events) if w.time.date() == now.date())


def _day_over(walk_schedule: WalkSchedule, now: datetime) -> bool:
    return walk_schedule.day_end_hour < 24 and now.hour >= walk_schedule.day_end_hour


def _slot_datetime(target_time: str, now: datetime) -> Optional[datetime]:
    parsed = parse_slot_time(target_time)
    if parsed is None:
        return None
    return at_time(now, parsed.hour, parsed.minute)


def _cap_at_day_end(
    suggested: datetime, walk_schedule: WalkSchedule, now: datetime
) -> Optional[datetime]:
    """Clamp to the day end; None if the day end has already passed."""
    if walk_schedule.day_end_hour >= 24:
        return suggested
    day_end = at_time(now, walk_schedule.day_end_hour)
    if suggested < day_end:
        return suggested
    return day_end if day_end > now else None


def _flexible_suggestion(
    events: Iterable[DomainEvent], walk_schedule: WalkSchedule, now: datetime
) -> Optional[WalkSuggestion]:
    todays = _todays_walks(events, now)
    completed = len(todays)
    target = walk_schedule.walks_per_day

    if completed >= target or _day_over(walk_schedule, now):
        return None

    minutes_since_last: Optional[int] = None
    if todays:
        last_walk = todays[-1]
        minutes_since_last = minutes_between(last_walk.time, now)
        suggested = last_walk.time + timedelta(minutes=walk_schedule.interval_minutes)
        if completed < len(walk_schedule.walks):
            label = walk_schedule.walks[completed].label
        else:
            slot = walk_schedule.closest_slot(suggested)
            label = slot.label if slot is not None else FALLBACK_NEXT_LABEL
    else:
        first_slot = (
            _slot_datetime(walk_schedule.first_walk_time, now)
            if walk_schedule.first_walk_time is not None
            else None
        )
        if first_slot is not None:
            suggested = now if first_slot < now else first_slot
        else:
            suggested = max(at_time(now, walk_schedule.day_start_hour), now)
        label = walk_schedule.walks[0].label if walk_schedule.walks else FALLBACK_FIRST_LABEL

    capped = _cap_at_day_end(suggested, walk_schedule, now)
    if capped is None:
        return None

    return WalkSuggestion(
        suggested_time=capped,
        label=label,
        is_overdue=capped < now,
        minutes_since_last_walk=minutes_since_last,
        minutes_until_suggested=minutes_between(now, capped),
        walks_completed_today=completed,
        target_walks_per_day=target,
        scheduled_walk_index=completed if completed < target else None,
    )


def _remaining_flexible(
    events: Iterable[DomainEvent], walk_schedule: WalkSchedule, now: datetime
) -> list[WalkSuggestion]:
    # Each suggestion is treated as walked, then the clock moves just past it.
    simulated = list(events)
    clock = now
    suggestions: list[WalkSuggestion] = []

    for _ in range(walk_schedule.walks_per_day):
        suggestion = _flexible_suggestion(simulated, walk_schedule, clock)
        if suggestion is None or suggestion.suggested_time.date() != now.date():
            break
        suggestions.append(suggestion)
        simulated.append(DomainEvent(time=suggestion.suggested_time, type=EventType.WALK))
        clock = suggestion.suggested_time + timedelta(minutes=1)

    return suggestions


def _strict_suggestion(
    events: Iterable[DomainEvent], walk_schedule: WalkSchedule, now: datetime
) -> Optional[WalkSuggestion]:
    todays = _todays_walks(events, now)
    completed = len(todays)
    target = walk_schedule.walks_per_day

    if completed >= target or _day_over(walk_schedule, now):
        return None

    slot = walk_schedule.walks[completed]
    scheduled = _slot_datetime(slot.target_time, now)
    if scheduled is None:
        return None

    return WalkSuggestion(
        suggested_time=scheduled,
        label=slot.label,
        is_overdue=scheduled < now,
        minutes_since_last_walk=minutes_between(todays[-1].time, now) if todays else None,
        minutes_until_suggested=minutes_between(now, scheduled),
        walks_completed_today=completed,
        target_walks_per_day=target,
        scheduled_walk_index=completed,
    )


def _remaining_strict(
    events: Iterable[DomainEvent], walk_schedule: WalkSchedule, now: datetime
) -> list[WalkSuggestion]:
    todays = _todays_walks(events, now)
    completed = len(todays)
    target = walk_schedule.walks_per_day
    minutes_since_last = minutes_between(todays[-1].time, now) if todays else None

    suggestions: list[WalkSuggestion] = []
    for index in range(completed, target):
        slot = walk_schedule.walks[index]
        scheduled = _slot_datetime(slot.target_time, now)
        if scheduled is None:
            continue
        suggestions.append(
            WalkSuggestion(
                suggested_time=scheduled,
                label=slot.label,
                is_overdue=scheduled < now,
                minutes_since_last_walk=minutes_since_last,
                minutes_until_suggested=minutes_between(now, scheduled),
                walks_completed_today=completed + len(suggestions),
                target_walks_per_day=target,
                scheduled_walk_index=index,
            )
        )
    return suggestions
