"""
Day Summaries — week overview and daily digest.

Both read a plain event snapshot and slice it by calendar day; sleep uses the
same session fold as the sleep resolver, clipped to each day's bounds.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from puppycare.models.enums import EventLocation, EventType
from puppycare.models.events import DomainEvent, on_day, of_types
from puppycare.models.profile import PuppyProfile
from puppycare.models.summary import DailyDigest, DayStats
from puppycare.utils.dates import at_time, minutes_between, resolve_now, to_date
from puppycare.utils.logging import get_logger

from .sleep_resolver import build_sessions, total_sleep_today

logger = get_logger(__name__)

WEEK_DAYS = 7


def day_sleep_minutes(
    day: date | datetime, events: Iterable[DomainEvent], now: Optional[datetime] = None
) -> int:
    """
    Sleep minutes that fall inside one calendar day.

    Pass the day's events plus the previous day's so a sleep that started
    before midnight is counted. An unclosed sleep runs until now on today
    and until midnight on earlier days.
    """
    now = resolve_now(now)
    day = to_date(day)
    day_start = at_time(day, 0)
    day_end = at_time(day, 24)
    open_end = now if day == now.date() else day_end

    total = 0
    for session in build_sessions(events):
        end = session.end_time if session.end_time is not None else open_end
        start = max(session.start_time, day_start)
        end = min(end, day_end)
        if end > start:
            total += minutes_between(start, end)
    return total


def day_stats(
    day: date | datetime, events: Iterable[DomainEvent], now: Optional[datetime] = None
) -> DayStats:
    """Stats for one day, read from a snapshot covering it and the day before."""
    now = resolve_now(now)
    day = to_date(day)
    events = list(events)
    todays = on_day(events, day)
    potty = [e for e in todays if e.type.is_potty_event]

    return DayStats(
        day=day,
        outdoor_potty=sum(1 for e in potty if e.location is EventLocation.OUTDOOR),
        indoor_potty=sum(1 for e in potty if e.location is EventLocation.INDOOR),
        meals=len(of_types(todays, [EventType.MEAL])),
        walks=len(of_types(todays, [EventType.WALK])),
        sleep_minutes=day_sleep_minutes(day, on_day(events, day - timedelta(days=1)) + todays, now),
        training_sessions=len(of_types(todays, [EventType.TRAINING])),
    )


def week_stats(
    events: Iterable[DomainEvent], now: Optional[datetime] = None, days: int = WEEK_DAYS
) -> list[DayStats]:
    """Stats for the last `days` days through today, oldest first."""
    now = resolve_now(now)
    events = list(events)
    today = now.date()
    stats = [day_stats(today - timedelta(days=offset), events, now) for offset in range(days - 1, -1, -1)]
    logger.debug("week_stats_computed", days=len(stats), through=today.isoformat())
    return stats


def _outdoor_percentage(events: list[DomainEvent]) -> int:
    outdoor = sum(1 for e in events if e.location is EventLocation.OUTDOOR)
    return (outdoor * 100) // len(events) if events else 0


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def _sleep_text(minutes: int) -> str:
    hours, rest = divmod(minutes, 60)
    if hours == 0:
        return f"{rest} min slept"
    if rest == 0:
        return f"{hours}h slept"
    return f"{hours}h{rest}m slept"


def generate_digest(
    events: Iterable[DomainEvent],
    profile: Optional[PuppyProfile] = None,
    day: Optional[date | datetime] = None,
    now: Optional[datetime] = None,
) -> DailyDigest:
    """
    Summarize one day's events.

    Args:
        events: The day's events
        profile: Profile for the day number, optional
        day: Day being summarized (default: today)
        now: Evaluation time, the end of any unclosed sleep
    """
    now = resolve_now(now)
    day = to_date(day) if day is not None else now.date()
    events = list(events)

    day_number = None
    if profile is not None:
        days = (day - profile.home_date).days
        day_number = days + 1 if days >= 0 else None

    pees = of_types(events, [EventType.PEE])
    poops = of_types(events, [EventType.POOP])
    meal_count = len(of_types(events, [EventType.MEAL]))
    walk_count = len(of_types(events, [EventType.WALK]))
    sleep_minutes = total_sleep_today(events, now)

    parts = []
    if pees:
        parts.append(f"{len(pees)}x pee ({_outdoor_percentage(pees)}% outside)")
    if poops:
        parts.append(f"{len(poops)}x poop ({_outdoor_percentage(poops)}% outside)")
    if meal_count:
        parts.append(_plural(meal_count, "meal", "meals"))
    if sleep_minutes > 0:
        parts.append(_sleep_text(sleep_minutes))
    if walk_count:
        parts.append(_plural(walk_count, "walk", "walks"))

    return DailyDigest(
        day_number=day_number,
        pee_count=len(pees),
        pee_outdoor_percentage=_outdoor_percentage(pees),
        poop_count=len(poops),
        poop_outdoor_percentage=_outdoor_percentage(poops),
        meal_count=meal_count,
        sleep_minutes=sleep_minutes,
        walk_count=walk_count,
        parts=tuple(parts),
    )
