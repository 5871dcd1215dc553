"""
Wall-clock helpers shared by the engine.

All timestamps are naive local datetimes. Minute differences truncate toward
zero, so 90 seconds is 1 minute and -90 seconds is -1 minute.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return the injected clock value, or the current local time."""
    return now if now is not None else datetime.now()


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end (negative if end precedes start)."""
    return int((end - start).total_seconds() / 60)


def same_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()


def at_time(day: date | datetime, hour: int, minute: int = 0) -> datetime:
    """
    Build a datetime on the given day at hour:minute.

    Hour 24 is accepted and resolves to midnight at the start of the next day.
    """
    if isinstance(day, datetime):
        day = day.date()
    if hour >= 24:
        return datetime.combine(day + timedelta(days=1), time(0, minute))
    return datetime.combine(day, time(hour, minute))


def to_date(value: date | datetime) -> date:
    """Normalize a date or datetime to a date."""
    if isinstance(value, datetime):
        return value.date()
    return value
