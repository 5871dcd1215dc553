"""
Walk sessions: potty events logged during a walk, grouped under it.
"""

from datetime import datetime, timedelta
from typing import Iterable

from puppycare.models.events import DomainEvent, potty_events, walks
from puppycare.models.walks import WalkSession


def walk_sessions(events: Iterable[DomainEvent]) -> list[WalkSession]:
    """One session per walk event, carrying the potty events whose parent_walk_id points at it."""
    events = list(events)
    children = [e for e in potty_events(events) if e.parent_walk_id is not None]
    return [
        WalkSession(
            session_id=walk.event_id,
            walk_event=walk,
            child_potty_events=tuple(c for c in children if c.parent_walk_id == walk.event_id),
        )
        for walk in walks(events)
    ]


def contained_potty_event_ids(events: Iterable[DomainEvent]) -> set[str]:
    """Ids of potty events rendered inside a walk rather than on their own."""
    return {e.event_id for e in potty_events(events) if e.parent_walk_id is not None}


def potty_timestamp(walk_start: datetime, duration_min: int) -> datetime:
    """Midpoint of the walk, used as the time of a potty logged during it."""
    return walk_start + timedelta(minutes=duration_min / 2)
