"""
Domain event model for the puppy care engine.

This module defines the immutable event record every computation component
consumes, plus the small filtering and ordering helpers the components use
to carve working copies out of an input snapshot. None of the helpers mutate
their input; each returns a new list.
"""

from datetime import date, datetime
from typing import Iterable, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import CoverageGapType, EventLocation, EventType


class DomainEvent(BaseModel):
    """
    A single timestamped care action.

    Events are created by the logging collaborators and never mutated by the
    engine. The timestamp is the only ordering key: components sort their own
    working copies before any pairing logic, so input order is irrelevant.

    Attributes:
        event_id: Unique identifier for this event
        time: When the care action happened (naive local time)
        type: Categorical event tag
        location: Outdoor/indoor, for potty events
        duration_min: Duration in minutes (walks, naps logged after the fact)
        weight_kg: Measured weight for weight events
        parent_walk_id: Walk this potty event was logged under
        sleep_session_id: Links a sleep-start to its wake when both are known
        end_time: End of an open-ended marker such as a coverage gap
        gap_type: Caregiver kind for coverage gap markers
        note: Free-text note, carried through untouched
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Unique identifier for this event",
    )
    time: datetime = Field(description="When the care action happened")
    type: EventType = Field(description="Categorical event tag")
    location: Optional[EventLocation] = Field(
        default=None, description="Outdoor/indoor location for potty events"
    )
    duration_min: Optional[int] = Field(
        default=None, description="Duration in minutes, if recorded"
    )
    weight_kg: Optional[float] = Field(
        default=None, description="Measured weight in kilograms"
    )
    parent_walk_id: Optional[str] = Field(
        default=None, description="Walk session this potty event belongs to"
    )
    sleep_session_id: Optional[str] = Field(
        default=None, description="Shared id linking a sleep-start and its wake"
    )
    end_time: Optional[datetime] = Field(
        default=None, description="End of an open-ended marker (None = still open)"
    )
    gap_type: Optional[CoverageGapType] = Field(
        default=None, description="Caregiver kind for coverage gaps"
    )
    note: Optional[str] = Field(default=None, description="Free-text note")

    @field_validator("weight_kg")
    @classmethod
    def validate_weight(cls, v: Optional[float]) -> Optional[float]:
        """Weights are physical measurements and cannot be negative."""
        if v is not None and v < 0:
            raise ValueError("weight_kg cannot be negative")
        return v

    @model_validator(mode="after")
    def validate_end_time(self) -> "DomainEvent":
        if self.end_time is not None and self.end_time < self.time:
            raise ValueError("end_time cannot precede time")
        return self

    @property
    def is_outdoor(self) -> bool:
        return self.location is EventLocation.OUTDOOR

    @property
    def is_indoor(self) -> bool:
        return self.location is EventLocation.INDOOR

    @property
    def is_open_gap(self) -> bool:
        return self.type.is_coverage_gap and self.end_time is None


# ---------------------------------------------------------------------------
# Collection helpers
# ---------------------------------------------------------------------------


def _sort_key(event: DomainEvent) -> tuple[datetime, bool, str]:
    # At equal timestamps a sleep-start precedes its wake; event_id settles the rest.
    return (event.time, event.type.is_wake, event.event_id)


def chronological(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    """Oldest first, in the same order whatever order the events arrive in."""
    return sorted(events, key=_sort_key)


def reverse_chronological(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    """Newest first."""
    return sorted(events, key=_sort_key, reverse=True)


def of_types(events: Iterable[DomainEvent], types: Iterable[EventType]) -> list[DomainEvent]:
    wanted = set(types)
    return [e for e in events if e.type in wanted]


def pees(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    return [e for e in events if e.type is EventType.PEE]


def poops(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    return [e for e in events if e.type is EventType.POOP]


def potty_events(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    """Pee and poop events."""
    return [e for e in events if e.type.is_potty_event]


def sleeps(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    """Sleep-start events (sleep and crate)."""
    return [e for e in events if e.type.is_sleep_start]


def wakes(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    return [e for e in events if e.type.is_wake]


def meals(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    return [e for e in events if e.type is EventType.MEAL]


def drinks(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    return [e for e in events if e.type is EventType.DRINK]


def walks(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    return [e for e in events if e.type is EventType.WALK]


def weights(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    """Weight events that actually carry a measurement."""
    return [e for e in events if e.type is EventType.WEIGHT and e.weight_kg is not None]


def coverage_gaps(events: Iterable[DomainEvent]) -> list[DomainEvent]:
    return [e for e in events if e.type.is_coverage_gap]


def on_day(events: Iterable[DomainEvent], day: date) -> list[DomainEvent]:
    return [e for e in events if e.time.date() == day]


def after(events: Iterable[DomainEvent], moment: datetime) -> list[DomainEvent]:
    """Events strictly after the given moment."""
    return [e for e in events if e.time > moment]


def before(events: Iterable[DomainEvent], moment: datetime) -> list[DomainEvent]:
    """Events strictly before the given moment."""
    return [e for e in events if e.time < moment]
