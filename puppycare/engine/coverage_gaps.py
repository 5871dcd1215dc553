"""
Coverage Gap Filter — exclude caregiver handoff windows from statistics.

A coverage gap is a coverage_gap event spanning [time, end_time]; an open
gap (no end_time) extends indefinitely. Only coverage_gap events in the
`gaps` argument are considered, so callers may pass a full event list.
"""

from datetime import datetime
from typing import Iterable, Optional

from puppycare.models.events import DomainEvent, chronological, coverage_gaps, reverse_chronological
from puppycare.models.stats import PottyGap


def _gap_end(gap: DomainEvent) -> datetime:
    return gap.end_time if gap.end_time is not None else datetime.max


def is_time_covered_by_gap(moment: datetime, gaps: Iterable[DomainEvent]) -> bool:
    """True if the moment falls inside any gap, bounds inclusive."""
    return any(gap.time <= moment <= _gap_end(gap) for gap in coverage_gaps(gaps))


def interval_spans_gap(start: datetime, end: datetime, gaps: Iterable[DomainEvent]) -> bool:
    """True if [start, end] overlaps any gap."""
    return any(gap.time < end and start < _gap_end(gap) for gap in coverage_gaps(gaps))


def gaps_overlapping(
    start: datetime, end: datetime, gaps: Iterable[DomainEvent]
) -> list[DomainEvent]:
    """Coverage gaps that overlap [start, end], oldest first."""
    overlapping = [
        gap for gap in coverage_gaps(gaps) if gap.time < end and start < _gap_end(gap)
    ]
    return chronological(overlapping)


def filter_events_outside_gaps(
    events: Iterable[DomainEvent], gaps: Iterable[DomainEvent]
) -> list[DomainEvent]:
    """Events whose timestamp is not covered by any gap. Gap markers themselves are dropped."""
    gap_list = coverage_gaps(gaps)
    if not gap_list:
        return [e for e in events if not e.type.is_coverage_gap]
    return [
        e for e in events
        if not e.type.is_coverage_gap and not is_time_covered_by_gap(e.time, gap_list)
    ]


def filter_potty_gaps(
    potty_gaps: Iterable[PottyGap], gaps: Iterable[DomainEvent]
) -> tuple[list[PottyGap], int]:
    """
    Drop potty intervals that span a coverage gap.

    Returns:
        (surviving potty gaps, number excluded)
    """
    gap_list = coverage_gaps(gaps)
    kept: list[PottyGap] = []
    excluded = 0
    for potty_gap in potty_gaps:
        if gap_list and interval_spans_gap(potty_gap.start_time, potty_gap.end_time, gap_list):
            excluded += 1
        else:
            kept.append(potty_gap)
    return kept, excluded


def has_active_gap(gaps: Iterable[DomainEvent]) -> bool:
    return active_gap(gaps) is not None


def active_gap(gaps: Iterable[DomainEvent]) -> Optional[DomainEvent]:
    """The most recent open gap, if any."""
    return next((g for g in reverse_chronological(coverage_gaps(gaps)) if g.is_open_gap), None)
