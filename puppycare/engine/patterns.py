"""
Trigger Patterns — which activities lead to outdoor vs indoor pees.

For each trigger category, every trigger event is matched with the first
pee strictly after it (within the category's window) that has a recorded
location. The outcomes are tallied per category.
"""

from datetime import timedelta
from typing import Iterable, Optional

from puppycare.models.enums import EventType
from puppycare.models.events import DomainEvent, chronological, pees
from puppycare.models.stats import PatternAnalysis, PatternTrigger
from puppycare.utils.logging import get_logger

TRIGGER_WINDOW_MINUTES = 30
WALK_WINDOW_MINUTES = 60
DEFAULT_PERIOD_DAYS = 7

# (trigger id, display name, trigger event types, uses the walk window)
TRIGGER_CATEGORIES: tuple[tuple[str, str, frozenset[EventType], bool], ...] = (
    ("sleep", "After sleep", frozenset({EventType.WAKE}), False),
    ("meal", "After eating", frozenset({EventType.MEAL}), False),
    ("walk", "During walk", frozenset({EventType.WALK}), True),
    ("water", "After drinking", frozenset({EventType.DRINK}), False),
    ("play", "After playing", frozenset({EventType.TRAINING, EventType.SOCIAL}), False),
)


class PatternAnalyzer:
    """
    Computes per-trigger outdoor success rates from an event history.

    Walks get a wider window since a pee usually happens during the walk
    rather than right at its start.
    """

    def __init__(
        self,
        trigger_window_minutes: int = TRIGGER_WINDOW_MINUTES,
        walk_window_minutes: int = WALK_WINDOW_MINUTES,
    ):
        self.trigger_window_minutes = trigger_window_minutes
        self.walk_window_minutes = walk_window_minutes
        self.logger = get_logger(__name__)

    def analyze(
        self, events: Iterable[DomainEvent], period_days: int = DEFAULT_PERIOD_DAYS
    ) -> PatternAnalysis:
        """
        Tally outcomes for every trigger category.

        Args:
            events: Event history, ideally a week or more
            period_days: Days covered by the history, carried to the result

        Returns:
            PatternAnalysis with one PatternTrigger per category, in fixed order
        """
        ordered = chronological(events)
        located_pees = [e for e in pees(ordered) if e.location is not None]

        triggers = []
        for trigger_id, name, types, uses_walk_window in TRIGGER_CATEGORIES:
            window = self.walk_window_minutes if uses_walk_window else self.trigger_window_minutes
            outdoor = 0
            indoor = 0
            for trigger_event in (e for e in ordered if e.type in types):
                outcome = _first_pee_after(trigger_event, located_pees, window)
                if outcome is None:
                    continue
                if outcome.is_outdoor:
                    outdoor += 1
                elif outcome.is_indoor:
                    indoor += 1
            triggers.append(
                PatternTrigger(
                    trigger_id=trigger_id,
                    name=name,
                    outdoor_count=outdoor,
                    indoor_count=indoor,
                )
            )

        self.logger.debug(
            "pattern_analysis_computed",
            period_days=period_days,
            categories_with_data=sum(1 for t in triggers if t.has_data),
        )
        return PatternAnalysis(triggers=tuple(triggers), period_days=period_days)


def _first_pee_after(
    trigger_event: DomainEvent, located_pees: list[DomainEvent], window_minutes: int
) -> Optional[DomainEvent]:
    window_end = trigger_event.time + timedelta(minutes=window_minutes)
    return next(
        (p for p in located_pees if trigger_event.time < p.time <= window_end),
        None,
    )


def analyze_patterns(
    events: Iterable[DomainEvent], period_days: int = DEFAULT_PERIOD_DAYS
) -> PatternAnalysis:
    """Run the default analyzer."""
    return PatternAnalyzer().analyze(events, period_days)
