"""
Puppy care engine core components.

This package contains the pure computation components that turn a snapshot
of logged care events into derived state:

- Sleep state: sleeping/awake, sessions, total sleep, nap statistics
- Potty prediction: urgency and trigger detection from pee history
- Combined status: one mutually exclusive sleep + potty display state
- Activity blocks: typed timeline segments and daily summaries
- Statistics: potty gaps, outdoor streaks, trigger patterns
- Walk suggestions: flexible and strict walk scheduling
- Coverage gaps: exclusion of caregiver handoff windows
- Weight: growth tracking against reference curves
- Poop status: learned daily range, daytime gaps, walk-without-poop notes
- Upcoming items: remaining meals and walks, split into actionable and later
- Summaries: week overview day stats and the daily digest

All engine components are designed for:
- Determinism (an explicit `now` on every time-dependent entry point)
- Totality (degenerate input yields unknown/empty results, never an exception)
- Immutability (inputs are never mutated; results are frozen Pydantic models)
"""

__all__ = [
    "ActivityBlockGenerator",
    "PatternAnalyzer",
    "calculate_combined_state",
    "calculate_current_streak",
    "calculate_best_streak",
    "calculate_gap_stats",
    "calculate_next_suggestion",
    "calculate_poop_status",
    "calculate_potty_gaps",
    "calculate_prediction",
    "calculate_remaining_suggestions",
    "calculate_upcoming",
    "check_for_assumed_overnight_sleep",
    "current_sleep_state",
    "filter_events_outside_gaps",
    "generate_digest",
    "get_streak_info",
    "total_sleep_today",
    "week_stats",
]

from puppycare.engine.activity_blocks import ActivityBlockGenerator
from puppycare.engine.combined_status import (
    calculate_combined_state,
    check_for_assumed_overnight_sleep,
)
from puppycare.engine.coverage_gaps import filter_events_outside_gaps
from puppycare.engine.gap_stats import calculate_gap_stats, calculate_potty_gaps
from puppycare.engine.patterns import PatternAnalyzer
from puppycare.engine.poop_status import calculate_poop_status
from puppycare.engine.potty_predictor import calculate_prediction
from puppycare.engine.sleep_resolver import current_sleep_state, total_sleep_today
from puppycare.engine.streaks import (
    calculate_best_streak,
    calculate_current_streak,
    get_streak_info,
)
from puppycare.engine.summaries import generate_digest, week_stats
from puppycare.engine.upcoming import calculate_upcoming
from puppycare.engine.walk_suggestions import (
    calculate_next_suggestion,
    calculate_remaining_suggestions,
)

