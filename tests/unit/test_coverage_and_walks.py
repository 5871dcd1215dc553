"""
Unit tests for coverage gap filtering, walk sessions, and weight tracking.
"""

from datetime import date, datetime

import pytest

from puppycare.engine.coverage_gaps import (
    active_gap,
    filter_events_outside_gaps,
    filter_potty_gaps,
    gaps_overlapping,
    has_active_gap,
    interval_spans_gap,
    is_time_covered_by_gap,
)
from puppycare.engine.gap_stats import calculate_potty_gaps
from puppycare.engine.walk_sessions import (
    contained_potty_event_ids,
    potty_timestamp,
    walk_sessions,
)
from puppycare.engine.weight import (
    compare_to_reference,
    interpolated_reference_weight,
    latest_weight,
    reference_band,
    weight_delta,
    weight_measurements,
)
from puppycare.models.enums import EventLocation
from puppycare.models.weight import GrowthReference
from tests.conftest import (
    at,
    make_coverage_gap,
    make_meal,
    make_pee,
    make_poop,
    make_walk,
    make_weight,
)


# ============================================================================
# Coverage gaps
# ============================================================================


class TestCoverageGaps:
    def test_time_covered_inclusive_bounds(self):
        gaps = [make_coverage_gap(at(9), at(12))]
        assert is_time_covered_by_gap(at(9), gaps)
        assert is_time_covered_by_gap(at(12), gaps)
        assert not is_time_covered_by_gap(at(12, 1), gaps)

    def test_open_gap_extends_forever(self):
        gaps = [make_coverage_gap(at(9))]
        assert is_time_covered_by_gap(datetime(2030, 1, 1), gaps)
        assert interval_spans_gap(at(20), at(21), gaps)

    def test_non_gap_events_ignored(self):
        assert not is_time_covered_by_gap(at(9), [make_meal(at(9))])

    def test_interval_overlap(self):
        gaps = [make_coverage_gap(at(9), at(12))]
        assert interval_spans_gap(at(8), at(10), gaps)
        assert interval_spans_gap(at(10), at(11), gaps)
        assert not interval_spans_gap(at(12), at(13), gaps)
        assert not interval_spans_gap(at(7), at(8), gaps)

    def test_gaps_overlapping_sorted(self):
        late = make_coverage_gap(at(15), at(16))
        early = make_coverage_gap(at(9), at(10))
        assert gaps_overlapping(at(8), at(20), [late, early]) == [early, late]

    def test_filter_events_outside_gaps_drops_markers(self):
        gap = make_coverage_gap(at(9), at(12))
        kept = make_pee(at(13))
        events = [make_pee(at(10)), kept, gap]
        assert filter_events_outside_gaps(events, [gap]) == [kept]

    def test_filter_potty_gaps_counts_exclusions(self):
        potty_gaps = calculate_potty_gaps([make_pee(at(8)), make_pee(at(13)), make_pee(at(14))])
        kept, excluded = filter_potty_gaps(potty_gaps, [make_coverage_gap(at(9), at(12))])
        assert excluded == 1
        assert len(kept) == 1

    def test_active_gap_is_latest_open(self):
        closed = make_coverage_gap(at(7), at(8))
        older_open = make_coverage_gap(at(6, days_ago=2))
        newer_open = make_coverage_gap(at(9))
        assert active_gap([closed, older_open, newer_open]) == newer_open
        assert has_active_gap([closed, newer_open])
        assert not has_active_gap([closed])


# ============================================================================
# Walk sessions
# ============================================================================


class TestWalkSessions:
    def test_groups_children_under_walk(self):
        walk = make_walk(at(8), duration_min=40)
        pee = make_pee(at(8, 20), parent_walk_id=walk.event_id)
        poop = make_poop(at(8, 25), EventLocation.INDOOR, parent_walk_id=walk.event_id)
        loose = make_pee(at(10))
        sessions = walk_sessions([walk, pee, poop, loose])
        assert len(sessions) == 1
        assert sessions[0].session_id == walk.event_id
        assert sessions[0].child_potty_events == (pee, poop)
        assert sessions[0].outdoor_potty_count == 1
        assert contained_potty_event_ids([walk, pee, poop, loose]) == {pee.event_id, poop.event_id}

    def test_potty_timestamp_is_midpoint(self):
        assert potty_timestamp(at(8), 30) == at(8, 15)
        assert potty_timestamp(at(8), 25) == datetime(2024, 3, 12, 8, 12, 30)


# ============================================================================
# Weight
# ============================================================================


CURVE = [
    GrowthReference(weeks=8, kg=4.0),
    GrowthReference(weeks=16, kg=8.0),
    GrowthReference(weeks=24, kg=12.0),
]


class TestWeight:
    def test_measurements_sorted_with_age(self):
        events = [make_weight(at(9), 6.5), make_weight(at(9, days_ago=14), 5.2), make_meal(at(8))]
        measurements = weight_measurements(events, birth_date=date(2024, 1, 1))
        assert [m.weight_kg for m in measurements] == [5.2, 6.5]
        assert measurements[-1].age_weeks == 10

    def test_latest_and_delta(self):
        events = [make_weight(at(9, days_ago=7), 5.0), make_weight(at(9), 5.6)]
        assert latest_weight(events) == (5.6, at(9))
        delta, previous = weight_delta(events)
        assert delta == pytest.approx(0.6)
        assert previous == at(9, days_ago=7)

    def test_no_weights(self):
        assert latest_weight([]) is None
        assert weight_delta([make_weight(at(9), 5.0)]) is None

    @pytest.mark.parametrize("weeks,expected", [(4, 4.0), (8, 4.0), (12, 6.0), (20, 10.0), (30, 12.0)])
    def test_interpolation_clamped(self, weeks, expected):
        assert interpolated_reference_weight(weeks, CURVE) == pytest.approx(expected)

    def test_empty_curve(self):
        assert interpolated_reference_weight(10, []) == 0.0
        assert compare_to_reference(5.0, 10, []) is None

    def test_compare_to_reference(self):
        comparison = compare_to_reference(6.6, 12, CURVE)
        assert comparison.reference_weight == pytest.approx(6.0)
        assert comparison.percentage_difference == pytest.approx(10.0)
        assert comparison.is_within_band
        assert not compare_to_reference(7.2, 12, CURVE).is_within_band

    def test_reference_band(self):
        low, high = reference_band(16, CURVE)
        assert low == pytest.approx(6.8)
        assert high == pytest.approx(9.2)
