"""
Unit tests for pattern-aware poop status.

History used by the pattern tests (three past days, today excluded):
    3 days ago: 07:00, 12:00
    2 days ago: 07:00, 12:00, 17:00
    yesterday:  07:00, 13:00
Daily counts [2, 3, 2] give a median of 2; daytime gaps
[300, 300, 300, 420, 360] give a median gap of 300 minutes.
"""

import pytest

from puppycare.engine.poop_status import (
    MESSAGE_BELOW_EXPECTED,
    MESSAGE_LONG_GAP,
    MESSAGE_LONGER_THAN_USUAL,
    MESSAGE_NO_POOP_YET,
    MESSAGE_NO_POOP_YET_EARLY,
    MESSAGE_WALK_WITHOUT_POOP,
    analyze_poop_pattern,
    calculate_poop_status,
    daytime_gap_minutes,
    daytime_gaps,
    expected_daily_range,
    recent_walk_without_poop,
)
from puppycare.models.enums import PoopUrgencyLevel
from puppycare.models.poop import PoopPattern
from tests.conftest import NOW, at, make_poop, make_walk


def _history():
    return [
        make_poop(at(7, days_ago=3)),
        make_poop(at(12, days_ago=3)),
        make_poop(at(7, days_ago=2)),
        make_poop(at(12, days_ago=2)),
        make_poop(at(17, days_ago=2)),
        make_poop(at(7, days_ago=1)),
        make_poop(at(13, days_ago=1)),
    ]


# ============================================================================
# Building blocks
# ============================================================================


class TestExpectedRange:
    @pytest.mark.parametrize(
        "age_weeks,expected",
        [(6, (4, 6)), (8, (3, 5)), (11, (3, 5)), (12, (2, 4)), (30, (2, 3)), (60, (1, 2))],
    )
    def test_expected_daily_range_by_age(self, age_weeks, expected):
        assert expected_daily_range(age_weeks) == expected


class TestDaytimeGap:
    def test_daytime_gap_minutes_none_without_start(self):
        assert daytime_gap_minutes(None, NOW) is None

    def test_daytime_gap_minutes_plain_daytime(self):
        assert daytime_gap_minutes(at(8), at(9)) == 60

    def test_daytime_gap_minutes_counts_started_steps(self):
        assert daytime_gap_minutes(at(8), at(8, 20)) == 30

    def test_daytime_gap_minutes_skips_night(self):
        assert daytime_gap_minutes(at(22, days_ago=1), at(7)) == 120

    def test_daytime_gap_minutes_all_night_is_none(self):
        assert daytime_gap_minutes(at(23, 30, days_ago=1), at(5)) is None

    def test_daytime_gaps_drop_overnight_length(self):
        poops = [make_poop(at(7, days_ago=1)), make_poop(at(20, days_ago=1)), make_poop(at(21, days_ago=1))]
        assert daytime_gaps(poops) == [60]


class TestPattern:
    def test_analyze_poop_pattern_empty_without_history(self):
        assert analyze_poop_pattern([make_poop(at(8))], now=NOW) == PoopPattern.empty()

    def test_analyze_poop_pattern_medians(self):
        pattern = analyze_poop_pattern(_history() + [make_poop(at(8))], now=NOW)
        assert pattern.days_analyzed == 3
        assert pattern.median_daily_count == 2.0
        assert pattern.median_daytime_gap_minutes == 300

    def test_analyze_poop_pattern_post_walk_rate(self):
        walks = [make_walk(at(6, 50, days_ago=1), duration_min=20), make_walk(at(9, days_ago=2))]
        pattern = analyze_poop_pattern(_history() + walks + [make_walk(at(8))], now=NOW)
        assert pattern.post_walk_poop_rate == 0.5


class TestRecentWalk:
    def test_recent_walk_without_poop_true_after_walk(self):
        walks = [make_walk(at(8), duration_min=30)]
        assert recent_walk_without_poop(walks, None, now=at(8, 45))
        assert recent_walk_without_poop(walks, at(7), now=at(8, 45))

    def test_recent_walk_without_poop_false_when_poop_during_walk(self):
        walks = [make_walk(at(8), duration_min=30)]
        assert not recent_walk_without_poop(walks, at(8, 10), now=at(8, 45))

    def test_recent_walk_without_poop_false_outside_window(self):
        walks = [make_walk(at(8), duration_min=30)]
        assert not recent_walk_without_poop(walks, None, now=at(9, 10))

    def test_recent_walk_without_poop_ignores_yesterday(self):
        assert not recent_walk_without_poop([make_walk(at(8, days_ago=1))], None, now=at(8, 45))


# ============================================================================
# calculate_poop_status
# ============================================================================


class TestPoopStatus:
    def test_hidden_at_night(self):
        status = calculate_poop_status([make_poop(at(20))], _history(), age_weeks=10, now=at(23, 30))
        assert status.urgency is PoopUrgencyLevel.HIDDEN
        assert not status.is_visible
        assert status.today_count == 0
        assert (status.expected_min, status.expected_max) == (3, 5)

    def test_early_morning_without_poop_is_info(self):
        status = calculate_poop_status([], [], age_weeks=10, now=at(8))
        assert status.urgency is PoopUrgencyLevel.INFO
        assert status.message == MESSAGE_NO_POOP_YET_EARLY

    def test_walk_without_poop_is_gentle(self):
        status = calculate_poop_status([make_walk(at(9), duration_min=30)], [], age_weeks=10, now=at(9, 45))
        assert status.recent_walk_without_poop
        assert status.urgency is PoopUrgencyLevel.GENTLE
        assert status.message == MESSAGE_WALK_WITHOUT_POOP

    def test_gap_twice_the_learned_median_needs_attention(self):
        today = [make_poop(at(7))]
        status = calculate_poop_status(today, _history() + today, age_weeks=20, now=at(17))
        assert status.has_pattern_data
        assert status.pattern_daily_median == 2.0
        assert (status.expected_min, status.expected_max) == (2, 3)
        assert status.daytime_minutes_since_last == 600
        assert status.urgency is PoopUrgencyLevel.ATTENTION
        assert status.message == MESSAGE_LONGER_THAN_USUAL

    def test_gap_one_and_a_half_median_is_gentle_without_message(self):
        today = [make_poop(at(7))]
        status = calculate_poop_status(today, _history(), age_weeks=20, now=at(14, 30))
        assert status.urgency is PoopUrgencyLevel.GENTLE
        assert status.message is None

    def test_absolute_gap_without_pattern(self):
        status = calculate_poop_status([make_poop(at(7))], [], age_weeks=30, now=at(15))
        assert not status.has_pattern_data
        assert status.pattern_daily_median is None
        assert status.urgency is PoopUrgencyLevel.ATTENTION
        assert status.message == MESSAGE_LONG_GAP

    def test_evening_below_expected_is_info(self):
        status = calculate_poop_status([make_poop(at(14))], [], age_weeks=30, now=at(18, 30))
        assert status.is_below_expected
        assert status.urgency is PoopUrgencyLevel.INFO
        assert status.message == MESSAGE_BELOW_EXPECTED

    def test_no_poop_by_mid_morning_is_info(self):
        status = calculate_poop_status([], [], age_weeks=30, now=at(10, 30))
        assert status.urgency is PoopUrgencyLevel.INFO
        assert status.message == MESSAGE_NO_POOP_YET

    def test_on_track_is_good(self):
        today = [make_poop(at(9)), make_poop(at(7)), make_poop(at(21, days_ago=1))]
        status = calculate_poop_status(today, [], age_weeks=30, now=at(11))
        assert status.urgency is PoopUrgencyLevel.GOOD
        assert status.message is None
        assert status.today_count == 2
        assert status.last_poop_time == at(9)
        assert status.daytime_minutes_since_last == 120
