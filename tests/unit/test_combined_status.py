"""
Unit tests for the combined status resolver.

Covers the priority-ordered decision tree, the assumed overnight sleep
heuristic, and the wake-time potty capture.
"""

from datetime import date, datetime

import pytest

from puppycare.engine.combined_status import (
    calculate_combined_state,
    capture_wake_time_potty_state,
    check_for_assumed_overnight_sleep,
    should_clear_wake_state,
    suggested_bedtime,
)
from puppycare.models.combined import CombinedSleepPottyState, WakeTimePottyState
from puppycare.models.enums import CombinedStateKind, EventType
from puppycare.models.prediction import PottyPrediction, PottyUrgency
from puppycare.models.sleep import SleepState
from tests.conftest import (
    NOW,
    YESTERDAY,
    at,
    make_event,
    make_meal,
    make_pee,
    make_sleep,
    make_wake,
)


def prediction(urgency: PottyUrgency) -> PottyPrediction:
    return PottyPrediction(urgency=urgency, expected_gap_minutes=120, minutes_since_last=60)


NORMAL = prediction(PottyUrgency.normal(60))
OVERDUE = prediction(PottyUrgency.overdue(25))


def overdue_wake_state(captured_at: datetime = at(8, 55)) -> WakeTimePottyState:
    return WakeTimePottyState(captured_at=captured_at, was_overdue=True, minutes_overdue=10)


# ============================================================================
# Decision tree
# ============================================================================


class TestPriorityOrder:
    def test_post_wake_prompt_wins_while_awake(self):
        state = calculate_combined_state(
            SleepState.awake(since=at(8, 55), elapsed_minutes=5),
            NORMAL,
            overdue_wake_state(),
            now=NOW,
        )
        assert state.kind is CombinedStateKind.JUST_WOKE_NEEDS_POTTY
        assert state.woke_at == at(8, 55)
        assert state.minutes_since_wake == 5
        assert state.potty_was_overdue_by == 10

    @pytest.mark.parametrize("urgency", [PottyUrgency.just_went(), PottyUrgency.overdue(40), PottyUrgency.unknown()])
    def test_post_wake_prompt_independent_of_prediction(self, urgency):
        state = calculate_combined_state(
            SleepState.awake(since=at(8, 55), elapsed_minutes=5),
            prediction(urgency),
            overdue_wake_state(),
            now=NOW,
        )
        assert state.should_show_post_wake_prompt

    def test_expired_wake_state_ignored(self):
        state = calculate_combined_state(
            SleepState.awake(since=at(8, 50), elapsed_minutes=10),
            NORMAL,
            overdue_wake_state(at(8, 50)),
            now=NOW,
        )
        assert state.kind is CombinedStateKind.AWAKE

    def test_wake_state_not_overdue_ignored(self):
        wake_state = WakeTimePottyState(captured_at=at(8, 58), was_overdue=False)
        state = calculate_combined_state(
            SleepState.awake(since=at(8, 58), elapsed_minutes=2), NORMAL, wake_state, now=NOW
        )
        assert state.kind is CombinedStateKind.AWAKE

    def test_wake_state_ignored_while_sleeping(self):
        state = calculate_combined_state(
            SleepState.sleeping(since=at(8, 30), elapsed_minutes=30),
            NORMAL,
            overdue_wake_state(),
            now=NOW,
        )
        assert state.kind is CombinedStateKind.SLEEPING_POTTY_OKAY

    def test_sleeping_and_overdue_is_urgent(self):
        state = calculate_combined_state(
            SleepState.sleeping(since=at(7), elapsed_minutes=120), OVERDUE, now=NOW
        )
        assert state.kind is CombinedStateKind.SLEEPING_POTTY_URGENT
        assert state.minutes_overdue == 25
        assert state.sleep_duration_min == 120
        assert state.potty_urgency == PottyUrgency.overdue(25)

    def test_sleeping_after_accident_is_urgent(self):
        state = calculate_combined_state(
            SleepState.sleeping(since=at(8), elapsed_minutes=60),
            prediction(PottyUrgency.post_accident()),
            now=NOW,
        )
        assert state.kind is CombinedStateKind.SLEEPING_POTTY_URGENT
        assert state.minutes_overdue is None

    def test_sleeping_with_normal_urgency_is_okay(self):
        state = calculate_combined_state(
            SleepState.sleeping(since=at(8), elapsed_minutes=60), NORMAL, now=NOW
        )
        assert state.kind is CombinedStateKind.SLEEPING_POTTY_OKAY
        assert state.sleeping_since == at(8)

    def test_awake_briefly_is_awake(self):
        state = calculate_combined_state(
            SleepState.awake(since=at(8, 30), elapsed_minutes=30), NORMAL, now=NOW
        )
        assert state.kind is CombinedStateKind.AWAKE

    def test_unknown_outside_morning_window_is_unknown(self):
        state = calculate_combined_state(SleepState.unknown(), NORMAL, now=at(14))
        assert state.kind is CombinedStateKind.UNKNOWN


# ============================================================================
# Assumed overnight sleep
# ============================================================================


class TestAssumedOvernightSleep:
    def test_fires_after_long_awake_stretch(self):
        now = at(7)
        events = [make_wake(at(23, days_ago=1))]
        state = calculate_combined_state(
            SleepState.awake(since=at(23, days_ago=1), elapsed_minutes=480),
            NORMAL,
            recent_events=events,
            now=now,
        )
        assert state.kind is CombinedStateKind.ASSUMED_OVERNIGHT_SLEEP
        assert state.suggested_bedtime == at(23, days_ago=1)
        assert state.minutes_sleeping == 480
        assert state.last_event_time == at(23, days_ago=1)

    def test_not_fired_when_awake_under_six_hours(self):
        state = calculate_combined_state(
            SleepState.awake(since=at(5), elapsed_minutes=120), NORMAL, now=at(7)
        )
        assert state.kind is CombinedStateKind.AWAKE

    def test_not_fired_outside_morning_window(self):
        assert check_for_assumed_overnight_sleep([], awake_minutes=600, now=at(11)) is None
        assert check_for_assumed_overnight_sleep([], awake_minutes=600, now=at(4, 59)) is None

    def test_not_fired_when_dismissed_today(self):
        assert check_for_assumed_overnight_sleep([], dismissed_assumed_sleep_date=at(6), now=at(7)) is None
        assert check_for_assumed_overnight_sleep([], dismissed_assumed_sleep_date=date(2024, 3, 12), now=at(7)) is None

    def test_fires_when_dismissed_yesterday(self):
        state = check_for_assumed_overnight_sleep([], dismissed_assumed_sleep_date=YESTERDAY, now=at(7))
        assert state is not None

    def test_not_fired_when_sleep_logged_after_nine_pm(self):
        events = [make_sleep(at(22, days_ago=1))]
        assert check_for_assumed_overnight_sleep(events, now=at(7)) is None

    def test_crate_counts_as_logged_sleep(self):
        events = [make_event(EventType.CRATE, at(21, 30, days_ago=1))]
        assert check_for_assumed_overnight_sleep(events, now=at(7)) is None

    def test_sleep_before_nine_pm_does_not_block(self):
        events = [make_sleep(at(19, days_ago=1)), make_wake(at(20, days_ago=1))]
        assert check_for_assumed_overnight_sleep(events, now=at(7)) is not None

    def test_events_only_variant_for_unknown_state(self):
        state = calculate_combined_state(SleepState.unknown(), NORMAL, now=at(6))
        assert state.kind is CombinedStateKind.ASSUMED_OVERNIGHT_SLEEP
        assert state.last_event_time is None

    def test_result_shows_only_assumed_sleep_card(self):
        state = check_for_assumed_overnight_sleep([], now=at(7))
        assert state.should_show_assumed_sleep_card
        assert state.should_hide_sleep_card
        assert not state.should_hide_potty_card


class TestSuggestedBedtime:
    def test_default_is_eleven_pm(self):
        assert suggested_bedtime([], YESTERDAY) == at(23, days_ago=1)

    def test_twenty_minutes_after_evening_activity(self):
        events = [make_meal(at(19, days_ago=1)), make_pee(at(21, 30, days_ago=1))]
        assert suggested_bedtime(events, YESTERDAY) == at(21, 50, days_ago=1)

    def test_late_activity_caps_at_midnight(self):
        events = [make_pee(at(23, 15, days_ago=1))]
        assert suggested_bedtime(events, YESTERDAY) == at(23, 59, days_ago=1)

    def test_non_activity_events_ignored(self):
        events = [make_event(EventType.MOMENT, at(22, days_ago=1))]
        assert suggested_bedtime(events, YESTERDAY) == at(23, days_ago=1)


# ============================================================================
# Wake-time capture
# ============================================================================


class TestWakeTimeCapture:
    def test_capture_overdue_prediction(self):
        state = capture_wake_time_potty_state(OVERDUE, now=NOW)
        assert state.captured_at == NOW
        assert state.was_overdue
        assert state.minutes_overdue == 25
        assert state.minutes_since_last == 60

    def test_capture_soon_is_not_overdue(self):
        state = capture_wake_time_potty_state(prediction(PottyUrgency.soon(5)), now=NOW)
        assert state is not None
        assert not state.was_overdue

    def test_no_capture_when_not_urgent(self):
        assert capture_wake_time_potty_state(NORMAL, now=NOW) is None

    def test_should_clear_none_state(self):
        assert not should_clear_wake_state(None, now=NOW)

    def test_should_clear_after_expiry(self):
        assert should_clear_wake_state(overdue_wake_state(at(8, 45)), now=NOW)

    def test_should_clear_after_pee_logged(self):
        assert should_clear_wake_state(overdue_wake_state(), potty_logged_at=at(8, 58), now=NOW)

    def test_should_not_clear_for_earlier_pee(self):
        assert not should_clear_wake_state(overdue_wake_state(), potty_logged_at=at(8, 30), now=NOW)


class TestDisplayFlags:
    @pytest.mark.parametrize(
        "state",
        [
            CombinedSleepPottyState.awake(),
            CombinedSleepPottyState.unknown(),
            CombinedSleepPottyState.sleeping_potty_okay(at(8), 60),
            CombinedSleepPottyState.sleeping_potty_urgent(at(8), 60, PottyUrgency.overdue(5), 5),
            CombinedSleepPottyState.just_woke_needs_potty(at(8, 55), 5, 10),
            CombinedSleepPottyState.assumed_overnight_sleep(at(23, days_ago=1), 480, None),
        ],
    )
    def test_at_most_one_card_flag(self, state):
        flags = [
            state.should_show_post_wake_prompt,
            state.should_show_combined_card,
            state.should_show_assumed_sleep_card,
            state.should_show_separate_cards,
        ]
        assert sum(flags) <= 1

    def test_sleeping_hides_potty_card(self):
        assert CombinedSleepPottyState.sleeping_potty_okay(at(8), 60).should_hide_potty_card
        assert CombinedSleepPottyState.sleeping_potty_okay(at(8), 60).is_sleeping
