"""
Unit tests for the activity block generator.
"""

from datetime import timedelta

from puppycare.engine.activity_blocks import (
    ActivityBlockGenerator,
    generate_blocks,
    generate_summary,
)
from puppycare.models.activity import ActivityBlock, ActivityBlockSummary
from puppycare.models.enums import ActivityBlockKind, EventLocation, EventType
from tests.conftest import (
    NOW,
    TODAY,
    YESTERDAY,
    at,
    make_event,
    make_meal,
    make_pee,
    make_poop,
    make_sleep,
    make_wake,
    make_walk,
)


def yesterday(hour: int, minute: int = 0):
    return at(hour, minute, days_ago=1)


def past_day_events():
    return [
        make_meal(yesterday(8)),
        make_event(EventType.DRINK, yesterday(9)),
        make_walk(yesterday(10), duration_min=45),
        make_pee(yesterday(10, 20)),
        make_poop(yesterday(12), EventLocation.INDOOR),
        make_sleep(yesterday(13)),
        make_wake(yesterday(14, 30)),
        make_walk(yesterday(16)),
    ]


class TestGenerateBlocks:
    def test_blocks_sorted_with_expected_kinds(self):
        blocks = generate_blocks(past_day_events(), YESTERDAY, now=NOW)
        assert [b.kind for b in blocks] == [
            ActivityBlockKind.MEAL,
            ActivityBlockKind.MEAL,
            ActivityBlockKind.WALK,
            ActivityBlockKind.POTTY,
            ActivityBlockKind.POTTY,
            ActivityBlockKind.SLEEP,
            ActivityBlockKind.WALK,
        ]

    def test_walk_defaults_to_thirty_minutes(self):
        blocks = generate_blocks(past_day_events(), YESTERDAY, now=NOW)
        last_walk = blocks[-1]
        assert last_walk.end_time - last_walk.start_time == timedelta(minutes=30)

    def test_potty_blocks_are_points_with_location(self):
        blocks = [b for b in generate_blocks(past_day_events(), YESTERDAY, now=NOW) if b.kind is ActivityBlockKind.POTTY]
        assert [b.outdoor for b in blocks] == [True, False]
        assert all(b.start_time == b.end_time for b in blocks)

    def test_overnight_sleep_clipped_to_day_start(self):
        start = make_sleep(yesterday(22, 30))
        end = make_wake(at(6, 45))
        blocks = generate_blocks([end], TODAY, previous_day_events=[start], now=NOW)
        assert len(blocks) == 1
        block = blocks[0]
        assert block.kind is ActivityBlockKind.SLEEP
        assert block.start_time == at(6)
        assert block.end_time == at(6, 45)
        assert block.contained_event_ids == (start.event_id, end.event_id)
        assert not block.is_ongoing

    def test_ongoing_sleep_today_runs_to_now(self):
        blocks = generate_blocks([make_sleep(at(8))], TODAY, now=NOW)
        assert blocks[0].end_time == NOW
        assert blocks[0].is_ongoing

    def test_open_sleep_on_past_day_clipped_and_not_ongoing(self):
        blocks = generate_blocks([make_sleep(yesterday(21))], YESTERDAY, now=NOW)
        assert blocks[0].start_time == yesterday(21)
        assert blocks[0].end_time == yesterday(22)
        assert not blocks[0].is_ongoing

    def test_sleep_outside_window_skipped(self):
        events = [make_sleep(at(1)), make_wake(at(3))]
        assert generate_blocks(events, TODAY, now=NOW) == []

    def test_custom_day_window(self):
        generator = ActivityBlockGenerator(day_start_hour=0, day_end_hour=23)
        events = [make_sleep(at(1)), make_wake(at(3))]
        blocks = generator.generate_blocks(events, TODAY, now=NOW)
        assert blocks[0].duration_minutes == 120

    def test_idempotent(self):
        events = tuple(past_day_events())
        assert generate_blocks(events, YESTERDAY, now=NOW) == generate_blocks(events, YESTERDAY, now=NOW)


class TestSummary:
    def test_summary_totals(self):
        blocks, summary = ActivityBlockGenerator().generate(past_day_events(), YESTERDAY, now=NOW)
        assert len(blocks) == 7
        assert summary.total_sleep_minutes == 90
        assert summary.walk_count == 2
        assert summary.total_walk_minutes == 75
        assert summary.outdoor_potty_count == 1
        assert summary.indoor_potty_count == 1
        assert summary.meal_count == 2
        assert summary.potty_success_rate == 0.5

    def test_empty_summary_success_rate_is_one(self):
        summary = generate_summary([])
        assert summary == ActivityBlockSummary()
        assert summary.total_potty_count == 0
        assert summary.potty_success_rate == 1.0


class TestTimelineBounds:
    def test_default_window_for_past_day(self):
        start, end = ActivityBlockGenerator().timeline_bounds([], YESTERDAY, now=NOW)
        assert start == yesterday(6)
        assert end == yesterday(22)

    def test_widened_for_early_and_late_blocks(self):
        blocks = [
            ActivityBlock(block_id="a", kind=ActivityBlockKind.POTTY, start_time=yesterday(5, 30), end_time=yesterday(5, 30)),
            ActivityBlock(block_id="b", kind=ActivityBlockKind.WALK, start_time=yesterday(22), end_time=yesterday(22, 40)),
        ]
        start, end = ActivityBlockGenerator().timeline_bounds(blocks, YESTERDAY, now=NOW)
        assert start == yesterday(4)
        assert end == yesterday(23)

    def test_today_ends_at_now(self):
        blocks = generate_blocks([make_pee(at(7))], TODAY, now=NOW)
        _, end = ActivityBlockGenerator().timeline_bounds(blocks, TODAY, now=NOW)
        assert end == NOW
