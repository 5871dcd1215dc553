"""
Activity Block Generator — typed timeline segments for one day.

Sleep sessions come from the previous day's and this day's events so a
night's sleep that started before midnight still shows on the morning
timeline. Walks span their logged duration; potty and meal events are
point blocks. Blocks are never merged, so overlapping blocks of different
kinds can coexist.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from puppycare.config import get_settings
from puppycare.models.activity import ActivityBlock, ActivityBlockSummary
from puppycare.models.enums import ActivityBlockKind, EventType
from puppycare.models.events import DomainEvent, potty_events, walks
from puppycare.utils.dates import at_time, resolve_now, to_date
from puppycare.utils.logging import evaluation_context, get_logger

from .sleep_resolver import build_sessions

DEFAULT_WALK_MINUTES = 30


class ActivityBlockGenerator:
    """
    Builds the blocks and summary for a day view.

    Args:
        day_start_hour: Start of the default window (settings default 6)
        day_end_hour: End of the default window for past days (settings default 22)
    """

    def __init__(self, day_start_hour: Optional[int] = None, day_end_hour: Optional[int] = None):
        settings = get_settings()
        self.day_start_hour = (
            day_start_hour if day_start_hour is not None else settings.timeline_day_start_hour
        )
        self.day_end_hour = (
            day_end_hour if day_end_hour is not None else settings.timeline_day_end_hour
        )
        self.logger = get_logger(__name__)

    def day_bounds(self, day: date | datetime, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
        """Default window for the day; today ends at now."""
        now = resolve_now(now)
        day = to_date(day)
        start = at_time(day, self.day_start_hour)
        end = now if day == now.date() else at_time(day, self.day_end_hour)
        return start, end

    def generate_blocks(
        self,
        events: Iterable[DomainEvent],
        day: date | datetime,
        previous_day_events: Iterable[DomainEvent] = (),
        now: Optional[datetime] = None,
    ) -> list[ActivityBlock]:
        """
        Blocks for the given day, sorted by start time.

        Args:
            events: The day's events
            day: Day being rendered
            previous_day_events: The day before, for sleep that crossed midnight
            now: Evaluation time
        """
        now = resolve_now(now)
        day = to_date(day)
        is_today = day == now.date()
        day_start, day_end = self.day_bounds(day, now)
        events = list(events)

        blocks: list[ActivityBlock] = []

        for session in build_sessions(list(previous_day_events) + events):
            session_end = session.end_time if session.end_time is not None else now
            if not (session.start_time < day_end and session_end > day_start):
                continue
            contained = (session.start_event_id,)
            if session.end_event_id is not None:
                contained += (session.end_event_id,)
            blocks.append(
                ActivityBlock(
                    block_id=session.session_id,
                    kind=ActivityBlockKind.SLEEP,
                    start_time=max(session.start_time, day_start),
                    end_time=min(session_end, day_end),
                    contained_event_ids=contained,
                    is_ongoing=session.is_ongoing and is_today,
                )
            )

        for walk in walks(events):
            duration = walk.duration_min if walk.duration_min is not None else DEFAULT_WALK_MINUTES
            blocks.append(
                ActivityBlock(
                    block_id=walk.event_id,
                    kind=ActivityBlockKind.WALK,
                    start_time=walk.time,
                    end_time=walk.time + timedelta(minutes=max(0, duration)),
                    contained_event_ids=(walk.event_id,),
                )
            )

        for potty in potty_events(events):
            blocks.append(_point_block(potty, ActivityBlockKind.POTTY, outdoor=potty.is_outdoor))

        for meal in (e for e in events if e.type in (EventType.MEAL, EventType.DRINK)):
            blocks.append(_point_block(meal, ActivityBlockKind.MEAL))

        blocks.sort(key=lambda b: (b.start_time, b.block_id))
        self.logger.debug("activity_blocks_generated", day=day.isoformat(), blocks=len(blocks))
        return blocks

    def generate_summary(self, blocks: Iterable[ActivityBlock]) -> ActivityBlockSummary:
        """Per-day totals from a block list."""
        sleep_minutes = 0
        walk_count = 0
        walk_minutes = 0
        outdoor = 0
        indoor = 0
        meal_count = 0

        for block in blocks:
            if block.kind is ActivityBlockKind.SLEEP:
                sleep_minutes += max(0, block.duration_minutes)
            elif block.kind is ActivityBlockKind.WALK:
                walk_count += 1
                walk_minutes += max(0, block.duration_minutes)
            elif block.kind is ActivityBlockKind.POTTY:
                if block.outdoor:
                    outdoor += 1
                else:
                    indoor += 1
            elif block.kind is ActivityBlockKind.MEAL:
                meal_count += 1

        return ActivityBlockSummary(
            total_sleep_minutes=sleep_minutes,
            walk_count=walk_count,
            total_walk_minutes=walk_minutes,
            outdoor_potty_count=outdoor,
            indoor_potty_count=indoor,
            meal_count=meal_count,
        )

    def generate(
        self,
        events: Iterable[DomainEvent],
        day: date | datetime,
        previous_day_events: Iterable[DomainEvent] = (),
        now: Optional[datetime] = None,
    ) -> tuple[list[ActivityBlock], ActivityBlockSummary]:
        """Blocks and their summary for one day, logged under one evaluation."""
        now = resolve_now(now)
        with evaluation_context(now, day=to_date(day).isoformat()):
            blocks = self.generate_blocks(events, day, previous_day_events, now)
            return blocks, self.generate_summary(blocks)

    def timeline_bounds(
        self,
        blocks: Iterable[ActivityBlock],
        day: date | datetime,
        now: Optional[datetime] = None,
    ) -> tuple[datetime, datetime]:
        """
        Display window for the timeline.

        Widens the default window by an hour of margin to fit blocks before
        the start hour or past the end hour, capped to 00:00-23:00. Today's
        window always ends at now.
        """
        now = resolve_now(now)
        day = to_date(day)
        blocks = list(blocks)
        start_hour = self.day_start_hour
        end_hour = self.day_end_hour

        if blocks:
            earliest = min(b.start_time for b in blocks)
            if earliest.date() < day:
                start_hour = 0
            elif earliest.hour < start_hour:
                start_hour = max(0, earliest.hour - 1)

            latest = max(b.end_time for b in blocks)
            if latest.date() > day:
                end_hour = 23
            elif latest.hour >= end_hour:
                end_hour = min(23, latest.hour + 1)

        start = at_time(day, start_hour)
        end = now if day == now.date() else at_time(day, end_hour)
        return start, end


def _point_block(
    event: DomainEvent, kind: ActivityBlockKind, outdoor: Optional[bool] = None
) -> ActivityBlock:
    return ActivityBlock(
        block_id=event.event_id,
        kind=kind,
        outdoor=outdoor,
        start_time=event.time,
        end_time=event.time,
        contained_event_ids=(event.event_id,),
    )


def generate_blocks(
    events: Iterable[DomainEvent],
    day: date | datetime,
    previous_day_events: Iterable[DomainEvent] = (),
    now: Optional[datetime] = None,
) -> list[ActivityBlock]:
    """Blocks for a day using the configured default window."""
    return ActivityBlockGenerator().generate_blocks(events, day, previous_day_events, now)


def generate_summary(blocks: Iterable[ActivityBlock]) -> ActivityBlockSummary:
    return ActivityBlockGenerator().generate_summary(blocks)
