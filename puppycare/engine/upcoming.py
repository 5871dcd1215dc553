"""
Upcoming Items — today's remaining meals and walks.

Meals come from the meal schedule (portions beyond the number of meals
already logged today); walks come from the walk suggestion scheduler. Both
are merged by time and split into:

- actionable: overdue, due (within 5 minutes), or approaching (within 10)
- upcoming: everything further out
"""

from datetime import date, datetime
from typing import Iterable, Optional

from puppycare.models.enums import ActionableState, UpcomingItemKind
from puppycare.models.events import DomainEvent, meals
from puppycare.models.profile import MealSchedule, WalkSchedule, parse_slot_time
from puppycare.models.upcoming import ActionableItem, UpcomingItem, UpcomingItems
from puppycare.utils.dates import at_time, minutes_between, resolve_now, to_date
from puppycare.utils.logging import get_logger

from .walk_suggestions import calculate_remaining_suggestions

logger = get_logger(__name__)

DUE_WINDOW_MINUTES = 5
ACTIONABLE_THRESHOLD_MINUTES = 10


def _meal_items(
    events: list[DomainEvent], meal_schedule: MealSchedule, now: datetime
) -> list[UpcomingItem]:
    eaten = sum(1 for m in meals(events) if m.time.date() == now.date())
    items = []
    for portion in meal_schedule.portions[eaten:]:
        if portion.target_time is None:
            continue
        parsed = parse_slot_time(portion.target_time)
        target = at_time(now, parsed.hour, parsed.minute)
        items.append(
            UpcomingItem(
                kind=UpcomingItemKind.MEAL,
                label=portion.label,
                detail=portion.amount,
                target_time=target,
                minutes_until=minutes_between(now, target),
            )
        )
    return items


def _walk_items(
    events: list[DomainEvent], walk_schedule: WalkSchedule, now: datetime
) -> list[UpcomingItem]:
    items = []
    for index, suggestion in enumerate(calculate_remaining_suggestions(events, walk_schedule, now)):
        if index == 0:
            detail = f"{suggestion.walks_completed_today} of {suggestion.target_walks_per_day} walks"
        else:
            detail = suggestion.suggested_time.strftime("%H:%M")
        items.append(
            UpcomingItem(
                kind=UpcomingItemKind.WALK,
                label=suggestion.label,
                detail=detail,
                target_time=suggestion.suggested_time,
                minutes_until=minutes_between(now, suggestion.suggested_time),
            )
        )
    return items


def classify_item(item: UpcomingItem) -> Optional[ActionableState]:
    """Actionable state for an item, or None if it is still further out."""
    if item.minutes_until < 0:
        return ActionableState.OVERDUE
    if item.minutes_until <= DUE_WINDOW_MINUTES:
        return ActionableState.DUE
    if item.minutes_until <= ACTIONABLE_THRESHOLD_MINUTES:
        return ActionableState.APPROACHING
    return None


def calculate_upcoming(
    events: Iterable[DomainEvent],
    meal_schedule: Optional[MealSchedule] = None,
    walk_schedule: Optional[WalkSchedule] = None,
    now: Optional[datetime] = None,
    is_walk_in_progress: bool = False,
    day: Optional[date | datetime] = None,
) -> UpcomingItems:
    """
    Today's remaining meals and walks.

    Args:
        events: Event snapshot; today's meals and walks count as done
        meal_schedule: Meal plan, or None to skip meals
        walk_schedule: Walk plan, or None to skip walks
        now: Evaluation time
        is_walk_in_progress: Suppress overdue and due walks while already walking
        day: Day being displayed; anything but today yields nothing

    Returns:
        UpcomingItems with actionable and upcoming items, each in time order
    """
    now = resolve_now(now)
    if day is not None and to_date(day) != now.date():
        return UpcomingItems()

    events = list(events)
    items: list[UpcomingItem] = []
    if meal_schedule is not None:
        items.extend(_meal_items(events, meal_schedule, now))
    if walk_schedule is not None:
        items.extend(_walk_items(events, walk_schedule, now))
    items.sort(key=lambda i: i.target_time)

    actionable: list[ActionableItem] = []
    upcoming: list[UpcomingItem] = []
    for item in items:
        state = classify_item(item)
        if state is None:
            upcoming.append(item)
            continue
        if (
            is_walk_in_progress
            and item.kind is UpcomingItemKind.WALK
            and state is not ActionableState.APPROACHING
        ):
            continue
        actionable.append(ActionableItem(item=item, state=state))

    logger.debug("upcoming_items_computed", actionable=len(actionable), upcoming=len(upcoming))
    return UpcomingItems(actionable=tuple(actionable), upcoming=tuple(upcoming))
