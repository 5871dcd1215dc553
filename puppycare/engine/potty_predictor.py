"""
Potty Prediction Engine — urgency and expected next pee.

Classifies how soon the puppy needs to go out from the pee history plus
recent trigger events (a meal or a significant nap) that shorten the
expected interval.

Classification order matters and is fixed:

1. Indoor pee under 15 minutes ago -> post_accident (bypasses gap math)
2. No pee history -> unknown with the configured default gap
3. Outdoor pee under 15 minutes ago -> just_went
4. remaining = expected gap - minutes since last pee
   remaining <= 0 -> overdue, < 10 -> soon, < 20 -> attention, else normal

Because step 4 tests `remaining <= 0` first, soon always carries a positive
remaining value.
"""

from datetime import datetime
from typing import Iterable, Optional

from puppycare.engine.sleep_resolver import just_woke_from_significant_nap
from puppycare.models.enums import TriggerKind
from puppycare.models.events import DomainEvent, chronological, meals, pees, wakes
from puppycare.models.prediction import PottyPrediction, PottyTrigger, PottyUrgency
from puppycare.models.profile import PredictionConfig
from puppycare.utils.dates import minutes_between, resolve_now
from puppycare.utils.logging import evaluation_context, get_logger

logger = get_logger(__name__)

POST_MEAL_WINDOW_MINUTES = 30
POST_SLEEP_WINDOW_MINUTES = 20
JUST_WENT_THRESHOLD_MINUTES = 15
ATTENTION_THRESHOLD_MINUTES = 20
SOON_THRESHOLD_MINUTES = 10


def calculate_prediction(
    events: Iterable[DomainEvent],
    config: Optional[PredictionConfig] = None,
    now: Optional[datetime] = None,
) -> PottyPrediction:
    """
    Calculate the potty prediction.

    Args:
        events: Recent events, typically yesterday + today, in any order
        config: Prediction tuning (default: PredictionConfig.default_config())
        now: Evaluation time (default: current local time)

    Returns:
        PottyPrediction with urgency, active trigger, and timing context
    """
    config = config or PredictionConfig.default_config()
    now = resolve_now(now)
    with evaluation_context(now):
        return _predict(list(events), config, now)


def _predict(events: list[DomainEvent], config: PredictionConfig, now: datetime) -> PottyPrediction:
    history = chronological(pees(events))
    last = history[-1] if history else None

    if last is not None and last.is_indoor:
        minutes_since = minutes_between(last.time, now)
        if minutes_since < JUST_WENT_THRESHOLD_MINUTES:
            return PottyPrediction(
                urgency=PottyUrgency.post_accident(),
                trigger=PottyTrigger.none(),
                expected_gap_minutes=0,
                minutes_since_last=minutes_since,
                last_was_indoor=True,
            )

    if last is None:
        return PottyPrediction(
            urgency=PottyUrgency.unknown(),
            trigger=PottyTrigger.none(),
            expected_gap_minutes=config.default_gap_minutes,
            minutes_since_last=None,
            last_was_indoor=False,
        )

    minutes_since = minutes_between(last.time, now)
    trigger = detect_trigger(events, last.time, now)
    expected_gap = calculate_expected_gap(config.default_gap_minutes, trigger, config)
    urgency = classify_urgency(minutes_since, expected_gap, last.is_outdoor)

    logger.debug(
        "potty_prediction_computed",
        urgency=urgency.kind.value,
        trigger=trigger.kind.value,
        expected_gap_minutes=expected_gap,
        minutes_since_last=minutes_since,
    )

    return PottyPrediction(
        urgency=urgency,
        trigger=trigger,
        expected_gap_minutes=expected_gap,
        minutes_since_last=minutes_since,
        last_was_indoor=last.is_indoor,
    )


def detect_trigger(
    events: Iterable[DomainEvent], last_pee_time: datetime, now: datetime
) -> PottyTrigger:
    """
    Find the trigger active since the last pee.

    A meal within 30 minutes wins over a wake within 20 minutes. The wake
    only counts if it ended a significant nap.
    """
    events = list(events)

    recent_meals = chronological(e for e in meals(events) if e.time > last_pee_time)
    if recent_meals:
        minutes_since_meal = minutes_between(recent_meals[-1].time, now)
        if minutes_since_meal <= POST_MEAL_WINDOW_MINUTES:
            return PottyTrigger.post_meal(minutes_since_meal)

    if just_woke_from_significant_nap(events, POST_SLEEP_WINDOW_MINUTES, now=now):
        recent_wakes = chronological(e for e in wakes(events) if e.time > last_pee_time)
        if recent_wakes:
            minutes_since_wake = minutes_between(recent_wakes[-1].time, now)
            if minutes_since_wake <= POST_SLEEP_WINDOW_MINUTES:
                return PottyTrigger.post_sleep(minutes_since_wake)

    return PottyTrigger.none()


def calculate_expected_gap(
    base_gap: int, trigger: PottyTrigger, config: PredictionConfig
) -> int:
    """Base gap scaled by the active trigger's multiplier, truncated to minutes."""
    if trigger.kind is TriggerKind.POST_MEAL:
        return int(base_gap * config.post_meal_gap_multiplier)
    if trigger.kind is TriggerKind.POST_SLEEP:
        return int(base_gap * config.post_sleep_gap_multiplier)
    return base_gap


def classify_urgency(
    minutes_since: int, expected_gap: int, last_was_outdoor: bool
) -> PottyUrgency:
    """Map elapsed time against the expected gap onto an urgency level."""
    if last_was_outdoor and minutes_since < JUST_WENT_THRESHOLD_MINUTES:
        return PottyUrgency.just_went()

    remaining = expected_gap - minutes_since

    if remaining <= 0:
        return PottyUrgency.overdue(abs(remaining))
    if remaining < SOON_THRESHOLD_MINUTES:
        return PottyUrgency.soon(remaining)
    if remaining < ATTENTION_THRESHOLD_MINUTES:
        return PottyUrgency.attention(remaining)
    return PottyUrgency.normal(remaining)
