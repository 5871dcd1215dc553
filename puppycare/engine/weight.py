"""
Weight tracking: measurements, deltas, and growth curve comparison.
"""

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from puppycare.models.events import DomainEvent, chronological, weights
from puppycare.models.weight import (
    GROWTH_TOLERANCE,
    GrowthComparison,
    GrowthReference,
    WeightMeasurement,
)


def weight_measurements(events: Iterable[DomainEvent], birth_date: date) -> list[WeightMeasurement]:
    """Measurements oldest first, each with the puppy's age in whole weeks."""
    return [
        WeightMeasurement(
            event_id=e.event_id,
            time=e.time,
            weight_kg=e.weight_kg,
            age_weeks=max(0, (e.time.date() - birth_date).days // 7),
        )
        for e in chronological(weights(events))
    ]


def latest_weight(events: Iterable[DomainEvent]) -> Optional[tuple[float, datetime]]:
    ordered = chronological(weights(events))
    if not ordered:
        return None
    return ordered[-1].weight_kg, ordered[-1].time


def weight_delta(events: Iterable[DomainEvent]) -> Optional[tuple[float, datetime]]:
    """Change since the previous measurement, with that measurement's time."""
    ordered = chronological(weights(events))
    if len(ordered) < 2:
        return None
    current, previous = ordered[-1], ordered[-2]
    return current.weight_kg - previous.weight_kg, previous.time


def interpolated_reference_weight(weeks: int, curve: Sequence[GrowthReference]) -> float:
    """
    Reference weight at an age, linearly interpolated.

    Ages outside the curve clamp to its first or last point. An empty curve
    gives 0.
    """
    if not curve:
        return 0.0
    points = sorted(curve, key=lambda p: p.weeks)
    if weeks <= points[0].weeks:
        return points[0].kg
    if weeks >= points[-1].weeks:
        return points[-1].kg

    for lower, upper in zip(points, points[1:]):
        if lower.weeks <= weeks <= upper.weeks:
            span = upper.weeks - lower.weeks
            if span == 0:
                return lower.kg
            return lower.kg + (upper.kg - lower.kg) * (weeks - lower.weeks) / span
    return points[-1].kg


def compare_to_reference(
    current_weight: float, age_weeks: int, curve: Sequence[GrowthReference]
) -> Optional[GrowthComparison]:
    """Percentage above (+) or below (-) the reference; None without a reference."""
    reference = interpolated_reference_weight(age_weeks, curve)
    if reference == 0:
        return None
    return GrowthComparison(
        current_weight=current_weight,
        reference_weight=reference,
        percentage_difference=(current_weight - reference) / reference * 100,
    )


def reference_band(weeks: int, curve: Sequence[GrowthReference]) -> tuple[float, float]:
    center = interpolated_reference_weight(weeks, curve)
    tolerance = center * GROWTH_TOLERANCE
    return center - tolerance, center + tolerance
