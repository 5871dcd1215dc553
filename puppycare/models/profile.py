"""
Configuration models supplied by the profile collaborator.

PredictionConfig, WalkSchedule and MealSchedule are read-only inputs to the
engine. They are validated here, at construction, so the computation
components can stay total over every configuration they receive.
"""

import re
from datetime import date, datetime, time
from typing import ClassVar, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from puppycare.config import get_settings

from .enums import SizeCategory, WalkScheduleMode

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
LAST_MINUTE_OF_DAY = 23 * 60 + 59


def parse_slot_time(value: str) -> Optional[time]:
    """Parse an "HH:MM" slot time, or None if it is not one."""
    match = _TIME_PATTERN.match(value.strip())
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return time(hour, minute)


class PredictionConfig(BaseModel):
    """
    Potty prediction tuning.

    Attributes:
        default_gap_minutes: Expected minutes between pee events with no trigger
        post_meal_gap_multiplier: Gap multiplier while a meal trigger is active
        post_sleep_gap_multiplier: Gap multiplier while a nap trigger is active
    """

    model_config = ConfigDict(frozen=True)

    default_gap_minutes: int = Field(default=120, ge=1, description="Baseline pee interval")
    post_meal_gap_multiplier: float = Field(
        default=0.5, gt=0.0, description="Multiplier after a meal"
    )
    post_sleep_gap_multiplier: float = Field(
        default=0.5, gt=0.0, description="Multiplier after a nap"
    )

    @classmethod
    def default_config(cls) -> "PredictionConfig":
        """Build the config from environment-tunable settings."""
        settings = get_settings()
        return cls(
            default_gap_minutes=settings.default_gap_minutes,
            post_meal_gap_multiplier=settings.post_meal_gap_multiplier,
            post_sleep_gap_multiplier=settings.post_sleep_gap_multiplier,
        )


class ScheduledWalk(BaseModel):
    """One walk slot: a label and a fixed "HH:MM" target time."""

    model_config = ConfigDict(frozen=True)

    slot_id: str = Field(default_factory=lambda: str(uuid4()))
    label: str
    target_time: str = Field(description="Target time of day as HH:MM")

    @field_validator("target_time")
    @classmethod
    def validate_target_time(cls, v: str) -> str:
        if parse_slot_time(v) is None:
            raise ValueError("target_time must be HH:MM")
        return v.strip()

    @property
    def minutes_of_day(self) -> int:
        t = parse_slot_time(self.target_time)
        return t.hour * 60 + t.minute


class MaxDurationRule(BaseModel):
    """
    Maximum walk length, either scaled by age or fixed.

    Attributes:
        rule: "minutes_per_month" or "fixed_minutes"
        minutes: Minutes per month of age, or the fixed cap
    """

    model_config = ConfigDict(frozen=True)

    rule: Literal["minutes_per_month", "fixed_minutes"] = "minutes_per_month"
    minutes: int = Field(default=5, ge=1)

    def max_duration(self, age_months: int) -> int:
        if self.rule == "minutes_per_month":
            return max(1, age_months) * self.minutes
        return self.minutes


class WalkSchedule(BaseModel):
    """
    Configured walk plan for a puppy.

    The number of slots is the daily walk target. day_end_hour 24 means
    midnight, which disables the end-of-day cap.
    """

    model_config = ConfigDict(frozen=True)

    # (age limit in weeks, walk count, interval minutes)
    AGE_BANDS: ClassVar[tuple[tuple[int, int, int], ...]] = (
        (12, 8, 120),
        (24, 6, 120),
        (52, 4, 180),
    )
    ADULT_BAND: ClassVar[tuple[int, int]] = (3, 240)

    mode: WalkScheduleMode = WalkScheduleMode.FLEXIBLE
    walks: tuple[ScheduledWalk, ...] = ()
    interval_minutes: int = Field(
        default_factory=lambda: get_settings().walk_interval_minutes, ge=1
    )
    day_start_hour: int = Field(default=6, ge=0, le=23)
    day_end_hour: int = Field(default=22, ge=1, le=24)
    max_duration_rule: MaxDurationRule = Field(default_factory=MaxDurationRule)

    @model_validator(mode="after")
    def validate_day_bounds(self) -> "WalkSchedule":
        if self.day_start_hour >= self.day_end_hour:
            raise ValueError("day_start_hour must be before day_end_hour")
        return self

    @property
    def walks_per_day(self) -> int:
        return len(self.walks)

    @property
    def first_walk_time(self) -> Optional[str]:
        return self.walks[0].target_time if self.walks else None

    @property
    def last_walk_time(self) -> Optional[str]:
        return self.walks[-1].target_time if self.walks else None

    def closest_slot(self, moment: datetime) -> Optional[ScheduledWalk]:
        """Slot whose time of day is nearest to the given moment (first wins ties)."""
        current = moment.hour * 60 + moment.minute
        closest = None
        smallest = None
        for walk in self.walks:
            diff = abs(walk.minutes_of_day - current)
            if smallest is None or diff < smallest:
                smallest = diff
                closest = walk
        return closest

    @classmethod
    def default_schedule(cls, age_weeks: int = 8) -> "WalkSchedule":
        """Age-aware default: more, closer walks for younger puppies."""
        count, interval = cls.ADULT_BAND
        for limit, band_count, band_interval in cls.AGE_BANDS:
            if age_weeks < limit:
                count, interval = band_count, band_interval
                break

        return cls(
            mode=WalkScheduleMode.FLEXIBLE,
            walks=_evenly_spaced(count, start_hour=6, end_hour=24),
            interval_minutes=interval,
            day_start_hour=6,
            day_end_hour=24,
        )


_FEW_WALK_LABELS = {
    2: ("Morning walk", "Evening walk"),
    3: ("Morning walk", "Afternoon walk", "Evening walk"),
    4: ("Morning walk", "Afternoon walk", "Late afternoon walk", "Evening walk"),
}

_MANY_WALK_LABELS = (
    "Early morning walk",
    "Morning walk",
    "Mid-morning walk",
    "Lunch walk",
    "Early afternoon walk",
    "Afternoon walk",
    "Evening walk",
    "Late evening walk",
    "Night walk",
)


def _slot_label(index: int, total: int) -> str:
    if total == 1:
        return "Morning walk"
    if total in _FEW_WALK_LABELS:
        return _FEW_WALK_LABELS[total][index]
    if index < len(_MANY_WALK_LABELS):
        return _MANY_WALK_LABELS[index]
    return f"Walk {index + 1}"


def _evenly_spaced(count: int, start_hour: int, end_hour: int) -> tuple[ScheduledWalk, ...]:
    """Spread walks from start_hour to end_hour, never past 23:59."""
    if count <= 0:
        return ()
    total_minutes = (end_hour - start_hour) * 60
    step = total_minutes // (count - 1) if count > 1 else 0

    slots = []
    for i in range(count):
        minutes = min(start_hour * 60 + i * step, LAST_MINUTE_OF_DAY)
        hour, minute = divmod(minutes, 60)
        slots.append(ScheduledWalk(label=_slot_label(i, count), target_time=f"{hour:02d}:{minute:02d}"))
    return tuple(slots)


class MealPortion(BaseModel):
    """One planned meal: label, amount as shown to the owner, optional HH:MM time."""

    model_config = ConfigDict(frozen=True)

    portion_id: str = Field(default_factory=lambda: str(uuid4()))
    label: str
    amount: str = ""
    target_time: Optional[str] = Field(default=None, description="Target time of day as HH:MM")

    @field_validator("target_time")
    @classmethod
    def validate_target_time(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if parse_slot_time(v) is None:
            raise ValueError("target_time must be HH:MM")
        return v.strip()


class MealSchedule(BaseModel):
    """
    Daily meal plan. The number of portions is the number of meals per day.
    """

    model_config = ConfigDict(frozen=True)

    BASE_AMOUNTS: ClassVar[dict[SizeCategory, str]] = {
        SizeCategory.SMALL: "50g",
        SizeCategory.MEDIUM: "80g",
        SizeCategory.LARGE: "110g",
        SizeCategory.EXTRA_LARGE: "140g",
    }

    portions: tuple[MealPortion, ...] = ()

    @property
    def meals_per_day(self) -> int:
        return len(self.portions)

    @classmethod
    def default_schedule(
        cls, age_weeks: int = 8, size: SizeCategory = SizeCategory.MEDIUM
    ) -> "MealSchedule":
        """Four meals under 12 weeks, three under 24 weeks, then two."""
        amount = cls.BASE_AMOUNTS[size]
        if age_weeks < 12:
            plan = (("Breakfast", "07:00"), ("Lunch", "11:00"), ("Afternoon", "15:00"), ("Evening", "19:00"))
        elif age_weeks < 24:
            plan = (("Breakfast", "07:00"), ("Afternoon", "13:00"), ("Evening", "19:00"))
        else:
            plan = (("Morning", "07:00"), ("Evening", "18:00"))
        return cls(
            portions=tuple(MealPortion(label=label, amount=amount, target_time=t) for label, t in plan)
        )


class PuppyProfile(BaseModel):
    """The slice of the puppy profile the engine reads."""

    model_config = ConfigDict(frozen=True)

    name: str
    birth_date: date
    home_date: date
    size_category: SizeCategory = SizeCategory.MEDIUM
    prediction_config: PredictionConfig = Field(default_factory=PredictionConfig.default_config)
    walk_schedule: WalkSchedule = Field(default_factory=WalkSchedule.default_schedule)
    meal_schedule: MealSchedule = Field(default_factory=MealSchedule.default_schedule)

    @model_validator(mode="after")
    def validate_dates(self) -> "PuppyProfile":
        if self.home_date < self.birth_date:
            raise ValueError("home_date cannot precede birth_date")
        return self

    def age_weeks(self, on: date) -> int:
        return max(0, (on - self.birth_date).days // 7)

    def days_home(self, on: date) -> int:
        """Day number since coming home; the homecoming day is day 1."""
        return max(0, (on - self.home_date).days) + 1
