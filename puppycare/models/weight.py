"""
Weight tracking models.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

GROWTH_TOLERANCE = 0.15


class WeightMeasurement(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_id: str
    time: datetime
    weight_kg: float = Field(ge=0)
    age_weeks: int = Field(ge=0)


class GrowthReference(BaseModel):
    """One point on a breed growth curve."""

    model_config = ConfigDict(frozen=True)

    weeks: int = Field(ge=0)
    kg: float = Field(ge=0)


class GrowthComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_weight: float
    reference_weight: float
    percentage_difference: float

    @property
    def is_within_band(self) -> bool:
        return abs(self.percentage_difference) <= GROWTH_TOLERANCE * 100
