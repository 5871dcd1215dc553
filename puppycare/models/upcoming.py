"""
Upcoming meal and walk items for today.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .enums import ActionableState, UpcomingItemKind


class UpcomingItem(BaseModel):
    """
    A meal or walk still to come today.

    Attributes:
        kind: meal or walk
        label: Portion or walk slot label
        detail: Meal amount, walk progress ("2 of 5 walks"), or walk time
        target_time: When it is planned
        minutes_until: Minutes from now to target_time; negative when overdue
    """

    model_config = ConfigDict(frozen=True)

    kind: UpcomingItemKind
    label: str
    detail: str = ""
    target_time: datetime
    minutes_until: int


class ActionableItem(BaseModel):
    """An upcoming item that needs doing now or very soon."""

    model_config = ConfigDict(frozen=True)

    item: UpcomingItem
    state: ActionableState

    @property
    def minutes_overdue(self) -> Optional[int]:
        if self.state is ActionableState.OVERDUE:
            return -self.item.minutes_until
        return None

    @property
    def minutes_until(self) -> Optional[int]:
        if self.state is ActionableState.APPROACHING:
            return self.item.minutes_until
        return None


class UpcomingItems(BaseModel):
    """Today's remaining items, split at the actionable threshold."""

    model_config = ConfigDict(frozen=True)

    actionable: tuple[ActionableItem, ...] = ()
    upcoming: tuple[UpcomingItem, ...] = ()

    @property
    def next_meal(self) -> Optional[UpcomingItem]:
        """Earliest remaining meal, actionable or not."""
        return next((i for i in self.all_items if i.kind is UpcomingItemKind.MEAL), None)

    @property
    def all_items(self) -> list[UpcomingItem]:
        return [a.item for a in self.actionable] + list(self.upcoming)
