"""Recently saved meals, newest first."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from lowfodmap.data.models import Meal
from lowfodmap.templates.assembler import reinstantiate

MAX_HISTORY = 15
EMPTY_MEAL_NAME = "Empty meal"


def meal_display_name(meal: Meal) -> str:
    """First three food names, with '...' when the meal has more."""
    if meal.is_empty:
        return EMPTY_MEAL_NAME
    names = ", ".join(meal.food_names()[:3])
    return f"{names}..." if len(meal) > 3 else names


@dataclass(frozen=True)
class HistoryEntry:
    """A saved meal snapshot."""

    id: str
    name: str
    created_at: datetime
    meal: Meal


@dataclass(frozen=True)
class MealHistory:
    """Capped, newest-first list of saved meals."""

    entries: tuple[HistoryEntry, ...] = ()
    limit: int = MAX_HISTORY

    def record(self, meal: Meal, now: Optional[datetime] = None) -> MealHistory:
        """Return a history with ``meal`` added at the front.

        Empty meals are not recorded.
        """
        if meal.is_empty:
            return self
        entry = HistoryEntry(
            id=uuid.uuid4().hex,
            name=meal_display_name(meal),
            created_at=now or datetime.now(timezone.utc),
            meal=meal,
        )
        return MealHistory(entries=(entry, *self.entries)[: self.limit], limit=self.limit)

    def remove(self, entry_id: str) -> MealHistory:
        return MealHistory(
            entries=tuple(e for e in self.entries if e.id != entry_id),
            limit=self.limit,
        )

    def load(self, entry_id: str) -> Meal:
        """Copy a saved meal with fresh instance ids.

        Raises:
            KeyError: If no entry has ``entry_id``.
        """
        for entry in self.entries:
            if entry.id == entry_id:
                return reinstantiate(entry.meal)
        raise KeyError(f"No history entry with id {entry_id}")

    def __len__(self) -> int:
        return len(self.entries)
