"""Data models for meal templates and randomized shuffles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from lowfodmap.data.models import FoodCategory, MealSlot


class TemplateKind(Enum):
    """Kind of template."""

    RECIPE = "recipe"
    SOUP = "soup"


class ShuffleOption(Enum):
    """What a randomized shuffle is asked to produce.

    Every meal slot, plus the SOUP pseudo-slot which always tries a soup
    template first.
    """

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    AFTERNOON_SNACK = "afternoon_snack"
    DINNER = "dinner"
    SNACKS = "snacks"
    SOUP = "soup"

    @classmethod
    def from_slot(cls, slot: MealSlot) -> ShuffleOption:
        return cls(slot.value)

    @classmethod
    def parse(cls, value: str) -> ShuffleOption:
        normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
        for option in cls:
            if normalized in (option.value, option.name.lower()):
                return option
        raise ValueError(
            f"Unknown shuffle option '{value}'. "
            f"Valid: {', '.join(o.value for o in cls)}"
        )


@dataclass(frozen=True)
class TemplateItem:
    """A food reference with a fixed portion."""

    food_id: str
    amount: float


@dataclass(frozen=True)
class MealTemplate:
    """A named, reusable meal.

    Attributes:
        id: Unique template id
        name: Display name
        description: Short description
        category: Slot the template is meant for, or None for soups
        items: Food references with portions, in display order
        kind: Recipe or soup
    """

    id: str
    name: str
    description: str
    category: Optional[MealSlot]
    items: tuple[TemplateItem, ...]
    kind: TemplateKind = TemplateKind.RECIPE


@dataclass(frozen=True)
class ShuffleRule:
    """Eligible categories and item-count range for a shuffle."""

    categories: frozenset[FoodCategory]
    min_items: int
    max_items: int
