"""Core data models for low-FODMAP meal composition.

Foods are shared, read-only records supplied by a catalog. Meals hold
portions of those foods as ``MealItem`` instances and are rebuilt (never
mutated) on every change, so a meal can be passed around freely as a value.

Day and week plans are plain dicts keyed by slot and day name:

    WeeklyPlan = {"Monday": {MealSlot.BREAKFAST: Meal(...), ...}, ...}

A slot or day missing from the mapping means "not planned", which is
distinct from an explicitly empty meal.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional


class FodmapType(Enum):
    """FODMAP categories that are scored independently."""

    FRUCTANS = "fructans"
    FRUCTOSE = "fructose"
    SORBITOL = "sorbitol"
    MANNITOL = "mannitol"
    GOS = "gos"
    LACTOSE = "lactose"

    @property
    def label(self) -> str:
        return "GOS" if self is FodmapType.GOS else self.value.capitalize()


class FructanGroup(Enum):
    """Source sub-classification for fructans."""

    FRUIT_VEG = "fruit_veg"
    CEREAL = "cereal"


class FoodCategory(Enum):
    """Closed set of food categories used for meal-worthy filtering."""

    PROTEIN = "protein"
    FRUIT = "fruit"
    VEGETABLE = "vegetable"
    CEREAL = "cereal"
    DAIRY = "dairy"
    SEEDS = "seeds"
    SPREADS = "spreads"
    NUTS = "nuts"
    LEGUMES = "legumes"
    VEGETARIAN_SUBSTITUTES = "vegetarian_substitutes"
    SWEETS = "sweets"
    OTHER = "other"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


class MealSlot(Enum):
    """Named meal occasions within a day, in planning order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    AFTERNOON_SNACK = "afternoon_snack"
    DINNER = "dinner"
    SNACKS = "snacks"

    @property
    def is_snack(self) -> bool:
        return self in (MealSlot.AFTERNOON_SNACK, MealSlot.SNACKS)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


DAYS_OF_WEEK: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


@dataclass(frozen=True)
class FodmapInfo:
    """A FODMAP declared by a food.

    Attributes:
        type: The FODMAP category
        group: Fructan source group (only meaningful for FRUCTANS)
    """

    type: FodmapType
    group: Optional[FructanGroup] = None


@dataclass(frozen=True)
class FoodItem:
    """A food record from the catalog.

    Attributes:
        id: Unique identifier
        name: Display name
        category: Food category
        unit: Portion unit ("g", "ml" or a count unit such as "unit")
        calories: kcal per 100 g/ml, or per single count unit. None if unknown.
        safe_amount: Largest low-risk portion, in ``unit``. 0 means no known limit.
        fodmaps: FODMAPs present in the food, in declaration order
        notes: Free-text notes
    """

    id: str
    name: str
    category: FoodCategory
    unit: str
    calories: Optional[float] = None
    safe_amount: float = 0.0
    fodmaps: tuple[FodmapInfo, ...] = ()
    notes: str = ""

    def __post_init__(self) -> None:
        if self.safe_amount < 0:
            raise ValueError(
                f"safe_amount must be >= 0 for food '{self.id}', got {self.safe_amount}"
            )

    @property
    def has_fodmaps(self) -> bool:
        return len(self.fodmaps) > 0

    @property
    def fodmap_types(self) -> tuple[FodmapType, ...]:
        return tuple(info.type for info in self.fodmaps)

    @property
    def calorie_basis(self) -> float:
        """Calories per basis, with missing or non-finite values as 0."""
        if self.calories is None:
            return 0.0
        try:
            value = float(self.calories)
        except (TypeError, ValueError):
            return 0.0
        return value if math.isfinite(value) else 0.0


def new_instance_id() -> str:
    """Return a fresh opaque token for a meal item."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class MealItem:
    """A portion of a food within a meal."""

    food: FoodItem
    current_amount: float
    instance_id: str = field(default_factory=new_instance_id)

    def with_amount(self, amount: float) -> MealItem:
        return replace(self, current_amount=amount)


@dataclass(frozen=True)
class Meal:
    """An ordered sequence of meal items.

    Order is insertion order. It does not affect load or calorie totals but
    is kept for display and for tie-breaks when ranking contributors.
    """

    items: tuple[MealItem, ...] = ()

    @classmethod
    def of(cls, items: Iterable[MealItem]) -> Meal:
        return cls(items=tuple(items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def food_names(self) -> list[str]:
        return [item.food.name for item in self.items]


DayPlan = dict[MealSlot, Meal]
WeeklyPlan = dict[str, DayPlan]
FoodPreferences = dict[MealSlot, set[str]]


def parse_slot(value: str) -> MealSlot:
    """Parse a slot from its value or member name (case-insensitive).

    Raises:
        ValueError: If the string does not name a slot.
    """
    normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
    for slot in MealSlot:
        if normalized in (slot.value, slot.name.lower()):
            return slot
    raise ValueError(
        f"Unknown meal slot '{value}'. "
        f"Valid: {', '.join(s.value for s in MealSlot)}"
    )
