"""FODMAP load and calorie calculations for a meal.

Load is the ratio of a portion to the food's safe amount. Loads add up
within a FODMAP type across different foods ("accumulation") but different
types never add to each other. A type whose total load exceeds 1.0 is an
accumulation risk.

All functions here are pure: they never modify the meal they are given.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from lowfodmap.data.models import FodmapType, FoodItem, Meal, MealItem

# Substrings that mark a mass or volume unit (calories per 100 units)
MASS_VOLUME_MARKERS: tuple[str, ...] = ("g", "ml")

OVERLOAD_THRESHOLD = 1.0


class LoadStatus(Enum):
    """Risk classification of a FODMAP load."""

    SAFE = "safe"
    MODERATE = "moderate"
    HIGH = "high"


def is_mass_or_volume_unit(unit: str) -> bool:
    unit_lower = unit.lower()
    return any(marker in unit_lower for marker in MASS_VOLUME_MARKERS)


def default_amount(food: FoodItem) -> float:
    """Default portion when a food is added to a meal.

    The safe amount when one is known, otherwise 100 for mass/volume units
    and 1 for count units.
    """
    if food.safe_amount > 0:
        return food.safe_amount
    return 100.0 if is_mass_or_volume_unit(food.unit) else 1.0


def item_load(item: MealItem) -> float:
    """Load ratio of a single item (0 without FODMAPs or a safe amount)."""
    food = item.food
    if not food.has_fodmaps or food.safe_amount <= 0:
        return 0.0
    return item.current_amount / food.safe_amount


def item_calories(item: MealItem) -> float:
    basis = item.food.calorie_basis
    if is_mass_or_volume_unit(item.food.unit):
        calories = (item.current_amount / 100.0) * basis
    else:
        calories = item.current_amount * basis
    return calories if math.isfinite(calories) else 0.0


def calculate_meal_calories(meal: Meal) -> float:
    """Total calories of a meal, unrounded."""
    return sum((item_calories(item) for item in meal.items), 0.0)


def calculate_fodmap_loads(
    meal: Meal,
) -> tuple[dict[FodmapType, float], dict[str, float]]:
    """Calculate aggregate and individual FODMAP loads.

    Args:
        meal: Meal to evaluate

    Returns:
        (fodmap_loads, individual_loads) where ``fodmap_loads`` maps each
        FODMAP type present to its summed load ratio, in first-encountered
        order, and ``individual_loads`` maps each instance id to its load as
        a percentage.
    """
    fodmap_loads: dict[FodmapType, float] = {}
    individual_loads: dict[str, float] = {}

    for item in meal.items:
        load = item_load(item)
        individual_loads[item.instance_id] = load * 100.0

        if load <= 0:
            continue
        # A food listing the same type twice still counts once
        for fodmap_type in dict.fromkeys(item.food.fodmap_types):
            fodmap_loads[fodmap_type] = fodmap_loads.get(fodmap_type, 0.0) + load

    return fodmap_loads, individual_loads


def classify_load(
    load: float,
    warning_threshold: float = 0.75,
    danger_threshold: float = 1.0,
) -> LoadStatus:
    """Classify a load ratio as safe, moderate or high risk."""
    percentage = round_half_up(load * 100)
    if percentage > danger_threshold * 100:
        return LoadStatus.HIGH
    if percentage > warning_threshold * 100:
        return LoadStatus.MODERATE
    return LoadStatus.SAFE


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


@dataclass
class MealAnalysis:
    """Computed summary of a single meal.

    Attributes:
        fodmap_loads: Summed load ratio per FODMAP type
        individual_loads: Load percentage per item instance id
        total_calories: Unrounded calorie total
    """

    fodmap_loads: dict[FodmapType, float] = field(default_factory=dict)
    individual_loads: dict[str, float] = field(default_factory=dict)
    total_calories: float = 0.0

    @property
    def display_calories(self) -> int:
        return round_half_up(self.total_calories)

    @property
    def overloaded_types(self) -> list[FodmapType]:
        return [t for t, load in self.fodmap_loads.items() if load > OVERLOAD_THRESHOLD]

    @property
    def has_accumulation_risk(self) -> bool:
        return bool(self.overloaded_types)

    def status(self, fodmap_type: FodmapType) -> LoadStatus:
        return classify_load(self.fodmap_loads.get(fodmap_type, 0.0))

    def to_dict(self) -> dict:
        return {
            "fodmap_loads": {t.value: round(v, 4) for t, v in self.fodmap_loads.items()},
            "individual_loads": {k: round(v, 2) for k, v in self.individual_loads.items()},
            "total_calories": self.display_calories,
        }


def analyze_meal(meal: Meal) -> MealAnalysis:
    """Compute loads and calories for a meal."""
    fodmap_loads, individual_loads = calculate_fodmap_loads(meal)
    return MealAnalysis(
        fodmap_loads=fodmap_loads,
        individual_loads=individual_loads,
        total_calories=calculate_meal_calories(meal),
    )
