"""Food data models and catalog loading."""

from __future__ import annotations

from lowfodmap.data.catalog import FoodCatalog
from lowfodmap.data.models import (
    DAYS_OF_WEEK,
    DayPlan,
    FodmapInfo,
    FodmapType,
    FoodCategory,
    FoodItem,
    FoodPreferences,
    FructanGroup,
    Meal,
    MealItem,
    MealSlot,
    WeeklyPlan,
)

__all__ = [
    "DAYS_OF_WEEK",
    "DayPlan",
    "FodmapInfo",
    "FodmapType",
    "FoodCatalog",
    "FoodCategory",
    "FoodItem",
    "FoodPreferences",
    "FructanGroup",
    "Meal",
    "MealItem",
    "MealSlot",
    "WeeklyPlan",
]
