"""Meal load and calorie analysis."""

from __future__ import annotations

from lowfodmap.analysis.loads import (
    LoadStatus,
    MealAnalysis,
    analyze_meal,
    calculate_fodmap_loads,
    calculate_meal_calories,
    classify_load,
    default_amount,
    is_mass_or_volume_unit,
)

__all__ = [
    "LoadStatus",
    "MealAnalysis",
    "analyze_meal",
    "calculate_fodmap_loads",
    "calculate_meal_calories",
    "classify_load",
    "default_amount",
    "is_mass_or_volume_unit",
]
