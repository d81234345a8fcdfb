"""Weekly plan editing, totals and meal history."""

from __future__ import annotations

from lowfodmap.plan.history import MealHistory
from lowfodmap.plan.weekly import (
    CalorieStatus,
    DailyTotal,
    clear_slot,
    daily_totals,
    format_plan_text,
    save_meal_to_plan,
    update_meal_in_plan,
)

__all__ = [
    "CalorieStatus",
    "DailyTotal",
    "MealHistory",
    "clear_slot",
    "daily_totals",
    "format_plan_text",
    "save_meal_to_plan",
    "update_meal_in_plan",
]
