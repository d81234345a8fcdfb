"""Weekly plan editing, daily totals and plain-text export.

Plans are rebuilt on every change: each function returns a new plan and
leaves its input untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from lowfodmap.analysis.loads import calculate_meal_calories, round_half_up
from lowfodmap.data.models import DAYS_OF_WEEK, Meal, MealSlot, WeeklyPlan


class CalorieStatus(Enum):
    """How a day's calories compare with the daily goal."""

    GOOD = "good"
    WARNING = "warning"  # above 100% of goal
    HIGH = "high"  # above 115% of goal


@dataclass
class DailyTotal:
    """Calorie total for one day."""

    day: str
    calories: float
    status: CalorieStatus

    @property
    def display_calories(self) -> int:
        return round_half_up(self.calories)


def copy_plan(plan: WeeklyPlan) -> WeeklyPlan:
    return {day: dict(day_plan) for day, day_plan in plan.items()}


def save_meal_to_plan(
    plan: WeeklyPlan,
    meal: Meal,
    days: Iterable[str],
    slot: MealSlot,
) -> WeeklyPlan:
    """Place ``meal`` in ``slot`` for each of ``days``.

    Raises:
        ValueError: If a day is not a weekday name.
    """
    new_plan = copy_plan(plan)
    for day in days:
        if day not in DAYS_OF_WEEK:
            raise ValueError(f"Unknown day '{day}'. Valid: {', '.join(DAYS_OF_WEEK)}")
        new_plan.setdefault(day, {})[slot] = meal
    return new_plan


def update_meal_in_plan(
    plan: WeeklyPlan, day: str, slot: MealSlot, meal: Meal
) -> WeeklyPlan:
    return save_meal_to_plan(plan, meal, [day], slot)


def clear_slot(plan: WeeklyPlan, day: str, slot: MealSlot) -> WeeklyPlan:
    """Remove one slot; a day left without slots is removed too."""
    if slot not in plan.get(day, {}):
        return plan

    new_plan = copy_plan(plan)
    del new_plan[day][slot]
    if not new_plan[day]:
        del new_plan[day]
    return new_plan


def day_calories(plan: WeeklyPlan, day: str) -> float:
    return sum(
        (calculate_meal_calories(meal) for meal in plan.get(day, {}).values()),
        0.0,
    )


def calorie_status(calories: float, goal: float) -> CalorieStatus:
    if goal <= 0:
        return CalorieStatus.GOOD
    percentage = calories / goal * 100
    if percentage > 115:
        return CalorieStatus.HIGH
    if percentage > 100:
        return CalorieStatus.WARNING
    return CalorieStatus.GOOD


def daily_totals(plan: WeeklyPlan, goal: float) -> list[DailyTotal]:
    """Calorie total and status for every day of the week."""
    totals = []
    for day in DAYS_OF_WEEK:
        calories = day_calories(plan, day)
        totals.append(DailyTotal(day=day, calories=calories, status=calorie_status(calories, goal)))
    return totals


def format_amount(amount: float) -> str:
    return f"{amount:g}"


def format_plan_text(plan: WeeklyPlan) -> str:
    """Render the plan as plain text, days and slots in calendar order."""
    lines = ["My Weekly Meal Plan", "=" * 19, ""]

    for day in DAYS_OF_WEEK:
        day_plan = plan.get(day)
        if not day_plan:
            continue

        total = round_half_up(day_calories(plan, day))
        lines.append(f"{day.upper()} ({total} kcal total)")
        lines.append("-" * 20)

        for slot in MealSlot:
            meal = day_plan.get(slot)
            if meal is None or meal.is_empty:
                continue
            lines.append(f"  {slot.label} ({round_half_up(calculate_meal_calories(meal))} kcal):")
            for item in meal.items:
                lines.append(
                    f"    - {item.food.name} ({format_amount(item.current_amount)}{item.food.unit})"
                )
            lines.append("")

    return "\n".join(lines).strip()
