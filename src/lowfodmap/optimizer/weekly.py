"""Weekly plan generation from user food preferences.

For every day and slot, a candidate meal is drawn from the foods the user
prefers for that slot and then refined (see ``refine.py``) to fit the slot's
calorie band without overloading any FODMAP type.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from lowfodmap.data.catalog import FoodCatalog
from lowfodmap.data.models import (
    DAYS_OF_WEEK,
    DayPlan,
    FoodPreferences,
    Meal,
    MealSlot,
    WeeklyPlan,
)
from lowfodmap.optimizer.models import (
    DEFAULT_DAILY_CALORIE_GOAL,
    CalorieTarget,
    OptimizerSettings,
    SlotReport,
    WeeklyPlanResult,
)
from lowfodmap.optimizer.refine import refine_meal
from lowfodmap.templates.assembler import draw_from_preferences

logger = logging.getLogger(__name__)

SNACK_ITEM_COUNT = 2
MAIN_ITEM_COUNTS = (3, 4)


def resolve_daily_goal(daily_goal: Optional[float]) -> float:
    """Return the goal to plan for, defaulting when unset or zero.

    Raises:
        ValueError: If the goal is negative.
    """
    if daily_goal is None or daily_goal == 0:
        return DEFAULT_DAILY_CALORIE_GOAL
    if daily_goal < 0:
        raise ValueError(f"Daily calorie goal must be positive, got {daily_goal}")
    return float(daily_goal)


def target_item_count(slot: MealSlot, rng: random.Random) -> int:
    if slot.is_snack:
        return SNACK_ITEM_COUNT
    return rng.choice(MAIN_ITEM_COUNTS)


def plan_slot(
    day: str,
    catalog: FoodCatalog,
    preferred_ids: Iterable[str],
    target: CalorieTarget,
    rng: random.Random,
    settings: OptimizerSettings,
) -> Optional[SlotReport]:
    """Draw and refine one slot's meal.

    Returns None when none of the preferred foods is in the catalog, which
    leaves the slot unplanned.
    """
    preferred_ids = list(preferred_ids)
    if not any(food_id in catalog for food_id in preferred_ids):
        return None

    count = target_item_count(target.slot, rng)
    seed: Meal = draw_from_preferences(catalog, preferred_ids, count, rng)
    result = refine_meal(seed, target, settings)
    return SlotReport(day=day, slot=target.slot, target=target, result=result)


def generate_weekly_plan(
    catalog: FoodCatalog,
    preferences: FoodPreferences,
    daily_goal: Optional[float] = None,
    rng: Optional[random.Random] = None,
    settings: Optional[OptimizerSettings] = None,
    days: Iterable[str] = DAYS_OF_WEEK,
) -> WeeklyPlanResult:
    """Generate a balanced weekly plan.

    Args:
        catalog: Catalog snapshot to draw foods from
        preferences: Preferred food ids per slot
        daily_goal: Daily calorie goal (2000 if unset)
        rng: Random source (a fresh unseeded one if None)
        settings: Refinement loop tuning
        days: Day names to plan, in order

    Returns:
        WeeklyPlanResult. Slots without eligible foods, and days without any
        planned slot, are absent from the plan.
    """
    goal = resolve_daily_goal(daily_goal)
    rng = rng or random.Random()
    settings = settings or OptimizerSettings()

    for slot, food_ids in preferences.items():
        unknown = [fid for fid in food_ids if fid not in catalog]
        if unknown:
            logger.warning(
                "Ignoring %d preferred %s foods not in catalog: %s",
                len(unknown),
                slot.value,
                ", ".join(sorted(unknown)),
            )

    plan: WeeklyPlan = {}
    reports: list[SlotReport] = []

    for day in days:
        day_plan: DayPlan = {}
        for slot in MealSlot:
            target = CalorieTarget.for_slot(slot, goal, settings.calorie_tolerance)
            report = plan_slot(
                day, catalog, preferences.get(slot, ()), target, rng, settings
            )
            if report is None:
                continue
            day_plan[slot] = report.result.meal
            reports.append(report)

        if day_plan:
            plan[day] = day_plan

    not_converged = sum(1 for r in reports if not r.result.converged)
    logger.info(
        "Generated plan: %d days, %d meals, %d not fully balanced",
        len(plan),
        len(reports),
        not_converged,
    )
    return WeeklyPlanResult(plan=plan, reports=reports)
