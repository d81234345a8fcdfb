"""Conversion of meals, plans and preferences to and from plain dicts.

Foods are referenced by id so a saved plan stays small; loading a plan
resolves ids against a catalog, skipping (and logging) ids it lacks.

Plan format:

    {
      "Monday": {
        "breakfast": [{"food_id": "rolled-oats", "amount": 52}, ...],
        ...
      },
      ...
    }
"""

from __future__ import annotations

import logging
from typing import Any

from lowfodmap.data.catalog import FoodCatalog
from lowfodmap.data.models import (
    DAYS_OF_WEEK,
    FoodPreferences,
    Meal,
    MealSlot,
    WeeklyPlan,
    parse_slot,
)
from lowfodmap.templates.assembler import expand_items

logger = logging.getLogger(__name__)


def meal_to_dict(meal: Meal) -> list[dict[str, Any]]:
    return [
        {
            "instance_id": item.instance_id,
            "food_id": item.food.id,
            "name": item.food.name,
            "amount": item.current_amount,
            "unit": item.food.unit,
        }
        for item in meal.items
    ]


def meal_from_dict(data: list[dict[str, Any]], catalog: FoodCatalog) -> Meal:
    """Rebuild a meal (with fresh instance ids) from its dict form.

    Raises:
        ValueError: If an entry lacks ``food_id`` or ``amount``.
    """
    pairs = []
    for entry in data:
        try:
            pairs.append((str(entry["food_id"]), float(entry["amount"])))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid meal entry {entry}: {e}") from e
    return expand_items(pairs, catalog)


def plan_to_dict(plan: WeeklyPlan) -> dict[str, dict[str, list[dict[str, Any]]]]:
    """Serialize a plan, days and slots in calendar order."""
    data: dict[str, dict[str, list[dict[str, Any]]]] = {}
    ordered_days = [d for d in DAYS_OF_WEEK if d in plan]
    ordered_days += [d for d in plan if d not in DAYS_OF_WEEK]

    for day in ordered_days:
        day_plan = plan[day]
        data[day] = {
            slot.value: meal_to_dict(day_plan[slot]) for slot in MealSlot if slot in day_plan
        }
    return data


def plan_from_dict(data: dict[str, Any], catalog: FoodCatalog) -> WeeklyPlan:
    """Rebuild a plan from its dict form.

    Unknown days are kept as given. A slot whose entries all fail to resolve
    is left unplanned; an empty entry list stays an empty meal.

    Raises:
        ValueError: If a slot name is not recognised.
    """
    plan: WeeklyPlan = {}
    for day, slots in data.items():
        if day not in DAYS_OF_WEEK:
            logger.warning("Plan contains unknown day '%s'", day)
        day_plan = {}
        for slot_name, entries in (slots or {}).items():
            slot = parse_slot(slot_name)
            entries = entries or []
            meal = meal_from_dict(entries, catalog)
            if entries and meal.is_empty:
                logger.warning("No food in %s %s resolved; slot left unplanned", day, slot.value)
                continue
            day_plan[slot] = meal
        if day_plan:
            plan[day] = day_plan
    return plan


def preferences_from_dict(data: dict[str, Any]) -> FoodPreferences:
    """Parse ``{slot: [food ids]}`` into FoodPreferences.

    Raises:
        ValueError: If a slot name is not recognised.
    """
    preferences: FoodPreferences = {}
    for slot_name, food_ids in (data or {}).items():
        preferences[parse_slot(slot_name)] = {str(fid) for fid in food_ids or []}
    return preferences


def preferences_to_dict(preferences: FoodPreferences) -> dict[str, list[str]]:
    return {
        slot.value: sorted(preferences[slot]) for slot in MealSlot if slot in preferences
    }
