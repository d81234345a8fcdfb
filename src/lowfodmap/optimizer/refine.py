"""Bounded refinement of a meal's portions.

Each iteration evaluates the current meal snapshot and applies at most one
correction, producing a new snapshot:

1. Overload: if any FODMAP type's load exceeds the threshold, the first such
   type (in encounter order) is picked and its single largest contributor is
   reduced by ``reduction_step``. Items reduced to zero leave the meal.
2. Over calories: every portion is scaled by ``high / calories``.
3. Under calories: every portion is scaled by ``low / calories``; a ratio
   that is not finite and positive ends the loop.
4. Otherwise the portions are rounded to whole numbers. The rounded meal is
   accepted if it is non-empty and still passes checks 1 to 3; if not, the
   loop carries on from the rounded meal.

Overload always wins over calorie fitting. The loop is capped at
``max_iterations`` and returns its last snapshot when the cap is hit, which
may still violate a constraint.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from lowfodmap.analysis.loads import (
    calculate_fodmap_loads,
    calculate_meal_calories,
    round_half_up,
)
from lowfodmap.data.models import FodmapType, Meal
from lowfodmap.optimizer.models import (
    CalorieTarget,
    OptimizerSettings,
    RefinementOutcome,
    RefinementResult,
)

logger = logging.getLogger(__name__)


def find_overloaded_type(
    fodmap_loads: dict[FodmapType, float], threshold: float
) -> Optional[FodmapType]:
    """First FODMAP type, in encounter order, whose load exceeds ``threshold``."""
    for fodmap_type, load in fodmap_loads.items():
        if load > threshold:
            return fodmap_type
    return None


def reduce_worst_contributor(
    meal: Meal,
    fodmap_type: FodmapType,
    individual_loads: dict[str, float],
    settings: OptimizerSettings,
) -> Optional[Meal]:
    """Reduce the item contributing most to ``fodmap_type``.

    Ties go to the earliest item. Returns None when no item with a positive
    load declares the type.
    """
    contributors = [
        item
        for item in meal.items
        if fodmap_type in item.food.fodmap_types
        and individual_loads.get(item.instance_id, 0.0) > 0
    ]
    if not contributors:
        return None

    # max() keeps the first of equal keys, i.e. insertion order
    worst = max(contributors, key=lambda item: individual_loads[item.instance_id])

    new_amount = worst.current_amount * (1 - settings.reduction_step)
    if settings.round_each_step:
        new_amount = round_half_up(new_amount)
    new_amount = max(new_amount, 0.0)

    logger.debug(
        "Reducing '%s' for %s: %.2f -> %.2f",
        worst.food.id,
        fodmap_type.value,
        worst.current_amount,
        new_amount,
    )

    items = []
    for item in meal.items:
        if item.instance_id != worst.instance_id:
            items.append(item)
        elif new_amount > 0:
            items.append(item.with_amount(float(new_amount)))
    return Meal.of(items)


def scale_portions(meal: Meal, ratio: float, settings: OptimizerSettings) -> Meal:
    """Scale every portion by ``ratio``, with a floor of 1."""
    amounts = np.array([item.current_amount for item in meal.items], dtype=float)
    scaled = amounts * ratio
    if settings.round_each_step:
        scaled = np.floor(scaled + 0.5)
    scaled = np.maximum(scaled, 1.0)
    return Meal.of(
        item.with_amount(float(amount)) for item, amount in zip(meal.items, scaled)
    )


def commit_meal(meal: Meal) -> Meal:
    """Round portions to integers and drop items with nothing left."""
    items = []
    for item in meal.items:
        amount = round_half_up(item.current_amount)
        if amount > 0:
            items.append(item.with_amount(float(amount)))
    return Meal.of(items)


def meets_constraints(
    meal: Meal, target: CalorieTarget, settings: OptimizerSettings
) -> bool:
    """True when ``meal`` is non-empty, has no overloaded type and fits the band."""
    if meal.is_empty:
        return False
    fodmap_loads, _ = calculate_fodmap_loads(meal)
    if find_overloaded_type(fodmap_loads, settings.overload_threshold) is not None:
        return False
    calories = calculate_meal_calories(meal)
    if calories > target.high:
        return False
    return not (target.target > 0 and calories < target.low)


def refine_meal(
    meal: Meal,
    target: CalorieTarget,
    settings: Optional[OptimizerSettings] = None,
) -> RefinementResult:
    """Adjust portions until FODMAP and calorie constraints hold.

    Args:
        meal: Seed meal (not modified)
        target: Calorie target and band for the slot
        settings: Loop tuning (defaults if None)

    Returns:
        RefinementResult with the committed meal, the number of iterations
        evaluated, and why the loop stopped.
    """
    settings = settings or OptimizerSettings()
    current = meal
    iterations = 0
    outcome = RefinementOutcome.BUDGET_EXHAUSTED

    for iteration in range(1, settings.max_iterations + 1):
        iterations = iteration

        if current.is_empty:
            outcome = RefinementOutcome.EMPTY
            break

        fodmap_loads, individual_loads = calculate_fodmap_loads(current)
        calories = calculate_meal_calories(current)

        overloaded = find_overloaded_type(fodmap_loads, settings.overload_threshold)
        if overloaded is not None:
            reduced = reduce_worst_contributor(
                current, overloaded, individual_loads, settings
            )
            if reduced is None:
                logger.warning(
                    "%s overload reported with no contributing item; stopping refinement",
                    overloaded.value,
                )
                outcome = RefinementOutcome.NO_CONTRIBUTOR
                break
            current = reduced
            continue

        if calories > target.high:
            current = scale_portions(current, target.high / calories, settings)
            continue

        if target.target > 0 and calories < target.low:
            ratio = target.low / calories if calories > 0 else math.inf
            if not math.isfinite(ratio) or ratio <= 0:
                logger.debug("Cannot scale up a %.1f kcal meal; stopping refinement", calories)
                outcome = RefinementOutcome.NON_FINITE_RATIO
                break
            current = scale_portions(current, ratio, settings)
            continue

        # Accept only if the whole-number portions still satisfy every constraint
        rounded = commit_meal(current)
        if meets_constraints(rounded, target, settings):
            current = rounded
            outcome = RefinementOutcome.CONVERGED
            break
        logger.debug("Rounded portions break a constraint; refining the rounded meal")
        current = rounded

    committed = commit_meal(current)
    fodmap_loads, _ = calculate_fodmap_loads(committed)
    result = RefinementResult(
        meal=committed,
        iterations=iterations,
        outcome=outcome,
        total_calories=calculate_meal_calories(committed),
        fodmap_loads=fodmap_loads,
    )

    logger.debug(
        "%s: %s after %d iterations (%.0f kcal, target %.0f)",
        target.slot.value,
        outcome.value,
        iterations,
        result.total_calories,
        target.target,
    )
    return result
