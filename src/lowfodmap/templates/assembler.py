"""Meal assembly: template expansion, category shuffles and builder edits.

Every function returns a fresh Meal. New items always get new instance ids,
even when the same food appears twice or a meal is rebuilt from the same
template.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from lowfodmap.analysis.loads import default_amount
from lowfodmap.data.catalog import FoodCatalog
from lowfodmap.data.models import FoodCategory, FoodItem, Meal, MealItem, MealSlot
from lowfodmap.templates.models import (
    MealTemplate,
    ShuffleOption,
    ShuffleRule,
    TemplateItem,
)

logger = logging.getLogger(__name__)

DEFAULT_SOUP_PROBABILITY = 0.4

BREAKFAST_RULE = ShuffleRule(
    categories=frozenset([
        FoodCategory.PROTEIN,
        FoodCategory.FRUIT,
        FoodCategory.CEREAL,
        FoodCategory.DAIRY,
        FoodCategory.SEEDS,
        FoodCategory.SPREADS,
    ]),
    min_items=2,
    max_items=4,
)

MAIN_MEAL_RULE = ShuffleRule(
    categories=frozenset([
        FoodCategory.PROTEIN,
        FoodCategory.VEGETABLE,
        FoodCategory.CEREAL,
        FoodCategory.LEGUMES,
        FoodCategory.VEGETARIAN_SUBSTITUTES,
    ]),
    min_items=3,
    max_items=4,
)

SNACK_RULE = ShuffleRule(
    categories=frozenset([
        FoodCategory.FRUIT,
        FoodCategory.NUTS,
        FoodCategory.SEEDS,
        FoodCategory.CEREAL,
        FoodCategory.DAIRY,
        FoodCategory.SWEETS,
    ]),
    min_items=1,
    max_items=2,
)

DEFAULT_RULE = ShuffleRule(
    categories=frozenset([
        FoodCategory.PROTEIN,
        FoodCategory.FRUIT,
        FoodCategory.VEGETABLE,
        FoodCategory.CEREAL,
    ]),
    min_items=3,
    max_items=4,
)

SHUFFLE_RULES: dict[ShuffleOption, ShuffleRule] = {
    ShuffleOption.BREAKFAST: BREAKFAST_RULE,
    ShuffleOption.LUNCH: MAIN_MEAL_RULE,
    ShuffleOption.DINNER: MAIN_MEAL_RULE,
    ShuffleOption.SNACKS: SNACK_RULE,
    ShuffleOption.AFTERNOON_SNACK: SNACK_RULE,
}

SOUP_ELIGIBLE_OPTIONS = frozenset([ShuffleOption.LUNCH, ShuffleOption.DINNER])


def get_shuffle_rule(option: ShuffleOption) -> ShuffleRule:
    return SHUFFLE_RULES.get(option, DEFAULT_RULE)


def instantiate(food: FoodItem, amount: Optional[float] = None) -> MealItem:
    """Create a new meal item, at the default portion unless ``amount`` is given."""
    if amount is None:
        amount = default_amount(food)
    return MealItem(food=food, current_amount=amount)


def expand_items(
    items: Iterable[TemplateItem | tuple[str, float]],
    catalog: FoodCatalog,
) -> Meal:
    """Resolve (food id, amount) pairs against the catalog.

    Food ids missing from the catalog are skipped with a warning; the
    remaining items still make up the meal.
    """
    meal_items: list[MealItem] = []
    for entry in items:
        if isinstance(entry, TemplateItem):
            food_id, amount = entry.food_id, entry.amount
        else:
            food_id, amount = entry

        food = catalog.get(food_id)
        if food is None:
            logger.warning("Food with id '%s' not found in catalog, skipping", food_id)
            continue
        meal_items.append(instantiate(food, float(amount)))

    return Meal.of(meal_items)


def expand_template(template: MealTemplate, catalog: FoodCatalog) -> Meal:
    """Build a meal from a template's fixed portions."""
    meal = expand_items(template.items, catalog)
    logger.debug(
        "Expanded template '%s': %d of %d items resolved",
        template.id,
        len(meal),
        len(template.items),
    )
    return meal


def draw_meal(
    pool: Iterable[FoodItem],
    count: int,
    rng: random.Random,
) -> Meal:
    """Permute ``pool`` and keep the first ``count`` foods at default portions."""
    candidates = list(pool)
    rng.shuffle(candidates)
    return Meal.of(instantiate(food) for food in candidates[:count])


def draw_from_preferences(
    catalog: FoodCatalog,
    preferred_ids: Iterable[str],
    count: int,
    rng: random.Random,
) -> Meal:
    """Draw a meal restricted to the user's preferred foods for a slot."""
    return draw_meal(catalog.by_ids(preferred_ids), count, rng)


def shuffle_meal(
    catalog: FoodCatalog,
    option: ShuffleOption | MealSlot,
    rng: random.Random,
    soups: Optional[list[MealTemplate]] = None,
    soup_probability: float = DEFAULT_SOUP_PROBABILITY,
) -> Meal:
    """Build a random meal of meal-worthy foods for a slot.

    Lunch and dinner are replaced by a soup recipe with probability
    ``soup_probability``; a SOUP request always tries a soup first. When no
    soup resolves against the catalog, a category shuffle is used instead.

    Args:
        catalog: Foods to draw from
        option: Slot (or SOUP) to build a meal for
        rng: Random source
        soups: Soup recipes to choose from (empty or None disables soups)
        soup_probability: Chance of a soup for lunch and dinner

    Returns:
        A new Meal; empty if no catalog food is eligible.
    """
    if isinstance(option, MealSlot):
        option = ShuffleOption.from_slot(option)

    if soups:
        wants_soup = option == ShuffleOption.SOUP or (
            option in SOUP_ELIGIBLE_OPTIONS and rng.random() < soup_probability
        )
        if wants_soup:
            soup = rng.choice(soups)
            meal = expand_template(soup, catalog)
            if not meal.is_empty:
                return meal
            logger.debug("Soup '%s' has no foods in catalog, shuffling instead", soup.id)

    rule = get_shuffle_rule(option)
    eligible = catalog.by_category(rule.categories)
    if not eligible:
        return Meal()

    rng.shuffle(eligible)
    count = rng.randint(rule.min_items, rule.max_items)
    return Meal.of(instantiate(food) for food in eligible[:count])


# =============================================================================
# Builder edits
# =============================================================================


def add_food(meal: Meal, food: FoodItem, amount: Optional[float] = None) -> Meal:
    """Append a new item for ``food``, always with a fresh instance id."""
    return Meal.of([*meal.items, instantiate(food, amount)])


def remove_item(meal: Meal, instance_id: str) -> Meal:
    return Meal.of(item for item in meal.items if item.instance_id != instance_id)


def update_amount(meal: Meal, instance_id: str, amount: float) -> Meal:
    """Set the portion of one item.

    Raises:
        ValueError: If ``amount`` is negative.
    """
    if amount < 0:
        raise ValueError(f"Amount must be >= 0, got {amount}")
    return Meal.of(
        item.with_amount(amount) if item.instance_id == instance_id else item
        for item in meal.items
    )


def clear_meal() -> Meal:
    return Meal()


def reinstantiate(meal: Meal) -> Meal:
    """Copy a meal with fresh instance ids for every item."""
    return Meal.of(instantiate(item.food, item.current_amount) for item in meal.items)
