"""Bundled sample catalog of common low-FODMAP foods.

Safe amounts are the largest serving rated low for the listed FODMAPs.
Calories are per 100 g/ml, or per unit for count-based foods. Foods with no
FODMAPs carry a safe amount of 0 (no known limit).
"""

from __future__ import annotations

from lowfodmap.data.catalog import FoodCatalog
from lowfodmap.data.models import (
    FodmapInfo,
    FodmapType,
    FoodCategory,
    FoodItem,
    FructanGroup,
)

_FRUCTANS_FV = FodmapInfo(FodmapType.FRUCTANS, FructanGroup.FRUIT_VEG)
_FRUCTANS_CEREAL = FodmapInfo(FodmapType.FRUCTANS, FructanGroup.CEREAL)
_FRUCTOSE = FodmapInfo(FodmapType.FRUCTOSE)
_SORBITOL = FodmapInfo(FodmapType.SORBITOL)
_MANNITOL = FodmapInfo(FodmapType.MANNITOL)
_GOS = FodmapInfo(FodmapType.GOS)
_LACTOSE = FodmapInfo(FodmapType.LACTOSE)


def _food(food_id, name, category, unit, calories, safe_amount=0.0, fodmaps=()):
    return FoodItem(
        id=food_id,
        name=name,
        category=category,
        unit=unit,
        calories=calories,
        safe_amount=safe_amount,
        fodmaps=tuple(fodmaps),
    )


SAMPLE_FOODS: list[FoodItem] = [
    # Protein
    _food("chicken-breast", "Chicken breast", FoodCategory.PROTEIN, "g", 165),
    _food("salmon", "Salmon fillet", FoodCategory.PROTEIN, "g", 208),
    _food("egg", "Egg", FoodCategory.PROTEIN, "unit", 72),
    _food("turkey-breast", "Turkey breast", FoodCategory.PROTEIN, "g", 135),
    _food("white-fish", "White fish (cod)", FoodCategory.PROTEIN, "g", 82),
    # Fruit
    _food("banana-unripe", "Banana, unripe", FoodCategory.FRUIT, "g", 89, 100, [_FRUCTANS_FV]),
    _food("banana-ripe", "Banana, ripe", FoodCategory.FRUIT, "g", 89, 35, [_FRUCTANS_FV]),
    _food("blueberries", "Blueberries", FoodCategory.FRUIT, "g", 57, 125, [_FRUCTOSE]),
    _food("orange", "Orange, navel", FoodCategory.FRUIT, "g", 47, 130, [_FRUCTANS_FV]),
    _food("kiwi", "Kiwi, green", FoodCategory.FRUIT, "g", 61, 150, [_FRUCTOSE]),
    _food("strawberries", "Strawberries", FoodCategory.FRUIT, "g", 32, 65, [_FRUCTOSE]),
    # Vegetable
    _food("spinach", "Spinach, baby", FoodCategory.VEGETABLE, "g", 23, 75, [_FRUCTANS_FV]),
    _food("broccoli-heads", "Broccoli heads", FoodCategory.VEGETABLE, "g", 34, 75, [_FRUCTOSE]),
    _food("carrot", "Carrot", FoodCategory.VEGETABLE, "g", 41),
    _food("zucchini", "Zucchini", FoodCategory.VEGETABLE, "g", 17, 65, [_FRUCTANS_FV]),
    _food("pumpkin-kent", "Pumpkin, Kent", FoodCategory.VEGETABLE, "g", 26, 75, [_MANNITOL]),
    _food("potato", "Potato", FoodCategory.VEGETABLE, "g", 77),
    _food("green-beans", "Green beans", FoodCategory.VEGETABLE, "g", 31, 75, [_SORBITOL]),
    _food("leek-leaves", "Leek leaves", FoodCategory.VEGETABLE, "g", 31, 55, [_FRUCTANS_FV]),
    # Cereal
    _food("rolled-oats", "Rolled oats", FoodCategory.CEREAL, "g", 389, 52, [_FRUCTANS_CEREAL, _GOS]),
    _food("white-rice", "White rice, cooked", FoodCategory.CEREAL, "g", 130),
    _food("quinoa", "Quinoa, cooked", FoodCategory.CEREAL, "g", 120, 155, [_FRUCTANS_CEREAL]),
    _food("gluten-free-bread", "Gluten-free bread", FoodCategory.CEREAL, "g", 250, 52, [_FRUCTANS_CEREAL]),
    _food("sourdough-spelt", "Sourdough spelt bread", FoodCategory.CEREAL, "g", 245, 52, [_FRUCTANS_CEREAL]),
    _food("rice-noodles", "Rice noodles, cooked", FoodCategory.CEREAL, "g", 109),
    # Dairy
    _food("lactose-free-yogurt", "Lactose-free yogurt", FoodCategory.DAIRY, "g", 60, 170, [_LACTOSE]),
    _food("feta", "Feta cheese", FoodCategory.DAIRY, "g", 264, 40, [_LACTOSE]),
    _food("almond-milk", "Almond milk", FoodCategory.DAIRY, "ml", 17, 250, [_GOS]),
    _food("cheddar", "Cheddar cheese", FoodCategory.DAIRY, "g", 403),
    # Seeds
    _food("chia-seeds", "Chia seeds", FoodCategory.SEEDS, "g", 486, 24, [_FRUCTANS_FV]),
    _food("flax-seeds", "Flax seeds", FoodCategory.SEEDS, "g", 534, 15, [_FRUCTANS_FV]),
    _food("pumpkin-seeds", "Pumpkin seeds", FoodCategory.SEEDS, "g", 559, 23, [_FRUCTANS_FV]),
    # Spreads
    _food("peanut-butter", "Peanut butter", FoodCategory.SPREADS, "g", 588, 50, [_FRUCTANS_FV]),
    _food("strawberry-jam", "Strawberry jam", FoodCategory.SPREADS, "g", 250, 40, [_FRUCTOSE]),
    # Nuts
    _food("walnuts", "Walnuts", FoodCategory.NUTS, "g", 654, 30, [_FRUCTANS_FV]),
    _food("macadamias", "Macadamia nuts", FoodCategory.NUTS, "g", 718, 40, [_FRUCTANS_FV]),
    _food("almonds", "Almonds", FoodCategory.NUTS, "g", 579, 12, [_GOS]),
    # Legumes
    _food("canned-lentils", "Lentils, canned", FoodCategory.LEGUMES, "g", 116, 46, [_GOS]),
    _food("canned-chickpeas", "Chickpeas, canned", FoodCategory.LEGUMES, "g", 139, 42, [_GOS]),
    # Vegetarian substitutes
    _food("firm-tofu", "Tofu, firm", FoodCategory.VEGETARIAN_SUBSTITUTES, "g", 144, 170, [_GOS]),
    _food("tempeh", "Tempeh", FoodCategory.VEGETARIAN_SUBSTITUTES, "g", 192, 100, [_GOS]),
    # Sweets
    _food("dark-chocolate", "Dark chocolate", FoodCategory.SWEETS, "g", 546, 30, [_FRUCTANS_FV]),
    _food("maple-syrup", "Maple syrup", FoodCategory.SWEETS, "ml", 260),
    # Other
    _food("olive-oil", "Olive oil", FoodCategory.OTHER, "ml", 884),
    _food("vegetable-stock", "Vegetable stock (onion-free)", FoodCategory.OTHER, "ml", 5),
]


def sample_catalog() -> FoodCatalog:
    """Return the bundled sample catalog."""
    return FoodCatalog(SAMPLE_FOODS)
