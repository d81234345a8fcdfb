"""Built-in meal templates and soup recipes.

Food ids reference the bundled sample catalog. A template expanded against
another catalog simply drops the foods that catalog does not carry.
"""

from __future__ import annotations

from typing import Optional

from lowfodmap.data.models import MealSlot
from lowfodmap.templates.models import MealTemplate, TemplateItem, TemplateKind


def _template(
    template_id: str,
    name: str,
    description: str,
    category: Optional[MealSlot],
    items: list[tuple[str, float]],
    kind: TemplateKind = TemplateKind.RECIPE,
) -> MealTemplate:
    return MealTemplate(
        id=template_id,
        name=name,
        description=description,
        category=category,
        items=tuple(TemplateItem(food_id, amount) for food_id, amount in items),
        kind=kind,
    )


# =============================================================================
# Breakfast
# =============================================================================

BREAKFAST_TEMPLATES = [
    _template(
        "breakfast-bread-fruit",
        "Bread and Fruit",
        "A classic, balanced way to start the day.",
        MealSlot.BREAKFAST,
        [("gluten-free-bread", 52), ("feta", 40), ("orange", 130)],
    ),
    _template(
        "breakfast-porridge",
        "Porridge",
        "Warm oat porridge with blueberries and chia seeds.",
        MealSlot.BREAKFAST,
        [("rolled-oats", 52), ("blueberries", 40), ("chia-seeds", 24)],
    ),
    _template(
        "breakfast-green-smoothie",
        "Green Smoothie",
        "A quick, nutritious smoothie to take away.",
        MealSlot.BREAKFAST,
        [("banana-unripe", 95), ("spinach", 40), ("almond-milk", 200), ("flax-seeds", 15)],
    ),
    _template(
        "breakfast-eggs-spinach",
        "Scrambled Eggs with Spinach",
        "A protein-rich breakfast.",
        MealSlot.BREAKFAST,
        [("egg", 2), ("spinach", 75), ("gluten-free-bread", 52)],
    ),
    _template(
        "breakfast-yogurt-walnuts",
        "Yogurt with Banana and Walnuts",
        "Creamy and crunchy, full of energy.",
        MealSlot.BREAKFAST,
        [("lactose-free-yogurt", 170), ("banana-unripe", 50), ("walnuts", 30)],
    ),
]

# =============================================================================
# Lunch and dinner
# =============================================================================

LUNCH_TEMPLATES = [
    _template(
        "lunch-chicken-rice",
        "Chicken and Rice",
        "Protein, carbohydrate and vegetables in one plate.",
        MealSlot.LUNCH,
        [("chicken-breast", 150), ("white-rice", 190), ("broccoli-heads", 75)],
    ),
    _template(
        "lunch-salmon-quinoa",
        "Salmon and Quinoa",
        "A tasty lunch rich in omega-3.",
        MealSlot.LUNCH,
        [("salmon", 150), ("quinoa", 155), ("zucchini", 65)],
    ),
    _template(
        "lunch-tofu-noodles",
        "Tofu Noodle Bowl",
        "Firm tofu with rice noodles and carrot.",
        MealSlot.LUNCH,
        [("firm-tofu", 170), ("rice-noodles", 200), ("carrot", 75)],
    ),
]

DINNER_TEMPLATES = [
    _template(
        "dinner-fish-potato",
        "White Fish with Potato",
        "A light dinner with baked fish and green beans.",
        MealSlot.DINNER,
        [("white-fish", 150), ("potato", 200), ("green-beans", 75)],
    ),
    _template(
        "dinner-turkey-pumpkin",
        "Turkey with Roast Pumpkin",
        "Lean turkey, roast pumpkin and rice.",
        MealSlot.DINNER,
        [("turkey-breast", 150), ("pumpkin-kent", 75), ("white-rice", 150)],
    ),
    _template(
        "dinner-lentil-bowl",
        "Lentil and Quinoa Bowl",
        "Vegetarian bowl with canned lentils and spinach.",
        MealSlot.DINNER,
        [("canned-lentils", 46), ("quinoa", 155), ("spinach", 75), ("feta", 30)],
    ),
]

# =============================================================================
# Snacks
# =============================================================================

SNACK_TEMPLATES = [
    _template(
        "snack-yogurt-berries",
        "Yogurt with Strawberries",
        "A light, refreshing snack.",
        MealSlot.SNACKS,
        [("lactose-free-yogurt", 170), ("strawberries", 65)],
    ),
    _template(
        "snack-kiwi-macadamia",
        "Kiwi and Macadamias",
        "Fruit with a handful of nuts.",
        MealSlot.SNACKS,
        [("kiwi", 150), ("macadamias", 20)],
    ),
    _template(
        "snack-chocolate",
        "Dark Chocolate",
        "A small treat.",
        MealSlot.AFTERNOON_SNACK,
        [("dark-chocolate", 20)],
    ),
]

# =============================================================================
# Soups
# =============================================================================

SOUP_TEMPLATES = [
    _template(
        "soup-pumpkin",
        "Pumpkin Soup",
        "Creamy roast pumpkin soup with carrot.",
        None,
        [("pumpkin-kent", 75), ("carrot", 75), ("potato", 100), ("vegetable-stock", 300)],
        kind=TemplateKind.SOUP,
    ),
    _template(
        "soup-chicken-noodle",
        "Chicken Noodle Soup",
        "Clear broth with chicken, rice noodles and leek leaves.",
        None,
        [("chicken-breast", 100), ("rice-noodles", 100), ("leek-leaves", 55), ("vegetable-stock", 350)],
        kind=TemplateKind.SOUP,
    ),
    _template(
        "soup-green",
        "Green Vegetable Soup",
        "Zucchini, spinach and potato soup. Some versions use leek whites; keep to the leaves.",
        None,
        [("zucchini", 65), ("spinach", 75), ("potato", 120), ("olive-oil", 10), ("vegetable-stock", 300)],
        kind=TemplateKind.SOUP,
    ),
]


TEMPLATE_REGISTRY: dict[str, MealTemplate] = {
    t.id: t
    for t in [
        *BREAKFAST_TEMPLATES,
        *LUNCH_TEMPLATES,
        *DINNER_TEMPLATES,
        *SNACK_TEMPLATES,
        *SOUP_TEMPLATES,
    ]
}


def get_template(template_id: str) -> MealTemplate | None:
    """Get a template by id.

    Args:
        template_id: Template id (e.g., "lunch-chicken-rice")

    Returns:
        MealTemplate or None if not found.
    """
    return TEMPLATE_REGISTRY.get(template_id.lower())


def list_templates(category: Optional[MealSlot] = None) -> list[MealTemplate]:
    """Return templates, optionally only those meant for ``category``."""
    templates = list(TEMPLATE_REGISTRY.values())
    if category is None:
        return templates
    return [t for t in templates if t.category == category]


def soup_templates() -> list[MealTemplate]:
    """Return all soup recipes."""
    return [t for t in TEMPLATE_REGISTRY.values() if t.kind == TemplateKind.SOUP]
