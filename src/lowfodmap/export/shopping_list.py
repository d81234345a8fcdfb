"""Shopping list generator from a weekly plan.

Aggregates portions per food across all days and slots, groups them by
food category and produces a checklist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from lowfodmap.data.models import FoodCategory, FoodItem, WeeklyPlan
from lowfodmap.plan.weekly import format_amount


@dataclass
class ShoppingItem:
    """A single item on the shopping list."""

    food: FoodItem
    total_amount: float

    @property
    def name(self) -> str:
        return self.food.name

    @property
    def unit(self) -> str:
        return self.food.unit


@dataclass
class ShoppingList:
    """Shopping list grouped by category."""

    items_by_category: dict[FoodCategory, list[ShoppingItem]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.items_by_category

    def categories(self) -> list[FoodCategory]:
        """Categories present, in alphabetical order of their labels."""
        return sorted(self.items_by_category, key=lambda c: c.label)


def generate_shopping_list(plan: WeeklyPlan) -> ShoppingList:
    """Aggregate every planned portion into a shopping list.

    Args:
        plan: Weekly plan

    Returns:
        ShoppingList with items sorted by name within each category
    """
    totals: dict[str, ShoppingItem] = {}

    for day_plan in plan.values():
        for meal in day_plan.values():
            for meal_item in meal.items:
                food = meal_item.food
                if food.id in totals:
                    totals[food.id].total_amount += meal_item.current_amount
                else:
                    totals[food.id] = ShoppingItem(
                        food=food, total_amount=meal_item.current_amount
                    )

    items_by_category: dict[FoodCategory, list[ShoppingItem]] = {}
    for item in totals.values():
        items_by_category.setdefault(item.food.category, []).append(item)

    for items in items_by_category.values():
        items.sort(key=lambda i: i.name.lower())

    return ShoppingList(items_by_category=items_by_category)


def format_shopping_list(
    shopping_list: ShoppingList,
    purchased: Optional[Iterable[str]] = None,
) -> str:
    """Format pending items as plain text.

    Args:
        shopping_list: List to render
        purchased: Food ids already bought (left out of the output)
    """
    bought = set(purchased or ())
    lines = ["My Weekly Shopping List (Pending Items)", "=" * 39, ""]
    has_pending = False

    for category in shopping_list.categories():
        pending = [
            i for i in shopping_list.items_by_category[category] if i.food.id not in bought
        ]
        if not pending:
            continue

        has_pending = True
        lines.append(category.label.upper())
        for item in pending:
            lines.append(f"- [ ] {item.name}: {format_amount(item.total_amount)} {item.unit}")
        lines.append("")

    if not has_pending:
        return "All items have been purchased!"
    return "\n".join(lines).strip()


def shopping_list_to_dict(shopping_list: ShoppingList) -> dict:
    """Convert shopping list to dict for JSON output."""
    return {
        "categories": {
            category.value: [
                {
                    "food_id": item.food.id,
                    "name": item.name,
                    "total_amount": round(item.total_amount, 2),
                    "unit": item.unit,
                }
                for item in shopping_list.items_by_category[category]
            ]
            for category in shopping_list.categories()
        }
    }
