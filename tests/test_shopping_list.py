"""Tests for shopping list generation."""

from __future__ import annotations

from lowfodmap.data.models import FoodCategory, Meal, MealItem, MealSlot
from lowfodmap.export.shopping_list import (
    format_shopping_list,
    generate_shopping_list,
    shopping_list_to_dict,
)

from conftest import make_food

RICE = make_food("rice", "White rice", FoodCategory.CEREAL)
OATS = make_food("oats", "Oats", FoodCategory.CEREAL)
CHICKEN = make_food("chicken", "Chicken breast", FoodCategory.PROTEIN)


def sample_plan():
    return {
        "Monday": {
            MealSlot.LUNCH: Meal.of([MealItem(CHICKEN, 150), MealItem(RICE, 100)]),
            MealSlot.BREAKFAST: Meal.of([MealItem(OATS, 50)]),
        },
        "Tuesday": {
            MealSlot.DINNER: Meal.of([MealItem(RICE, 120), MealItem(RICE, 30)]),
        },
    }


class TestShoppingList:
    """Tests for generate_shopping_list."""

    def test_aggregates_per_food(self):
        shopping = generate_shopping_list(sample_plan())
        cereal = shopping.items_by_category[FoodCategory.CEREAL]
        assert [(i.food.id, i.total_amount) for i in cereal] == [("oats", 50), ("rice", 250)]

    def test_categories_sorted_by_label(self):
        shopping = generate_shopping_list(sample_plan())
        assert shopping.categories() == [FoodCategory.CEREAL, FoodCategory.PROTEIN]

    def test_empty_plan(self):
        assert generate_shopping_list({}).is_empty

    def test_text(self):
        text = format_shopping_list(generate_shopping_list(sample_plan()))
        assert text.splitlines()[0] == "My Weekly Shopping List (Pending Items)"
        assert "CEREAL" in text
        assert "- [ ] White rice: 250 g" in text

    def test_purchased_items_hidden(self):
        shopping = generate_shopping_list(sample_plan())
        text = format_shopping_list(shopping, purchased={"rice"})
        assert "White rice" not in text
        assert "Oats" in text

    def test_everything_purchased(self):
        shopping = generate_shopping_list(sample_plan())
        text = format_shopping_list(shopping, purchased={"rice", "oats", "chicken"})
        assert text == "All items have been purchased!"

    def test_to_dict(self):
        data = shopping_list_to_dict(generate_shopping_list(sample_plan()))
        assert list(data["categories"]) == ["cereal", "protein"]
        assert data["categories"]["protein"][0]["total_amount"] == 150
