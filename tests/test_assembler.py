"""Tests for template expansion, random shuffles and builder edits."""

from __future__ import annotations

import random

import pytest

from lowfodmap.data.catalog import FoodCatalog
from lowfodmap.data.models import FoodCategory, Meal, MealSlot
from lowfodmap.data.sample_foods import sample_catalog
from lowfodmap.templates.assembler import (
    BREAKFAST_RULE,
    MAIN_MEAL_RULE,
    add_food,
    clear_meal,
    draw_from_preferences,
    draw_meal,
    expand_items,
    expand_template,
    reinstantiate,
    remove_item,
    shuffle_meal,
    update_amount,
)
from lowfodmap.templates.definitions import (
    TEMPLATE_REGISTRY,
    get_template,
    list_templates,
    soup_templates,
)
from lowfodmap.templates.models import ShuffleOption

from conftest import make_food


class TestTemplates:
    """Tests for built-in templates and expansion."""

    def test_all_templates_resolve_against_sample_catalog(self):
        """Every built-in template food exists in the bundled catalog."""
        catalog = sample_catalog()
        for template in TEMPLATE_REGISTRY.values():
            meal = expand_template(template, catalog)
            assert len(meal) == len(template.items), template.id

    def test_expand_uses_template_amounts(self):
        template = get_template("breakfast-porridge")
        meal = expand_template(template, sample_catalog())
        assert [(i.food.id, i.current_amount) for i in meal] == [
            ("rolled-oats", 52),
            ("blueberries", 40),
            ("chia-seeds", 24),
        ]

    def test_missing_food_dropped(self, small_catalog):
        meal = expand_items([("chicken", 150), ("unicorn", 10), ("rice", 190)], small_catalog)
        assert [i.food.id for i in meal] == ["chicken", "rice"]

    def test_fresh_instance_ids(self):
        template = get_template("lunch-chicken-rice")
        catalog = sample_catalog()
        first = expand_template(template, catalog)
        second = expand_template(template, catalog)
        ids = {i.instance_id for i in first} | {i.instance_id for i in second}
        assert len(ids) == 6

    def test_unknown_template(self):
        assert get_template("no-such-template") is None

    def test_list_by_slot(self):
        lunches = list_templates(MealSlot.LUNCH)
        assert lunches
        assert all(t.category == MealSlot.LUNCH for t in lunches)

    def test_soups_have_no_slot(self):
        assert soup_templates()
        assert all(t.category is None for t in soup_templates())


class TestShuffle:
    """Tests for shuffle_meal."""

    def test_breakfast_stays_in_categories(self, small_catalog):
        rng = random.Random(7)
        for _ in range(1000):
            meal = shuffle_meal(small_catalog, ShuffleOption.BREAKFAST, rng)
            assert BREAKFAST_RULE.min_items <= len(meal) <= BREAKFAST_RULE.max_items
            assert all(i.food.category in BREAKFAST_RULE.categories for i in meal)
            assert len({i.food.id for i in meal}) == len(meal)

    def test_default_portions(self, small_catalog):
        meal = shuffle_meal(small_catalog, ShuffleOption.BREAKFAST, random.Random(3))
        for item in meal:
            if item.food.safe_amount > 0:
                assert item.current_amount == item.food.safe_amount

    def test_no_eligible_foods_gives_empty_meal(self):
        catalog = FoodCatalog([make_food("oil", category=FoodCategory.OTHER)])
        meal = shuffle_meal(catalog, ShuffleOption.SNACKS, random.Random(0))
        assert meal.is_empty

    def test_soup_option_picks_a_soup(self):
        catalog = sample_catalog()
        soups = soup_templates()
        soup_food_sets = [{item.food_id for item in s.items} for s in soups]

        meal = shuffle_meal(catalog, ShuffleOption.SOUP, random.Random(5), soups=soups)

        assert {i.food.id for i in meal} in soup_food_sets

    def test_lunch_soup_when_coin_always_lands(self):
        catalog = sample_catalog()
        soups = soup_templates()
        meal = shuffle_meal(
            catalog, ShuffleOption.LUNCH, random.Random(1), soups=soups, soup_probability=1.0
        )
        assert {i.food.id for i in meal} in [{t.food_id for t in s.items} for s in soups]

    def test_lunch_without_soup(self, small_catalog):
        meal = shuffle_meal(
            small_catalog,
            MealSlot.LUNCH,
            random.Random(1),
            soups=soup_templates(),
            soup_probability=0.0,
        )
        assert MAIN_MEAL_RULE.min_items <= len(meal) <= MAIN_MEAL_RULE.max_items
        assert all(i.food.category in MAIN_MEAL_RULE.categories for i in meal)

    def test_soup_unavailable_falls_back_to_shuffle(self, small_catalog):
        """Soup recipes with no foods in the catalog give a regular shuffle."""
        meal = shuffle_meal(
            FoodCatalog([f for f in small_catalog if f.id not in ("carrot", "spinach")]),
            ShuffleOption.DINNER,
            random.Random(2),
            soups=soup_templates(),
            soup_probability=1.0,
        )
        assert not meal.is_empty
        assert all(i.food.category in MAIN_MEAL_RULE.categories for i in meal)

    def test_seeded_reproducible(self, small_catalog):
        a = shuffle_meal(small_catalog, ShuffleOption.BREAKFAST, random.Random(42))
        b = shuffle_meal(small_catalog, ShuffleOption.BREAKFAST, random.Random(42))
        assert [i.food.id for i in a] == [i.food.id for i in b]

    def test_unknown_option_string(self):
        with pytest.raises(ValueError):
            ShuffleOption.parse("brunch")


class TestDrawMeal:
    """Tests for draw_meal."""

    def test_count_larger_than_pool(self, small_catalog):
        pool = small_catalog.by_ids(["chicken", "rice"])
        meal = draw_meal(pool, 4, random.Random(0))
        assert sorted(i.food.id for i in meal) == ["chicken", "rice"]

    def test_empty_pool(self):
        assert draw_meal([], 3, random.Random(0)).is_empty


class TestDrawFromPreferences:
    """Tests for draw_from_preferences."""

    def test_only_preferred_foods_drawn(self, small_catalog):
        preferred = {"chicken", "rice", "carrot", "oil"}
        for seed in range(10):
            meal = draw_from_preferences(small_catalog, preferred, 3, random.Random(seed))
            assert len(meal) == 3
            assert {i.food.id for i in meal} <= preferred

    def test_unknown_ids_ignored(self, small_catalog):
        meal = draw_from_preferences(small_catalog, ["unicorn", "egg"], 2, random.Random(0))
        assert [i.food.id for i in meal] == ["egg"]

    def test_no_known_ids_gives_empty_meal(self, small_catalog):
        assert draw_from_preferences(small_catalog, ["unicorn"], 2, random.Random(0)).is_empty

    def test_matches_pool_draw(self, small_catalog):
        preferred = ["rice", "chicken", "spinach"]
        pool = small_catalog.by_ids(preferred)
        drawn = draw_from_preferences(small_catalog, preferred, 2, random.Random(5))
        expected = draw_meal(pool, 2, random.Random(5))
        assert [i.food.id for i in drawn] == [i.food.id for i in expected]


class TestBuilder:
    """Tests for builder edits."""

    def test_add_same_food_twice(self, banana_ripe):
        meal = add_food(add_food(Meal(), banana_ripe), banana_ripe)
        assert len(meal) == 2
        assert meal.items[0].instance_id != meal.items[1].instance_id
        assert meal.items[0].current_amount == 35

    def test_add_with_amount(self, banana_ripe):
        meal = add_food(Meal(), banana_ripe, 10)
        assert meal.items[0].current_amount == 10

    def test_remove_only_that_instance(self, banana_ripe):
        meal = add_food(add_food(Meal(), banana_ripe), banana_ripe)
        remaining = remove_item(meal, meal.items[0].instance_id)
        assert [i.instance_id for i in remaining] == [meal.items[1].instance_id]
        assert len(meal) == 2

    def test_update_amount(self, banana_ripe):
        meal = add_food(Meal(), banana_ripe)
        updated = update_amount(meal, meal.items[0].instance_id, 70)
        assert updated.items[0].current_amount == 70
        assert meal.items[0].current_amount == 35

    def test_update_amount_negative(self, banana_ripe):
        meal = add_food(Meal(), banana_ripe)
        with pytest.raises(ValueError):
            update_amount(meal, meal.items[0].instance_id, -1)

    def test_clear(self):
        assert clear_meal().is_empty

    def test_reinstantiate(self, banana_ripe):
        meal = add_food(Meal(), banana_ripe, 20)
        copy = reinstantiate(meal)
        assert copy.items[0].current_amount == 20
        assert copy.items[0].instance_id != meal.items[0].instance_id
