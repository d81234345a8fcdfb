"""Pytest fixtures for lowfodmap tests."""

from __future__ import annotations

import random

import pytest

from lowfodmap.data.catalog import FoodCatalog
from lowfodmap.data.models import (
    FodmapInfo,
    FodmapType,
    FoodCategory,
    FoodItem,
    FructanGroup,
)


def make_food(
    food_id: str,
    name: str | None = None,
    category: FoodCategory = FoodCategory.OTHER,
    unit: str = "g",
    calories: float | None = 100.0,
    safe_amount: float = 0.0,
    fodmaps: tuple[FodmapType, ...] = (),
) -> FoodItem:
    """Build a FoodItem with sensible test defaults."""
    return FoodItem(
        id=food_id,
        name=name or food_id,
        category=category,
        unit=unit,
        calories=calories,
        safe_amount=safe_amount,
        fodmaps=tuple(FodmapInfo(t) for t in fodmaps),
    )


@pytest.fixture
def banana_ripe():
    return make_food(
        "banana-ripe", "Banana madura", FoodCategory.FRUIT, "g", 89, 35, (FodmapType.FRUCTANS,)
    )


@pytest.fixture
def banana_unripe():
    return FoodItem(
        id="banana-unripe",
        name="Banana não madura",
        category=FoodCategory.FRUIT,
        unit="g",
        calories=89,
        safe_amount=100,
        fodmaps=(FodmapInfo(FodmapType.FRUCTANS, FructanGroup.FRUIT_VEG),),
    )


@pytest.fixture
def apple():
    return make_food(
        "apple", "Maçã", FoodCategory.FRUIT, "g", 52, 20,
        (FodmapType.FRUCTOSE, FodmapType.SORBITOL),
    )


@pytest.fixture
def small_catalog(banana_ripe, banana_unripe, apple):
    """A small catalog covering every category used by shuffles."""
    return FoodCatalog([
        banana_unripe,
        banana_ripe,
        apple,
        make_food("chicken", "Chicken breast", FoodCategory.PROTEIN, "g", 165),
        make_food("egg", "Egg", FoodCategory.PROTEIN, "unit", 78),
        make_food("rice", "White rice", FoodCategory.CEREAL, "g", 130),
        make_food(
            "oats", "Rolled oats", FoodCategory.CEREAL, "g", 389, 52,
            (FodmapType.FRUCTANS, FodmapType.GOS),
        ),
        make_food("carrot", "Carrot", FoodCategory.VEGETABLE, "g", 41),
        make_food("spinach", "Spinach", FoodCategory.VEGETABLE, "g", 23, 75, (FodmapType.FRUCTANS,)),
        make_food("yogurt", "Lactose-free yogurt", FoodCategory.DAIRY, "g", 60, 170, (FodmapType.LACTOSE,)),
        make_food("chia", "Chia seeds", FoodCategory.SEEDS, "g", 486, 24, (FodmapType.FRUCTANS,)),
        make_food("walnuts", "Walnuts", FoodCategory.NUTS, "g", 654, 30, (FodmapType.FRUCTANS,)),
        make_food("oil", "Olive oil", FoodCategory.OTHER, "ml", 884),
    ])


@pytest.fixture
def rng():
    return random.Random(1234)
