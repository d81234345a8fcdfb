"""Tests for the food catalog and its file loader."""

from __future__ import annotations

import json

import pytest
import yaml

from lowfodmap.data.catalog import FoodCatalog, food_from_dict, food_to_dict, parse_category
from lowfodmap.data.models import FodmapType, FoodCategory, FructanGroup
from lowfodmap.data.sample_foods import sample_catalog

from conftest import make_food

RECORDS = [
    {
        "id": "banana-unripe",
        "name": "Banana, unripe",
        "category": "fruit",
        "unit": "g",
        "calories": 89,
        "safe_amount": 100,
        "fodmaps": [{"type": "fructans", "group": "fruit_veg"}],
    },
    {"id": "rice", "name": "White rice", "category": "cereal", "unit": "g", "calories": 130},
]


class TestFoodCatalog:
    """Tests for FoodCatalog."""

    def test_lookup(self, small_catalog):
        assert small_catalog.get("rice").name == "White rice"
        assert small_catalog.get("nope") is None
        assert "rice" in small_catalog

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            FoodCatalog([make_food("a"), make_food("a")])

    def test_by_ids_keeps_catalog_order(self, small_catalog):
        foods = small_catalog.by_ids(["rice", "chicken", "missing"])
        assert [f.id for f in foods] == ["chicken", "rice"]

    def test_with_foods(self, small_catalog):
        extended = small_catalog.with_foods([make_food("custom")])
        assert len(extended) == len(small_catalog) + 1
        assert "custom" not in small_catalog

    def test_fodmap_split(self, small_catalog):
        with_f = small_catalog.with_fodmaps()
        without = small_catalog.without_fodmaps()
        assert len(with_f) + len(without) == len(small_catalog)
        assert all(f.has_fodmaps for f in with_f)

    def test_sample_catalog_loads(self):
        catalog = sample_catalog()
        assert len(catalog) > 30
        assert catalog.get("egg").unit == "unit"


class TestRecords:
    """Tests for record parsing."""

    def test_food_from_dict(self):
        food = food_from_dict(RECORDS[0])
        assert food.category == FoodCategory.FRUIT
        assert food.fodmaps[0].type == FodmapType.FRUCTANS
        assert food.fodmaps[0].group == FructanGroup.FRUIT_VEG

    def test_plain_string_fodmaps(self):
        food = food_from_dict({"id": "x", "name": "X", "unit": "g", "safe_amount": 5, "fodmaps": ["GOS"]})
        assert food.fodmap_types == (FodmapType.GOS,)

    def test_missing_field(self):
        with pytest.raises(ValueError):
            food_from_dict({"id": "x", "unit": "g"})

    def test_unknown_fodmap(self):
        with pytest.raises(ValueError):
            food_from_dict({"id": "x", "name": "X", "unit": "g", "fodmaps": ["polyol"]})

    def test_negative_safe_amount(self):
        with pytest.raises(ValueError):
            food_from_dict({"id": "x", "name": "X", "unit": "g", "safe_amount": -1})

    def test_unknown_category_is_other(self):
        assert parse_category("Beverages") == FoodCategory.OTHER
        assert parse_category("Vegetarian substitutes") == FoodCategory.VEGETARIAN_SUBSTITUTES

    def test_to_dict_round_trip(self):
        food = food_from_dict(RECORDS[0])
        assert food_from_dict(food_to_dict(food)) == food


class TestCatalogFiles:
    """Tests for FoodCatalog.from_file."""

    def test_yaml_list(self, tmp_path):
        path = tmp_path / "foods.yaml"
        path.write_text(yaml.dump(RECORDS))
        catalog = FoodCatalog.from_file(path)
        assert [f.id for f in catalog] == ["banana-unripe", "rice"]

    def test_json_wrapped(self, tmp_path):
        path = tmp_path / "foods.json"
        path.write_text(json.dumps({"foods": RECORDS}))
        assert len(FoodCatalog.from_file(path)) == 2

    def test_bad_shape(self, tmp_path):
        path = tmp_path / "foods.json"
        path.write_text(json.dumps({"items": RECORDS}))
        with pytest.raises(ValueError):
            FoodCatalog.from_file(path)
