"""Food catalog container and file loader.

The catalog is supplied by a collaborator (a bundled sample, a YAML/JSON
export, or user custom foods). It is immutable once built; combining it with
custom foods returns a new catalog.

File format (YAML or JSON), a list of records or ``{"foods": [...]}``:

    - id: banana-unripe
      name: Banana, unripe
      category: fruit
      unit: g
      calories: 89
      safe_amount: 100
      fodmaps:
        - type: fructans
          group: fruit_veg
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

import yaml

from lowfodmap.data.models import (
    FodmapInfo,
    FodmapType,
    FoodCategory,
    FoodItem,
    FructanGroup,
)

logger = logging.getLogger(__name__)


class FoodCatalog:
    """Ordered, id-indexed collection of foods."""

    def __init__(self, foods: Iterable[FoodItem]):
        self._foods: tuple[FoodItem, ...] = tuple(foods)
        self._by_id: dict[str, FoodItem] = {}
        for food in self._foods:
            if food.id in self._by_id:
                raise ValueError(f"Duplicate food id in catalog: {food.id}")
            self._by_id[food.id] = food

    def __len__(self) -> int:
        return len(self._foods)

    def __iter__(self) -> Iterator[FoodItem]:
        return iter(self._foods)

    def __contains__(self, food_id: object) -> bool:
        return food_id in self._by_id

    @property
    def foods(self) -> tuple[FoodItem, ...]:
        return self._foods

    def get(self, food_id: str) -> Optional[FoodItem]:
        return self._by_id.get(food_id)

    def by_category(self, categories: Iterable[FoodCategory]) -> list[FoodItem]:
        wanted = set(categories)
        return [f for f in self._foods if f.category in wanted]

    def by_ids(self, food_ids: Iterable[str]) -> list[FoodItem]:
        """Foods whose id is in ``food_ids``, in catalog order."""
        wanted = set(food_ids)
        return [f for f in self._foods if f.id in wanted]

    def with_fodmaps(self) -> list[FoodItem]:
        return [f for f in self._foods if f.has_fodmaps]

    def without_fodmaps(self) -> list[FoodItem]:
        return [f for f in self._foods if not f.has_fodmaps]

    def with_foods(self, extra: Iterable[FoodItem]) -> FoodCatalog:
        """Return a new catalog with ``extra`` foods appended."""
        return FoodCatalog([*self._foods, *extra])

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> FoodCatalog:
        return cls(food_from_dict(record) for record in records)

    @classmethod
    def from_file(cls, path: Path) -> FoodCatalog:
        """Load a catalog from a YAML or JSON file.

        Raises:
            ValueError: If the file content is not a list of food records.
        """
        with open(path) as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        if isinstance(data, dict):
            data = data.get("foods")
        if not isinstance(data, list):
            raise ValueError(f"Catalog file {path} must contain a list of foods")

        catalog = cls.from_records(data)
        logger.debug("Loaded %d foods from %s", len(catalog), path)
        return catalog


def parse_category(value: str) -> FoodCategory:
    """Parse a category string, mapping unknown values to OTHER."""
    normalized = str(value).strip().lower().replace(" ", "_").replace("-", "_")
    for category in FoodCategory:
        if normalized in (category.value, category.name.lower()):
            return category
    logger.warning("Unknown food category '%s', using 'other'", value)
    return FoodCategory.OTHER


def _parse_fodmap_type(value: str) -> FodmapType:
    normalized = str(value).strip().lower()
    for fodmap_type in FodmapType:
        if normalized in (fodmap_type.value, fodmap_type.name.lower()):
            return fodmap_type
    raise ValueError(f"Unknown FODMAP type: {value}")


def _parse_fructan_group(value: Optional[str]) -> Optional[FructanGroup]:
    if value is None:
        return None
    normalized = str(value).strip().lower().replace(" ", "_").replace("/", "_")
    for group in FructanGroup:
        if normalized in (group.value, group.name.lower()):
            return group
    raise ValueError(f"Unknown fructan group: {value}")


def _parse_calories(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def food_from_dict(record: dict[str, Any]) -> FoodItem:
    """Build a FoodItem from a plain record.

    Raises:
        ValueError: If a required field is missing or a FODMAP type is unknown.
    """
    missing = [key for key in ("id", "name", "unit") if not record.get(key)]
    if missing:
        raise ValueError(f"Food record missing fields {missing}: {record}")

    fodmaps = []
    for entry in record.get("fodmaps") or []:
        if isinstance(entry, str):
            entry = {"type": entry}
        fodmap_type = _parse_fodmap_type(entry.get("type"))
        group = _parse_fructan_group(entry.get("group"))
        if fodmap_type is not FodmapType.FRUCTANS:
            group = None
        fodmaps.append(FodmapInfo(type=fodmap_type, group=group))

    food = FoodItem(
        id=str(record["id"]),
        name=str(record["name"]),
        category=parse_category(record.get("category", "other")),
        unit=str(record["unit"]),
        calories=_parse_calories(record.get("calories")),
        safe_amount=float(record.get("safe_amount") or 0),
        fodmaps=tuple(fodmaps),
        notes=str(record.get("notes") or ""),
    )

    if food.has_fodmaps and food.safe_amount == 0:
        logger.warning(
            "Food '%s' declares FODMAPs but has no safe amount; its load is scored as 0",
            food.id,
        )

    return food


def food_to_dict(food: FoodItem) -> dict[str, Any]:
    """Convert a FoodItem to a record accepted by ``food_from_dict``."""
    fodmaps: list[dict[str, str]] = []
    for info in food.fodmaps:
        entry = {"type": info.type.value}
        if info.group is not None:
            entry["group"] = info.group.value
        fodmaps.append(entry)

    return {
        "id": food.id,
        "name": food.name,
        "category": food.category.value,
        "unit": food.unit,
        "calories": food.calories,
        "safe_amount": food.safe_amount,
        "fodmaps": fodmaps,
        "notes": food.notes,
    }
