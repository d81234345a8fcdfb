"""Meal templates, randomized shuffles and meal assembly.

Meals are assembled three ways: by expanding a fixed template, by a
category-constrained random shuffle, or by drawing from the foods a user
prefers for a slot (used by the weekly optimizer).
"""

from __future__ import annotations

from lowfodmap.templates.models import (
    MealTemplate,
    ShuffleOption,
    ShuffleRule,
    TemplateItem,
    TemplateKind,
)

__all__ = [
    "MealTemplate",
    "ShuffleOption",
    "ShuffleRule",
    "TemplateItem",
    "TemplateKind",
]
