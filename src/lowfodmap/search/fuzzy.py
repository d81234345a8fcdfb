"""Fuzzy food-name search.

Scores each candidate by normalized Levenshtein similarity plus a bonus for
prefix (+1.0) or substring (+0.5) matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

import numpy as np

from lowfodmap.data.models import FoodItem

PREFIX_BONUS = 1.0
SUBSTRING_BONUS = 0.5
DEFAULT_MIN_SCORE = 0.4
DEFAULT_LIMIT = 5


class FodmapFilter(Enum):
    """Pre-filter applied to candidates before scoring."""

    ALL = "all"
    LOW = "low"  # foods without FODMAPs
    HIGH = "high"  # foods with at least one FODMAP


@dataclass
class SearchResult:
    """A scored search match."""

    food: FoodItem
    score: float


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute)."""
    if not a:
        return len(b)
    if not b:
        return len(a)

    b_codes = np.array([ord(c) for c in b], dtype=np.int64)
    offsets = np.arange(len(b) + 1, dtype=np.int64)
    previous = offsets.copy()

    for i, char in enumerate(a, start=1):
        cost = (b_codes != ord(char)).astype(np.int64)
        current = np.empty_like(previous)
        current[0] = i
        current[1:] = np.minimum(previous[1:] + 1, previous[:-1] + cost)
        # Insertions within the row: current[j] = j + min(current[k] - k) for k <= j
        current = np.minimum.accumulate(current - offsets) + offsets
        previous = current

    return int(previous[-1])


def score_name(query: str, name: str) -> float:
    """Relevance of a food name to an already trimmed, lower-cased query."""
    name_lower = name.lower()
    longest = max(len(query), len(name_lower))
    if longest == 0:
        return 0.0

    similarity = 1.0 - levenshtein(query, name_lower) / longest

    if name_lower.startswith(query):
        bonus = PREFIX_BONUS
    elif query in name_lower:
        bonus = SUBSTRING_BONUS
    else:
        bonus = 0.0

    return similarity + bonus


def apply_fodmap_filter(
    foods: Iterable[FoodItem], fodmap_filter: FodmapFilter
) -> list[FoodItem]:
    if fodmap_filter == FodmapFilter.LOW:
        return [f for f in foods if not f.has_fodmaps]
    if fodmap_filter == FodmapFilter.HIGH:
        return [f for f in foods if f.has_fodmaps]
    return list(foods)


def rank_foods(
    query: str,
    foods: Iterable[FoodItem],
    fodmap_filter: FodmapFilter = FodmapFilter.ALL,
    limit: Optional[int] = DEFAULT_LIMIT,
    min_score: float = DEFAULT_MIN_SCORE,
) -> list[SearchResult]:
    """Score and rank foods against a free-text query.

    Args:
        query: User input; surrounding whitespace and case are ignored
        foods: Candidate foods, in catalog order
        fodmap_filter: Restrict candidates by FODMAP presence
        limit: Maximum number of results (None for no limit)
        min_score: Candidates scoring at or below this are discarded

    Returns:
        Matches sorted by score, highest first. Ties keep catalog order.
        Empty for a blank query.
    """
    trimmed = query.strip().lower()
    if not trimmed:
        return []

    results = []
    for food in apply_fodmap_filter(foods, fodmap_filter):
        score = score_name(trimmed, food.name)
        if score > min_score:
            results.append(SearchResult(food=food, score=score))

    # sorted() is stable, so equal scores keep catalog order
    results = sorted(results, key=lambda r: r.score, reverse=True)
    if limit is not None:
        results = results[:limit]
    return results


def search_foods(
    query: str,
    foods: Iterable[FoodItem],
    fodmap_filter: FodmapFilter = FodmapFilter.ALL,
    limit: Optional[int] = DEFAULT_LIMIT,
    min_score: float = DEFAULT_MIN_SCORE,
) -> list[FoodItem]:
    """Return up to ``limit`` foods best matching ``query``."""
    return [
        r.food
        for r in rank_foods(query, foods, fodmap_filter, limit=limit, min_score=min_score)
    ]
