"""Fuzzy food-name search."""

from __future__ import annotations

from lowfodmap.search.fuzzy import FodmapFilter, SearchResult, rank_foods, search_foods

__all__ = ["FodmapFilter", "SearchResult", "rank_foods", "search_foods"]
