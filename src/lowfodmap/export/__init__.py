"""Export utilities for plans and shopping lists."""

from lowfodmap.export.shopping_list import generate_shopping_list

__all__ = ["generate_shopping_list"]
