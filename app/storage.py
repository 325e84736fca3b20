from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Optional, Protocol, Sequence, Tuple

from .models import Recipe


def next_position(current_max: Optional[float]) -> float:
    """Position for a new recipe so it sorts after every existing one."""

    if current_max is None:
        return 1
    return current_max + 1


def reorder_assignments(ordered_ids: Sequence[Any]) -> Iterator[Tuple[Any, int]]:
    """Yield ``(recipe_id, position)`` pairs using dense 1-based ranks."""

    for index, recipe_id in enumerate(ordered_ids):
        yield recipe_id, index + 1


class RecipeRepository(Protocol):
    """Protocol describing the behaviour required by the web layer."""

    def list_recipes(self) -> Iterable[Recipe]:
        """Return every stored recipe ordered by ascending position."""

    def get_recipe(self, recipe_id: str) -> Recipe:
        """Return a single recipe or raise :class:`RecipeNotFoundError` if missing."""

    def add_recipe(self, fields: Dict[str, Any], *, position: Optional[float] = None) -> Recipe:
        """Persist a new recipe and return the stored instance.

        When ``position`` is omitted the recipe is placed after every existing one.
        """

    def update_recipe(self, recipe_id: str, fields: Dict[str, Any]) -> Recipe:
        """Replace the mutable fields of a recipe and return the new representation."""

    def reorder_recipes(self, ordered_ids: Sequence[Any]) -> int:
        """Set each listed recipe's position to its 1-based index.

        Unknown ids are skipped. Returns how many recipes were updated.
        """

    def is_empty(self) -> bool:
        """Return ``True`` when no recipes are stored."""


__all__ = ["RecipeRepository", "next_position", "reorder_assignments"]
