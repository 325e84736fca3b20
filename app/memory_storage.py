from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .errors import RecipeNotFoundError
from .models import Recipe
from .storage import RecipeRepository, next_position, reorder_assignments


class InMemoryRecipeStorage(RecipeRepository):
    """Process-local storage backend used for development and tests."""

    def __init__(self) -> None:
        self._recipes: List[Recipe] = []
        self._lock = threading.Lock()

    def list_recipes(self) -> Iterable[Recipe]:
        with self._lock:
            # sorted() is stable, so equal positions keep insertion order
            return sorted(self._recipes, key=lambda recipe: recipe.position)

    def get_recipe(self, recipe_id: str) -> Recipe:
        with self._lock:
            return self._find(recipe_id)

    def add_recipe(self, fields: Dict[str, Any], *, position: Optional[float] = None) -> Recipe:
        now = datetime.now(timezone.utc)
        with self._lock:
            if position is None:
                current_max = max((recipe.position for recipe in self._recipes), default=None)
                position = next_position(current_max)

            recipe = Recipe.from_fields(
                uuid.uuid4().hex,
                {**fields, "position": position, "createdAt": now, "updatedAt": now},
            )
            self._recipes.append(recipe)
            return recipe

    def update_recipe(self, recipe_id: str, fields: Dict[str, Any]) -> Recipe:
        with self._lock:
            current = self._find(recipe_id)
            updated = Recipe.from_fields(
                current.id,
                {
                    **fields,
                    "position": current.position,
                    "createdAt": current.created_at,
                    "updatedAt": datetime.now(timezone.utc),
                },
            )
            self._recipes[self._recipes.index(current)] = updated
            return updated

    def reorder_recipes(self, ordered_ids: Sequence[Any]) -> int:
        updated = 0
        with self._lock:
            by_id = {recipe.id: recipe for recipe in self._recipes}
            for recipe_id, position in reorder_assignments(ordered_ids):
                recipe = by_id.get(recipe_id) if isinstance(recipe_id, str) else None
                if recipe is None:
                    continue
                recipe.position = position
                updated += 1
        return updated

    def is_empty(self) -> bool:
        with self._lock:
            return not self._recipes

    def _find(self, recipe_id: str) -> Recipe:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        raise RecipeNotFoundError(recipe_id)


__all__ = ["InMemoryRecipeStorage"]
