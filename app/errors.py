from __future__ import annotations

from typing import Any, Dict, List


class RecipeValidationError(ValueError):
    """Raised when a recipe payload breaks one or more field rules."""

    def __init__(self, violations: List[Dict[str, Any]]) -> None:
        super().__init__(f"{len(violations)} invalid field(s)")
        self.violations = violations


class RecipeNotFoundError(KeyError):
    """Raised when no recipe exists for the requested id."""

    def __init__(self, recipe_id: str) -> None:
        super().__init__(f"Recipe '{recipe_id}' does not exist.")
        self.recipe_id = recipe_id


class RecipeStorageError(RuntimeError):
    """Wraps connection and write failures raised by a storage backend."""


__all__ = ["RecipeNotFoundError", "RecipeStorageError", "RecipeValidationError"]
