"""One-time population of an empty recipe store from a remote JSON endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from .errors import RecipeStorageError, RecipeValidationError
from .storage import RecipeRepository
from .validation import clean_recipe

logger = logging.getLogger(__name__)

SEED_TIMEOUT = httpx.Timeout(10.0)


def fetch_sample_recipes(url: str, client: Optional[httpx.Client] = None) -> List[Dict[str, Any]]:
    """Download the sample document and return its ``recipes`` entries."""

    if client is None:
        with httpx.Client(timeout=SEED_TIMEOUT) as own_client:
            return fetch_sample_recipes(url, own_client)

    response = client.get(url)
    response.raise_for_status()
    body = response.json()

    recipes = body.get("recipes") if isinstance(body, dict) else body
    if not isinstance(recipes, list):
        raise ValueError(f"Expected a list of recipes from {url}")
    return [entry for entry in recipes if isinstance(entry, dict)]


def to_recipe_payload(entry: Dict[str, Any]) -> Dict[str, Any]:
    """Map a sample entry onto the recipe payload shape."""

    instructions = entry.get("instructions", "")
    if isinstance(instructions, list):
        instructions = "\n".join(str(step) for step in instructions)

    return {
        "name": entry.get("name", ""),
        "cuisine": entry.get("cuisine", ""),
        "instructions": instructions,
        "ingredients": entry.get("ingredients", []),
        "image": entry.get("image", ""),
        "prepTimeMinutes": entry.get("prepTimeMinutes"),
        "cookTimeMinutes": entry.get("cookTimeMinutes"),
        "servings": entry.get("servings"),
        "tags": entry.get("tags", []),
    }


def insert_samples(storage: RecipeRepository, entries: Iterable[Dict[str, Any]]) -> int:
    inserted = 0
    for entry in entries:
        try:
            fields = clean_recipe(to_recipe_payload(entry))
        except RecipeValidationError as exc:
            logger.warning(
                "Skipping sample recipe %r: %s",
                entry.get("name"),
                ", ".join(violation["path"] for violation in exc.violations),
            )
            continue

        inserted += 1
        storage.add_recipe(fields, position=inserted)
    return inserted


def seed_if_empty(
    storage: RecipeRepository, url: str, *, client: Optional[httpx.Client] = None
) -> int:
    """Insert the sample recipes when the store is empty.

    Returns the number of recipes inserted. Failures are logged and never
    raised so that the service can start without the seed.
    """

    try:
        if not storage.is_empty():
            logger.info("Recipe store already populated; skipping seed")
            return 0

        entries = fetch_sample_recipes(url, client)
        inserted = insert_samples(storage, entries)
    except (httpx.HTTPError, ValueError, RecipeStorageError):
        logger.exception("Seeding recipes from %s failed", url)
        return 0

    logger.info("Seeded %d recipes from %s", inserted, url)
    return inserted


__all__ = ["fetch_sample_recipes", "seed_if_empty", "to_recipe_payload"]
