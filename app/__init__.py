import logging
from typing import Optional

import click
from flask import Flask, jsonify, request
from flask.typing import ResponseReturnValue
from flask_cors import CORS

from .config import Settings
from .errors import RecipeNotFoundError, RecipeStorageError, RecipeValidationError
from .memory_storage import InMemoryRecipeStorage
from .models import Recipe
from .seed import seed_if_empty
from .storage import RecipeRepository
from .validation import clean_recipe

try:
    from .gcp_storage import FirestoreRecipeStorage
except ImportError:  # pragma: no cover - allows running tests without optional deps
    FirestoreRecipeStorage = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)


def create_app(
    storage: Optional[RecipeRepository] = None, settings: Optional[Settings] = None
) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    storage:
        Optional recipe repository. When ``None`` the backend named by
        ``settings.storage_backend`` is built, which defaults to
        :class:`FirestoreRecipeStorage`.
    settings:
        Optional settings. When ``None`` they are read from the environment.
    """

    if settings is None:
        settings = Settings.from_env()

    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    if storage is None:
        storage = _build_storage(settings)
    app.config["RECIPE_STORAGE"] = storage

    CORS(app, resources={r"/api/*": {"origins": settings.frontend_url}})

    @app.before_request
    def log_request() -> None:
        logger.info("%s %s", request.method, request.path)

    @app.get("/healthz")
    def health() -> ResponseReturnValue:
        return jsonify({"status": "ok"})

    @app.get("/api/recipes")
    def list_recipes() -> ResponseReturnValue:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        try:
            recipes = list(storage_backend.list_recipes())
        except RecipeStorageError as exc:
            return _storage_failure("Failed to fetch recipes", exc)

        return jsonify([recipe.to_dict() for recipe in recipes]), 200

    @app.post("/api/recipes")
    def create_recipe() -> ResponseReturnValue:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        try:
            fields = clean_recipe(request.get_json(silent=True))
        except RecipeValidationError as exc:
            return jsonify({"errors": exc.violations}), 400

        try:
            new_recipe = storage_backend.add_recipe(fields)
        except RecipeStorageError as exc:
            return _storage_failure("Failed to create recipe", exc)

        logger.info("Created recipe %s at position %s", new_recipe.id, new_recipe.position)
        return jsonify(new_recipe.to_dict()), 201

    @app.post("/api/recipes/reorder")
    def reorder_recipes() -> ResponseReturnValue:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        body = request.get_json(silent=True)
        ordered_ids = body.get("orderedIds") if isinstance(body, dict) else None
        if not isinstance(ordered_ids, list):
            return jsonify({"message": "Invalid request format"}), 400

        try:
            updated = storage_backend.reorder_recipes(ordered_ids)
        except RecipeStorageError as exc:
            return _storage_failure("Failed to reorder recipes", exc)

        logger.info("Reordered %d of %d recipes", updated, len(ordered_ids))
        return jsonify({"message": "Recipes reordered successfully"}), 200

    @app.put("/api/recipes/<recipe_id>")
    def update_recipe(recipe_id: str) -> ResponseReturnValue:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        try:
            fields = clean_recipe(request.get_json(silent=True))
        except RecipeValidationError as exc:
            return jsonify({"errors": exc.violations}), 400

        try:
            updated_recipe = storage_backend.update_recipe(recipe_id, fields)
        except RecipeNotFoundError:
            return jsonify({"message": "Recipe not found"}), 404
        except RecipeStorageError as exc:
            return _storage_failure("Failed to update recipe", exc)

        return jsonify(updated_recipe.to_dict()), 200

    @app.cli.command("seed")
    @click.option("--url", default=None, help="Sample recipes endpoint; defaults to SEED_URL.")
    def seed_command(url: Optional[str]) -> None:
        """Insert the sample recipes when the store is empty."""

        inserted = seed_if_empty(app.config["RECIPE_STORAGE"], url or settings.seed_url)
        click.echo(f"Seeded {inserted} recipes.")

    return app


def _build_storage(settings: Settings) -> RecipeRepository:
    if settings.storage_backend == "memory":
        return InMemoryRecipeStorage()

    if FirestoreRecipeStorage is None:
        raise RuntimeError(
            "google-cloud-firestore is not installed. Install it, set "
            "RECIPE_STORAGE=memory, or pass an explicit storage backend to create_app."
        )
    return FirestoreRecipeStorage.from_settings(settings)


def _storage_failure(message: str, exc: RecipeStorageError) -> ResponseReturnValue:
    logger.exception(message)
    return jsonify({"message": message, "error": str(exc)}), 500


__all__ = ["create_app", "Recipe"]
