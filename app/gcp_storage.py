from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Sequence

from google.api_core import exceptions as gcloud_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import firestore

from .config import Settings
from .errors import RecipeNotFoundError, RecipeStorageError
from .models import Recipe
from .storage import RecipeRepository, next_position, reorder_assignments

logger = logging.getLogger(__name__)

# ValueError and TypeError come from encoding a document before it is sent.
BACKEND_ERRORS = (
    gcloud_exceptions.GoogleAPIError,
    auth_exceptions.GoogleAuthError,
    ValueError,
    TypeError,
)


def _is_document_id(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    if "/" in value or value in {".", ".."}:
        return False
    return not (value.startswith("__") and value.endswith("__"))


def _write_after_last(transaction, collection, doc_ref, doc: Dict[str, Any]) -> None:
    query = collection.order_by("position", direction=firestore.Query.DESCENDING).limit(1)

    current_max: Optional[float] = None
    for snapshot in transaction.get(query):
        current_max = (snapshot.to_dict() or {}).get("position")

    transaction.set(doc_ref, {**doc, "position": next_position(current_max)})


_create_after_last = firestore.transactional(_write_after_last)


class FirestoreRecipeStorage(RecipeRepository):
    """Recipe storage backed by a Firestore collection."""

    def __init__(
        self,
        *,
        project: Optional[str] = None,
        collection_name: str = "recipes",
        client: Optional[firestore.Client] = None,
    ) -> None:
        self._project = project
        self._collection_name = collection_name

        self._firestore_client = client or firestore.Client(project=project)
        self._collection = self._firestore_client.collection(collection_name)

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirestoreRecipeStorage":
        """Build a storage instance from the application settings."""

        return cls(project=settings.gcp_project, collection_name=settings.recipes_collection)

    def list_recipes(self) -> Iterable[Recipe]:
        query = self._collection.order_by("position", direction=firestore.Query.ASCENDING)
        try:
            docs = list(query.stream())
        except BACKEND_ERRORS as exc:
            raise RecipeStorageError(str(exc)) from exc

        return [self._doc_to_recipe(doc.id, doc.to_dict() or {}) for doc in docs]

    def get_recipe(self, recipe_id: str) -> Recipe:
        if not _is_document_id(recipe_id):
            raise RecipeNotFoundError(recipe_id)

        try:
            snapshot = self._collection.document(recipe_id).get()
        except BACKEND_ERRORS as exc:
            raise RecipeStorageError(str(exc)) from exc

        if not snapshot.exists:
            raise RecipeNotFoundError(recipe_id)

        return self._doc_to_recipe(snapshot.id, snapshot.to_dict() or {})

    def add_recipe(self, fields: Dict[str, Any], *, position: Optional[float] = None) -> Recipe:
        doc = {
            **fields,
            "createdAt": firestore.SERVER_TIMESTAMP,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        }
        doc_ref = self._collection.document()

        try:
            if position is None:
                transaction = self._firestore_client.transaction()
                _create_after_last(transaction, self._collection, doc_ref, doc)
            else:
                doc_ref.set({**doc, "position": position})
            snapshot = doc_ref.get()
        except BACKEND_ERRORS as exc:
            raise RecipeStorageError(str(exc)) from exc

        return self._doc_to_recipe(snapshot.id, snapshot.to_dict() or {})

    def update_recipe(self, recipe_id: str, fields: Dict[str, Any]) -> Recipe:
        if not _is_document_id(recipe_id):
            raise RecipeNotFoundError(recipe_id)

        doc_ref = self._collection.document(recipe_id)
        update_doc = {**fields, "updatedAt": firestore.SERVER_TIMESTAMP}
        update_doc.pop("position", None)

        try:
            doc_ref.update(update_doc)
            snapshot = doc_ref.get()
        except gcloud_exceptions.NotFound as exc:
            raise RecipeNotFoundError(recipe_id) from exc
        except BACKEND_ERRORS as exc:
            raise RecipeStorageError(str(exc)) from exc

        return self._doc_to_recipe(snapshot.id, snapshot.to_dict() or {})

    def reorder_recipes(self, ordered_ids: Sequence[Any]) -> int:
        updated = 0
        for recipe_id, position in reorder_assignments(ordered_ids):
            if not _is_document_id(recipe_id):
                logger.warning("Skipping invalid recipe id %r in reorder", recipe_id)
                continue

            try:
                self._collection.document(recipe_id).update({"position": position})
            except gcloud_exceptions.NotFound:
                logger.info("Skipping unknown recipe %s in reorder", recipe_id)
                continue
            except BACKEND_ERRORS as exc:
                raise RecipeStorageError(str(exc)) from exc
            updated += 1

        return updated

    def is_empty(self) -> bool:
        try:
            first = list(self._collection.limit(1).stream())
        except BACKEND_ERRORS as exc:
            raise RecipeStorageError(str(exc)) from exc
        return not first

    def _doc_to_recipe(self, doc_id: str, data: dict) -> Recipe:
        return Recipe.from_fields(doc_id, data)


__all__ = ["FirestoreRecipeStorage"]
