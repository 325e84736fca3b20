import pytest

from app import create_app
from app.config import Settings
from app.memory_storage import InMemoryRecipeStorage


def _recipe_payload(**overrides):
    payload = {
        "name": "Pad Thai",
        "cuisine": "Thai",
        "instructions": "Soak noodles. Stir fry everything.",
        "ingredients": ["rice noodles", "tofu", "peanuts"],
        "image": "https://cdn.example.com/pad-thai.jpg",
        "prepTimeMinutes": 15,
        "cookTimeMinutes": 10,
        "servings": 2,
        "tags": ["noodles", "dinner"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def recipe_payload():
    """Factory for a valid recipe payload; keyword arguments override fields."""
    return _recipe_payload


@pytest.fixture
def storage():
    return InMemoryRecipeStorage()


@pytest.fixture
def client(storage):
    settings = Settings(storage_backend="memory", seed_on_startup=False)
    app = create_app(storage=storage, settings=settings)
    app.config.update(TESTING=True)
    return app.test_client()
