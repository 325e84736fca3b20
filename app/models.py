from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Recipe:
    """Domain object representing a stored recipe."""

    id: str
    name: str
    cuisine: str
    instructions: str
    ingredients: List[str]
    image: str
    prep_time_minutes: int
    cook_time_minutes: int
    servings: int
    tags: List[str] = field(default_factory=list)
    position: float = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "cuisine": self.cuisine,
            "instructions": self.instructions,
            "ingredients": list(self.ingredients),
            "image": self.image,
            "prepTimeMinutes": self.prep_time_minutes,
            "cookTimeMinutes": self.cook_time_minutes,
            "servings": self.servings,
            "tags": list(self.tags),
            "position": self.position,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }

    @classmethod
    def from_fields(cls, recipe_id: str, data: Dict[str, Any]) -> "Recipe":
        """Build a recipe from a stored document keyed by the camelCase field names."""

        created_at = data.get("createdAt")
        updated_at = data.get("updatedAt")
        return cls(
            id=recipe_id,
            name=data.get("name", ""),
            cuisine=data.get("cuisine", ""),
            instructions=data.get("instructions", ""),
            ingredients=list(data.get("ingredients") or []),
            image=data.get("image", ""),
            prep_time_minutes=data.get("prepTimeMinutes", 0),
            cook_time_minutes=data.get("cookTimeMinutes", 0),
            servings=data.get("servings", 0),
            tags=list(data.get("tags") or []),
            position=data.get("position", 0),
            created_at=created_at if isinstance(created_at, datetime) else None,
            updated_at=updated_at if isinstance(updated_at, datetime) else None,
        )


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


__all__ = ["Recipe"]
