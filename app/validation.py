"""Field rules for recipe payloads.

``RecipePayload`` declares the shape of a recipe. ``FIELD_MESSAGES`` holds the
message reported for each field, so create and update share both. Every field
is checked, so a payload with several problems reports all of them at once.
"""

from typing import Annotated, Any, Dict, List

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    UrlConstraints,
    ValidationError,
)

from .errors import RecipeValidationError

# Firestore stores integers as signed 64-bit values.
INT64_MAX = 2**63 - 1

FIELD_MESSAGES = (
    ("name", "Recipe name is required"),
    ("cuisine", "Cuisine is required"),
    ("instructions", "Instructions are required"),
    ("ingredients", "At least one ingredient is required"),
    ("image", "Valid image URL is required"),
    ("prepTimeMinutes", "Valid prep time is required"),
    ("cookTimeMinutes", "Valid cook time is required"),
    ("servings", "Valid servings number is required"),
    ("tags", "Tags must be a list of strings"),
)

ImageUrl = Annotated[
    AnyUrl, UrlConstraints(allowed_schemes=["http", "https", "ftp"], host_required=True)
]
_image_url = TypeAdapter(ImageUrl)


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("booleans are not integers")
    if isinstance(value, str):
        return value.strip()
    return value


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def _check_url(value: str) -> str:
    try:
        _image_url.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"invalid URL: {value!r}") from exc
    return value


Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Ingredient = Annotated[str, AfterValidator(_require_text)]
Url = Annotated[str, StringConstraints(strip_whitespace=True), AfterValidator(_check_url)]
Count = Annotated[int, BeforeValidator(_reject_bool), Field(ge=1, le=INT64_MAX)]


class RecipePayload(BaseModel):
    """Recipe fields accepted by create and update."""

    model_config = ConfigDict(extra="ignore")

    name: Text
    cuisine: Text
    instructions: Text
    ingredients: List[Ingredient] = Field(min_length=1)
    image: Url
    prepTimeMinutes: Count
    cookTimeMinutes: Count
    servings: Count
    tags: List[str] = Field(default_factory=list)


def _violations(data: Dict[str, Any], exc: ValidationError) -> List[Dict[str, Any]]:
    failed = {error["loc"][0] for error in exc.errors() if error["loc"]}
    return [
        {
            "type": "field",
            "path": field,
            "msg": message,
            "value": data.get(field),
            "location": "body",
        }
        for field, message in FIELD_MESSAGES
        if field in failed
    ]


def _parse(payload: Any) -> RecipePayload:
    data = payload if isinstance(payload, dict) else {}
    try:
        return RecipePayload.model_validate(data)
    except ValidationError as exc:
        raise RecipeValidationError(_violations(data, exc)) from exc


def validate_recipe(payload: Any) -> List[Dict[str, Any]]:
    """Return the violations for ``payload`` in field order; empty when valid."""

    try:
        _parse(payload)
    except RecipeValidationError as exc:
        return exc.violations
    return []


def clean_recipe(payload: Any) -> Dict[str, Any]:
    """Validate ``payload`` and return only the recipe fields, normalized.

    Text fields are trimmed and integer fields converted to ``int``. ``id``,
    ``position`` and unknown keys are dropped.
    """

    return _parse(payload).model_dump()


__all__ = ["FIELD_MESSAGES", "RecipePayload", "clean_recipe", "validate_recipe"]
