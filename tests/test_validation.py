import pytest

from app.errors import RecipeValidationError
from app.validation import FIELD_MESSAGES, clean_recipe, validate_recipe


def test_valid_payload_has_no_violations(recipe_payload):
    assert validate_recipe(recipe_payload()) == []


@pytest.mark.parametrize(
    "field",
    [
        "name",
        "cuisine",
        "instructions",
        "ingredients",
        "image",
        "prepTimeMinutes",
        "cookTimeMinutes",
        "servings",
    ],
)
def test_missing_required_field_is_named(recipe_payload, field):
    payload = recipe_payload()
    del payload[field]

    violations = validate_recipe(payload)

    assert [violation["path"] for violation in violations] == [field]
    assert violations[0]["value"] is None
    assert violations[0]["location"] == "body"


def test_whitespace_only_text_is_rejected(recipe_payload):
    violations = validate_recipe(recipe_payload(cuisine="   ", instructions="\n\t"))

    assert [violation["msg"] for violation in violations] == [
        "Cuisine is required",
        "Instructions are required",
    ]


def test_empty_ingredient_list_is_rejected(recipe_payload):
    violations = validate_recipe(recipe_payload(ingredients=[]))

    assert violations == [
        {
            "type": "field",
            "path": "ingredients",
            "msg": "At least one ingredient is required",
            "value": [],
            "location": "body",
        }
    ]


@pytest.mark.parametrize("value", [0, -3, 1.5, True, "abc", "", None, [2]])
def test_integer_fields_reject_non_positive_or_non_integers(recipe_payload, value):
    violations = validate_recipe(recipe_payload(servings=value))

    assert [violation["path"] for violation in violations] == ["servings"]


@pytest.mark.parametrize("value", [1, 45, 3.0, "12", " 7 "])
def test_integer_fields_accept_integer_spellings(recipe_payload, value):
    assert validate_recipe(recipe_payload(prepTimeMinutes=value)) == []


def test_tags_must_be_text_when_present(recipe_payload):
    violations = validate_recipe(recipe_payload(tags="spicy"))

    assert [violation["path"] for violation in violations] == ["tags"]
    assert validate_recipe(recipe_payload(tags=[])) == []


def test_non_object_payload_reports_every_required_field():
    violations = validate_recipe(["not", "an", "object"])

    required = [field for field, _ in FIELD_MESSAGES if field != "tags"]
    assert [violation["path"] for violation in violations] == required


@pytest.mark.parametrize(
    "url",
    [
        "http://x.com/i.jpg",
        "https://cdn.dummyjson.com/recipe-images/1.webp",
        "  https://example.org/a.png  ",
        "ftp://files.example.net/pic.gif",
        "https://example.com:8443/img?size=large",
        "http://192.168.1.10/i.jpg",
        "http://[::1]/a.jpg",
        "http://localhost:8080/image.jpg",
    ],
)
def test_well_formed_image_urls(recipe_payload, url):
    assert validate_recipe(recipe_payload(image=url)) == []


@pytest.mark.parametrize(
    "url",
    [
        "",
        "not a url",
        "example.com/image.jpg",
        "javascript:alert(1)",
        "mailto:chef@example.com",
        "http://example.com:99999/i.jpg",
        42,
    ],
)
def test_malformed_image_urls(recipe_payload, url):
    violations = validate_recipe(recipe_payload(image=url))

    assert [violation["msg"] for violation in violations] == ["Valid image URL is required"]


@pytest.mark.parametrize(
    "ingredients",
    [["", "rice"], ["rice", "   "], [{"x": 1}], [7], ["rice", None]],
)
def test_every_ingredient_must_be_non_empty_text(recipe_payload, ingredients):
    violations = validate_recipe(recipe_payload(ingredients=ingredients))

    assert violations == [
        {
            "type": "field",
            "path": "ingredients",
            "msg": "At least one ingredient is required",
            "value": ingredients,
            "location": "body",
        }
    ]


@pytest.mark.parametrize("value", [10**20, "100000000000000000000", 1e20, 2**63])
def test_integer_fields_must_fit_in_64_bits(recipe_payload, value):
    violations = validate_recipe(recipe_payload(servings=value))

    assert [violation["path"] for violation in violations] == ["servings"]


def test_largest_64_bit_integer_is_accepted(recipe_payload):
    assert clean_recipe(recipe_payload(servings=2**63 - 1))["servings"] == 2**63 - 1


def test_clean_recipe_normalizes_fields(recipe_payload):
    fields = clean_recipe(
        recipe_payload(
            name="  Tom Yum ",
            image=" https://example.com/t.jpg ",
            servings="3",
            cookTimeMinutes=20.0,
            id="ignored",
            position=99,
        )
    )

    assert fields["name"] == "Tom Yum"
    assert fields["image"] == "https://example.com/t.jpg"
    assert fields["servings"] == 3
    assert fields["cookTimeMinutes"] == 20
    assert "id" not in fields
    assert "position" not in fields


def test_clean_recipe_raises_with_all_violations(recipe_payload):
    with pytest.raises(RecipeValidationError) as excinfo:
        clean_recipe(recipe_payload(name="", servings=0))

    assert [violation["path"] for violation in excinfo.value.violations] == [
        "name",
        "servings",
    ]
