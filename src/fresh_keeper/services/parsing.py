"""Recovery of structured data from free-text model output."""

import json
import logging
import re

from pydantic import ValidationError

from fresh_keeper.domain.errors import InvalidResponseError
from fresh_keeper.domain.recipes import (
    DEFAULT_COOKING_TIME,
    DEFAULT_CUISINE,
    DEFAULT_DIFFICULTY,
    DEFAULT_DISH_NAME,
    DEFAULT_REASON,
    DinnerRecommendation,
    IngredientUsage,
)
from fresh_keeper.domain.vision import FoodIdentification

UNKNOWN_FOOD = "Unknown Food"
FALLBACK_CATEGORY = "Other"
FALLBACK_CONFIDENCE = "low"

_logger = logging.getLogger(__name__)

_IDENTIFICATION_FIELDS = ("foodName", "category", "confidence", "additionalInfo")


def slice_json_object(text: str) -> str:
    """Return the text between the first ``{`` and the last ``}``.

    Prose and code fences around the object are dropped; text without a
    brace pair is returned unchanged.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start : end + 1]


def load_json_object(text: str) -> dict[str, object] | None:
    """Parse the sliced text as a JSON object, or return None."""
    try:
        value = json.loads(slice_json_object(text))
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def parse_food_identification(text: str) -> FoodIdentification:
    """Parse identification output, strictly first and then leniently."""
    sliced = slice_json_object(text)
    try:
        return FoodIdentification.model_validate_json(sliced)
    except ValidationError:
        _logger.info("Strict identification parse failed, trying lenient parse")

    fields = load_json_object(text)
    if fields is None:
        fields = _scan_string_fields(sliced, _IDENTIFICATION_FIELDS)
        if not fields:
            raise InvalidResponseError()
    return FoodIdentification(
        food_name=_string(fields.get("foodName"), UNKNOWN_FOOD),
        category=_string(fields.get("category"), FALLBACK_CATEGORY),
        confidence=_string(fields.get("confidence"), FALLBACK_CONFIDENCE),
        note=_optional_string(fields.get("additionalInfo")),
    )


def parse_dinner_recommendation(text: str) -> DinnerRecommendation:
    """Parse recommendation output, defaulting any missing field."""
    fields = load_json_object(text)
    if fields is None:
        raise InvalidResponseError()
    return DinnerRecommendation(
        dish_name=_string(fields.get("dishName"), DEFAULT_DISH_NAME),
        cuisine=_string(fields.get("cuisine"), DEFAULT_CUISINE),
        ingredients=_ingredients(fields.get("ingredients")),
        recipe=_string_list(fields.get("recipe")),
        cooking_time=_string(fields.get("cookingTime"), DEFAULT_COOKING_TIME),
        difficulty=_string(fields.get("difficulty"), DEFAULT_DIFFICULTY),
        video_search_chinese=_optional_string(fields.get("videoSearchChinese")),
        video_search_english=_optional_string(fields.get("videoSearchEnglish")),
        video_link=_optional_string(fields.get("videoLink")),
        reason=_string(fields.get("reason"), DEFAULT_REASON),
        shopping_list=_string_list(fields.get("shoppingList")),
    )


def _ingredients(value: object) -> list[IngredientUsage]:
    if not isinstance(value, list):
        return []
    ingredients = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        food_item = entry.get("foodItem")
        quantity = entry.get("quantity")
        if not isinstance(food_item, str) or not isinstance(quantity, str):
            continue
        ingredients.append(
            IngredientUsage(
                food_item=food_item,
                quantity=quantity,
                is_expiring_soon=entry.get("isExpiringSoon") is True,
                from_inventory=entry.get("fromInventory") is True,
            )
        )
    return ingredients


def _scan_string_fields(text: str, names: tuple[str, ...]) -> dict[str, object]:
    """Pull ``"name": "value"`` pairs out of text that is not valid JSON."""
    found: dict[str, object] = {}
    for name in names:
        match = re.search(rf'"{name}"\s*:\s*"((?:[^"\\]|\\.)*)"', text)
        if match:
            found[name] = _unescape(match.group(1))
    return found


def _unescape(raw: str) -> str:
    """Decode JSON string escapes, keeping the raw text when they are invalid."""
    try:
        return json.loads(f'"{raw}"')
    except ValueError:
        return raw.replace('\\"', '"')


def _string(value: object, default: str) -> str:
    return value if isinstance(value, str) else default


def _optional_string(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, str)]
