"""
Nutrition normalization for recipe objects returned by the model.

Fills the derived KBJU blocks (per 100 g, per serving, whole dish) that the
model left out, without touching anything it did supply. Calories are rounded
to whole kilocalories, macros to one decimal, both half-up.
"""

import math
from typing import Any, Dict, Mapping, Optional

from models.recipe import to_number

DEFAULT_TOTAL_WEIGHT = 1000
NUTRIENTS = ("calories", "proteins", "fats", "carbs")


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def _round_nutrition(values: Dict[str, float]) -> Dict[str, float]:
    return {
        "calories": int(round_half_up(values["calories"])),
        "proteins": round_half_up(values["proteins"], 1),
        "fats": round_half_up(values["fats"], 1),
        "carbs": round_half_up(values["carbs"], 1),
    }


def _scale(block: Mapping[str, Any], multiplier: float, divisor: float) -> Dict[str, float]:
    return _round_nutrition({name: to_number(block.get(name)) * multiplier / divisor for name in NUTRIENTS})


def _present(value: Any) -> bool:
    return isinstance(value, Mapping)


def _total_weight(recipe: Mapping[str, Any]) -> float:
    weight = to_number(recipe.get("totalWeight"))
    return weight if weight > 0 else DEFAULT_TOTAL_WEIGHT


def _servings(recipe: Mapping[str, Any]) -> Optional[float]:
    servings = to_number(recipe.get("servings"))
    return servings if servings > 0 else None


def normalize_recipe(recipe: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of recipe with derivable nutrition blocks and tags filled in.

    Each rule reads only fields that were supplied or derived by an earlier
    rule, so applying it to its own output changes nothing.
    """
    result = dict(recipe)
    total = result.get("nutrition")

    if not _present(result.get("nutritionPer100g")) and _present(total):
        result["nutritionPer100g"] = _scale(total, 100, _total_weight(result))

    servings = _servings(result)
    if not _present(result.get("nutritionPerServing")) and _present(total) and servings:
        result["nutritionPerServing"] = _scale(total, 1, servings)

    if not _present(total) and _present(result.get("nutritionPer100g")):
        result["nutrition"] = _scale(result["nutritionPer100g"], _total_weight(result), 100)

    if not isinstance(result.get("tags"), list):
        result["tags"] = []

    return result
