import math
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from .base import new_id

_NUMBER = re.compile(r"-?\d+(?:[.,]\d+)?")


def to_number(value: Any) -> float:
    """Best-effort numeric coercion for LLM output ("12,5 г" -> 12.5, junk -> 0)"""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        match = _NUMBER.search(value)
        if not match:
            return 0.0
        number = float(match.group().replace(",", "."))
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


class Difficulty(str, Enum):
    """Difficulty scale requested from the model; free text is still accepted"""
    easy = "Легко"
    medium = "Средне"
    hard = "Сложно"


class NutritionValues(BaseModel):
    """KBJU tuple: calories, proteins, fats, carbs"""
    calories: float = 0
    proteins: float = 0
    fats: float = 0
    carbs: float = 0

    @field_validator("calories", "proteins", "fats", "carbs", mode="before")
    @classmethod
    def coerce_non_negative(cls, value: Any) -> float:
        return max(0.0, to_number(value))


class InstructionStep(BaseModel):
    """One cooking step"""
    step: int
    title: str = ""
    description: str = ""

    @field_validator("step", mode="before")
    @classmethod
    def coerce_step(cls, value: Any) -> int:
        return int(to_number(value))

    @field_validator("title", "description", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


def _coerce_steps(value: Any) -> Any:
    """Accept bare strings as steps, numbering them by position"""
    if not isinstance(value, list):
        return None
    steps = []
    for position, item in enumerate(value, start=1):
        if isinstance(item, str):
            steps.append({"step": position, "title": "", "description": item})
        elif isinstance(item, dict):
            steps.append({"step": position, **item})
    return steps


def _coerce_strings(value: Any) -> Any:
    if not isinstance(value, list):
        return None
    strings = []
    for item in value:
        if item is None or isinstance(item, list):
            continue
        if isinstance(item, dict):
            # {"name": "Молоко", "amount": "50 г"} -> "Молоко 50 г"
            item = " ".join(str(part) for part in item.values() if part not in (None, ""))
        strings.append(str(item))
    return strings


class RecipePayload(BaseModel):
    """
    Loosely-typed recipe object as parsed from the model's reply.

    Every field is optional; malformed values become None so that
    normalization can tell "absent" from "present".
    """
    dish_name: Optional[str] = Field(None, alias="dishName")
    servings: Optional[int] = None
    total_weight: Optional[float] = Field(None, alias="totalWeight")
    difficulty: Optional[str] = None
    cooking_time: Optional[str] = Field(None, alias="cookingTime")
    ingredients: Optional[List[str]] = None
    nutrition_per_100g: Optional[NutritionValues] = Field(None, alias="nutritionPer100g")
    nutrition_per_serving: Optional[NutritionValues] = Field(None, alias="nutritionPerServing")
    nutrition: Optional[NutritionValues] = None
    instructions: Optional[List[InstructionStep]] = None
    tags: Optional[List[str]] = None

    model_config = {
        "populate_by_name": True,
        "extra": "ignore"
    }

    @field_validator("dish_name", "difficulty", "cooking_time", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, (dict, list)):
            return None
        text = str(value).strip()
        return text or None

    @field_validator("servings", mode="before")
    @classmethod
    def coerce_servings(cls, value: Any) -> Optional[int]:
        number = int(round(to_number(value)))
        return number if number >= 1 else None

    @field_validator("total_weight", mode="before")
    @classmethod
    def coerce_total_weight(cls, value: Any) -> Optional[float]:
        number = to_number(value)
        return number if number > 0 else None

    @field_validator("ingredients", "tags", mode="before")
    @classmethod
    def coerce_string_lists(cls, value: Any) -> Any:
        return _coerce_strings(value)

    @field_validator("nutrition_per_100g", "nutrition_per_serving", "nutrition", mode="before")
    @classmethod
    def coerce_nutrition(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None

    @field_validator("instructions", mode="before")
    @classmethod
    def coerce_instructions(cls, value: Any) -> Any:
        return _coerce_steps(value)

    def to_raw(self) -> dict:
        """camelCase dict holding only the fields that are present"""
        return self.model_dump(by_alias=True, exclude_none=True)


class RecipeAnalysis(BaseModel):
    """Normalized result of one analysis or generation"""
    dish_name: str = Field(..., min_length=1, alias="dishName")
    servings: int = Field(1, ge=1)
    total_weight: float = Field(1000, gt=0, alias="totalWeight")
    difficulty: str = ""
    cooking_time: str = Field("", alias="cookingTime")
    ingredients: List[str] = Field(default_factory=list)
    nutrition_per_100g: NutritionValues = Field(default_factory=NutritionValues, alias="nutritionPer100g")
    nutrition_per_serving: NutritionValues = Field(default_factory=NutritionValues, alias="nutritionPerServing")
    nutrition: NutritionValues = Field(default_factory=NutritionValues)
    instructions: List[InstructionStep]
    tags: List[str] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
        "json_schema_extra": {
            "example": {
                "dishName": "Омлет",
                "servings": 1,
                "totalWeight": 200,
                "difficulty": "Легко",
                "cookingTime": "10 минут",
                "ingredients": ["Яйца - 3 шт", "Молоко - 50 г"],
                "nutritionPer100g": {"calories": 150, "proteins": 10, "fats": 10, "carbs": 1},
                "nutritionPerServing": {"calories": 300, "proteins": 20, "fats": 20, "carbs": 2},
                "nutrition": {"calories": 300, "proteins": 20, "fats": 20, "carbs": 2},
                "instructions": [{"step": 1, "title": "Взбить", "description": "Взбейте яйца с молоком"}],
                "tags": ["яйца", "завтрак"]
            }
        }
    }

    @property
    def difficulty_level(self) -> Optional[Difficulty]:
        try:
            return Difficulty(self.difficulty)
        except ValueError:
            return None

    def same_dish(self, other: "RecipeAnalysis") -> bool:
        """Duplicate rule: identical name and identical ingredient sequence"""
        return self.dish_name == other.dish_name and self.ingredients == other.ingredients


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SavedRecipe(RecipeAnalysis):
    """Recipe persisted in the local recipe store"""
    id: str = Field(default_factory=new_id)
    saved_at: datetime = Field(default_factory=utc_now, alias="savedAt")

    model_config = {
        "frozen": True
    }

    @classmethod
    def from_analysis(cls, recipe: RecipeAnalysis) -> "SavedRecipe":
        return cls(**recipe.model_dump(by_alias=True))


class AnalyzeRequest(BaseModel):
    """Recipe text to analyze; empty means "use the forwarded message" """
    text: Optional[str] = None


class GenerateRequest(BaseModel):
    query: str = ""


class AnalysisResponse(BaseModel):
    recipe: RecipeAnalysis
    saved: bool = False


class GenerationResponse(BaseModel):
    recipes: List[RecipeAnalysis] = Field(default_factory=list)


class SaveRecipeResponse(BaseModel):
    recipe: SavedRecipe
    created: bool = True
    notice: Optional[str] = None
