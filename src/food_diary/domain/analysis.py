"""Models for food analysis results."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NutrientAmount(BaseModel):
    """Amount of a single macronutrient and the calories it contributes."""

    amount: float = Field(ge=0.0)
    unit: str
    calories: float = Field(ge=0.0)


class IngredientBreakdown(BaseModel):
    """Macronutrient split for one detected ingredient."""

    protein: NutrientAmount
    fat: NutrientAmount
    carbohydrate: NutrientAmount


class FoodAnalysisResult(BaseModel):
    """Calorie total and per-ingredient breakdown for a photographed meal."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_calories: float = Field(ge=0.0)
    breakdown: dict[str, IngredientBreakdown] = Field(default_factory=dict)
