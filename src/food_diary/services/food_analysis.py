"""Food photo analysis and its human-readable summary."""

from dataclasses import dataclass

from food_diary.adapters.diary_api_client import DiaryApiClient
from food_diary.domain.analysis import FoodAnalysisResult, NutrientAmount
from food_diary.domain.diary import ImageUpload


@dataclass
class FoodAnalysisService:
    """Submits meal photos for analysis and validates the breakdown."""

    client: DiaryApiClient

    async def analyze(self, image: ImageUpload, description: str) -> FoodAnalysisResult:
        """Return the calorie breakdown for a meal photo and its description."""
        raw = await self.client.analyze_food(image, description.strip())
        return FoodAnalysisResult.model_validate(raw)


def format_number(value: float) -> str:
    """Render whole numbers without a decimal point."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def format_summary(result: FoodAnalysisResult) -> str:
    """Build a readable summary of an analysis result."""
    lines = [f"[Food analysis] Total: {format_number(result.total_calories)} kcal"]
    for name, macros in result.breakdown.items():
        parts = [
            _format_nutrient("protein", macros.protein),
            _format_nutrient("fat", macros.fat),
            _format_nutrient("carbohydrate", macros.carbohydrate),
        ]
        lines.append(f"- {name}: {', '.join(parts)}")
    return "\n".join(lines)


def append_summary(content: str, result: FoodAnalysisResult) -> str:
    """Append the analysis summary to existing diary text."""
    summary = format_summary(result)
    existing = content.rstrip()
    if not existing:
        return summary
    return f"{existing}\n\n{summary}"


def _format_nutrient(label: str, nutrient: NutrientAmount) -> str:
    amount = format_number(nutrient.amount)
    calories = format_number(nutrient.calories)
    return f"{label} {amount}{nutrient.unit} ({calories} kcal)"
