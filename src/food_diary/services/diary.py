"""Diary entry retrieval and submission."""

import json
from dataclasses import dataclass

from food_diary.adapters.diary_api_client import DiaryApiClient
from food_diary.domain.analysis import FoodAnalysisResult
from food_diary.domain.diary import DiaryEntry, ImageUpload
from food_diary.services.food_analysis import format_number


class DiaryValidationError(ValueError):
    """Raised when a diary submission is rejected before reaching the API."""


@dataclass
class DiaryService:
    """Application service for diary entries owned by the remote API."""

    client: DiaryApiClient

    async def list_entries(self) -> list[DiaryEntry]:
        """Return the current user's entries as ordered by the API."""
        raw = await self.client.list_diaries()
        return [DiaryEntry.model_validate(item) for item in raw]

    async def get_entry(self, diary_id: str) -> DiaryEntry:
        """Return one entry."""
        raw = await self.client.get_diary(diary_id)
        return DiaryEntry.model_validate(raw)

    async def create_entry(
        self,
        content: str,
        image: ImageUpload | None = None,
        analysis: FoodAnalysisResult | None = None,
    ) -> DiaryEntry:
        """Validate and submit a new entry, folding in any analysis result."""
        if not content.strip():
            raise DiaryValidationError("Content is required")
        total_calories = None
        calorie_breakdown = None
        if analysis is not None:
            total_calories = format_number(analysis.total_calories)
            calorie_breakdown = serialize_breakdown(analysis)
        raw = await self.client.create_diary(
            content=content,
            image=image,
            total_calories=total_calories,
            calorie_breakdown=calorie_breakdown,
        )
        return DiaryEntry.model_validate(raw)

    async def delete_entry(self, diary_id: str) -> None:
        """Delete one entry."""
        await self.client.delete_diary(diary_id)


def serialize_breakdown(analysis: FoodAnalysisResult) -> str:
    """Serialize the per-ingredient breakdown as JSON for a form field."""
    payload = analysis.model_dump(mode="json")["breakdown"]
    return json.dumps(payload, ensure_ascii=False)
