"""Models for diary entries."""

import json
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from food_diary.domain.analysis import IngredientBreakdown


class DiaryEntry(BaseModel):
    """A logged meal as stored by the remote API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    content: str
    image_url: str | None = None
    total_calories: float | None = None
    calorie_breakdown: dict[str, IngredientBreakdown] | None = None
    created_at: datetime
    updated_at: datetime | None = None
    user_id: str | None = None

    @field_validator("calorie_breakdown", mode="before")
    @classmethod
    def _decode_breakdown(cls, value: object) -> object:
        # Multipart submissions persist the breakdown as a JSON string.
        if isinstance(value, str):
            if not value.strip():
                return None
            return json.loads(value)
        return value


@dataclass(frozen=True)
class ImageUpload:
    """Image file selected for upload."""

    filename: str
    content: bytes
    content_type: str = "image/jpeg"
