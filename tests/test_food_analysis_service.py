"""Tests for food analysis service and summaries."""

import asyncio

from food_diary.adapters.diary_api_client import HttpxDiaryApiClient
from food_diary.domain.analysis import FoodAnalysisResult
from food_diary.domain.diary import ImageUpload
from food_diary.services.food_analysis import (
    FoodAnalysisService,
    append_summary,
    format_number,
    format_summary,
)
from tests.conftest import VALID_TOKEN, FakeRemoteApi, analysis_payload


def test_analyze_returns_validated_result(
    api_client: HttpxDiaryApiClient, remote_api: FakeRemoteApi
) -> None:
    api_client.set_auth_token(VALID_TOKEN)
    service = FoodAnalysisService(api_client)

    result = asyncio.run(
        service.analyze(ImageUpload("meal.jpg", b"jpeg"), "  rice and chicken ")
    )

    assert result.total_calories == 500
    assert result.breakdown["rice"].carbohydrate.calories == 180
    request = remote_api.calls("POST", "/food/analyze")[0]
    assert b"rice and chicken\r\n" in request.content


def test_format_summary_lists_total_and_ingredients() -> None:
    result = FoodAnalysisResult.model_validate(analysis_payload())

    summary = format_summary(result)

    lines = summary.splitlines()
    assert lines[0] == "[Food analysis] Total: 500 kcal"
    assert lines[1] == (
        "- rice: protein 4g (16 kcal), fat 0.5g (4.5 kcal), "
        "carbohydrate 45g (180 kcal)"
    )
    assert lines[2].startswith("- chicken: protein 31g")


def test_append_summary_keeps_existing_content() -> None:
    result = FoodAnalysisResult(total_calories=250, breakdown={})

    content = append_summary("Lunch at work\n", result)

    assert content == "Lunch at work\n\n[Food analysis] Total: 250 kcal"


def test_append_summary_on_empty_content() -> None:
    result = FoodAnalysisResult(total_calories=250, breakdown={})

    assert append_summary("", result) == "[Food analysis] Total: 250 kcal"


def test_format_number() -> None:
    assert format_number(500.0) == "500"
    assert format_number(12.34) == "12.3"
    assert format_number(3) == "3"
