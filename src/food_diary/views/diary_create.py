"""Diary creation form with the optional food analysis step."""

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from food_diary.domain.analysis import FoodAnalysisResult
from food_diary.domain.diary import ImageUpload
from food_diary.domain.results import Redirect, ViewResult
from food_diary.services.diary import DiaryService, DiaryValidationError
from food_diary.services.food_analysis import FoodAnalysisService, append_summary
from food_diary.services.guard import DIARY_PATH, guard_protected
from food_diary.services.sessions import SessionService
from food_diary.views.layout import render

logger = logging.getLogger(__name__)


@dataclass
class DiaryCreateForm:
    """Working state of the create view between user actions."""

    content: str = ""
    description: str = ""
    analysis: FoodAnalysisResult | None = None
    error: str | None = None

    async def run_analysis(
        self,
        service: FoodAnalysisService,
        image: ImageUpload | None,
        description: str,
    ) -> FoodAnalysisResult | None:
        """Analyze a meal photo and append the summary to the content."""
        self.description = description
        if image is None:
            self.error = "Select an image to analyze"
            return None
        try:
            result = await service.analyze(image, description)
        except (httpx.HTTPError, ValidationError) as exc:
            logger.warning("Food analysis failed: %s", exc)
            self.error = "Food analysis failed. Please try again."
            return None
        self.analysis = result
        self.content = append_summary(self.content, result)
        self.error = None
        return result

    async def submit(self, service: DiaryService, image: ImageUpload | None) -> bool:
        """Create the entry from the current content and analysis."""
        try:
            await service.create_entry(
                self.content, image=image, analysis=self.analysis
            )
        except DiaryValidationError as exc:
            self.error = str(exc)
            return False
        except (httpx.HTTPError, ValidationError) as exc:
            logger.warning("Failed to create diary entry: %s", exc)
            self.error = "Failed to create diary entry. Please try again."
            return False
        self.reset()
        return True

    def reset(self) -> None:
        """Discard the working state."""
        self.content = ""
        self.description = ""
        self.analysis = None
        self.error = None


def diary_create_view(session: SessionService, form: DiaryCreateForm) -> ViewResult:
    """Show the create form with its working state."""
    return guard_protected(session.state) or _render_form(session, form)


async def diary_analyze_view(
    session: SessionService,
    form: DiaryCreateForm,
    service: FoodAnalysisService,
    image: ImageUpload | None,
    description: str,
    content: str | None = None,
) -> ViewResult:
    """Run the food analysis step and redisplay the form."""
    guarded = guard_protected(session.state)
    if guarded is not None:
        return guarded
    if content is not None:
        form.content = content
    await form.run_analysis(service, image, description)
    return guard_protected(session.state) or _render_form(session, form)


async def diary_submit_view(
    session: SessionService,
    form: DiaryCreateForm,
    service: DiaryService,
    content: str,
    image: ImageUpload | None = None,
) -> ViewResult:
    """Submit the entry; stay on the form when it fails."""
    guarded = guard_protected(session.state)
    if guarded is not None:
        return guarded
    form.content = content
    if await form.submit(service, image):
        return Redirect(DIARY_PATH)
    return guard_protected(session.state) or _render_form(session, form)


def _render_form(session: SessionService, form: DiaryCreateForm) -> ViewResult:
    return render(
        "diary_create",
        session.state,
        content=form.content,
        description=form.description,
        analysis=form.analysis,
        error=form.error,
    )
