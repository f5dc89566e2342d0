"""Diary list, detail and delete views."""

import logging

import httpx
from pydantic import ValidationError

from food_diary.domain.results import Redirect, ViewResult
from food_diary.services.diary import DiaryService
from food_diary.services.guard import DIARY_PATH, guard_protected
from food_diary.services.sessions import SessionService
from food_diary.views.layout import render

logger = logging.getLogger(__name__)

CREATE_PATH = "/diary/create"


async def diary_list_view(session: SessionService, diaries: DiaryService) -> ViewResult:
    """List the signed-in user's entries."""
    guarded = guard_protected(session.state)
    if guarded is not None:
        return guarded
    try:
        entries = await diaries.list_entries()
    except (httpx.HTTPError, ValidationError) as exc:
        logger.warning("Failed to fetch diary entries: %s", exc)
        return guard_protected(session.state) or render(
            "diary_list",
            session.state,
            entries=[],
            create_href=CREATE_PATH,
            error="Failed to load diary entries.",
        )
    return render(
        "diary_list",
        session.state,
        entries=entries,
        create_href=CREATE_PATH,
        error=None,
    )


async def diary_detail_view(
    session: SessionService, diaries: DiaryService, diary_id: str
) -> ViewResult:
    """Show one entry."""
    guarded = guard_protected(session.state)
    if guarded is not None:
        return guarded
    try:
        entry = await diaries.get_entry(diary_id)
    except (httpx.HTTPError, ValidationError) as exc:
        logger.warning("Failed to fetch diary entry %s: %s", diary_id, exc)
        return guard_protected(session.state) or render(
            "diary_detail",
            session.state,
            entry=None,
            error="Failed to load diary entry.",
        )
    return render("diary_detail", session.state, entry=entry, error=None)


async def diary_delete_view(
    session: SessionService, diaries: DiaryService, diary_id: str
) -> ViewResult:
    """Delete an entry and return to the list."""
    guarded = guard_protected(session.state)
    if guarded is not None:
        return guarded
    try:
        await diaries.delete_entry(diary_id)
    except httpx.HTTPError as exc:
        logger.warning("Failed to delete diary entry %s: %s", diary_id, exc)
        return guard_protected(session.state) or render(
            "diary_detail",
            session.state,
            entry=None,
            error="Failed to delete diary entry.",
        )
    return Redirect(DIARY_PATH)
