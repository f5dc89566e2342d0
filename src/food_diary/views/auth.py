"""Login, registration and logout views."""

import logging
from collections.abc import Awaitable, Callable

import httpx
from pydantic import ValidationError

from food_diary.adapters.diary_api_client import DiaryApiClient
from food_diary.domain.auth import User
from food_diary.domain.results import Redirect, ViewResult
from food_diary.services.guard import DIARY_PATH, guard_guest
from food_diary.services.sessions import SessionService
from food_diary.views.layout import render

logger = logging.getLogger(__name__)

HOME_PATH = "/"


def login_form_view(session: SessionService) -> ViewResult:
    """Show the login form unless the user is already signed in."""
    return guard_guest(session.state) or render("login", session.state, error=None)


def register_form_view(session: SessionService) -> ViewResult:
    """Show the registration form unless the user is already signed in."""
    return guard_guest(session.state) or render("register", session.state, error=None)


async def login_view(session: SessionService, email: str, password: str) -> ViewResult:
    """Submit the login form."""
    return await _submit_credentials(
        "login", session, session.login, email, password
    )


async def register_view(
    session: SessionService, email: str, password: str
) -> ViewResult:
    """Submit the registration form."""
    return await _submit_credentials(
        "register", session, session.register, email, password
    )


async def logout_view(session: SessionService, client: DiaryApiClient) -> Redirect:
    """Tell the API the session ended, then drop it locally."""
    if session.state.is_authenticated:
        try:
            await client.logout()
        except httpx.HTTPError as exc:
            logger.warning("Remote logout failed: %s", exc)
    session.logout()
    return Redirect(HOME_PATH)


async def _submit_credentials(
    view: str,
    session: SessionService,
    action: Callable[[str, str], Awaitable[User]],
    email: str,
    password: str,
) -> ViewResult:
    guarded = guard_guest(session.state)
    if guarded is not None:
        return guarded
    email = email.strip()
    if not email or not password:
        return render(
            view, session.state, error="Email and password are required", email=email
        )
    try:
        await action(email, password)
    except httpx.HTTPStatusError as exc:
        logger.warning("%s rejected with status %s", view, exc.response.status_code)
        return render(view, session.state, error=_rejection_message(view), email=email)
    except (httpx.TransportError, ValidationError) as exc:
        logger.warning("%s failed: %s", view, exc)
        return render(
            view,
            session.state,
            error="Something went wrong. Please try again.",
            email=email,
        )
    return Redirect(DIARY_PATH)


def _rejection_message(view: str) -> str:
    if view == "register":
        return "Registration failed. Please check your details."
    return "Invalid email or password"
