"""Shared page chrome."""

from food_diary.domain.results import Render
from food_diary.domain.sessions import SessionState


def navigation(state: SessionState) -> list[dict[str, str]]:
    """Return the navigation links for the current session."""
    if state.is_authenticated:
        return [
            {"label": "My Diary", "href": "/diary"},
            {"label": "Logout", "href": "/logout", "method": "post"},
        ]
    return [
        {"label": "Login", "href": "/login"},
        {"label": "Register", "href": "/register"},
    ]


def render(view: str, state: SessionState, **context: object) -> Render:
    """Render a view wrapped in the page navigation."""
    return Render(view=view, context={"nav": navigation(state), **context})
