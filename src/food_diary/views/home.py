"""Landing page."""

from food_diary.domain.results import Render
from food_diary.domain.sessions import SessionState
from food_diary.views.layout import render


def home_view(state: SessionState) -> Render:
    """Public landing page pointing at the diary."""
    return render(
        "home",
        state,
        title="Food Diary",
        links=[{"label": "Start Your Diary", "href": "/diary"}],
    )
