"""Navigation decisions based on the session state."""

from food_diary.domain.results import Loading, Redirect
from food_diary.domain.sessions import SessionState

LOGIN_PATH = "/login"
DIARY_PATH = "/diary"


def guard_protected(state: SessionState) -> Loading | Redirect | None:
    """Return a loading or redirect result, or None when the view may render."""
    if state.is_loading:
        return Loading()
    if not state.is_authenticated:
        return Redirect(LOGIN_PATH)
    return None


def guard_guest(state: SessionState) -> Loading | Redirect | None:
    """Keep signed-in users away from the login and register forms."""
    if state.is_loading:
        return Loading()
    if state.is_authenticated:
        return Redirect(DIARY_PATH)
    return None
