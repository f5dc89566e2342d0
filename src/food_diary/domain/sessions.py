"""Domain models for the client session."""

from dataclasses import dataclass

from food_diary.domain.auth import User


@dataclass(frozen=True)
class SessionState:
    """Snapshot of whether a user is signed in and who they are."""

    is_authenticated: bool = False
    is_loading: bool = True
    user: User | None = None
