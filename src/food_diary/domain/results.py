"""Results returned by views and the route guard."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Render:
    """Render a named view with its context."""

    view: str
    context: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Redirect:
    """Navigate to another location, replacing the attempted one."""

    location: str


@dataclass(frozen=True)
class Loading:
    """Session is still resolving; show a placeholder."""


ViewResult = Render | Redirect | Loading
