"""Minimal publish/subscribe channel between the HTTP layer and the session."""

from collections.abc import Callable
from dataclasses import dataclass, field

UNAUTHORIZED = "unauthorized"


@dataclass
class EventBus:
    """Synchronous in-process event bus."""

    _handlers: dict[str, list[Callable[[], None]]] = field(default_factory=dict)

    def subscribe(self, event: str, handler: Callable[[], None]) -> None:
        """Register a handler to run whenever the event is emitted."""
        self._handlers.setdefault(event, []).append(handler)

    def emit(self, event: str) -> None:
        """Run every handler registered for the event, in subscription order."""
        for handler in list(self._handlers.get(event, [])):
            handler()
