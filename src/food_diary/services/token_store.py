"""Key-value storage for the credential token."""

from dataclasses import dataclass
from typing import Protocol


class TokenStore(Protocol):
    """Durable key-value slot holding string values."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value under the key, replacing any previous one."""

    def remove(self, key: str) -> None:
        """Delete the key if present."""


@dataclass
class InMemoryTokenStore(TokenStore):
    """Token store that lives only as long as the process."""

    _values: dict[str, str]

    def __init__(self) -> None:
        self._values = {}

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value under the key."""
        self._values[key] = value

    def remove(self, key: str) -> None:
        """Delete the key if present."""
        self._values.pop(key, None)
