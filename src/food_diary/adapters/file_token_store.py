"""JSON file backed token storage that survives restarts."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from food_diary.services.token_store import TokenStore

logger = logging.getLogger(__name__)


@dataclass
class FileTokenStore(TokenStore):
    """Token store persisting a flat JSON object on disk."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Store a value under the key and flush it to disk."""
        values = self._read()
        values[key] = value
        self._write(values)

    def remove(self, key: str) -> None:
        """Delete the key if present."""
        values = self._read()
        if key not in values:
            return
        del values[key]
        self._write(values)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable token store at %s", self.path)
            return {}
        return payload if isinstance(payload, dict) else {}

    def _write(self, values: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(values), encoding="utf-8")
        tmp_path.replace(self.path)
