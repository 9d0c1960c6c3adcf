"""Persistent client storage (a small JSON file); the bearer token lives under the fixed key 'token'."""
import json
import logging
from pathlib import Path
from typing import Any

from ishaazi.core.constants import TOKEN_STORAGE_KEY

logger = logging.getLogger(__name__)


class TokenStore:
    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            logger.warning("Client storage %s unreadable: %s", self._path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, key: str) -> Any:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    @property
    def token(self) -> str | None:
        value = self.get(TOKEN_STORAGE_KEY)
        if not isinstance(value, str):
            return None
        return value.strip() or None

    @token.setter
    def token(self, value: str | None) -> None:
        if value:
            self.set(TOKEN_STORAGE_KEY, value)
        else:
            self.remove(TOKEN_STORAGE_KEY)
