"""Client config. API URL and token storage path from env (ISHAAZI_API_URL, ISHAAZI_STORAGE_PATH) or ClientConfig args."""
import os
from pathlib import Path

from ishaazi.core.constants import NOTIFICATION_POLL_INTERVAL_SECONDS, NOTIFICATION_STORE_LIMIT

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
DEFAULT_STORAGE_PATH = Path.home() / ".ishaazi" / "storage.json"


def _env(key: str, default: str = "") -> str:
    return (os.getenv(key) or default).strip()


class ClientConfig:
    """Where the API lives, where the bearer token is persisted, and polling knobs."""

    __slots__ = ("base_url", "storage_path", "timeout", "poll_interval_seconds", "store_limit")

    def __init__(
        self,
        *,
        base_url: str | None = None,
        storage_path: Path | str | None = None,
        timeout: float = 10.0,
        poll_interval_seconds: int = NOTIFICATION_POLL_INTERVAL_SECONDS,
        store_limit: int = NOTIFICATION_STORE_LIMIT,
    ) -> None:
        self.base_url = (base_url or _env("ISHAAZI_API_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.storage_path = Path(storage_path or _env("ISHAAZI_STORAGE_PATH") or DEFAULT_STORAGE_PATH).expanduser()
        self.timeout = timeout
        self.poll_interval_seconds = poll_interval_seconds
        self.store_limit = store_limit
