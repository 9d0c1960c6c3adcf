"""
Local mirror of server notifications, refreshed by polling.

Every 30s (fixed, no backoff) the poller fetches GET /api/notifications/recent, keeps only
records whose id is not already stored, puts them in front of the existing list and truncates
to the newest 50. Already-stored records are never reordered, so the list is "newest polled
batch first", not a strict timestamp sort. A failed poll flips is_connected and keeps the list.

The poll runs on a scheduler thread while callers mark/clear from theirs, so the store is locked.
"""
import dataclasses
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from apscheduler.schedulers.background import BackgroundScheduler

from ishaazi.client.api_client import ApiClient
from ishaazi.core.constants import NOTIFICATION_POLL_JOB_ID, NOTIFICATION_STORE_LIMIT
from ishaazi.core.errors import IshaaziError

logger = logging.getLogger(__name__)

RECENT_PATH = "/api/notifications/recent"


def _parse_ts(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True)
class NotificationRecord:
    id: str
    title: str
    description: str = ""
    type: str = ""
    read: bool = False
    created_at: datetime | None = None
    content_type: str | None = None
    content_id: int | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "NotificationRecord":
        return cls(
            id=str(d["id"]),
            title=d.get("title") or "",
            description=d.get("description") or "",
            type=d.get("type") or "",
            read=bool(d.get("read")),
            created_at=_parse_ts(d.get("created_at")),
            content_type=d.get("content_type"),
            content_id=d.get("content_id"),
        )


class NotificationStore:
    """Bounded, dedup-by-id list of notifications, newest batch first."""

    def __init__(self, limit: int = NOTIFICATION_STORE_LIMIT) -> None:
        self._limit = limit
        self._items: list[NotificationRecord] = []
        self._lock = threading.Lock()

    def merge(self, records: Iterable[NotificationRecord]) -> list[NotificationRecord]:
        """Prepend records whose id is not present yet; keep the newest `limit`. Returns the records added."""
        with self._lock:
            present = {n.id for n in self._items}
            new: list[NotificationRecord] = []
            for r in records:
                if r.id in present:
                    continue
                present.add(r.id)
                new.append(r)
            new = new[: self._limit]
            self._items = (new + self._items)[: self._limit]
            return new

    def mark_read(self, notification_id: str) -> bool:
        """Flip the local read flag. Returns False when the id is not stored."""
        with self._lock:
            for i, n in enumerate(self._items):
                if n.id == notification_id:
                    if not n.read:
                        self._items[i] = dataclasses.replace(n, read=True)
                    return True
            return False

    def clear(self) -> None:
        with self._lock:
            self._items = []

    def snapshot(self) -> list[NotificationRecord]:
        with self._lock:
            return list(self._items)

    @property
    def unread_count(self) -> int:
        with self._lock:
            return sum(1 for n in self._items if not n.read)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, notification_id: object) -> bool:
        with self._lock:
            return any(n.id == notification_id for n in self._items)


class NotificationPoller:
    """
    Polls the server on a fixed interval and merges results into a NotificationStore.

    The scheduler is owned by the poller: start() schedules the first poll immediately,
    stop() shuts it down and drops pending fire-and-forget calls. Usable as a context manager.
    """

    def __init__(
        self,
        api: ApiClient,
        store: NotificationStore | None = None,
        *,
        interval_seconds: int | None = None,
        on_new: Callable[[list[NotificationRecord]], None] | None = None,
        scheduler: BackgroundScheduler | None = None,
    ) -> None:
        self._api = api
        self.store = store or NotificationStore(api.config.store_limit)
        self.interval_seconds = interval_seconds or api.config.poll_interval_seconds
        self._on_new = on_new
        self._scheduler = scheduler or BackgroundScheduler()
        self.is_connected = False
        self.last_error: str | None = None

    @property
    def notifications(self) -> list[NotificationRecord]:
        return self.store.snapshot()

    @property
    def unread_count(self) -> int:
        return self.store.unread_count

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def poll_once(self) -> list[NotificationRecord]:
        """One poll. Returns newly added records; on failure marks disconnected and returns []."""
        try:
            data = self._api.request("GET", RECENT_PATH, auth=True)
            records = [NotificationRecord.from_dict(d) for d in data.get("notifications") or []]
        except (IshaaziError, KeyError, TypeError, ValueError) as e:
            if self.is_connected:
                logger.warning("Notification poll failed; keeping %s stored notifications: %s", len(self.store), e)
            else:
                logger.debug("Notification poll failed: %s", e)
            self.is_connected = False
            self.last_error = str(e)
            return []
        new = self.store.merge(records)
        self.is_connected = True
        self.last_error = None
        if new and self._on_new is not None:
            try:
                self._on_new(new)
            except Exception as e:
                logger.warning("on_new callback failed: %s", e, exc_info=True)
        return new

    def start(self) -> None:
        self._scheduler.add_job(
            self.poll_once,
            "interval",
            seconds=self.interval_seconds,
            id=NOTIFICATION_POLL_JOB_ID,
            next_run_time=datetime.now(timezone.utc),
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()
        logger.info("Polling %s every %ss", RECENT_PATH, self.interval_seconds)

    def stop(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def __enter__(self) -> "NotificationPoller":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def mark_as_read(self, notification_id: str) -> None:
        """
        Optimistically mark read locally, then tell the server without waiting.
        A failed request is logged only; local and server state stay diverged until the next mutation.
        """
        self.store.mark_read(notification_id)
        if self._scheduler.running:
            self._scheduler.add_job(self._send_read, args=[notification_id])
        else:
            self._send_read(notification_id)

    def _send_read(self, notification_id: str) -> None:
        try:
            self._api.request("POST", f"/api/notifications/{notification_id}/read", auth=True)
        except IshaaziError as e:
            logger.warning("Failed to mark notification %s read on server: %s", notification_id, e)

    def clear_all(self) -> None:
        """Dismiss everything locally. The server keeps its records and read state."""
        self.store.clear()
