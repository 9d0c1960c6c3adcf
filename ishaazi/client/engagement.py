"""
Engagement tracker for one content item: views, likes, shares and comments.

Mirrors what a content detail page does: track a view on open, load counters, toggle
like, record shares, submit comments. Background telemetry (views, shares) never raises;
user actions (comments, moderation) do. No request ordering is enforced between calls;
the last response received wins in `stats`.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from ishaazi.client.api_client import ApiClient
from ishaazi.core.constants import LIKE_ACTION, UNLIKE_ACTION
from ishaazi.core.errors import (
    MSG_COMMENT_FIELDS_REQUIRED,
    FetchError,
    IshaaziError,
    NetworkError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass
class EngagementStats:
    views: int = 0
    likes: int = 0
    shares: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "EngagementStats":
        return cls(views=int(d.get("views") or 0), likes=int(d.get("likes") or 0), shares=int(d.get("shares") or 0))


@dataclass
class CommentRecord:
    id: int
    author: str
    email: str
    content: str
    approved: bool = False
    created_at: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "CommentRecord":
        known = {"id", "author", "email", "content", "approved", "created_at"}
        return cls(
            id=d["id"],
            author=d.get("author") or "",
            email=d.get("email") or "",
            content=d.get("content") or "",
            approved=bool(d.get("approved")),
            created_at=d.get("created_at"),
            extra={k: v for k, v in d.items() if k not in known},
        )


class EngagementTracker:
    """Engagement state and operations for (content_type, content_id)."""

    def __init__(self, api: ApiClient, content_type: str, content_id: int) -> None:
        self._api = api
        self.content_type = content_type
        self.content_id = content_id
        self.stats = EngagementStats()
        self.is_liked = False
        self.loading = False
        self.error: str | None = None
        self.comments: list[CommentRecord] = []

    def _path(self, kind: str) -> str:
        return f"/api/content/{kind}/{self.content_type}/{self.content_id}"

    @contextmanager
    def _busy(self):
        self.loading = True
        try:
            yield
        finally:
            self.loading = False

    def open(self) -> None:
        """Detail page opened: count the view, then load counters (a failed load only sets error)."""
        self.track_view()
        try:
            self.fetch_stats()
        except FetchError:
            pass

    # --- Counters ---

    def track_view(self) -> None:
        """Count one view. A missed view is not critical: failures are logged, never raised."""
        try:
            data = self._api.request("POST", self._path("track/view"))
        except IshaaziError as e:
            logger.warning("Failed to track view for %s/%s: %s", self.content_type, self.content_id, e)
            return
        if "views" in data:
            self.stats.views = int(data["views"])

    def fetch_stats(self) -> EngagementStats:
        """Load current counters and clear error. On failure keep last-known stats, set error and raise FetchError."""
        try:
            data = self._api.request("GET", self._path("engagement"))
        except IshaaziError as e:
            logger.warning("Failed to fetch engagement stats for %s/%s: %s", self.content_type, self.content_id, e)
            self.error = "Failed to fetch stats"
            if isinstance(e, FetchError):
                raise
            raise FetchError(str(e), status_code=e.status_code) from e
        self.stats = EngagementStats.from_dict(data)
        self.error = None
        return self.stats

    def toggle_like(self, currently_liked: bool | None = None) -> bool:
        """
        Send 'like' or 'unlike' depending on the current state and return the new liked state.
        On failure the original state is returned unchanged and error is set.
        """
        liked = self.is_liked if currently_liked is None else currently_liked
        action = UNLIKE_ACTION if liked else LIKE_ACTION
        with self._busy():
            try:
                data = self._api.request("POST", self._path("track/like"), json_body={"action": action})
            except IshaaziError as e:
                logger.warning("Failed to toggle like for %s/%s: %s", self.content_type, self.content_id, e)
                self.error = "Failed to update like"
                return liked
        self.stats.likes = int(data.get("likes", self.stats.likes))
        self.is_liked = not liked
        return self.is_liked

    def track_share(self) -> None:
        """Count one share per call. Repeated clicks are not de-duplicated."""
        try:
            data = self._api.request("POST", self._path("track/share"))
        except IshaaziError as e:
            logger.warning("Failed to track share for %s/%s: %s", self.content_type, self.content_id, e)
            self.error = "Failed to track share"
            return
        if "shares" in data:
            self.stats.shares = int(data["shares"])

    # --- Comments ---

    def fetch_comments(self) -> list[CommentRecord]:
        """Approved comments, oldest first."""
        try:
            data = self._api.request("GET", self._path("comments"))
        except NetworkError as e:
            self.error = "Failed to fetch comments"
            raise FetchError(str(e), status_code=e.status_code) from e
        self.comments = [CommentRecord.from_dict(c) for c in data.get("comments") or []]
        return self.comments

    def add_comment(self, author: str, email: str, content: str) -> CommentRecord:
        """Submit a comment (pending approval). Blank fields are rejected before any request is sent."""
        if not (author or "").strip() or not (email or "").strip() or not (content or "").strip():
            self.error = MSG_COMMENT_FIELDS_REQUIRED
            raise ValidationError(MSG_COMMENT_FIELDS_REQUIRED)
        with self._busy():
            try:
                data = self._api.request(
                    "POST",
                    self._path("comments"),
                    json_body={"author": author, "email": email, "content": content},
                )
            except IshaaziError as e:
                logger.warning("Failed to add comment on %s/%s: %s", self.content_type, self.content_id, e)
                self.error = "Failed to add comment"
                raise
        return CommentRecord.from_dict(data["comment"])

    def delete_comment(self, comment_id: int) -> None:
        """Admin only. Raises AuthorizationError when no token is stored or the server refuses."""
        with self._busy():
            try:
                self._api.request("DELETE", f"{self._path('comments')}/{comment_id}", require_token=True)
            except IshaaziError as e:
                logger.warning("Failed to delete comment %s: %s", comment_id, e)
                self.error = "Failed to delete comment"
                raise
        self.comments = [c for c in self.comments if c.id != comment_id]

    def approve_comment(self, comment_id: int) -> CommentRecord:
        """Admin only. Raises AuthorizationError when no token is stored or the server refuses."""
        with self._busy():
            try:
                data = self._api.request(
                    "PATCH", f"{self._path('comments')}/{comment_id}/approve", require_token=True
                )
            except IshaaziError as e:
                logger.warning("Failed to approve comment %s: %s", comment_id, e)
                self.error = "Failed to approve comment"
                raise
        approved = CommentRecord.from_dict(data["comment"])
        if not any(c.id == approved.id for c in self.comments):
            self.comments.append(approved)
        else:
            self.comments = [approved if c.id == approved.id else c for c in self.comments]
        return approved
