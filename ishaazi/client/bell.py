"""Notification bell: relative times, type icons, deep links and one line per stored notification."""
from datetime import datetime, timezone
from typing import Iterable

from ishaazi.client.notifications import NotificationPoller, NotificationRecord
from ishaazi.core.constants import (
    NOTIFICATION_CONTENT_PUBLISHED,
    NOTIFICATION_EVENT_CREATED,
    NOTIFICATION_NEWSLETTER_SENT,
)

_ICONS = {
    NOTIFICATION_CONTENT_PUBLISHED: "📝",
    NOTIFICATION_EVENT_CREATED: "📅",
    NOTIFICATION_NEWSLETTER_SENT: "📧",
}
DEFAULT_ICON = "🔔"


def notification_icon(notification_type: str | None) -> str:
    return _ICONS.get(notification_type or "", DEFAULT_ICON)


def format_time_ago(ts: datetime | None, now: datetime | None = None) -> str:
    """'just now', '5m ago', '3h ago', '2d ago'. Naive timestamps are taken as UTC."""
    if ts is None:
        return ""
    now = now or datetime.now(timezone.utc)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    seconds = int((now - ts).total_seconds())
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def notification_link(n: NotificationRecord) -> str | None:
    """Deep link to the announced item, e.g. "/events/12"; None when the notification has none."""
    if not n.content_type or n.content_id is None:
        return None
    return f"/{n.content_type}/{n.content_id}"


def open_notification(poller: NotificationPoller, n: NotificationRecord) -> str | None:
    """Bell click: mark an unread notification read, then return where to navigate."""
    if not n.read:
        poller.mark_as_read(n.id)
    return notification_link(n)


def render_lines(records: Iterable[NotificationRecord], now: datetime | None = None) -> list[str]:
    """One line per notification; unread ones are marked with '*'."""
    lines = []
    for n in records:
        marker = " " if n.read else "*"
        ago = format_time_ago(n.created_at, now)
        suffix = f" ({ago})" if ago else ""
        link = notification_link(n)
        if link:
            suffix += f" -> {link}"
        lines.append(f"{marker} {notification_icon(n.type)} {n.title}{suffix}")
    return lines
