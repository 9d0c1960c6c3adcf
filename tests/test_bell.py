from datetime import datetime, timedelta, timezone

import httpx
import pytest

from ishaazi.client.bell import format_time_ago, notification_icon, notification_link, open_notification, render_lines
from ishaazi.client.notifications import NotificationPoller, NotificationRecord

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=30), "just now"),
        (timedelta(minutes=5), "5m ago"),
        (timedelta(hours=3), "3h ago"),
        (timedelta(days=2, hours=1), "2d ago"),
    ],
)
def test_format_time_ago(delta, expected):
    assert format_time_ago(NOW - delta, now=NOW) == expected


def test_naive_timestamp_is_utc():
    assert format_time_ago(datetime(2026, 3, 1, 11, 0), now=NOW) == "1h ago"


def test_icons():
    assert notification_icon("event_created") == "📅"
    assert notification_icon("newsletter_sent") == "📧"
    assert notification_icon("something_else") == "🔔"


def test_render_lines_marks_unread():
    records = [
        NotificationRecord(id="a", title="Dairy expo", type="event_created", created_at=NOW - timedelta(minutes=10)),
        NotificationRecord(id="b", title="Weekly digest", type="newsletter_sent", read=True),
    ]
    assert render_lines(records, now=NOW) == ["* 📅 Dairy expo (10m ago)", "  📧 Weekly digest"]


def test_notification_link():
    event = NotificationRecord(id="a", title="Expo", content_type="events", content_id=12)
    assert notification_link(event) == "/events/12"
    assert notification_link(NotificationRecord(id="b", title="General")) is None


def test_render_lines_shows_link():
    record = NotificationRecord(id="a", title="Expo", type="event_created", read=True, content_type="events", content_id=12)
    assert render_lines([record], now=NOW) == ["  📅 Expo -> /events/12"]


def test_open_notification_marks_read_and_returns_link(make_api):
    payload = {
        "notifications": [
            {"id": "a", "title": "Expo", "type": "event_created", "content_type": "events", "content_id": 12}
        ]
    }

    def respond(req):
        if req.method == "GET":
            return httpx.Response(200, json=payload)
        return httpx.Response(200, json={"ok": True})

    api, handler = make_api(respond, token="tok")
    poller = NotificationPoller(api)
    poller.poll_once()
    record = poller.notifications[0]

    assert open_notification(poller, record) == "/events/12"
    assert poller.unread_count == 0
    assert handler.requests[-1].url.path == "/api/notifications/a/read"

    # Already read: no second request
    sent = len(handler.requests)
    assert open_notification(poller, poller.notifications[0]) == "/events/12"
    assert len(handler.requests) == sent
