"""NotificationStore merge rules and NotificationPoller behaviour."""
import threading

import httpx

from ishaazi.client.notifications import NotificationPoller, NotificationRecord, NotificationStore
from ishaazi.core.constants import NOTIFICATION_POLL_JOB_ID
from ishaazi.services.content_service import publish_content


def _rec(i, read=False):
    return NotificationRecord(id=f"n{i}", title=f"Title {i}", read=read)


def _payload(*ids, read=()):
    return {
        "notifications": [
            {"id": i, "title": f"T {i}", "description": "", "type": "content_published", "read": i in read}
            for i in ids
        ],
        "unread_count": len(ids) - len(read),
    }


# --- Store ---


def test_new_batch_goes_in_front_and_known_ids_are_skipped():
    store = NotificationStore()
    store.merge([_rec(1)])
    added = store.merge([_rec(1), _rec(2)])
    assert [n.id for n in added] == ["n2"]
    assert [n.id for n in store.snapshot()] == ["n2", "n1"]


def test_existing_records_keep_their_position():
    store = NotificationStore()
    store.merge([_rec(2), _rec(1)])
    store.merge([_rec(3), _rec(2)])
    assert [n.id for n in store.snapshot()] == ["n3", "n2", "n1"]


def test_store_is_capped_and_has_no_duplicates():
    store = NotificationStore(limit=50)
    store.merge([_rec(i) for i in range(40)])
    store.merge([_rec(i) for i in range(30, 70)])
    ids = [n.id for n in store.snapshot()]
    assert len(ids) == 50
    assert len(set(ids)) == 50
    assert ids[:30] == [f"n{i}" for i in range(40, 70)]


def test_duplicates_within_one_batch_are_kept_once():
    store = NotificationStore()
    store.merge([_rec(1), _rec(1), _rec(2)])
    assert [n.id for n in store.snapshot()] == ["n1", "n2"]


def test_mark_read_is_idempotent():
    store = NotificationStore()
    store.merge([_rec(1), _rec(2)])
    assert store.unread_count == 2
    assert store.mark_read("n1") is True
    assert store.mark_read("n1") is True
    assert store.unread_count == 1
    assert store.mark_read("missing") is False
    assert "n1" in store


def test_concurrent_merges_keep_ids_unique():
    store = NotificationStore(limit=500)
    batches = [[_rec(i) for i in range(start, start + 100)] for start in range(0, 400, 50)]
    threads = [threading.Thread(target=store.merge, args=(b,)) for b in batches]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    ids = [n.id for n in store.snapshot()]
    assert len(ids) == len(set(ids)) == 450


# --- Poller ---


def test_poll_merges_and_reports_connected(make_api, reader_token):
    payloads = iter([_payload("a"), _payload("a", "b")])
    api, handler = make_api(lambda req: httpx.Response(200, json=next(payloads)), token=reader_token)
    poller = NotificationPoller(api)
    assert [n.id for n in poller.poll_once()] == ["a"]
    assert [n.id for n in poller.poll_once()] == ["b"]
    assert [n.id for n in poller.notifications] == ["b", "a"]
    assert poller.is_connected is True
    assert handler.requests[0].headers["Authorization"] == f"Bearer {reader_token}"


def test_failed_poll_keeps_list_and_disconnects(make_api):
    responses = iter([httpx.Response(200, json=_payload("a", read=("a",))), httpx.Response(500)])
    api, _ = make_api(lambda req: next(responses))
    poller = NotificationPoller(api)
    poller.poll_once()
    assert poller.poll_once() == []
    assert poller.is_connected is False
    assert poller.last_error
    assert [n.id for n in poller.notifications] == ["a"]
    assert poller.unread_count == 0


def test_unauthorized_poll_disconnects(make_api):
    api, _ = make_api(lambda req: httpx.Response(401, json={"detail": "Missing Authorization header"}))
    poller = NotificationPoller(api)
    assert poller.poll_once() == []
    assert poller.is_connected is False
    assert poller.last_error == "Missing Authorization header"


def test_malformed_payload_is_a_failed_poll(make_api):
    api, _ = make_api(lambda req: httpx.Response(200, json={"notifications": [{"title": "no id"}]}))
    poller = NotificationPoller(api)
    assert poller.poll_once() == []
    assert poller.is_connected is False


def test_on_new_called_only_with_new_records(make_api):
    payloads = iter([_payload("a"), _payload("a")])
    api, _ = make_api(lambda req: httpx.Response(200, json=next(payloads)))
    seen = []
    poller = NotificationPoller(api, on_new=seen.append)
    poller.poll_once()
    poller.poll_once()
    assert [[n.id for n in batch] for batch in seen] == [["a"]]


def test_on_new_failure_does_not_break_poll(make_api):
    api, _ = make_api(lambda req: httpx.Response(200, json=_payload("a")))

    def boom(records):
        raise RuntimeError("render failed")

    poller = NotificationPoller(api, on_new=boom)
    assert len(poller.poll_once()) == 1
    assert poller.is_connected is True


def test_mark_as_read_updates_locally_then_posts(make_api):
    def respond(req):
        if req.method == "GET":
            return httpx.Response(200, json=_payload("a", "b"))
        return httpx.Response(200, json={"ok": True})

    api, handler = make_api(respond, token="tok")
    poller = NotificationPoller(api)
    poller.poll_once()
    poller.mark_as_read("a")
    assert poller.unread_count == 1
    assert handler.requests[-1].method == "POST"
    assert handler.requests[-1].url.path == "/api/notifications/a/read"


def test_mark_as_read_server_failure_keeps_local_state(make_api, caplog):
    def respond(req):
        if req.method == "GET":
            return httpx.Response(200, json=_payload("a"))
        return httpx.Response(503)

    api, _ = make_api(respond)
    poller = NotificationPoller(api)
    poller.poll_once()
    poller.mark_as_read("a")
    assert poller.notifications[0].read is True
    assert "Failed to mark notification a read" in caplog.text


def test_clear_all_is_local_only(make_api):
    api, handler = make_api(lambda req: httpx.Response(200, json=_payload("a", "b")))
    poller = NotificationPoller(api)
    poller.poll_once()
    sent = len(handler.requests)
    poller.clear_all()
    assert poller.notifications == []
    assert len(handler.requests) == sent
    # Records the server still returns come back on the next poll
    assert len(poller.poll_once()) == 2


def test_start_schedules_interval_job_and_stop_shuts_down(make_api):
    api, _ = make_api(lambda req: httpx.Response(200, json=_payload()))
    poller = NotificationPoller(api, interval_seconds=30)
    poller.start()
    try:
        assert poller.running is True
        job = poller._scheduler.get_job(NOTIFICATION_POLL_JOB_ID)
        assert job is not None
        assert job.trigger.interval.total_seconds() == 30
    finally:
        poller.stop()
    assert poller.running is False


def test_default_interval_comes_from_config(make_api):
    api, _ = make_api(lambda req: httpx.Response(200, json=_payload()))
    assert NotificationPoller(api).interval_seconds == 30


def test_poller_against_app(app_api, db, reader_token):
    count = 3
    app_api.token_store.token = reader_token
    for i in range(count):
        publish_content(db, "news", f"Market prices week {i}")
    poller = NotificationPoller(app_api)
    new = poller.poll_once()
    assert len(new) == count
    assert poller.unread_count == count

    poller.mark_as_read(new[0].id)
    fresh = NotificationPoller(app_api)
    fresh.poll_once()
    assert fresh.unread_count == count - 1
