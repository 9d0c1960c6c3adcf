from ishaazi.client.toast import ToastPresenter


def _presenter():
    shown = []
    return ToastPresenter(shown.append), shown


def test_defaults():
    toasts, shown = _presenter()
    toast = toasts.show_notification("Saved")
    assert (toast.kind, toast.duration_ms, toast.position) == ("info", 4000, "top-right")
    assert shown == [toast]


def test_kind_helpers_and_overrides():
    toasts, shown = _presenter()
    toasts.success("Comment submitted", duration=2000)
    toasts.error("Could not like", position="bottom-left", dismissible=True)
    assert shown[0].kind == "success"
    assert shown[0].duration_ms == 2000
    assert shown[1].kind == "error"
    assert shown[1].position == "bottom-left"
    assert shown[1].options == {"dismissible": True}


def test_unknown_kind_is_shown_as_info():
    toasts, shown = _presenter()
    assert toasts.show_notification("Hello", "celebration").kind == "info"


def test_failing_sink_falls_back_to_log(caplog):
    def sink(toast):
        raise RuntimeError("no display")

    toast = ToastPresenter(sink).warning("Connection lost")
    assert toast.kind == "warning"
    assert "Connection lost" in caplog.text


def test_default_sink_logs(caplog):
    ToastPresenter().error("Failed to add comment")
    assert "[error] Failed to add comment" in caplog.text
