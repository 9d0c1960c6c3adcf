"""
Transient user-facing messages (success, error, warning, info), independent of stored notifications.

A sink renders the toast; the default one writes it to the log at a matching level.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from ishaazi.core.constants import TOAST_DEFAULT_DURATION_MS, TOAST_DEFAULT_POSITION, TOAST_KINDS

logger = logging.getLogger(__name__)

_LEVELS = {
    "success": logging.INFO,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True)
class ToastMessage:
    message: str
    kind: str = "info"
    duration_ms: int = TOAST_DEFAULT_DURATION_MS
    position: str = TOAST_DEFAULT_POSITION
    options: dict[str, Any] = field(default_factory=dict)


ToastSink = Callable[[ToastMessage], None]


def log_sink(toast: ToastMessage) -> None:
    logger.log(_LEVELS.get(toast.kind, logging.INFO), "[%s] %s", toast.kind, toast.message)


class ToastPresenter:
    def __init__(
        self,
        sink: ToastSink | None = None,
        *,
        default_duration_ms: int = TOAST_DEFAULT_DURATION_MS,
        default_position: str = TOAST_DEFAULT_POSITION,
    ) -> None:
        self._sink = sink or log_sink
        self.default_duration_ms = default_duration_ms
        self.default_position = default_position

    def show_notification(self, message: str, kind: str = "info", **options: Any) -> ToastMessage:
        """
        Show a toast. `duration` (ms) and `position` override the defaults; other options
        are passed through to the sink. Unknown kinds are shown as info.
        """
        if kind not in TOAST_KINDS:
            kind = "info"
        duration = options.pop("duration", None) or self.default_duration_ms
        position = options.pop("position", None) or self.default_position
        toast = ToastMessage(message=message, kind=kind, duration_ms=int(duration), position=position, options=options)
        try:
            self._sink(toast)
        except Exception as e:
            # Never drop the message: fall back to the log
            logger.warning("Toast sink failed (%s); %s", e, toast.message)
        return toast

    def success(self, message: str, **options: Any) -> ToastMessage:
        return self.show_notification(message, "success", **options)

    def error(self, message: str, **options: Any) -> ToastMessage:
        return self.show_notification(message, "error", **options)

    def warning(self, message: str, **options: Any) -> ToastMessage:
        return self.show_notification(message, "warning", **options)

    def info(self, message: str, **options: Any) -> ToastMessage:
        return self.show_notification(message, "info", **options)
