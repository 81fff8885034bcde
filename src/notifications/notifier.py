"""User-facing notifications (success/error alerts).

The host displays alerts; the core only publishes ``Notification`` objects.
``Notifier`` keeps the most recent notifications (bounded by ``history_size``)
and forwards every notification to registered sinks and to the log.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Literal

from app_logging import get_logger

_log = get_logger("notifications")

NotificationKind = Literal["success", "error"]

DEFAULT_HISTORY_SIZE = 100


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    title: str
    message: str


Sink = Callable[[Notification], None]


class Notifier:
    def __init__(self, sinks: list[Sink] | None = None, history_size: int = DEFAULT_HISTORY_SIZE):
        self._sinks: list[Sink] = list(sinks or [])
        self.history: deque[Notification] = deque(maxlen=history_size)

    def add_sink(self, sink: Sink) -> None:
        if sink not in self._sinks:
            self._sinks.append(sink)

    def remove_sink(self, sink: Sink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def success(self, title: str, message: str) -> Notification:
        return self._publish(Notification("success", title, message))

    def error(self, title: str, message: str) -> Notification:
        return self._publish(Notification("error", title, message))

    def _publish(self, notification: Notification) -> Notification:
        self.history.append(notification)
        if notification.kind == "error":
            _log.error(notification.message, extra={"title": notification.title})
        else:
            _log.info(notification.message, extra={"title": notification.title})
        for sink in self._sinks:
            try:
                sink(notification)
            except Exception as e:
                _log.warning("notification sink failed", extra={"error": str(e)})
        return notification


__all__ = ["Notification", "Notifier", "Sink"]
