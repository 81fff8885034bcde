"""Minimal event bus carrying dashboard refresh signals.

Handlers run synchronously in publish order. A failing handler is logged and
does not prevent the remaining handlers from running.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from app_logging import get_logger

_log = get_logger("variables.events")


@dataclass(frozen=True)
class RefreshEvent:
    payload: dict[str, Any] = field(default_factory=dict)


Handler = Callable[[Any], None]


class Subscription:
    def __init__(self, bus: "EventBus", event_type: type, handler: Handler):
        self._bus = bus
        self._event_type = event_type
        self._handler = handler
        self.closed = False

    def unsubscribe(self) -> None:
        if self.closed:
            return
        self._bus._remove(self._event_type, self._handler)
        self.closed = True


class EventBus:
    def __init__(self, name: str = "dashboard"):
        self.name = name
        self._handlers: dict[type, list[Handler]] = {}

    def subscribe(self, event_type: type, handler: Handler) -> Subscription:
        self._handlers.setdefault(event_type, []).append(handler)
        return Subscription(self, event_type, handler)

    def publish(self, event: Any) -> int:
        """Deliver ``event`` to handlers of its type; returns how many ran."""
        handlers = list(self._handlers.get(type(event), []))
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                _log.warning("event handler failed", extra={"bus": self.name, "error": str(e)})
        return len(handlers)

    def handler_count(self, event_type: type) -> int:
        return len(self._handlers.get(event_type, []))

    def _remove(self, event_type: type, handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)


__all__ = ["EventBus", "RefreshEvent", "Subscription"]
