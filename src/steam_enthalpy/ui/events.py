"""Publish/subscribe bus connecting the session model to the widgets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict

logger = logging.getLogger(__name__)

EventCallback = Callable[..., None]

# Event names published by :class:`~steam_enthalpy.ui.model.SessionModel`.
ESTIMATE_RECORDED = "estimate_recorded"
ESTIMATE_REJECTED = "estimate_rejected"
HISTORY_RESET = "history_reset"
STATS_CHANGED = "stats_changed"
NOTIFY = "notify"
MEDIUM_CHANGED = "medium_changed"


class EventBus:
    """Lightweight publish/subscribe dispatcher."""

    def __init__(self) -> None:
        self._subscribers: DefaultDict[str, list[EventCallback]] = defaultdict(list)

    def subscribe(self, event: str, callback: EventCallback) -> Callable[[], None]:
        """Register *callback* for *event* and return an unsubscribe handle."""

        self._subscribers[event].append(callback)

        def _unsubscribe() -> None:
            callbacks = self._subscribers.get(event)
            if not callbacks or callback not in callbacks:
                return
            callbacks.remove(callback)
            if not callbacks:
                self._subscribers.pop(event, None)

        return _unsubscribe

    def subscriber_count(self, event: str) -> int:
        return len(self._subscribers.get(event, ()))

    def publish(self, event: str, **payload: Any) -> None:
        """Invoke all callbacks registered for *event* with *payload*.

        A failing subscriber is logged and does not stop delivery to the rest.
        """

        for callback in list(self._subscribers.get(event, [])):
            try:
                callback(**payload)
            except Exception:  # pragma: no cover - GUI diagnostics
                logger.exception("Subscriber %r failed while handling %s", callback, event)


__all__ = [
    "ESTIMATE_RECORDED",
    "ESTIMATE_REJECTED",
    "EventBus",
    "EventCallback",
    "HISTORY_RESET",
    "MEDIUM_CHANGED",
    "NOTIFY",
    "STATS_CHANGED",
]
