"""
inspector_core.inspector.memory

Bounded in-memory sink for inspection UIs and tests.

Responsibilities:
- Retain the most recent events in arrival order (oldest evicted first).
- Answer the correlation queries the event model supports: one HTTP exchange, one
  action attempt, the children of an action.
- Notify subscribers of every stored event.
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from typing import Any

from inspector_core.inspector.base import ObservingInspector
from inspector_core.models.action import ActionLog
from inspector_core.models.base import LogEvent
from inspector_core.models.network import NetworkErrorLog, NetworkRequestLog, NetworkResponseLog
from inspector_core.observability.logging import get_logger
from inspector_core.utils.levels import LogLevel

log = get_logger(__name__)

Listener = Callable[[LogEvent], None]
NetworkLog = NetworkRequestLog | NetworkResponseLog | NetworkErrorLog


class InMemoryInspector(ObservingInspector):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._events: deque[LogEvent] = deque(maxlen=self.settings.max_events)
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def _emit(self, event: LogEvent) -> None:
        with self._lock:
            self._events.append(event)
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                log.warning("inspector_listener_failed", event_id=event.id, exc_info=True)

    # ----- reads -----

    @property
    def events(self) -> list[LogEvent]:
        with self._lock:
            return list(self._events)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def find(self, event_id: str) -> LogEvent | None:
        with self._lock:
            return next((e for e in self._events if e.id == event_id), None)

    def query(
        self,
        text: str | None = None,
        *,
        event_type: str | None = None,
        category: str | None = None,
        min_level: LogLevel | None = None,
    ) -> list[LogEvent]:
        results = []
        for event in self.events:
            if event_type is not None and event.event_type != event_type:
                continue
            if category is not None and event.category != category:
                continue
            if min_level is not None and event.level is not None and event.level.is_less_severe_than(min_level):
                continue
            if text and not event.matches(text):
                continue
            results.append(event)
        return results

    def exchange(self, request_id: str) -> list[NetworkLog]:
        """
        Request, response and error events of one HTTP exchange, in arrival order.
        """
        return [
            e
            for e in self.events
            if isinstance(e, NetworkRequestLog | NetworkResponseLog | NetworkErrorLog)
            and e.request_id == request_id
        ]

    def action_attempt(self, event_id: str) -> list[ActionLog]:
        return [e for e in self.events if isinstance(e, ActionLog) and e.event_id == event_id]

    def child_actions(self, event_id: str) -> list[ActionLog]:
        return [e for e in self.events if isinstance(e, ActionLog) and e.parent_event_id == event_id]

    # ----- subscriptions -----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def close(self) -> None:
        super().close()
        with self._lock:
            self._listeners.clear()


# --- Module Notes -----------------------------------------------------------
# Listeners run on the logging thread after the lock is released; a slow listener
# delays its caller but never blocks other writers.
