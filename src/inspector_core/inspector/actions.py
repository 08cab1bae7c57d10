"""
inspector_core.inspector.actions

Sink-side bookkeeping for action executions.

Responsibilities:
- Enforce the per-execution status machine
  (pending -> running -> completed | error, pending -> disabled).
- Reject events for executions that already reached a terminal status.
- Fill in `execution_time` on terminal events from the first `running` timestamp.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime

from inspector_core.errors import InvalidTransitionError
from inspector_core.models.action import ActionLog, ActionStatus

# Allowed next statuses, keyed by the last observed status (None: never seen).
# `running` may repeat to carry progress updates.
_ALLOWED: dict[ActionStatus | None, frozenset[ActionStatus]] = {
    None: frozenset({ActionStatus.pending, ActionStatus.running, ActionStatus.disabled}),
    ActionStatus.pending: frozenset({ActionStatus.running, ActionStatus.disabled}),
    ActionStatus.running: frozenset({ActionStatus.running, ActionStatus.completed, ActionStatus.error}),
    ActionStatus.completed: frozenset(),
    ActionStatus.error: frozenset(),
    ActionStatus.disabled: frozenset(),
}


@dataclass(slots=True)
class _Execution:
    status: ActionStatus
    started_at: datetime | None = None


class ActionLifecycleTracker:
    def __init__(self, *, max_live: int = 4096, max_finished: int = 4096) -> None:
        # Executions that never finish are evicted oldest-first past `max_live`.
        self._live: OrderedDict[str, _Execution] = OrderedDict()
        self._max_live = max_live
        # Terminal statuses are remembered (bounded) so late events can be rejected.
        self._finished: OrderedDict[str, ActionStatus] = OrderedDict()
        self._max_finished = max_finished
        self._lock = threading.Lock()

    def apply(self, event: ActionLog) -> ActionLog:
        if event.parent_event_id is not None and event.parent_event_id == event.event_id:
            raise InvalidTransitionError(
                f"action {event.event_id} names itself as parent",
                key=event.event_id,
                previous=None,
                attempted=event.status.value,
            )

        with self._lock:
            execution = self._live.get(event.event_id)
            previous = execution.status if execution is not None else self._finished.get(event.event_id)
            if event.status not in _ALLOWED[previous]:
                raise InvalidTransitionError(
                    f"action {event.event_id}: {previous} -> {event.status.value} is not allowed",
                    key=event.event_id,
                    previous=previous.value if previous is not None else None,
                    attempted=event.status.value,
                )

            if execution is None:
                execution = self._live[event.event_id] = _Execution(status=event.status)
                while len(self._live) > self._max_live:
                    self._live.popitem(last=False)
            if event.status is ActionStatus.running and execution.started_at is None:
                execution.started_at = event.timestamp
            execution.status = event.status

            if not event.status.is_terminal:
                return event

            del self._live[event.event_id]
            self._finished[event.event_id] = event.status
            while len(self._finished) > self._max_finished:
                self._finished.popitem(last=False)

        if event.execution_time is None and execution.started_at is not None and event.timestamp is not None:
            event = event.copy_with(execution_time=event.timestamp - execution.started_at)
        return event

    def status_of(self, event_id: str) -> ActionStatus | None:
        with self._lock:
            execution = self._live.get(event_id)
            return execution.status if execution is not None else self._finished.get(event_id)

    def running(self) -> list[str]:
        with self._lock:
            return [eid for eid, ex in self._live.items() if ex.status is ActionStatus.running]

    def clear(self) -> None:
        with self._lock:
            self._live.clear()
            self._finished.clear()


# --- Module Notes -----------------------------------------------------------
# Parents are not required to be known: an execution may be observed mid-tree.
