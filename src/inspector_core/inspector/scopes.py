"""
inspector_core.inspector.scopes

Sink-side bookkeeping for state scopes.

Responsibilities:
- Identify a scope by `(state_id, state_type, namespace)`.
- Enforce create -> change* -> dispose ordering per scope.
- Keep the current snapshot of every live scope and fill in `previous_state` /
  `current_state` / `final_state` on events that leave them out.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any

from inspector_core.errors import InvalidTransitionError
from inspector_core.models.state import StateEventType, StateLog, StateType


@dataclass(frozen=True, slots=True)
class ScopeKey:
    state_id: str
    state_type: StateType
    namespace: str | None = None

    @classmethod
    def of(cls, event: StateLog) -> ScopeKey:
        return cls(state_id=event.state_id, state_type=event.state_type, namespace=event.namespace)

    def __str__(self) -> str:
        suffix = f"@{self.namespace}" if self.namespace else ""
        return f"{self.state_type.value}:{self.state_id}{suffix}"


@dataclass(slots=True)
class _Scope:
    snapshot: dict[str, Any]
    args: dict[str, Any] | None
    changes: int = 0


class StateScopeTracker:
    """
    Applies state events in arrival order. `apply` returns the event as it should be
    recorded (possibly with snapshots filled in) or raises `InvalidTransitionError`.

    `error` events need a scope that is live or was disposed earlier; they do not change
    the snapshot. Both the live and the disposed sets are bounded: past `max_scopes`
    the least recently touched scope is forgotten.
    """

    def __init__(self, *, max_scopes: int = 4096) -> None:
        self._scopes: OrderedDict[ScopeKey, _Scope] = OrderedDict()
        self._closed: OrderedDict[ScopeKey, None] = OrderedDict()
        self._max_scopes = max_scopes
        self._lock = threading.Lock()

    def apply(self, event: StateLog) -> StateLog:
        key = ScopeKey.of(event)
        with self._lock:
            scope = self._scopes.get(key)
            kind = event.state_event_type

            if kind is StateEventType.create:
                # A create while live replaces the scope: a new instance under the same identity.
                self._scopes[key] = _Scope(snapshot=dict(event.state_data or {}), args=event.args)
                self._scopes.move_to_end(key)
                self._closed.pop(key, None)
                _trim(self._scopes, self._max_scopes)
                return event

            if kind is StateEventType.error and (scope is not None or key in self._closed):
                return event

            if scope is None:
                raise InvalidTransitionError(
                    f"{kind.value} for {key} without a live create",
                    key=key,
                    previous=None,
                    attempted=kind.value,
                )

            self._scopes.move_to_end(key)
            if kind is StateEventType.change:
                previous = dict(scope.snapshot)
                if event.state_data is not None:
                    current = dict(event.state_data)
                else:
                    current = {**previous, **(event.changes or {})}
                scope.snapshot = current
                scope.changes += 1
                if event.previous_state_data is None or event.state_data is None:
                    event = event.copy_with(
                        previous_state_data=(
                            event.previous_state_data if event.previous_state_data is not None else previous
                        ),
                        state_data=current,
                    )
                return event

            # dispose
            del self._scopes[key]
            self._closed[key] = None
            _trim(self._closed, self._max_scopes)
            if event.state_data is None:
                event = event.copy_with(state_data=dict(scope.snapshot))
            return event

    def snapshot(self, key: ScopeKey) -> dict[str, Any] | None:
        with self._lock:
            scope = self._scopes.get(key)
            return dict(scope.snapshot) if scope is not None else None

    def is_active(self, key: ScopeKey) -> bool:
        with self._lock:
            return key in self._scopes

    def active_scopes(self) -> list[ScopeKey]:
        with self._lock:
            return list(self._scopes)

    def clear(self) -> None:
        with self._lock:
            self._scopes.clear()
            self._closed.clear()


def _trim(entries: OrderedDict, limit: int) -> None:
    while len(entries) > limit:
        entries.popitem(last=False)


# --- Module Notes -----------------------------------------------------------
# A disposed scope keeps only its key (so late `error` events are accepted); a later
# create under the same key starts from its own initial snapshot.
