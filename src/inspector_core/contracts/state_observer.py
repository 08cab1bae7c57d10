"""
inspector_core.contracts.state_observer

Observer contract for state-scope lifecycles (app, page, component, state container).

Responsibilities:
- Callbacks keyed by `(state_id, state_type, namespace)`.
- Provide `NOOP_STATE_OBSERVER`.
"""

from __future__ import annotations

import abc
from typing import Any

from inspector_core.models.state import StateType


class StateObserver(abc.ABC):
    """
    Pure notifications: the contract carries no obligation to retain history.
    `namespace` tells apart concurrent instances of the same `(state_id, state_type)`.
    """

    @abc.abstractmethod
    def on_create(
        self,
        *,
        state_id: str,
        state_type: StateType,
        namespace: str | None = None,
        args: dict[str, Any] | None = None,
        state: dict[str, Any] | None = None,
    ) -> None: ...

    @abc.abstractmethod
    def on_change(
        self,
        *,
        state_id: str,
        state_type: StateType,
        namespace: str | None = None,
        args: dict[str, Any] | None = None,
        changes: dict[str, Any] | None = None,
        previous_state: dict[str, Any] | None = None,
        current_state: dict[str, Any] | None = None,
    ) -> None: ...

    @abc.abstractmethod
    def on_dispose(
        self,
        *,
        state_id: str,
        state_type: StateType,
        namespace: str | None = None,
        args: dict[str, Any] | None = None,
        state: dict[str, Any] | None = None,
    ) -> None: ...

    @abc.abstractmethod
    def on_error(
        self,
        *,
        state_id: str,
        state_type: StateType,
        error: BaseException | str,
        stack_trace: str | None = None,
        namespace: str | None = None,
        args: dict[str, Any] | None = None,
    ) -> None: ...


class NoOpStateObserver(StateObserver):
    def on_create(self, *, state_id: str, state_type: StateType, **_: Any) -> None:
        return None

    def on_change(self, *, state_id: str, state_type: StateType, **_: Any) -> None:
        return None

    def on_dispose(self, *, state_id: str, state_type: StateType, **_: Any) -> None:
        return None

    def on_error(self, *, state_id: str, state_type: StateType, **_: Any) -> None:
        return None


NOOP_STATE_OBSERVER = NoOpStateObserver()


# --- Module Notes -----------------------------------------------------------
# Delta/snapshot consistency is a sink concern; see
# `inspector_core.inspector.scopes.StateScopeTracker`.
