"""
inspector_core.inspector.observers

Default action/state observers that feed an event sink.

Responsibilities:
- Check each action callback against the status it reports.
- Run events through the lifecycle trackers before recording them.
- Drop (and report) events that break ordering instead of raising into the host.
"""

from __future__ import annotations

import traceback
from typing import Any

from inspector_core.contracts.action_observer import ActionObserver
from inspector_core.contracts.state_observer import StateObserver
from inspector_core.errors import InvalidTransitionError
from inspector_core.inspector.actions import ActionLifecycleTracker
from inspector_core.inspector.dispatch import EventSink, forward_safely
from inspector_core.inspector.scopes import StateScopeTracker
from inspector_core.models.action import ActionLog, ActionStatus
from inspector_core.models.state import StateLog, StateType
from inspector_core.observability.logging import get_logger
from inspector_core.utils.ids import IdGenerator

log = get_logger(__name__)

_PENDING = frozenset({ActionStatus.pending})
_RUNNING = frozenset({ActionStatus.running})
_FINISHED = frozenset({ActionStatus.completed, ActionStatus.error})
_DISABLED = frozenset({ActionStatus.disabled})


class InspectorActionObserver(ActionObserver):
    def __init__(self, sink: EventSink, *, tracker: ActionLifecycleTracker | None = None) -> None:
        self._sink = sink
        self.tracker = tracker or ActionLifecycleTracker()

    def on_action_pending(self, event: ActionLog) -> None:
        self._record("on_action_pending", event, _PENDING)

    def on_action_start(self, event: ActionLog) -> None:
        self._record("on_action_start", event, _RUNNING)

    def on_action_progress(self, event: ActionLog) -> None:
        self._record("on_action_progress", event, _RUNNING)

    def on_action_complete(self, event: ActionLog) -> None:
        self._record("on_action_complete", event, _FINISHED)

    def on_action_disabled(self, event: ActionLog) -> None:
        self._record("on_action_disabled", event, _DISABLED)

    def _record(self, callback: str, event: ActionLog, expected: frozenset[ActionStatus]) -> None:
        if event.status not in expected:
            log.warning(
                "action_status_mismatch",
                callback=callback,
                event_id=event.event_id,
                status=event.status.value,
            )
            return
        try:
            event = self.tracker.apply(event)
        except InvalidTransitionError as exc:
            log.warning(
                "action_transition_rejected",
                event_id=event.event_id,
                previous=exc.previous,
                attempted=exc.attempted,
            )
            return
        forward_safely(self._sink, event)


class InspectorStateObserver(StateObserver):
    def __init__(
        self,
        sink: EventSink,
        *,
        tracker: StateScopeTracker | None = None,
        ids: IdGenerator | None = None,
    ) -> None:
        self._sink = sink
        self.tracker = tracker or StateScopeTracker()
        self._ids = ids

    def on_create(
        self,
        *,
        state_id: str,
        state_type: StateType,
        namespace: str | None = None,
        args: dict[str, Any] | None = None,
        state: dict[str, Any] | None = None,
    ) -> None:
        self._record(
            StateLog.on_create(
                state_id=state_id,
                state_type=state_type,
                namespace=namespace,
                args=args,
                initial_state=state,
                ids=self._ids,
            )
        )

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
    ) -> None:
        self._record(
            StateLog.on_change(
                state_id=state_id,
                state_type=state_type,
                namespace=namespace,
                args=args,
                changes=changes,
                previous_state=previous_state,
                current_state=current_state,
                ids=self._ids,
            )
        )

    def on_dispose(
        self,
        *,
        state_id: str,
        state_type: StateType,
        namespace: str | None = None,
        args: dict[str, Any] | None = None,
        state: dict[str, Any] | None = None,
    ) -> None:
        self._record(
            StateLog.on_dispose(
                state_id=state_id,
                state_type=state_type,
                namespace=namespace,
                args=args,
                final_state=state,
                ids=self._ids,
            )
        )

    def on_error(
        self,
        *,
        state_id: str,
        state_type: StateType,
        error: BaseException | str,
        stack_trace: str | None = None,
        namespace: str | None = None,
        args: dict[str, Any] | None = None,
    ) -> None:
        if stack_trace is None and isinstance(error, BaseException) and error.__traceback__ is not None:
            stack_trace = "".join(traceback.format_exception(error))
        self._record(
            StateLog.on_error(
                state_id=state_id,
                state_type=state_type,
                error=error,
                stack_trace=stack_trace,
                namespace=namespace,
                args=args,
                ids=self._ids,
            )
        )

    def _record(self, event: StateLog) -> None:
        try:
            event = self.tracker.apply(event)
        except InvalidTransitionError as exc:
            log.warning(
                "state_transition_rejected",
                scope=str(exc.key),
                attempted=exc.attempted,
            )
            return
        forward_safely(self._sink, event)


# --- Module Notes -----------------------------------------------------------
# Trackers are exposed as attributes so sinks can answer snapshot queries from the
# same bookkeeping the observers use.
