"""
tests.test_actions

Action events, execution context and the action lifecycle.

Responsibilities:
- `ActionLog` levels, predicates, context stamping and JSON round trip.
- Status machine enforced by `ActionLifecycleTracker`.
- Default observer: status/callback agreement, ordering, execution time.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from inspector_core.errors import InvalidTransitionError, LogEventParseError
from inspector_core.inspector.actions import ActionLifecycleTracker
from inspector_core.inspector.memory import InMemoryInspector
from inspector_core.models.action import ActionLog, ActionStatus
from inspector_core.models.context import COMPONENT_LOAD_TRIGGER, ObservabilityContext
from inspector_core.models.registry import parse_log_event
from inspector_core.utils.levels import LogLevel

T0 = datetime(2024, 1, 15, 14, 30, 25, 123000, tzinfo=UTC)


def _action(status: ActionStatus, *, at: timedelta = timedelta(0), **kwargs) -> ActionLog:
    kwargs.setdefault("event_id", "e1")
    kwargs.setdefault("action_type", "navigate")
    return ActionLog(status=status, timestamp=T0 + at, **kwargs)


# ----- context -----


def test_context_for_component_then_trigger() -> None:
    ctx = ObservabilityContext(widget_hierarchy=["Root"]).for_component("Card").for_trigger("onClick")
    assert ctx.source_chain == ("Root", "Card")
    assert ctx.trigger_type == "onClick"


def test_context_derivations_do_not_share_state() -> None:
    parent = ObservabilityContext(widget_hierarchy=("Root",), current_entity_id="home")
    child = parent.for_component("Card")

    assert parent.widget_hierarchy == ("Root",)
    assert parent.trigger_type is None
    assert child.trigger_type == COMPONENT_LOAD_TRIGGER
    assert child.source_chain == ("home", "Root", "Card")
    assert child.formatted_source_chain == "home → Root → Card"
    assert parent.extend_hierarchy(["A", "B"]).widget_hierarchy == ("Root", "A", "B")
    assert parent.copy_with(trigger_type=None).trigger_type is None


# ----- model -----


def test_from_context_stamps_chain_and_trigger() -> None:
    ctx = ObservabilityContext(widget_hierarchy=("Root",), current_entity_id="home").for_trigger("onClick")
    event = ActionLog.from_context(ctx, event_id="e1", action_type="navigate", action_id="nav-1")

    assert event.status is ActionStatus.pending
    assert event.source_chain == ("home", "Root")
    assert event.trigger_name == "onClick"
    assert event.formatted_source_chain == "home → Root"
    assert event.is_top_level
    assert event.is_pending


@pytest.mark.parametrize(
    ("status", "level"),
    [
        (ActionStatus.pending, LogLevel.info),
        (ActionStatus.running, LogLevel.info),
        (ActionStatus.completed, LogLevel.info),
        (ActionStatus.error, LogLevel.error),
        (ActionStatus.disabled, LogLevel.debug),
    ],
)
def test_action_level_follows_status(status: ActionStatus, level: LogLevel) -> None:
    assert _action(status).level is level


def test_action_round_trip() -> None:
    event = _action(
        ActionStatus.completed,
        parent_event_id="e0",
        source_chain=("home", "Root"),
        trigger_name="onClick",
        execution_time=timedelta(milliseconds=1500),
        resolved_parameters={"route": "/cart"},
    )
    assert event.title == "navigate (completed)"
    assert "in 1.500s" in event.description

    restored = parse_log_event(event.to_json())
    assert isinstance(restored, ActionLog)
    assert restored.event_id == "e1"
    assert restored.parent_event_id == "e0"
    assert not restored.is_top_level
    assert restored.execution_time == timedelta(milliseconds=1500)
    assert restored.to_json() == event.to_json()


def test_action_from_json_rejects_unknown_status() -> None:
    data = _action(ActionStatus.running).to_json()
    data["metadata"]["status"] = "paused"
    with pytest.raises(LogEventParseError) as exc:
        ActionLog.from_json(data)
    assert exc.value.field == "status"


def test_action_search() -> None:
    event = _action(ActionStatus.error, source_chain=("checkout",), error_message="card declined")
    assert event.matches("navigate")
    assert event.matches("CHECKOUT")
    assert event.matches("declined")
    assert not event.matches("refund")


# ----- tracker -----


def test_tracker_accepts_full_lifecycle_and_fills_execution_time() -> None:
    tracker = ActionLifecycleTracker()
    tracker.apply(_action(ActionStatus.pending))
    tracker.apply(_action(ActionStatus.running, at=timedelta(milliseconds=100)))
    tracker.apply(_action(ActionStatus.running, at=timedelta(milliseconds=200), progress_data={"step": 1}))
    done = tracker.apply(_action(ActionStatus.completed, at=timedelta(milliseconds=350)))

    assert done.execution_time == timedelta(milliseconds=250)
    assert tracker.status_of("e1") is ActionStatus.completed


def test_tracker_keeps_explicit_execution_time() -> None:
    tracker = ActionLifecycleTracker()
    tracker.apply(_action(ActionStatus.running))
    done = tracker.apply(
        _action(ActionStatus.error, at=timedelta(seconds=1), execution_time=timedelta(milliseconds=42))
    )
    assert done.execution_time == timedelta(milliseconds=42)


def test_tracker_accepts_start_without_pending() -> None:
    tracker = ActionLifecycleTracker()
    tracker.apply(_action(ActionStatus.running))
    assert tracker.running() == ["e1"]


@pytest.mark.parametrize(
    ("history", "attempted"),
    [
        ([ActionStatus.pending, ActionStatus.running, ActionStatus.completed], ActionStatus.running),
        ([ActionStatus.pending, ActionStatus.disabled], ActionStatus.running),
        ([ActionStatus.pending], ActionStatus.completed),
        ([], ActionStatus.error),
        ([ActionStatus.running], ActionStatus.disabled),
    ],
)
def test_tracker_rejects_out_of_order_status(history: list[ActionStatus], attempted: ActionStatus) -> None:
    tracker = ActionLifecycleTracker()
    for status in history:
        tracker.apply(_action(status))
    with pytest.raises(InvalidTransitionError) as exc:
        tracker.apply(_action(attempted))
    assert exc.value.attempted == attempted.value


def test_tracker_rejects_self_parent() -> None:
    with pytest.raises(InvalidTransitionError):
        ActionLifecycleTracker().apply(_action(ActionStatus.pending, parent_event_id="e1"))



def test_tracker_bounds_unfinished_executions() -> None:
    tracker = ActionLifecycleTracker(max_live=2)
    for event_id in ("e1", "e2", "e3"):
        tracker.apply(_action(ActionStatus.running, event_id=event_id))

    assert tracker.running() == ["e2", "e3"]
    assert tracker.status_of("e1") is None


# ----- observer -----


def test_observer_records_lifecycle_and_children(inspector: InMemoryInspector) -> None:
    observer = inspector.action_observer
    assert observer is not None

    observer.on_action_pending(_action(ActionStatus.pending))
    observer.on_action_start(_action(ActionStatus.running, at=timedelta(milliseconds=10)))
    observer.on_action_start(_action(ActionStatus.running, event_id="c1", parent_event_id="e1"))
    observer.on_action_complete(_action(ActionStatus.completed, event_id="c1", parent_event_id="e1"))
    observer.on_action_complete(_action(ActionStatus.completed, at=timedelta(milliseconds=60)))

    attempt = inspector.action_attempt("e1")
    assert [e.status for e in attempt] == [
        ActionStatus.pending,
        ActionStatus.running,
        ActionStatus.completed,
    ]
    assert attempt[-1].execution_time == timedelta(milliseconds=50)
    assert {e.event_id for e in inspector.child_actions("e1")} == {"c1"}


def test_observer_drops_events_that_break_ordering(inspector: InMemoryInspector) -> None:
    observer = inspector.action_observer
    observer.on_action_pending(_action(ActionStatus.pending))
    observer.on_action_disabled(_action(ActionStatus.disabled))
    observer.on_action_start(_action(ActionStatus.running))

    assert [e.status for e in inspector.events] == [ActionStatus.pending, ActionStatus.disabled]


def test_observer_drops_status_that_disagrees_with_callback(inspector: InMemoryInspector) -> None:
    inspector.action_observer.on_action_start(_action(ActionStatus.completed))
    assert inspector.events == []


# --- Module Notes -----------------------------------------------------------
# Events inside one test share `event_id="e1"` unless a child execution is needed.
