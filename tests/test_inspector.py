"""
tests.test_inspector

Sinks and contracts.

Responsibilities:
- In-memory sink: gating, eviction, queries, subscriptions.
- structlog sink: one structured line per event at the mapped level.
- No-op contracts accept everything and record nothing.
- Sink faults never reach instrumented code.
"""

from __future__ import annotations

import structlog
from structlog.testing import capture_logs

from inspector_core.contracts.action_observer import NOOP_ACTION_OBSERVER
from inspector_core.contracts.inspector import NOOP_INSPECTOR, Inspector
from inspector_core.contracts.logger import NOOP_LOGGER
from inspector_core.contracts.state_observer import NOOP_STATE_OBSERVER
from inspector_core.inspector.dispatch import forward_safely
from inspector_core.inspector.memory import InMemoryInspector
from inspector_core.inspector.observers import InspectorActionObserver
from inspector_core.inspector.structured import StructlogInspector
from inspector_core.models.action import ActionLog, ActionStatus
from inspector_core.models.base import MessageLogEvent
from inspector_core.models.network import NetworkResponseLog
from inspector_core.models.state import StateType
from inspector_core.observability.logging import (
    _add_service_name,
    configure_from_settings,
    configure_logging,
)
from inspector_core.settings import InspectorSettings
from inspector_core.utils.levels import LogLevel


def test_logger_convenience_methods(inspector: InMemoryInspector) -> None:
    inspector.info("cache warmed", category="startup", tags=["boot"], metadata={"entries": 12})
    inspector.error("payment failed")

    warmed, failed = inspector.events
    assert isinstance(warmed, MessageLogEvent)
    assert warmed.level is LogLevel.info
    assert warmed.category == "startup"
    assert warmed.tags == {"boot"}
    assert warmed.metadata == {"entries": 12}
    assert failed.level is LogLevel.error


def test_minimum_level_filters_events() -> None:
    inspector = InMemoryInspector(settings=InspectorSettings(minimum_level=LogLevel.warning))
    inspector.info("ignored")
    inspector.warning("kept")

    assert not inspector.is_level_enabled(LogLevel.info)
    assert inspector.is_level_enabled(LogLevel.critical)
    assert [e.description for e in inspector.events] == ["kept"]


def test_disabled_inspector_discards_everything() -> None:
    inspector = InMemoryInspector(settings=InspectorSettings(enabled=False))
    inspector.critical("dropped")

    assert inspector.events == []
    assert inspector.action_observer is None
    assert inspector.state_observer is None
    assert inspector.scopes is None


def test_ring_buffer_evicts_oldest() -> None:
    inspector = InMemoryInspector(settings=InspectorSettings(max_events=3))
    for n in range(5):
        inspector.info(f"event {n}")
    assert [e.description for e in inspector.events] == ["event 2", "event 3", "event 4"]
    assert len(inspector) == 3


def test_find_and_query(inspector: InMemoryInspector) -> None:
    inspector.log(NetworkResponseLog(id="resp", request_id="r1", status_code=500))
    inspector.info("user signed in", category="auth")
    inspector.debug("token refreshed", category="auth")

    assert inspector.find("resp").status_code == 500
    assert inspector.find("missing") is None
    assert [e.id for e in inspector.query(event_type="network_response")] == ["resp"]
    assert len(inspector.query(category="auth")) == 2
    assert [e.description for e in inspector.query("signed")] == ["user signed in"]
    assert len(inspector.query(min_level=LogLevel.info)) == 2


def test_subscribe_and_unsubscribe(inspector: InMemoryInspector) -> None:
    seen: list[str] = []
    unsubscribe = inspector.subscribe(lambda event: seen.append(event.description))

    inspector.info("one")
    unsubscribe()
    inspector.info("two")

    assert seen == ["one"]
    assert len(inspector) == 2


def test_failing_listener_does_not_block_storage(inspector: InMemoryInspector) -> None:
    def explode(_event) -> None:
        raise RuntimeError("listener bug")

    inspector.subscribe(explode)
    inspector.info("still stored")
    assert [e.description for e in inspector.events] == ["still stored"]


def test_clear_and_close(inspector: InMemoryInspector) -> None:
    inspector.info("before")
    inspector.clear()
    assert inspector.events == []

    inspector.close()
    inspector.info("after close")
    assert inspector.events == []
    assert not inspector.enabled


class _ExplodingInspector(Inspector):
    def log(self, event) -> None:
        raise RuntimeError("sink down")

    @property
    def network_observer(self):
        return None

    @property
    def action_observer(self):
        return None

    @property
    def state_observer(self):
        return None


def test_sink_faults_are_swallowed() -> None:
    sink = _ExplodingInspector()
    event = ActionLog(event_id="e1", action_type="noop", status=ActionStatus.pending)

    assert forward_safely(sink, event) is False
    InspectorActionObserver(sink).on_action_pending(event)


def test_noop_contracts_accept_everything() -> None:
    event = ActionLog(event_id="e1", action_type="noop", status=ActionStatus.pending)

    NOOP_INSPECTOR.log(event)
    NOOP_ACTION_OBSERVER.on_action_pending(event)
    NOOP_STATE_OBSERVER.on_create(state_id="p", state_type=StateType.page)
    NOOP_LOGGER.info("nothing")

    assert NOOP_INSPECTOR.network_observer is None
    assert NOOP_LOGGER.minimum_level is LogLevel.critical
    assert not NOOP_LOGGER.is_level_enabled(LogLevel.critical)


def test_structlog_inspector_emits_one_line_per_event() -> None:
    with capture_logs() as logs:
        sink = StructlogInspector(logger=structlog.get_logger("test"))
        sink.log(NetworkResponseLog(request_id="r1", status_code=503))
        sink.info("hello")

    assert [entry["event"] for entry in logs] == ["network_response", "message"]
    assert logs[0]["log_level"] == "error"
    assert logs[0]["metadata"]["statusCode"] == 503
    assert logs[0]["inspector_level"] == "error"
    assert logs[1]["log_level"] == "info"
    assert logs[1]["description"] == "hello"


def test_service_name_processor_keeps_explicit_value() -> None:
    processor = _add_service_name("inspector-tests")
    assert processor(None, "info", {"event": "x"}) == {"event": "x", "service": "inspector-tests"}
    assert processor(None, "info", {"event": "x", "service": "own"})["service"] == "own"


def test_configure_logging_installs_stdlib_pipeline() -> None:
    try:
        configure_logging(service_name="inspector-tests", level="debug")
        assert structlog.is_configured()
        assert structlog.get_config()["wrapper_class"] is structlog.stdlib.BoundLogger
    finally:
        structlog.reset_defaults()


def test_configure_from_settings_selects_console_renderer() -> None:
    try:
        configure_from_settings(InspectorSettings(service_name="inspector-tests", log_json=False))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert structlog.processors.format_exc_info in processors
    finally:
        structlog.reset_defaults()


# --- Module Notes -----------------------------------------------------------
# structlog stays unconfigured here; `capture_logs` swaps processors for the block only.
