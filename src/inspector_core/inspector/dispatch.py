"""
inspector_core.inspector.dispatch

Isolation boundary between instrumented code and event sinks.

Responsibilities:
- Forward events to a sink without letting sink faults reach the caller.
- Report dropped events on the structlog fallback channel.
"""

from __future__ import annotations

from typing import Protocol

from inspector_core.models.base import LogEvent
from inspector_core.observability.logging import get_logger

log = get_logger(__name__)


class EventSink(Protocol):
    def log(self, event: LogEvent) -> None: ...


def forward_safely(sink: EventSink, event: LogEvent) -> bool:
    """
    Deliver `event` to `sink`; returns False when the sink raised.
    """
    try:
        sink.log(event)
    except Exception:
        log.warning(
            "inspector_sink_failed",
            event_id=event.id,
            event_type=event.event_type,
            sink=type(sink).__name__,
            exc_info=True,
        )
        return False
    return True


# --- Module Notes -----------------------------------------------------------
# Observers call `forward_safely` for every event they build; a broken sink costs the
# event, never the host operation.
