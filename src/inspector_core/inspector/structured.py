"""
inspector_core.inspector.structured

Sink that renders every event as one structlog line.

Responsibilities:
- Map `LogLevel` onto stdlib logging levels.
- Emit the event's JSON form as structured key/value pairs.
"""

from __future__ import annotations

from typing import Any

from inspector_core.inspector.base import ObservingInspector
from inspector_core.models.base import LogEvent
from inspector_core.observability.logging import get_logger


class StructlogInspector(ObservingInspector):
    def __init__(self, logger: Any | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._logger = logger or get_logger("inspector_core.events")

    def _emit(self, event: LogEvent) -> None:
        payload = event.to_json()
        # `event` is structlog's message key; the event type takes its place.
        payload.pop("eventType", None)
        level = payload.pop("level", None)
        # structlog stamps its own `timestamp`; keep the event time under another key.
        payload["eventTimestamp"] = payload.pop("timestamp", None)
        self._logger.log(event.level.stdlib_level, event.event_type, inspector_level=level, **payload)


# --- Module Notes -----------------------------------------------------------
# Rendering and output routing follow `configure_logging`; this sink adds no handlers.
