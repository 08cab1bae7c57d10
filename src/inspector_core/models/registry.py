"""
inspector_core.models.registry

Typed reconstruction of events from the JSON envelope.

Responsibilities:
- Map `eventType` to the concrete variant's `from_json`.
- Fall back to `GenericLogEvent` for types this package does not know.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from inspector_core.errors import LogEventParseError
from inspector_core.models.action import ActionLog
from inspector_core.models.base import LogEvent, MessageLogEvent
from inspector_core.models.error_log import ErrorLog, UIErrorLog
from inspector_core.models.network import NetworkErrorLog, NetworkRequestLog, NetworkResponseLog
from inspector_core.models.state import StateLog

Parser = Callable[[dict[str, Any]], LogEvent]

_PARSERS: dict[str, Parser] = {
    "network_request": NetworkRequestLog.from_json,
    "network_response": NetworkResponseLog.from_json,
    "network_error": NetworkErrorLog.from_json,
    "action": ActionLog.from_json,
    "state": StateLog.from_json,
    "error": ErrorLog.from_json,
    "fatal_error": ErrorLog.from_json,
    "ui_error": UIErrorLog.from_json,
    "message": MessageLogEvent.from_json,
}


def register_event_type(event_type: str, parser: Parser) -> None:
    # Host applications with their own LogEvent subclasses plug them in here.
    _PARSERS[event_type] = parser


def parse_log_event(data: dict[str, Any]) -> LogEvent:
    if not isinstance(data, dict):
        raise LogEventParseError(f"expected a JSON object, got {type(data).__name__}")
    event_type = data.get("eventType")
    parser = _PARSERS.get(event_type) if isinstance(event_type, str) else None
    if parser is None:
        return LogEvent.from_json(data)
    return parser(data)


# --- Module Notes -----------------------------------------------------------
# Unknown event types are not an error: they degrade to a generic event that keeps
# title/description/metadata intact.
