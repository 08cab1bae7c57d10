"""
inspector_core.models.error_log

General application and UI error events.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from inspector_core.models.base import LogEvent, base_kwargs
from inspector_core.models.wire import ErrorWire, LogEventEnvelope, parse_wire
from inspector_core.utils.levels import LogLevel


@dataclass(frozen=True, kw_only=True, eq=False)
class ErrorLog(LogEvent):
    error: object
    error_type: str | None = None
    stack_trace: str | None = None
    source: str | None = None
    error_context: dict[str, Any] = field(default_factory=dict)
    is_fatal: bool = False
    user_action: str | None = None
    category: str | None = "error"

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.error_type is None:
            object.__setattr__(self, "error_type", type(self.error).__name__)

    def _resolve_level(self, requested: LogLevel | None) -> LogLevel:
        if requested is not None:
            return requested
        return LogLevel.critical if self.is_fatal else LogLevel.error

    @property
    def event_type(self) -> str:
        return "fatal_error" if self.is_fatal else "error"

    @property
    def title(self) -> str:
        return f"{'Fatal Error' if self.is_fatal else 'Error'}: {self.error_type}"

    @property
    def description(self) -> str:
        text = str(self.error)
        if self.source is not None:
            text += f" in {self.source}"
        if self.user_action is not None:
            text += f" (triggered by: {self.user_action})"
        return text

    @property
    def metadata(self) -> dict[str, Any]:
        return {
            "error": str(self.error),
            "errorType": self.error_type,
            "stackTrace": self.stack_trace,
            "source": self.source,
            "errorContext": dict(self.error_context),
            "isFatal": self.is_fatal,
            "userAction": self.user_action,
        }

    def matches(self, query: str) -> bool:
        q = query.lower()
        return (
            super().matches(query)
            or (self.source is not None and q in self.source.lower())
            or (self.user_action is not None and q in self.user_action.lower())
            or q in (self.error_type or "").lower()
        )

    @classmethod
    def _from_wire(cls, env: LogEventEnvelope, meta: ErrorWire) -> dict[str, Any]:
        return {
            **base_kwargs(env),
            "level": LogLevel.from_string(env.level),
            "error": meta.error if meta.error is not None else "Unknown error",
            "error_type": meta.error_type,
            "stack_trace": meta.stack_trace,
            "source": meta.source,
            "error_context": dict(meta.error_context or {}),
            "is_fatal": meta.is_fatal,
            "user_action": meta.user_action,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ErrorLog:
        env = parse_wire(LogEventEnvelope, data, event_type="error")
        meta = parse_wire(ErrorWire, env.metadata or {}, event_type="error")
        return cls(**cls._from_wire(env, meta))


@dataclass(frozen=True, kw_only=True, eq=False)
class UIErrorLog(ErrorLog):
    widget_name: str | None = None
    widget_path: str | None = None
    widget_properties: dict[str, Any] | None = None
    category: str | None = "ui"

    @property
    def event_type(self) -> str:
        return "ui_error"

    @property
    def title(self) -> str:
        return f"UI Error: {self.widget_name or self.error_type}"

    @property
    def description(self) -> str:
        text = super().description
        if self.widget_name is not None:
            text += f" in widget {self.widget_name}"
        if self.widget_path is not None:
            text += f" at {self.widget_path}"
        return text

    @property
    def metadata(self) -> dict[str, Any]:
        return {
            **super().metadata,
            "widgetName": self.widget_name,
            "widgetPath": self.widget_path,
            "widgetProperties": self.widget_properties,
        }

    def matches(self, query: str) -> bool:
        q = query.lower()
        return (
            super().matches(query)
            or (self.widget_name is not None and q in self.widget_name.lower())
            or (self.widget_path is not None and q in self.widget_path.lower())
        )

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> UIErrorLog:
        env = parse_wire(LogEventEnvelope, data, event_type="ui_error")
        meta = parse_wire(ErrorWire, env.metadata or {}, event_type="ui_error")
        return cls(
            **cls._from_wire(env, meta),
            widget_name=meta.widget_name,
            widget_path=meta.widget_path,
            widget_properties=meta.widget_properties,
        )


# --- Module Notes -----------------------------------------------------------
# Fatal errors default to `critical`; an explicit level (including the one read back
# from JSON) takes precedence.
