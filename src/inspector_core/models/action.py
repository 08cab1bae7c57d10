"""
inspector_core.models.action

Action execution events.

Responsibilities:
- `ActionStatus`: pending -> running -> {completed, error}, or pending -> disabled.
- `ActionLog`: one event per lifecycle step of an action-execution attempt (`event_id`).
- Keep the raw action definition and the evaluated parameters side by side.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from inspector_core.errors import LogEventParseError
from inspector_core.models.base import LogEvent, base_kwargs
from inspector_core.models.wire import ActionWire, LogEventEnvelope, parse_wire
from inspector_core.utils.levels import LogLevel
from inspector_core.utils.timestamps import TimestampHelper

if TYPE_CHECKING:
    from inspector_core.models.context import ObservabilityContext

SOURCE_CHAIN_SEPARATOR = " → "


class ActionStatus(enum.StrEnum):
    pending = "pending"
    running = "running"
    completed = "completed"
    error = "error"
    disabled = "disabled"

    @property
    def is_terminal(self) -> bool:
        return self in (ActionStatus.completed, ActionStatus.error, ActionStatus.disabled)


@dataclass(frozen=True, kw_only=True, eq=False)
class ActionLog(LogEvent):
    event_id: str
    action_type: str
    status: ActionStatus
    action_id: str | None = None
    execution_time: timedelta | None = None
    parent_event_id: str | None = None
    source_chain: tuple[str, ...] = ()
    trigger_name: str | None = None
    action_definition: dict[str, Any] = field(default_factory=dict)
    resolved_parameters: dict[str, Any] = field(default_factory=dict)
    progress_data: dict[str, Any] | None = None
    error: object | None = None
    error_message: str | None = None
    stack_trace: str | None = None
    category: str | None = "action"

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", ActionStatus(self.status))
        object.__setattr__(self, "source_chain", tuple(self.source_chain or ()))
        if self.execution_time is not None:
            object.__setattr__(
                self, "execution_time", TimestampHelper.normalize_duration(self.execution_time)
            )
        super().__post_init__()

    def _resolve_level(self, requested: LogLevel | None) -> LogLevel:
        if self.status is ActionStatus.error:
            return LogLevel.error
        if self.status is ActionStatus.disabled:
            return LogLevel.debug
        return LogLevel.info

    @classmethod
    def from_context(
        cls,
        context: ObservabilityContext,
        *,
        event_id: str,
        action_type: str,
        status: ActionStatus = ActionStatus.pending,
        **kwargs: Any,
    ) -> ActionLog:
        """
        Stamp `source_chain` and `trigger_name` from the context the action was raised in.
        """

        return cls(
            event_id=event_id,
            action_type=action_type,
            status=status,
            source_chain=context.source_chain,
            trigger_name=context.trigger_type,
            **kwargs,
        )

    # ----- status predicates -----

    @property
    def is_top_level(self) -> bool:
        return self.parent_event_id is None

    @property
    def is_pending(self) -> bool:
        return self.status is ActionStatus.pending

    @property
    def is_running(self) -> bool:
        return self.status is ActionStatus.running

    @property
    def is_completed(self) -> bool:
        return self.status is ActionStatus.completed

    @property
    def is_failed(self) -> bool:
        return self.status is ActionStatus.error

    @property
    def is_disabled(self) -> bool:
        return self.status is ActionStatus.disabled

    @property
    def formatted_source_chain(self) -> str:
        return SOURCE_CHAIN_SEPARATOR.join(self.source_chain)

    # ----- LogEvent accessors -----

    @property
    def event_type(self) -> str:
        return "action"

    @property
    def title(self) -> str:
        return f"{self.action_type} ({self.status.value})"

    @property
    def description(self) -> str:
        parts = [f"Action {self.action_type} {self.status.value}"]
        if self.trigger_name:
            parts.append(f"on {self.trigger_name}")
        if self.source_chain:
            parts.append(f"from {self.formatted_source_chain}")
        if self.execution_time is not None:
            parts.append(f"in {TimestampHelper.format_elapsed(self.execution_time)}")
        if self.error_message:
            parts.append(f": {self.error_message}")
        return " ".join(parts)

    @property
    def metadata(self) -> dict[str, Any]:
        return {
            "eventId": self.event_id,
            "actionId": self.action_id,
            "actionType": self.action_type,
            "status": self.status.value,
            "executionTime": (
                TimestampHelper.to_millis(self.execution_time)
                if self.execution_time is not None
                else None
            ),
            "parentEventId": self.parent_event_id,
            "sourceChain": list(self.source_chain),
            "triggerName": self.trigger_name,
            "actionDefinition": dict(self.action_definition),
            "resolvedParameters": dict(self.resolved_parameters),
            "progressData": dict(self.progress_data) if self.progress_data is not None else None,
            "error": str(self.error) if self.error is not None else None,
            "errorMessage": self.error_message,
            "stackTrace": self.stack_trace,
        }

    def matches(self, query: str) -> bool:
        q = query.lower()
        return (
            super().matches(query)
            or q in self.action_type.lower()
            or (self.action_id is not None and q in self.action_id.lower())
            or (self.trigger_name is not None and q in self.trigger_name.lower())
            or any(q in entry.lower() for entry in self.source_chain)
            or (self.error_message is not None and q in self.error_message.lower())
        )

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ActionLog:
        env = parse_wire(LogEventEnvelope, data, event_type="action")
        meta = parse_wire(ActionWire, env.metadata or {}, event_type="action")
        try:
            status = ActionStatus(meta.status)
        except ValueError as e:
            raise LogEventParseError(
                f"action: unknown status {meta.status!r}", event_type="action", field="status"
            ) from e
        return cls(
            **base_kwargs(env),
            event_id=meta.event_id,
            action_id=meta.action_id,
            action_type=meta.action_type,
            status=status,
            execution_time=(
                timedelta(milliseconds=meta.execution_time)
                if meta.execution_time is not None
                else None
            ),
            parent_event_id=meta.parent_event_id,
            source_chain=tuple(meta.source_chain or ()),
            trigger_name=meta.trigger_name,
            action_definition=dict(meta.action_definition or {}),
            resolved_parameters=dict(meta.resolved_parameters or {}),
            progress_data=meta.progress_data,
            error=meta.error,
            error_message=meta.error_message,
            stack_trace=meta.stack_trace,
        )

    def __str__(self) -> str:
        return (
            f"ActionLog(id: {self.id}, actionType: {self.action_type}, status: {self.status.value}, "
            f"sourceChain: {self.formatted_source_chain}, triggerName: {self.trigger_name})"
        )


# --- Module Notes -----------------------------------------------------------
# `id` identifies one event; `event_id` identifies the execution attempt shared by its
# pending/running/progress/terminal events. Children point at their parent's `event_id`.
