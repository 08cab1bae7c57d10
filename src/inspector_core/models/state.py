"""
inspector_core.models.state

State-scope lifecycle events.

Responsibilities:
- `StateType` / `StateEventType` enums (wire values are stable).
- `StateLog`: one event per lifecycle step of a scope identified by
  `(state_id, state_type, namespace)`.
- Factories for create/change/dispose/error that stamp id and tags.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from inspector_core.errors import LogEventParseError
from inspector_core.models.base import LogEvent, base_kwargs
from inspector_core.models.wire import LogEventEnvelope, StateWire, parse_wire, wire_keys
from inspector_core.utils.ids import IdGenerator, new_event_id
from inspector_core.utils.levels import LogLevel

StateMap = dict[str, Any]


class StateType(enum.StrEnum):
    app = "app"
    page = "page"
    component = "component"
    state_container = "stateContainer"


class StateEventType(enum.StrEnum):
    create = "create"
    change = "change"
    dispose = "dispose"
    error = "error"


_TITLE_VERBS = {
    StateEventType.create: ("Created", "state created"),
    StateEventType.change: ("Changed", "state changed"),
    StateEventType.dispose: ("Disposed", "state disposed"),
    StateEventType.error: ("Error", "state error"),
}

_KNOWN_KEYS = wire_keys(StateWire)
_DERIVED_TAGS = frozenset(t.value for t in StateType) | frozenset(e.value for e in StateEventType)


@dataclass(frozen=True, kw_only=True, eq=False)
class StateLog(LogEvent):
    state_id: str
    state_type: StateType
    state_event_type: StateEventType
    namespace: str | None = None
    args: StateMap | None = None
    # Snapshot carried by the event: initial (create), current (change) or final (dispose).
    state_data: StateMap | None = None
    previous_state_data: StateMap | None = None
    changes: StateMap | None = None
    error: object | None = None
    stack_trace: str | None = None
    extra_metadata: StateMap = field(default_factory=dict)
    category: str | None = "state"

    def __post_init__(self) -> None:
        object.__setattr__(self, "state_type", StateType(self.state_type))
        object.__setattr__(self, "state_event_type", StateEventType(self.state_event_type))
        # Derived tags are recomputed so a copy never keeps the previous kind.
        caller_tags = frozenset(str(t) for t in self.tags or ()) - _DERIVED_TAGS
        object.__setattr__(
            self,
            "tags",
            caller_tags | {self.state_type.value, self.state_event_type.value},
        )
        super().__post_init__()

    def _resolve_level(self, requested: LogLevel | None) -> LogLevel:
        if self.state_event_type is StateEventType.error:
            return LogLevel.error
        return requested or LogLevel.info

    # ----- factories -----

    @classmethod
    def on_create(
        cls,
        *,
        state_id: str,
        state_type: StateType,
        namespace: str | None = None,
        args: StateMap | None = None,
        initial_state: StateMap | None = None,
        metadata: StateMap | None = None,
        ids: IdGenerator | None = None,
    ) -> StateLog:
        return cls(
            id=_next_id(ids),
            state_id=state_id,
            state_type=state_type,
            state_event_type=StateEventType.create,
            namespace=namespace,
            args=args,
            state_data=initial_state,
            extra_metadata=dict(metadata or {}),
        )

    @classmethod
    def on_change(
        cls,
        *,
        state_id: str,
        state_type: StateType,
        namespace: str | None = None,
        args: StateMap | None = None,
        changes: StateMap | None = None,
        previous_state: StateMap | None = None,
        current_state: StateMap | None = None,
        metadata: StateMap | None = None,
        ids: IdGenerator | None = None,
    ) -> StateLog:
        return cls(
            id=_next_id(ids),
            state_id=state_id,
            state_type=state_type,
            state_event_type=StateEventType.change,
            namespace=namespace,
            args=args,
            state_data=current_state,
            previous_state_data=previous_state,
            changes=changes,
            extra_metadata=dict(metadata or {}),
        )

    @classmethod
    def on_dispose(
        cls,
        *,
        state_id: str,
        state_type: StateType,
        namespace: str | None = None,
        args: StateMap | None = None,
        final_state: StateMap | None = None,
        metadata: StateMap | None = None,
        ids: IdGenerator | None = None,
    ) -> StateLog:
        return cls(
            id=_next_id(ids),
            state_id=state_id,
            state_type=state_type,
            state_event_type=StateEventType.dispose,
            namespace=namespace,
            args=args,
            state_data=final_state,
            extra_metadata=dict(metadata or {}),
        )

    @classmethod
    def on_error(
        cls,
        *,
        state_id: str,
        state_type: StateType,
        error: object,
        stack_trace: str | None = None,
        namespace: str | None = None,
        args: StateMap | None = None,
        metadata: StateMap | None = None,
        ids: IdGenerator | None = None,
    ) -> StateLog:
        return cls(
            id=_next_id(ids),
            state_id=state_id,
            state_type=state_type,
            state_event_type=StateEventType.error,
            namespace=namespace,
            args=args,
            error=error,
            stack_trace=stack_trace,
            extra_metadata=dict(metadata or {}),
        )

    # ----- snapshot views -----

    @property
    def initial_state(self) -> StateMap | None:
        return self.state_data if self.state_event_type is StateEventType.create else None

    @property
    def current_state(self) -> StateMap | None:
        return self.state_data if self.state_event_type is StateEventType.change else None

    @property
    def previous_state(self) -> StateMap | None:
        return self.previous_state_data

    @property
    def final_state(self) -> StateMap | None:
        return self.state_data if self.state_event_type is StateEventType.dispose else None

    # ----- LogEvent accessors -----

    @property
    def event_type(self) -> str:
        return "state"

    @property
    def title(self) -> str:
        verb, _ = _TITLE_VERBS[self.state_event_type]
        return f"{self.state_type.value.upper()} {verb}{self._namespace_suffix()}"

    @property
    def description(self) -> str:
        _, phrase = _TITLE_VERBS[self.state_event_type]
        return f"{self.state_type.value.upper()} {phrase}{self._namespace_suffix()}"

    def _namespace_suffix(self) -> str:
        return f" ({self.namespace})" if self.namespace is not None else ""

    @property
    def metadata(self) -> dict[str, Any]:
        # Typed keys are written last so extra metadata can never shadow them.
        return {
            **self.extra_metadata,
            "stateId": self.state_id,
            "stateType": self.state_type.value,
            "stateEventType": self.state_event_type.value,
            "namespace": self.namespace,
            "args": self.args,
            "stateData": self.state_data,
            "previousStateData": self.previous_state_data,
            "changes": self.changes,
            "error": str(self.error) if self.error is not None else None,
            "stackTrace": self.stack_trace,
        }

    def matches(self, query: str) -> bool:
        q = query.lower()
        return (
            super().matches(query)
            or q in self.state_id.lower()
            or (self.namespace is not None and q in self.namespace.lower())
        )

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> StateLog:
        env = parse_wire(LogEventEnvelope, data, event_type="state")
        raw = env.metadata or {}
        meta = parse_wire(StateWire, raw, event_type="state")
        try:
            state_type = StateType(meta.state_type)
        except ValueError as e:
            raise LogEventParseError(
                f"state: unknown stateType {meta.state_type!r}", event_type="state", field="stateType"
            ) from e
        try:
            state_event_type = StateEventType(meta.state_event_type)
        except ValueError as e:
            raise LogEventParseError(
                f"state: unknown stateEventType {meta.state_event_type!r}",
                event_type="state",
                field="stateEventType",
            ) from e
        return cls(
            **base_kwargs(env),
            level=LogLevel.from_string(env.level),
            state_id=meta.state_id,
            state_type=state_type,
            state_event_type=state_event_type,
            namespace=meta.namespace,
            args=meta.args,
            state_data=meta.state_data,
            previous_state_data=meta.previous_state_data,
            changes=meta.changes,
            error=meta.error,
            stack_trace=meta.stack_trace,
            extra_metadata={k: v for k, v in raw.items() if k not in _KNOWN_KEYS},
        )

    def __str__(self) -> str:
        return (
            f"StateLog(id: {self.id}, stateId: {self.state_id}, stateType: {self.state_type.value}, "
            f"stateEventType: {self.state_event_type.value}, namespace: {self.namespace})"
        )


def _next_id(ids: IdGenerator | None) -> str:
    return ids.random_id() if ids is not None else new_event_id()


# --- Module Notes -----------------------------------------------------------
# `_KNOWN_KEYS` contains both camelCase aliases and snake_case names; only the
# remainder of a payload's metadata is treated as caller-supplied extra metadata.
