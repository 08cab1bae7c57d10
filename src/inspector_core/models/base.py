"""
inspector_core.models.base

Base class for every loggable event.

Responsibilities:
- Own identity (`id`), severity, timestamp, category and tags.
- Define the virtual accessors (`event_type`, `title`, `description`, `metadata`)
  each concrete variant supplies.
- Provide search (`matches`), the JSON envelope (`to_json`/`from_json`) and
  "copy with overrides".

Invariants:
- Equality and hashing use `id` only.
- Instances are frozen; mutation means building a new event via `copy_with`.
"""

from __future__ import annotations

import abc
import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Self

from inspector_core.models.wire import LogEventEnvelope, parse_wire
from inspector_core.utils.ids import new_event_id
from inspector_core.utils.levels import LogLevel
from inspector_core.utils.timestamps import TimestampHelper


@dataclass(frozen=True, kw_only=True, eq=False)
class LogEvent(abc.ABC):
    id: str = field(default_factory=new_event_id)
    level: LogLevel | None = None
    timestamp: datetime | None = None
    category: str | None = None
    tags: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        # Construction never fails: absent values default rather than raise.
        if not self.id:
            object.__setattr__(self, "id", new_event_id())
        ts = self.timestamp if self.timestamp is not None else TimestampHelper.now()
        object.__setattr__(self, "timestamp", TimestampHelper.normalize(ts))
        object.__setattr__(self, "tags", frozenset(str(t) for t in self.tags or ()))
        requested = LogLevel.from_string(self.level) if isinstance(self.level, str) else None
        object.__setattr__(self, "level", self._resolve_level(requested))

    def _resolve_level(self, requested: LogLevel | None) -> LogLevel:
        return requested or LogLevel.info

    # ----- virtual accessors -----

    @property
    @abc.abstractmethod
    def event_type(self) -> str: ...

    @property
    @abc.abstractmethod
    def title(self) -> str: ...

    @property
    @abc.abstractmethod
    def description(self) -> str: ...

    @property
    @abc.abstractmethod
    def metadata(self) -> dict[str, Any]: ...

    # ----- search -----

    def matches(self, query: str) -> bool:
        """
        Case-insensitive substring search over title, description, category, tags and
        event type. Subclasses OR extra fields onto this; they never replace it.
        """

        q = query.lower()
        return (
            q in self.title.lower()
            or q in self.description.lower()
            or (self.category is not None and q in self.category.lower())
            or any(q in tag.lower() for tag in self.tags)
            or q in self.event_type.lower()
        )

    # ----- serialization -----

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "eventType": self.event_type,
            "level": self.level.value,
            "timestamp": TimestampHelper.format_iso(self.timestamp),
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "tags": sorted(self.tags),
            "metadata": self.metadata,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> LogEvent:
        """
        Rebuild a `GenericLogEvent` carrying the serialized title/description/metadata.

        The concrete type is not recoverable from here; use the subtype's own `from_json`
        (or `inspector_core.models.registry.parse_log_event`) for a typed event.
        """

        env = parse_wire(LogEventEnvelope, data, event_type="generic")
        return GenericLogEvent(
            **base_kwargs(env),
            level=LogLevel.from_string(env.level) or LogLevel.info,
            raw_title=env.title or "",
            raw_description=env.description or "",
            raw_metadata=dict(env.metadata or {}),
        )

    def copy_with(self, **overrides: Any) -> Self:
        return dataclasses.replace(self, **overrides)

    # ----- identity -----

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        return isinstance(other, LogEvent) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return (
            f"LogEvent{{id: {self.id}, type: {self.event_type}, level: {self.level.value}, "
            f"timestamp: {TimestampHelper.format(self.timestamp)}, title: {self.title}}}"
        )


def base_kwargs(env: LogEventEnvelope) -> dict[str, Any]:
    # Shared by every `from_json`: identity, timestamp, category and tags.
    return {
        "id": env.id or new_event_id(),
        "timestamp": TimestampHelper.parse_iso(env.timestamp),
        "category": env.category,
        "tags": env.tag_set(),
    }


@dataclass(frozen=True, kw_only=True, eq=False)
class GenericLogEvent(LogEvent):
    """
    Event reconstructed from JSON without knowledge of its concrete type.
    """

    raw_title: str = ""
    raw_description: str = ""
    raw_metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def event_type(self) -> str:
        return "generic"

    @property
    def title(self) -> str:
        return self.raw_title

    @property
    def description(self) -> str:
        return self.raw_description

    @property
    def metadata(self) -> dict[str, Any]:
        return dict(self.raw_metadata)


@dataclass(frozen=True, kw_only=True, eq=False)
class MessageLogEvent(LogEvent):
    """
    Plain text message, produced by the logger convenience methods.
    """

    message: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def event_type(self) -> str:
        return "message"

    @property
    def title(self) -> str:
        if len(self.message) > 50:
            return self.message[:47] + "..."
        return self.message

    @property
    def description(self) -> str:
        return self.message

    @property
    def metadata(self) -> dict[str, Any]:
        return dict(self.extra)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> MessageLogEvent:
        env = parse_wire(LogEventEnvelope, data, event_type="message")
        return cls(
            **base_kwargs(env),
            level=LogLevel.from_string(env.level) or LogLevel.info,
            message=env.description or "",
            extra=dict(env.metadata or {}),
        )


# --- Module Notes -----------------------------------------------------------
# Subclasses are declared with `eq=False` so the dataclass machinery keeps the
# id-based `__eq__`/`__hash__` defined here.
