"""
inspector_core.contracts.logger

Logger-flavoured sink contract with level filtering and lifecycle hooks.

Responsibilities:
- Define `EventLogger` (log/level filtering/flush/close).
- Provide message convenience methods built on `log`.
- Provide `NOOP_LOGGER`.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable
from typing import Any

from inspector_core.models.base import LogEvent, MessageLogEvent
from inspector_core.utils.levels import LogLevel


class EventLogger(abc.ABC):
    @abc.abstractmethod
    def log(self, event: LogEvent) -> None: ...

    @abc.abstractmethod
    def is_level_enabled(self, level: LogLevel) -> bool:
        """
        Lets callers skip building expensive events that would be filtered out anyway.
        """

    @property
    @abc.abstractmethod
    def minimum_level(self) -> LogLevel: ...

    @abc.abstractmethod
    def flush(self) -> None: ...

    @abc.abstractmethod
    def close(self) -> None: ...

    # ----- convenience methods -----

    def log_message(
        self,
        message: str,
        *,
        level: LogLevel = LogLevel.info,
        category: str | None = None,
        tags: Iterable[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        self.log(
            MessageLogEvent(
                level=level,
                message=message,
                category=category,
                tags=frozenset(tags or ()),
                extra=dict(metadata or {}),
            )
        )

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_message(message, level=LogLevel.debug, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_message(message, level=LogLevel.info, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_message(message, level=LogLevel.warning, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_message(message, level=LogLevel.error, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self.log_message(message, level=LogLevel.critical, **kwargs)


class NoOpLogger(EventLogger):
    def log(self, event: LogEvent) -> None:
        return None

    def is_level_enabled(self, level: LogLevel) -> bool:
        return False

    @property
    def minimum_level(self) -> LogLevel:
        return LogLevel.critical

    def flush(self) -> None:
        return None

    def close(self) -> None:
        return None


NOOP_LOGGER = NoOpLogger()


# --- Module Notes -----------------------------------------------------------
# `InMemoryInspector` implements both this contract and `Inspector`.
