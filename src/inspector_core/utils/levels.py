"""
inspector_core.utils.levels

Severity levels for categorizing and filtering log events.
"""

from __future__ import annotations

import enum
import logging


class LogLevel(enum.StrEnum):
    # Declaration order is the severity order; `priority` relies on it.
    verbose = "verbose"
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"
    critical = "critical"

    @property
    def display_name(self) -> str:
        return self.value.upper()

    @property
    def priority(self) -> int:
        return _ORDER.index(self)

    def is_more_severe_than(self, other: LogLevel) -> bool:
        return self.priority > other.priority

    def is_less_severe_than(self, other: LogLevel) -> bool:
        return self.priority < other.priority

    @property
    def stdlib_level(self) -> int:
        return _STDLIB_LEVELS[self]

    @classmethod
    def from_string(cls, name: str | None) -> LogLevel | None:
        """
        Case-insensitive lookup; returns None for unknown names instead of raising.
        """

        if not name:
            return None
        lowered = name.strip().lower()
        for level in cls:
            if level.value == lowered:
                return level
        return None


_ORDER: tuple[LogLevel, ...] = tuple(LogLevel)

_STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.verbose: logging.DEBUG,
    LogLevel.debug: logging.DEBUG,
    LogLevel.info: logging.INFO,
    LogLevel.warning: logging.WARNING,
    LogLevel.error: logging.ERROR,
    LogLevel.critical: logging.CRITICAL,
}


# --- Module Notes -----------------------------------------------------------
# Values are serialized verbatim into the `level` key of the JSON envelope; treat
# them as a stable wire contract.
