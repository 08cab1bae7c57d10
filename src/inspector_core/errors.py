"""
inspector_core.errors

Domain-specific exceptions.

Responsibilities:
- Distinguish deserialization failures from ordinary value errors.
- Signal lifecycle violations detected by scope/action trackers.
"""

from __future__ import annotations


class InspectorError(Exception):
    pass


class LogEventParseError(InspectorError, ValueError):
    """
    Raised when a JSON payload lacks a required correlation field or carries it with the
    wrong type. Optional fields never raise; they default.
    """

    def __init__(self, message: str, *, event_type: str | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.event_type = event_type
        self.field = field


class InvalidTransitionError(InspectorError):
    """
    Raised by lifecycle trackers when an event would break the ordering of its scope
    (e.g. a state `change` before `create`, an action `running` after `completed`).
    """

    def __init__(self, message: str, *, key: object, previous: str | None, attempted: str) -> None:
        super().__init__(message)
        self.key = key
        self.previous = previous
        self.attempted = attempted


# --- Module Notes -----------------------------------------------------------
# Observers never let these escape into the instrumented subsystem; see
# `inspector_core.inspector.dispatch`.
