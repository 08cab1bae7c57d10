"""
inspector_core.contracts.action_observer

Observer contract for action execution.

Responsibilities:
- One callback per lifecycle step: pending, start, progress, complete (completed or
  error), disabled.
- Provide `NOOP_ACTION_OBSERVER`.
"""

from __future__ import annotations

import abc

from inspector_core.models.action import ActionLog


class ActionObserver(abc.ABC):
    """
    Each callback receives a fully formed `ActionLog` whose `status` already reflects the
    step being reported.
    """

    @abc.abstractmethod
    def on_action_pending(self, event: ActionLog) -> None: ...

    @abc.abstractmethod
    def on_action_start(self, event: ActionLog) -> None: ...

    @abc.abstractmethod
    def on_action_progress(self, event: ActionLog) -> None:
        """
        Called any number of times while running; details live in `event.progress_data`.
        """

    @abc.abstractmethod
    def on_action_complete(self, event: ActionLog) -> None:
        """
        Called once with status `completed` or `error`.
        """

    @abc.abstractmethod
    def on_action_disabled(self, event: ActionLog) -> None:
        """
        Called when an action is skipped before it ever ran (e.g. a guard condition).
        """


class NoOpActionObserver(ActionObserver):
    def on_action_pending(self, event: ActionLog) -> None:
        return None

    def on_action_start(self, event: ActionLog) -> None:
        return None

    def on_action_progress(self, event: ActionLog) -> None:
        return None

    def on_action_complete(self, event: ActionLog) -> None:
        return None

    def on_action_disabled(self, event: ActionLog) -> None:
        return None


NOOP_ACTION_OBSERVER = NoOpActionObserver()


# --- Module Notes -----------------------------------------------------------
# The default implementation (`inspector_core.inspector.observers`) forwards to a sink
# and fills in `execution_time` from the start event when the caller did not.
