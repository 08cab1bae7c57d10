"""
inspector_core.contracts.inspector

The single ingestion point every observer funnels into.

Responsibilities:
- Define `Inspector.log(event)`.
- Expose the observers an inspector provides (or None).
- Provide `NOOP_INSPECTOR`.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inspector_core.contracts.action_observer import ActionObserver
    from inspector_core.contracts.network_observer import NetworkObserver
    from inspector_core.contracts.state_observer import StateObserver
    from inspector_core.models.base import LogEvent


class Inspector(abc.ABC):
    """
    Implementations must accept any `LogEvent` variant and stay cheap per call: observers
    call `log` inline from the instrumented code path.
    """

    @abc.abstractmethod
    def log(self, event: LogEvent) -> None: ...

    @property
    @abc.abstractmethod
    def network_observer(self) -> NetworkObserver | None: ...

    @property
    @abc.abstractmethod
    def action_observer(self) -> ActionObserver | None: ...

    @property
    @abc.abstractmethod
    def state_observer(self) -> StateObserver | None: ...


class NoOpInspector(Inspector):
    def log(self, event: LogEvent) -> None:
        return None

    @property
    def network_observer(self) -> NetworkObserver | None:
        return None

    @property
    def action_observer(self) -> ActionObserver | None:
        return None

    @property
    def state_observer(self) -> StateObserver | None:
        return None


NOOP_INSPECTOR = NoOpInspector()


# --- Module Notes -----------------------------------------------------------
# Whether inspection is active is a constructor argument of concrete inspectors
# (`InspectorSettings.enabled`), never a process-wide flag.
