"""
inspector_core.inspector.base

Shared plumbing for concrete inspectors.

Responsibilities:
- Apply `enabled` / `minimum_level` gating before an event reaches storage.
- Build the default observers lazily, bound to the inspector itself.
- Track closed state so late events are ignored.
"""

from __future__ import annotations

import abc
import threading

import httpx

from inspector_core.contracts.inspector import Inspector
from inspector_core.contracts.logger import EventLogger
from inspector_core.inspector.observers import InspectorActionObserver, InspectorStateObserver
from inspector_core.inspector.scopes import StateScopeTracker
from inspector_core.models.base import LogEvent
from inspector_core.network.observer import InspectorNetworkObserver
from inspector_core.settings import InspectorSettings
from inspector_core.utils.ids import IdGenerator, RandomIdGenerator
from inspector_core.utils.levels import LogLevel


class ObservingInspector(Inspector, EventLogger):
    """
    Subclasses implement `_emit`; everything that reaches it already passed gating.
    A disabled inspector discards events and exposes no observers.
    """

    def __init__(
        self,
        *,
        settings: InspectorSettings | None = None,
        ids: IdGenerator | None = None,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or InspectorSettings()
        self.ids = ids or RandomIdGenerator(
            length=self.settings.id_length, short_length=self.settings.short_id_length
        )
        self._transport = transport
        self._async_transport = async_transport
        self._closed = False
        self._observer_lock = threading.Lock()
        self._network_observer: InspectorNetworkObserver | None = None
        self._action_observer: InspectorActionObserver | None = None
        self._state_observer: InspectorStateObserver | None = None

    @abc.abstractmethod
    def _emit(self, event: LogEvent) -> None: ...

    # ----- EventLogger -----

    @property
    def enabled(self) -> bool:
        return self.settings.enabled and not self._closed

    @property
    def minimum_level(self) -> LogLevel:
        return self.settings.minimum_level

    def is_level_enabled(self, level: LogLevel) -> bool:
        return self.enabled and not level.is_less_severe_than(self.minimum_level)

    def log(self, event: LogEvent) -> None:
        if event.level is None or not self.is_level_enabled(event.level):
            return
        self._emit(event)

    def flush(self) -> None:
        return None

    def close(self) -> None:
        self._closed = True

    # ----- observers -----

    @property
    def network_observer(self) -> InspectorNetworkObserver | None:
        if not self.settings.enabled:
            return None
        with self._observer_lock:
            if self._network_observer is None:
                self._network_observer = InspectorNetworkObserver(
                    self,
                    settings=self.settings,
                    ids=self.ids,
                    transport=self._transport,
                    async_transport=self._async_transport,
                )
            return self._network_observer

    @property
    def action_observer(self) -> InspectorActionObserver | None:
        if not self.settings.enabled:
            return None
        with self._observer_lock:
            if self._action_observer is None:
                self._action_observer = InspectorActionObserver(self)
            return self._action_observer

    @property
    def state_observer(self) -> InspectorStateObserver | None:
        if not self.settings.enabled:
            return None
        with self._observer_lock:
            if self._state_observer is None:
                self._state_observer = InspectorStateObserver(self, ids=self.ids)
            return self._state_observer

    @property
    def scopes(self) -> StateScopeTracker | None:
        observer = self.state_observer
        return observer.tracker if observer is not None else None


# --- Module Notes -----------------------------------------------------------
# Observers hold a reference to the inspector, not the reverse ownership of storage:
# events they build go through the same `log` gating as directly logged ones.
