"""
inspector_core

Top-level package for the inspector event model.

Responsibilities:
- Expose package version metadata.
- Re-export the public event taxonomy, contracts and default sinks.
"""

from inspector_core.contracts.action_observer import NOOP_ACTION_OBSERVER, ActionObserver
from inspector_core.contracts.inspector import NOOP_INSPECTOR, Inspector, NoOpInspector
from inspector_core.contracts.logger import NOOP_LOGGER, EventLogger, NoOpLogger
from inspector_core.contracts.network_observer import (
    NOOP_NETWORK_OBSERVER,
    InterceptorHandler,
    NetworkObserver,
)
from inspector_core.contracts.state_observer import NOOP_STATE_OBSERVER, StateObserver
from inspector_core.errors import InspectorError, InvalidTransitionError, LogEventParseError
from inspector_core.inspector.actions import ActionLifecycleTracker
from inspector_core.inspector.memory import InMemoryInspector
from inspector_core.inspector.observers import InspectorActionObserver, InspectorStateObserver
from inspector_core.inspector.scopes import ScopeKey, StateScopeTracker
from inspector_core.inspector.structured import StructlogInspector
from inspector_core.models.action import ActionLog, ActionStatus
from inspector_core.models.base import GenericLogEvent, LogEvent, MessageLogEvent
from inspector_core.models.context import ObservabilityContext
from inspector_core.models.error_log import ErrorLog, UIErrorLog
from inspector_core.models.network import NetworkErrorLog, NetworkRequestLog, NetworkResponseLog
from inspector_core.models.registry import parse_log_event
from inspector_core.models.state import StateEventType, StateLog, StateType
from inspector_core.network.observer import InspectorNetworkObserver
from inspector_core.network.transport import AsyncInspectorTransport, InspectorTransport
from inspector_core.settings import InspectorSettings
from inspector_core.utils.ids import IdHelper, RandomIdGenerator, SequentialIdGenerator
from inspector_core.utils.levels import LogLevel
from inspector_core.utils.timestamps import TimestampHelper

__all__ = [
    "__version__",
    # Models
    "LogEvent",
    "GenericLogEvent",
    "MessageLogEvent",
    "NetworkRequestLog",
    "NetworkResponseLog",
    "NetworkErrorLog",
    "ActionLog",
    "ActionStatus",
    "StateLog",
    "StateType",
    "StateEventType",
    "ErrorLog",
    "UIErrorLog",
    "ObservabilityContext",
    "parse_log_event",
    # Contracts
    "Inspector",
    "NoOpInspector",
    "NOOP_INSPECTOR",
    "EventLogger",
    "NoOpLogger",
    "NOOP_LOGGER",
    "NetworkObserver",
    "InterceptorHandler",
    "NOOP_NETWORK_OBSERVER",
    "ActionObserver",
    "NOOP_ACTION_OBSERVER",
    "StateObserver",
    "NOOP_STATE_OBSERVER",
    # Sinks
    "InMemoryInspector",
    "StructlogInspector",
    # Default observers and trackers
    "InspectorNetworkObserver",
    "InspectorTransport",
    "AsyncInspectorTransport",
    "InspectorActionObserver",
    "InspectorStateObserver",
    "ActionLifecycleTracker",
    "StateScopeTracker",
    "ScopeKey",
    # Errors
    "InspectorError",
    "LogEventParseError",
    "InvalidTransitionError",
    # Utilities
    "InspectorSettings",
    "IdHelper",
    "RandomIdGenerator",
    "SequentialIdGenerator",
    "LogLevel",
    "TimestampHelper",
]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Submodules import each other by absolute path; nothing here runs at import time
# beyond class definitions.
