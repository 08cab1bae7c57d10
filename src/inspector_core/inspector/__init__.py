"""
inspector_core.inspector

Concrete sinks and the default observers that feed them.

Responsibilities:
- In-memory and structlog-backed `Inspector` implementations.
- Lifecycle trackers for actions and state scopes.
- Default action/state observers that build events and forward them to a sink.
"""

# Package marker.
