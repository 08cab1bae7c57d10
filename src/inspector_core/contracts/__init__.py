"""
inspector_core.contracts

Interfaces that host subsystems and sinks implement.

Responsibilities:
- Sink ingestion (`Inspector`, `EventLogger`).
- Observer callbacks for network, action and state lifecycles.
- One named no-op instance per contract.
"""

# Package marker.
