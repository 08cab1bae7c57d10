"""
inspector_core.utils

Small, dependency-free helpers shared by the event model.

Responsibilities:
- Timestamps, identifiers and severity levels.
"""

# Package marker.
