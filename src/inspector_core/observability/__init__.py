"""
inspector_core.observability

Diagnostics for the inspector itself.

Responsibilities:
- Structured logging configuration used as the fallback channel for internal faults.
"""

# Package marker.
