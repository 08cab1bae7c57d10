"""
inspector_core.models

Event taxonomy and value objects.

Responsibilities:
- Define the polymorphic `LogEvent` family and its JSON envelope.
- Define `ObservabilityContext`, the immutable source-chain descriptor.
"""

# Package marker.
