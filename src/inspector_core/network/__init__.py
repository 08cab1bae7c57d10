"""
inspector_core.network

HTTP observation on top of `httpx`.

Responsibilities:
- Transports that call a `NetworkObserver` around every exchange.
- The default observer that turns exchanges into network log events.
"""

# Package marker.
