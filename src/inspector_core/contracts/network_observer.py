"""
inspector_core.contracts.network_observer

Interceptor-style contract for observing HTTP exchanges made with `httpx`.

Responsibilities:
- Define the three callbacks (`on_request`, `on_response`, `on_error`).
- Define `InterceptorHandler`, the pass-through continuation handed to each callback.
- Expose the transport objects that register the observer with an httpx client.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass

import httpx


@dataclass(slots=True)
class InterceptorHandler:
    """
    Continuation for one callback of one exchange.

    Observers call `next()` once they are done; the exchange itself always proceeds with
    the original request/response/error, whether or not the observer forwarded.
    `response_body` carries the decoded body for `on_response` when body capture is on.
    """

    request: httpx.Request
    forwarded: bool = False
    response_body: bytes | None = None

    def next(self) -> None:
        self.forwarded = True


class NetworkObserver(abc.ABC):
    """
    A side-channel tap: callbacks must not alter or block the exchange they observe.
    """

    @abc.abstractmethod
    def on_request(self, request: httpx.Request, handler: InterceptorHandler) -> None: ...

    @abc.abstractmethod
    def on_response(self, response: httpx.Response, handler: InterceptorHandler) -> None: ...

    @abc.abstractmethod
    def on_error(self, error: Exception, handler: InterceptorHandler) -> None: ...

    @property
    @abc.abstractmethod
    def interceptor(self) -> httpx.BaseTransport:
        """
        Transport to pass as `httpx.Client(transport=...)`.
        """

    @property
    @abc.abstractmethod
    def async_interceptor(self) -> httpx.AsyncBaseTransport:
        """
        Transport to pass as `httpx.AsyncClient(transport=...)`.
        """


class NoOpNetworkObserver(NetworkObserver):
    """
    Pass-through observer. Its transports are built on first access and shared by every
    client that uses this observer; closing one such client closes the shared pool.
    """

    def __init__(self) -> None:
        self._transport: httpx.HTTPTransport | None = None
        self._async_transport: httpx.AsyncHTTPTransport | None = None

    def on_request(self, request: httpx.Request, handler: InterceptorHandler) -> None:
        handler.next()

    def on_response(self, response: httpx.Response, handler: InterceptorHandler) -> None:
        handler.next()

    def on_error(self, error: Exception, handler: InterceptorHandler) -> None:
        handler.next()

    @property
    def interceptor(self) -> httpx.BaseTransport:
        if self._transport is None:
            self._transport = httpx.HTTPTransport()
        return self._transport

    @property
    def async_interceptor(self) -> httpx.AsyncBaseTransport:
        if self._async_transport is None:
            self._async_transport = httpx.AsyncHTTPTransport()
        return self._async_transport


NOOP_NETWORK_OBSERVER = NoOpNetworkObserver()


# --- Module Notes -----------------------------------------------------------
# The HTTP client only ever sees plain httpx transports; it never depends on this
# package's types.
