"""
inspector_core.network.observer

Default `NetworkObserver`: turns httpx exchanges into network log events.

Responsibilities:
- Resolve a request id per exchange (header, request extension, or generated).
- Correlate request, response and error events through that id.
- Measure durations and sizes, decode bodies for display.
- Forward events to a sink without affecting the exchange.
"""

from __future__ import annotations

import json
import threading
import traceback
import weakref
from dataclasses import dataclass
from datetime import timedelta
from time import perf_counter
from typing import Any

import httpx

from inspector_core.contracts.network_observer import InterceptorHandler, NetworkObserver
from inspector_core.inspector.dispatch import EventSink, forward_safely
from inspector_core.models.network import NetworkErrorLog, NetworkRequestLog, NetworkResponseLog
from inspector_core.network.transport import AsyncInspectorTransport, InspectorTransport
from inspector_core.settings import InspectorSettings
from inspector_core.utils.ids import IdGenerator, RandomIdGenerator

# Request extensions read by the observer (set via `client.get(..., extensions={...})`).
REQUEST_ID_EXTENSION = "request_id"
API_NAME_EXTENSION = "api_name"
API_ID_EXTENSION = "api_id"


@dataclass(frozen=True, slots=True)
class _Exchange:
    request_id: str
    started: float
    api_name: str | None
    api_id: str | None


class InspectorNetworkObserver(NetworkObserver):
    def __init__(
        self,
        sink: EventSink,
        *,
        settings: InspectorSettings | None = None,
        ids: IdGenerator | None = None,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._sink = sink
        self._settings = settings or InspectorSettings()
        self._ids = ids or RandomIdGenerator(
            length=self._settings.id_length, short_length=self._settings.short_id_length
        )
        self._transport = transport
        self._async_transport = async_transport
        # Keyed by the request object itself; entries vanish with the request.
        self._exchanges: weakref.WeakKeyDictionary[httpx.Request, _Exchange] = weakref.WeakKeyDictionary()
        self._lock = threading.Lock()

    # --- callbacks ----------------------------------------------------------

    def on_request(self, request: httpx.Request, handler: InterceptorHandler) -> None:
        exchange = self._begin(request)
        raw = _request_content(request)
        event = NetworkRequestLog(
            id=self._ids.random_id(),
            method=request.method,
            url=str(request.url),
            request_id=exchange.request_id,
            headers=dict(request.headers),
            body=self._decode(raw, request.headers),
            query_parameters=_query_parameters(request.url),
            request_size=_declared_size(request.headers, raw),
            api_name=exchange.api_name,
            api_id=exchange.api_id,
        )
        forward_safely(self._sink, event)
        handler.next()

    def on_response(self, response: httpx.Response, handler: InterceptorHandler) -> None:
        exchange = self._finish(handler.request)
        raw = handler.response_body
        event = NetworkResponseLog(
            id=self._ids.random_id(),
            request_id=exchange.request_id,
            status_code=response.status_code,
            headers=dict(response.headers),
            body=self._decode(raw, response.headers),
            response_size=_declared_size(response.headers, raw),
            duration=timedelta(seconds=perf_counter() - exchange.started),
            api_name=exchange.api_name,
            api_id=exchange.api_id,
        )
        forward_safely(self._sink, event)
        handler.next()

    def on_error(self, error: Exception, handler: InterceptorHandler) -> None:
        request = handler.request
        exchange = self._finish(request)
        event = NetworkErrorLog(
            id=self._ids.random_id(),
            error=error,
            request_id=exchange.request_id,
            error_type=type(error).__name__,
            stack_trace="".join(traceback.format_exception(error)),
            error_context={
                "timeout": isinstance(error, httpx.TimeoutException),
                "elapsedMs": round((perf_counter() - exchange.started) * 1000),
            },
            api_name=exchange.api_name,
            api_id=exchange.api_id,
            failed_url=str(request.url),
            failed_method=request.method,
        )
        forward_safely(self._sink, event)
        handler.next()

    # --- registration -------------------------------------------------------

    @property
    def interceptor(self) -> httpx.BaseTransport:
        return InspectorTransport(
            self,
            self._transport,
            capture_response_body=self._settings.capture_response_body,
            max_body_bytes=self._settings.max_body_bytes,
        )

    @property
    def async_interceptor(self) -> httpx.AsyncBaseTransport:
        return AsyncInspectorTransport(
            self,
            self._async_transport,
            capture_response_body=self._settings.capture_response_body,
            max_body_bytes=self._settings.max_body_bytes,
        )

    # --- internals ----------------------------------------------------------

    def _begin(self, request: httpx.Request) -> _Exchange:
        exchange = self._begin_untracked(request)
        with self._lock:
            self._exchanges[request] = exchange
        return exchange

    def _finish(self, request: httpx.Request) -> _Exchange:
        with self._lock:
            exchange = self._exchanges.pop(request, None)
        # A response for a request this observer never saw still gets a usable id.
        return exchange or self._begin_untracked(request)

    def _begin_untracked(self, request: httpx.Request) -> _Exchange:
        # Header, then request extension, then a generated id.
        request_id = (
            request.headers.get(self._settings.request_id_header)
            or request.extensions.get(REQUEST_ID_EXTENSION)
            or self._ids.random_id()
        )
        return _Exchange(
            request_id=str(request_id),
            started=perf_counter(),
            api_name=request.extensions.get(API_NAME_EXTENSION),
            api_id=request.extensions.get(API_ID_EXTENSION),
        )

    def _decode(self, raw: bytes | None, headers: httpx.Headers) -> Any:
        if not raw or len(raw) > self._settings.max_body_bytes:
            return None
        if "json" in headers.get("content-type", ""):
            try:
                return json.loads(raw)
            except ValueError:
                pass
        return raw.decode("utf-8", errors="replace")


def _request_content(request: httpx.Request) -> bytes | None:
    try:
        return request.content
    except httpx.RequestNotRead:
        # Streaming uploads are not buffered for observation.
        return None


def _query_parameters(url: httpx.URL) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for key in url.params.keys():
        values = url.params.get_list(key)
        params[key] = values[0] if len(values) == 1 else values
    return params


def _declared_size(headers: httpx.Headers, raw: bytes | None) -> int | None:
    length = headers.get("content-length")
    if length is not None:
        try:
            return int(length)
        except ValueError:
            pass
    return len(raw) if raw is not None else None


# --- Module Notes -----------------------------------------------------------
# The observer never writes to the request (no injected headers); a generated request
# id lives only in the emitted events.
