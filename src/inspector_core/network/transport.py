"""
inspector_core.network.transport

httpx transports that tap every exchange for a `NetworkObserver`.

Responsibilities:
- Call `on_request` / `on_response` / `on_error` around the wrapped transport.
- Isolate the exchange from observer faults (log and continue).
- Optionally buffer small response bodies so observers can see them without consuming
  the stream the client is about to read.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from inspector_core.contracts.network_observer import InterceptorHandler, NetworkObserver
from inspector_core.observability.logging import get_logger

log = get_logger(__name__)


class InspectorTransport(httpx.BaseTransport):
    def __init__(
        self,
        observer: NetworkObserver,
        transport: httpx.BaseTransport | None = None,
        *,
        capture_response_body: bool = False,
        max_body_bytes: int = 64 * 1024,
    ) -> None:
        self._observer = observer
        self._transport = transport or httpx.HTTPTransport()
        self._capture = capture_response_body
        self._max_body_bytes = max_body_bytes

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        _notify(self._observer.on_request, request, InterceptorHandler(request=request))
        try:
            response = self._transport.handle_request(request)
        except Exception as exc:
            _notify(self._observer.on_error, exc, InterceptorHandler(request=request))
            raise

        handler = InterceptorHandler(request=request)
        if self._capture and response.is_stream_consumed:
            handler.response_body = response.content
        elif self._capture and _fits(response, self._max_body_bytes):
            raw = b"".join(response.iter_raw())
            response = _rebuffer(response, raw)
            handler.response_body = _decoded(response, raw)
        _notify(self._observer.on_response, response, handler)
        return response

    def close(self) -> None:
        self._transport.close()


class AsyncInspectorTransport(httpx.AsyncBaseTransport):
    def __init__(
        self,
        observer: NetworkObserver,
        transport: httpx.AsyncBaseTransport | None = None,
        *,
        capture_response_body: bool = False,
        max_body_bytes: int = 64 * 1024,
    ) -> None:
        self._observer = observer
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._capture = capture_response_body
        self._max_body_bytes = max_body_bytes

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        _notify(self._observer.on_request, request, InterceptorHandler(request=request))
        try:
            response = await self._transport.handle_async_request(request)
        except Exception as exc:
            _notify(self._observer.on_error, exc, InterceptorHandler(request=request))
            raise

        handler = InterceptorHandler(request=request)
        if self._capture and response.is_stream_consumed:
            handler.response_body = response.content
        elif self._capture and _fits(response, self._max_body_bytes):
            raw = b"".join([chunk async for chunk in response.aiter_raw()])
            response = _rebuffer(response, raw)
            handler.response_body = _decoded(response, raw)
        _notify(self._observer.on_response, response, handler)
        return response

    async def aclose(self) -> None:
        await self._transport.aclose()


def _notify(callback: Callable[[Any, InterceptorHandler], None], subject: Any, handler: InterceptorHandler) -> None:
    # Observer faults are reported on the fallback channel; the exchange never sees them.
    try:
        callback(subject, handler)
    except Exception:
        log.warning(
            "network_observer_failed",
            callback=getattr(callback, "__name__", repr(callback)),
            url=str(handler.request.url),
            exc_info=True,
        )
        return
    if not handler.forwarded:
        log.debug("network_observer_did_not_forward", callback=getattr(callback, "__name__", None))


def _fits(response: httpx.Response, limit: int) -> bool:
    # Only bodies with a declared, bounded length are buffered; open-ended streams pass through.
    length = response.headers.get("content-length")
    try:
        return length is not None and int(length) <= limit
    except ValueError:
        return False


def _rebuffer(response: httpx.Response, raw: bytes) -> httpx.Response:
    # Same status/headers/extensions, fresh unread stream over the already-received bytes.
    return httpx.Response(
        status_code=response.status_code,
        headers=response.headers,
        stream=httpx.ByteStream(raw),
        extensions=response.extensions,
    )


def _decoded(response: httpx.Response, raw: bytes) -> bytes:
    # Decode content-encoding on a throwaway copy so the returned response stays unread.
    preview = httpx.Response(
        status_code=response.status_code,
        headers=response.headers,
        stream=httpx.ByteStream(raw),
    )
    return preview.read()


# --- Module Notes -----------------------------------------------------------
# Errors are always re-raised unchanged; the observer only records them.
