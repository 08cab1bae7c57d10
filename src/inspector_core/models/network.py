"""
inspector_core.models.network

HTTP exchange events.

Responsibilities:
- `NetworkRequestLog`, `NetworkResponseLog`, `NetworkErrorLog`, correlated by `request_id`.
- Classify responses by status code (severity, success/client/server error).
- Extend search with API name/id, status code and failed URL/method.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any
from urllib.parse import urlsplit

from inspector_core.models.base import LogEvent, base_kwargs
from inspector_core.models.wire import (
    LogEventEnvelope,
    NetworkErrorWire,
    NetworkRequestWire,
    NetworkResponseWire,
    parse_wire,
)
from inspector_core.utils.levels import LogLevel
from inspector_core.utils.timestamps import TimestampHelper


def level_for_status(status_code: int) -> LogLevel:
    if 200 <= status_code < 300:
        return LogLevel.info
    if 300 <= status_code < 400:
        return LogLevel.warning
    if status_code >= 400:
        return LogLevel.error
    return LogLevel.debug


def _contains(value: str | None, q: str) -> bool:
    return value is not None and q in value.lower()


@dataclass(frozen=True, kw_only=True, eq=False)
class NetworkRequestLog(LogEvent):
    method: str
    url: str
    request_id: str
    headers: dict[str, Any] = field(default_factory=dict)
    body: Any = None
    query_parameters: dict[str, Any] = field(default_factory=dict)
    request_size: int | None = None
    api_name: str | None = None
    api_id: str | None = None
    category: str | None = "network"

    @property
    def event_type(self) -> str:
        return "network_request"

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def display_name(self) -> str:
        return self.api_name or self.path

    @property
    def title(self) -> str:
        return f"{self.method} {self.display_name}"

    @property
    def description(self) -> str:
        if self.api_name is not None:
            return f"HTTP {self.method} request to {self.api_name} ({self.url})"
        return f"HTTP {self.method} request to {self.url}"

    @property
    def metadata(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "method": self.method,
            "url": self.url,
            "headers": dict(self.headers),
            "body": self.body,
            "queryParameters": dict(self.query_parameters),
            "requestSize": self.request_size,
            "requestId": self.request_id,
        }
        if self.api_name is not None:
            data["apiName"] = self.api_name
        if self.api_id is not None:
            data["apiId"] = self.api_id
        return data

    def matches(self, query: str) -> bool:
        q = query.lower()
        return super().matches(query) or _contains(self.api_name, q) or _contains(self.api_id, q)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> NetworkRequestLog:
        env = parse_wire(LogEventEnvelope, data, event_type="network_request")
        meta = parse_wire(NetworkRequestWire, env.metadata or {}, event_type="network_request")
        return cls(
            **base_kwargs(env),
            level=LogLevel.from_string(env.level),
            method=meta.method,
            url=meta.url,
            request_id=meta.request_id,
            headers=dict(meta.headers or {}),
            body=meta.body,
            query_parameters=dict(meta.query_parameters or {}),
            request_size=meta.request_size,
            api_name=meta.api_name,
            api_id=meta.api_id,
        )

    def __str__(self) -> str:
        return f"NetworkRequestLog({self.method} {self.display_name})"


@dataclass(frozen=True, kw_only=True, eq=False)
class NetworkResponseLog(LogEvent):
    request_id: str
    status_code: int
    headers: dict[str, Any] = field(default_factory=dict)
    body: Any = None
    response_size: int | None = None
    duration: timedelta | None = None
    api_name: str | None = None
    api_id: str | None = None
    category: str | None = "network"

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.duration is not None:
            object.__setattr__(self, "duration", TimestampHelper.normalize_duration(self.duration))

    def _resolve_level(self, requested: LogLevel | None) -> LogLevel:
        # Severity always follows the status code.
        return level_for_status(self.status_code)

    @property
    def event_type(self) -> str:
        return "network_response"

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        # Bounded above so codes outside [200, 600) classify as nothing.
        return 500 <= self.status_code < 600

    @property
    def display_name(self) -> str:
        return self.api_name or "Response"

    @property
    def title(self) -> str:
        if self.api_name is not None:
            return f"HTTP {self.status_code} ({self.api_name})"
        return f"HTTP {self.status_code}"

    @property
    def description(self) -> str:
        timing = f" ({TimestampHelper.to_millis(self.duration)}ms)" if self.duration is not None else ""
        if self.api_name is not None:
            return f"HTTP response {self.status_code} for {self.api_name}{timing}"
        return f"HTTP response with status code {self.status_code}{timing}"

    @property
    def metadata(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "requestId": self.request_id,
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
            "responseSize": self.response_size,
            "duration": TimestampHelper.to_millis(self.duration) if self.duration is not None else None,
        }
        if self.api_name is not None:
            data["apiName"] = self.api_name
        if self.api_id is not None:
            data["apiId"] = self.api_id
        return data

    def matches(self, query: str) -> bool:
        q = query.lower()
        return (
            super().matches(query)
            or _contains(self.api_name, q)
            or _contains(self.api_id, q)
            or q in str(self.status_code)
        )

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> NetworkResponseLog:
        env = parse_wire(LogEventEnvelope, data, event_type="network_response")
        meta = parse_wire(NetworkResponseWire, env.metadata or {}, event_type="network_response")
        return cls(
            **base_kwargs(env),
            request_id=meta.request_id,
            status_code=meta.status_code,
            headers=dict(meta.headers or {}),
            body=meta.body,
            response_size=meta.response_size,
            duration=timedelta(milliseconds=meta.duration) if meta.duration is not None else None,
            api_name=meta.api_name,
            api_id=meta.api_id,
        )

    def __str__(self) -> str:
        return f"NetworkResponseLog({self.status_code} {self.display_name})"


@dataclass(frozen=True, kw_only=True, eq=False)
class NetworkErrorLog(LogEvent):
    error: object
    request_id: str | None = None
    error_type: str | None = None
    stack_trace: str | None = None
    error_context: dict[str, Any] = field(default_factory=dict)
    api_name: str | None = None
    api_id: str | None = None
    failed_url: str | None = None
    failed_method: str | None = None
    category: str | None = "network"

    def __post_init__(self) -> None:
        super().__post_init__()
        # Keep the original class name; a JSON round trip turns `error` into a string.
        if self.error_type is None:
            object.__setattr__(self, "error_type", type(self.error).__name__)

    def _resolve_level(self, requested: LogLevel | None) -> LogLevel:
        return LogLevel.error

    @property
    def event_type(self) -> str:
        return "network_error"

    @property
    def display_name(self) -> str:
        return self.api_name or "Network Error"

    @property
    def title(self) -> str:
        if self.api_name is not None:
            return f"Network Error: {self.api_name}"
        return f"Network Error: {self.error_type}"

    @property
    def description(self) -> str:
        if self.api_name is not None:
            return f"Network error occurred while calling {self.api_name}: {self.error}"
        return f"Network error: {self.error}"

    @property
    def metadata(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "requestId": self.request_id,
            "error": str(self.error),
            "errorType": self.error_type,
            "stackTrace": self.stack_trace,
            "errorContext": dict(self.error_context),
        }
        if self.api_name is not None:
            data["apiName"] = self.api_name
        if self.api_id is not None:
            data["apiId"] = self.api_id
        if self.failed_url is not None:
            data["failedUrl"] = self.failed_url
        if self.failed_method is not None:
            data["failedMethod"] = self.failed_method
        return data

    def matches(self, query: str) -> bool:
        q = query.lower()
        return (
            super().matches(query)
            or _contains(self.api_name, q)
            or _contains(self.api_id, q)
            or _contains(self.failed_url, q)
            or _contains(self.failed_method, q)
        )

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> NetworkErrorLog:
        env = parse_wire(LogEventEnvelope, data, event_type="network_error")
        meta = parse_wire(NetworkErrorWire, env.metadata or {}, event_type="network_error")
        return cls(
            **base_kwargs(env),
            request_id=meta.request_id,
            error=meta.error if meta.error is not None else "Unknown error",
            error_type=meta.error_type,
            stack_trace=meta.stack_trace,
            error_context=dict(meta.error_context or {}),
            api_name=meta.api_name,
            api_id=meta.api_id,
            failed_url=meta.failed_url,
            failed_method=meta.failed_method,
        )

    def __str__(self) -> str:
        return f"NetworkErrorLog({self.display_name}: {self.error_type})"


# --- Module Notes -----------------------------------------------------------
# `category` is redeclared per variant only to change its default; the JSON value
# (including an explicit null) always wins on reconstruction.
