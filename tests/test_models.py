"""
tests.test_models

Event taxonomy: serialization, reconstruction, classification and search.

Responsibilities:
- JSON round trips keep identity and every typed field.
- Malformed payloads raise `LogEventParseError` instead of producing half-built events.
- Derived levels and status predicates follow the status code / outcome.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from inspector_core.errors import LogEventParseError
from inspector_core.models.base import GenericLogEvent, MessageLogEvent
from inspector_core.models.error_log import ErrorLog, UIErrorLog
from inspector_core.models.network import NetworkErrorLog, NetworkRequestLog, NetworkResponseLog
from inspector_core.models.registry import parse_log_event, register_event_type
from inspector_core.utils.levels import LogLevel

T0 = datetime(2024, 1, 15, 14, 30, 25, 123000, tzinfo=UTC)


def test_request_round_trip_preserves_every_field() -> None:
    event = NetworkRequestLog(
        timestamp=T0,
        method="GET",
        url="https://api.x/users?page=2",
        request_id="r1",
        headers={"accept": "application/json"},
        query_parameters={"page": "2"},
        api_name="listUsers",
        api_id="api-7",
        tags={"users"},
    )
    data = event.to_json()

    assert data["eventType"] == "network_request"
    assert data["timestamp"] == "2024-01-15T14:30:25.123Z"
    assert data["metadata"]["requestId"] == "r1"
    assert data["title"] == "GET listUsers"

    restored = parse_log_event(data)
    assert isinstance(restored, NetworkRequestLog)
    assert restored == event
    assert restored.timestamp == T0
    assert restored.to_json() == data



def test_request_round_trip_keeps_explicit_level() -> None:
    event = NetworkRequestLog(method="GET", url="/health", request_id="r2", level=LogLevel.debug)
    restored = parse_log_event(event.to_json())
    assert restored.level is LogLevel.debug
    assert NetworkRequestLog(method="GET", url="/a", request_id="r3").level is LogLevel.info

def test_response_round_trip_keeps_duration_in_millis() -> None:
    event = NetworkResponseLog(
        request_id="r1",
        status_code=201,
        body={"id": 3},
        response_size=10,
        duration=timedelta(milliseconds=250, microseconds=700),
    )
    assert event.duration == timedelta(milliseconds=250)
    data = event.to_json()
    assert data["metadata"]["duration"] == 250

    restored = NetworkResponseLog.from_json(data)
    assert restored.duration == timedelta(milliseconds=250)
    assert restored.body == {"id": 3}
    assert restored.to_json() == data


def test_not_found_exchange_classification() -> None:
    request = NetworkRequestLog(method="GET", url="https://api.x/users", request_id="r1")
    response = NetworkResponseLog(request_id="r1", status_code=404)

    assert response.is_client_error
    assert not response.is_success
    assert not response.is_server_error
    assert response.level is LogLevel.error
    assert request.request_id == response.request_id == "r1"


@pytest.mark.parametrize(
    ("status", "level", "success", "client", "server"),
    [
        (200, LogLevel.info, True, False, False),
        (204, LogLevel.info, True, False, False),
        (302, LogLevel.warning, False, False, False),
        (499, LogLevel.error, False, True, False),
        (503, LogLevel.error, False, False, True),
        (101, LogLevel.debug, False, False, False),
        (600, LogLevel.error, False, False, False),
    ],
)
def test_status_code_classification(
    status: int, level: LogLevel, success: bool, client: bool, server: bool
) -> None:
    response = NetworkResponseLog(request_id="r", status_code=status)
    assert response.level is level
    assert (response.is_success, response.is_client_error, response.is_server_error) == (
        success,
        client,
        server,
    )


def test_response_level_ignores_requested_level() -> None:
    response = NetworkResponseLog(request_id="r", status_code=500, level=LogLevel.debug)
    assert response.level is LogLevel.error
    assert response.copy_with(status_code=200).level is LogLevel.info


def test_network_error_keeps_exception_type_across_round_trip() -> None:
    event = NetworkErrorLog(
        error=TimeoutError("read timed out"),
        request_id="r9",
        failed_url="https://api.x/slow",
        failed_method="GET",
    )
    assert event.error_type == "TimeoutError"
    assert event.level is LogLevel.error

    restored = NetworkErrorLog.from_json(event.to_json())
    assert restored.error == "read timed out"
    assert restored.error_type == "TimeoutError"
    assert restored.failed_url == "https://api.x/slow"
    assert restored.to_json() == event.to_json()


def test_missing_correlation_field_raises() -> None:
    payload = {"eventType": "network_response", "metadata": {"statusCode": 200}}
    with pytest.raises(LogEventParseError) as exc:
        parse_log_event(payload)
    assert exc.value.event_type == "network_response"
    assert exc.value.field in {"requestId", "request_id"}


def test_mistyped_status_code_raises() -> None:
    payload = {"eventType": "network_response", "metadata": {"requestId": "r", "statusCode": "404"}}
    with pytest.raises(LogEventParseError):
        NetworkResponseLog.from_json(payload)


def test_non_object_payload_raises() -> None:
    with pytest.raises(LogEventParseError):
        parse_log_event(["not", "an", "object"])  # type: ignore[arg-type]


def test_optional_fields_default_on_reconstruction() -> None:
    restored = NetworkRequestLog.from_json(
        {"eventType": "network_request", "metadata": {"method": "GET", "url": "/a", "requestId": "r"}}
    )
    assert restored.headers == {}
    assert restored.query_parameters == {}
    assert restored.body is None
    assert restored.category == "network"
    assert restored.id


def test_unknown_event_type_degrades_to_generic() -> None:
    restored = parse_log_event(
        {
            "id": "x1",
            "eventType": "custom_metric",
            "level": "warning",
            "title": "Cache miss",
            "description": "profile cache",
            "metadata": {"key": "u:1"},
        }
    )
    assert isinstance(restored, GenericLogEvent)
    assert restored.id == "x1"
    assert restored.level is LogLevel.warning
    assert restored.title == "Cache miss"
    assert restored.metadata == {"key": "u:1"}


def test_equality_and_hash_use_id_only() -> None:
    a = NetworkRequestLog(id="same", method="GET", url="/a", request_id="r1")
    b = NetworkRequestLog(id="same", method="POST", url="/b", request_id="r2")
    c = NetworkRequestLog(method="GET", url="/a", request_id="r1")
    assert a == b
    assert len({a, b}) == 1
    assert a != c


def test_copy_with_keeps_identity() -> None:
    event = NetworkRequestLog(method="GET", url="/a", request_id="r1")
    copy = event.copy_with(url="/b")
    assert copy == event
    assert copy.url == "/b"
    assert event.url == "/a"


def test_matches_is_superset_of_base_search() -> None:
    event = NetworkErrorLog(
        error=ConnectionError("refused"),
        api_name="Payments",
        failed_url="https://pay.x/charge",
        failed_method="POST",
        tags={"checkout"},
    )
    assert event.matches("CHECKOUT")
    assert event.matches("network")
    assert event.matches("payments")
    assert event.matches("pay.x")
    assert event.matches("post")
    assert not event.matches("refund")


def test_response_search_includes_status_code() -> None:
    assert NetworkResponseLog(request_id="r", status_code=418).matches("418")


def test_error_log_fatal_defaults() -> None:
    fatal = ErrorLog(error=RuntimeError("disk full"), is_fatal=True, source="sync")
    assert fatal.level is LogLevel.critical
    assert fatal.event_type == "fatal_error"
    assert fatal.title == "Fatal Error: RuntimeError"
    assert fatal.description == "disk full in sync"

    restored = parse_log_event(fatal.to_json())
    assert isinstance(restored, ErrorLog)
    assert restored.is_fatal
    assert restored.level is LogLevel.critical


def test_ui_error_round_trip() -> None:
    event = UIErrorLog(
        error="overflow",
        widget_name="ProductCard",
        widget_path="Home/Grid/ProductCard",
        widget_properties={"width": 320},
    )
    assert event.event_type == "ui_error"
    assert event.category == "ui"
    assert event.matches("grid")

    restored = parse_log_event(event.to_json())
    assert isinstance(restored, UIErrorLog)
    assert restored.widget_properties == {"width": 320}
    assert restored.to_json() == event.to_json()


def test_message_event_truncates_long_titles() -> None:
    message = "x" * 60
    event = MessageLogEvent(message=message, level=LogLevel.debug)
    assert event.title == "x" * 47 + "..."
    assert event.description == message

    restored = parse_log_event(event.to_json())
    assert isinstance(restored, MessageLogEvent)
    assert restored.message == message
    assert restored.level is LogLevel.debug


def test_registered_event_type_is_dispatched() -> None:
    register_event_type("audit_note", MessageLogEvent.from_json)
    restored = parse_log_event({"eventType": "audit_note", "description": "exported report"})
    assert isinstance(restored, MessageLogEvent)
    assert restored.message == "exported report"


# --- Module Notes -----------------------------------------------------------
# Action and state events have their own modules (test_actions.py, test_state.py).
