"""
inspector_core.models.wire

Pydantic schemas for the JSON envelope and the typed metadata of each event variant.

Responsibilities:
- Validate incoming JSON before typed events are reconstructed.
- Default optional fields; reject missing/mistyped correlation fields.
- Translate `pydantic.ValidationError` into `LogEventParseError`.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from inspector_core.errors import LogEventParseError


class _Wire(BaseModel):
    # Wire keys are camelCase; unknown keys are ignored for forward compatibility.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LogEventEnvelope(_Wire):
    id: str | None = None
    event_type: str = Field(default="generic", alias="eventType")
    level: str | None = None
    timestamp: str | None = None
    title: str | None = None
    description: str | None = None
    category: str | None = None
    tags: list[Any] | None = None
    metadata: dict[str, Any] | None = None

    def tag_set(self) -> frozenset[str]:
        return frozenset(str(t) for t in self.tags or ())


class NetworkRequestWire(_Wire):
    method: StrictStr
    url: StrictStr
    request_id: StrictStr = Field(alias="requestId")
    headers: dict[str, Any] | None = None
    body: Any = None
    query_parameters: dict[str, Any] | None = Field(default=None, alias="queryParameters")
    request_size: int | None = Field(default=None, alias="requestSize")
    api_name: str | None = Field(default=None, alias="apiName")
    api_id: str | None = Field(default=None, alias="apiId")


class NetworkResponseWire(_Wire):
    request_id: StrictStr = Field(alias="requestId")
    status_code: StrictInt = Field(alias="statusCode")
    headers: dict[str, Any] | None = None
    body: Any = None
    response_size: int | None = Field(default=None, alias="responseSize")
    duration: int | None = None
    api_name: str | None = Field(default=None, alias="apiName")
    api_id: str | None = Field(default=None, alias="apiId")


class NetworkErrorWire(_Wire):
    request_id: str | None = Field(default=None, alias="requestId")
    error: str | None = None
    error_type: str | None = Field(default=None, alias="errorType")
    stack_trace: str | None = Field(default=None, alias="stackTrace")
    error_context: dict[str, Any] | None = Field(default=None, alias="errorContext")
    api_name: str | None = Field(default=None, alias="apiName")
    api_id: str | None = Field(default=None, alias="apiId")
    failed_url: str | None = Field(default=None, alias="failedUrl")
    failed_method: str | None = Field(default=None, alias="failedMethod")


class ActionWire(_Wire):
    event_id: StrictStr = Field(alias="eventId")
    action_type: StrictStr = Field(alias="actionType")
    status: StrictStr
    action_id: str | None = Field(default=None, alias="actionId")
    execution_time: int | None = Field(default=None, alias="executionTime")
    parent_event_id: str | None = Field(default=None, alias="parentEventId")
    source_chain: list[str] | None = Field(default=None, alias="sourceChain")
    trigger_name: str | None = Field(default=None, alias="triggerName")
    action_definition: dict[str, Any] | None = Field(default=None, alias="actionDefinition")
    resolved_parameters: dict[str, Any] | None = Field(default=None, alias="resolvedParameters")
    progress_data: dict[str, Any] | None = Field(default=None, alias="progressData")
    error: str | None = None
    error_message: str | None = Field(default=None, alias="errorMessage")
    stack_trace: str | None = Field(default=None, alias="stackTrace")


class StateWire(_Wire):
    state_id: StrictStr = Field(alias="stateId")
    state_type: StrictStr = Field(alias="stateType")
    state_event_type: StrictStr = Field(alias="stateEventType")
    namespace: str | None = None
    args: dict[str, Any] | None = None
    state_data: dict[str, Any] | None = Field(default=None, alias="stateData")
    previous_state_data: dict[str, Any] | None = Field(default=None, alias="previousStateData")
    changes: dict[str, Any] | None = None
    error: str | None = None
    stack_trace: str | None = Field(default=None, alias="stackTrace")


class ErrorWire(_Wire):
    error: str | None = None
    error_type: str | None = Field(default=None, alias="errorType")
    stack_trace: str | None = Field(default=None, alias="stackTrace")
    source: str | None = None
    error_context: dict[str, Any] | None = Field(default=None, alias="errorContext")
    is_fatal: bool = Field(default=False, alias="isFatal")
    user_action: str | None = Field(default=None, alias="userAction")
    widget_name: str | None = Field(default=None, alias="widgetName")
    widget_path: str | None = Field(default=None, alias="widgetPath")
    widget_properties: dict[str, Any] | None = Field(default=None, alias="widgetProperties")


W = TypeVar("W", bound=BaseModel)


def parse_wire(model: type[W], data: object, *, event_type: str) -> W:
    """
    Validate `data` against `model`, raising `LogEventParseError` naming the first bad field.
    """

    if not isinstance(data, dict):
        raise LogEventParseError(
            f"{event_type}: expected a JSON object, got {type(data).__name__}",
            event_type=event_type,
        )
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or None
        raise LogEventParseError(
            f"{event_type}: invalid field {field!r}: {first.get('msg')}",
            event_type=event_type,
            field=field,
        ) from e


def wire_keys(model: type[BaseModel]) -> frozenset[str]:
    # Both the alias and the python name count as "known" when splitting off extra metadata.
    keys: set[str] = set()
    for name, info in model.model_fields.items():
        keys.add(name)
        if info.alias:
            keys.add(info.alias)
    return frozenset(keys)


# --- Module Notes -----------------------------------------------------------
# Correlation fields use Strict* types so "404" never silently becomes 404 and a
# numeric id never silently becomes a string.
