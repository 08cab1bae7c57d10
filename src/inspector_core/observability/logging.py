"""
inspector_core.observability.logging

structlog setup for the inspector's own diagnostics (the fallback channel).

Responsibilities:
- Build the processor chain: level filtering, ISO UTC timestamps, a stable `service`
  field, rendered exceptions.
- Render as JSON lines for collectors or as a console view while developing.
- Hand out named bound loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from inspector_core.settings import InspectorSettings


def configure_logging(*, service_name: str, level: str, json_logs: bool = True) -> None:
    """
    Call once from the host application's composition root; the library never does.
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer: Any = (
        # Event payloads may hold datetimes, exceptions or enums.
        structlog.processors.JSONRenderer(default=str)
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: InspectorSettings) -> None:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Unconfigured, structlog still prints readable lines, so sink and observer faults
# are visible even in hosts that never call `configure_logging`.
