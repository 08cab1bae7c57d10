"""
inspector_core.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for sinks and observers.
- Replace build-flag gating with an explicit `enabled` value passed at sink construction.
- Offer a cached settings instance for composition roots.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from inspector_core.utils.levels import LogLevel


class InspectorSettings(BaseSettings):
    """
    Library classes take an instance explicitly; nothing reads the environment
    behind the caller's back.
    """

    model_config = SettingsConfigDict(env_prefix="INSPECTOR_", case_sensitive=False)

    # Disabled sinks accept and discard every event (instrumentation stays wired).
    enabled: bool = True
    service_name: str = "inspector-core"
    log_level: str = "INFO"
    # JSON lines by default; `false` switches to the console renderer.
    log_json: bool = True

    # Events below this level are discarded by the in-memory sink.
    minimum_level: LogLevel = LogLevel.verbose
    max_events: int = Field(default=1000, ge=1)

    # Network capture
    request_id_header: str = "x-request-id"
    capture_response_body: bool = False
    max_body_bytes: int = Field(default=64 * 1024, ge=0)

    # Identifier lengths (base62 symbols)
    id_length: int = Field(default=10, ge=1)
    short_id_length: int = Field(default=6, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> InspectorSettings:
    # Cache avoids re-parsing env vars at every composition root.
    return InspectorSettings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `InspectorSettings(...)` directly; `get_settings` is only for apps
# that want env-driven defaults.
