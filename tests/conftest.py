"""
tests.conftest

Shared fixtures.

Responsibilities:
- Deterministic id generation for assertions on ids.
- A fresh in-memory inspector per test.
"""

from __future__ import annotations

import pytest

from inspector_core.inspector.memory import InMemoryInspector
from inspector_core.settings import InspectorSettings
from inspector_core.utils.ids import SequentialIdGenerator


@pytest.fixture
def ids() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def settings() -> InspectorSettings:
    return InspectorSettings(enabled=True, max_events=100)


@pytest.fixture
def inspector(settings: InspectorSettings, ids: SequentialIdGenerator) -> InMemoryInspector:
    return InMemoryInspector(settings=settings, ids=ids)


# --- Module Notes -----------------------------------------------------------
# Network tests build their own inspector so they can inject an httpx.MockTransport.
