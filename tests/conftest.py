"""Pytest fixtures for chainable tests."""

from __future__ import annotations

from datetime import date

import pytest

from chainable.config import settings
from chainable.services.chain_service import ChainService
from chainable.sources.memory import InMemoryDateSource

TODAY = date(2026, 2, 7)


@pytest.fixture(autouse=True)
def _utc_reference_zone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the reference zone so tests do not depend on the host environment."""
    monkeypatch.setattr(settings, "timezone", "UTC")


@pytest.fixture
def today() -> date:
    """Fixed calendar day used as "today"."""
    return TODAY


@pytest.fixture
def source() -> InMemoryDateSource:
    """Empty in-memory date source with a ``posts`` association."""
    store = InMemoryDateSource()
    store.extend("user-1", "posts", [])
    return store


@pytest.fixture
def service(source: InMemoryDateSource, today: date) -> ChainService:
    """Chain service reading from the in-memory source with a frozen today."""
    return ChainService(source, today=lambda: today)
