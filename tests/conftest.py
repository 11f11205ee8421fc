"""Mini README: Shared fixtures for the tracker test-suite.

Structure:
    * MutableClock - callable clock the tests can move forward.
    * clock / gateway / settings / client - a pinned-time gateway over a
      temporary SQLite file and a TestClient around the application.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from dailycost.configuration import DailyCostSettings
from dailycost.interface import create_application
from dailycost.storage import create_gateway

# 2024-01-01 is exactly 299.5 days earlier, so it rounds up to 300.
FIXED_NOW = datetime(2024, 10, 26, 12, 0, tzinfo=timezone.utc)


class MutableClock:
    """Deterministic stand-in for the gateway's wall clock."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now = self.now + timedelta(**delta)


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock(FIXED_NOW)


@pytest.fixture
def settings(tmp_path) -> DailyCostSettings:
    return DailyCostSettings(
        _env_file=None,
        sqlite_path=tmp_path / "products.db",
        database_url=None,
        environment="test",
    )


@pytest.fixture
def gateway(settings, clock):
    store = create_gateway(settings, clock=clock)
    store.init_schema()
    yield store
    store.dispose()


@pytest.fixture
def client(gateway, settings):
    app = create_application(gateway=gateway, settings=settings)
    with TestClient(app) as test_client:
        yield test_client
