"""Shared fixtures: a controllable clock and an app wired to it."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.services.state import AnalyticsState


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(static_dir=tmp_path / "no_site")


@pytest.fixture
def analytics(settings, clock) -> AnalyticsState:
    return AnalyticsState.from_settings(settings, clock=clock)


@pytest.fixture
def client(settings, analytics):
    application = create_app(settings=settings, analytics=analytics)
    with TestClient(application) as test_client:
        yield test_client
