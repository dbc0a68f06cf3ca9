# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any
from zoneinfo import ZoneInfo

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("STORE_BACKEND", "none")

from kiosk_gate.core.clock import Clock
from kiosk_gate.core.settings import Settings
from kiosk_gate.main import create_app
from kiosk_gate.services.admission import AdmissionDecisionEngine
from kiosk_gate.services.presence import ConcurrencyRegistry
from kiosk_gate.services.quota import DailyQuotaCounter
from kiosk_gate.store.base import SharedStateStore
from kiosk_gate.store.memory import MemoryStore

TEST_TIMEZONE = "Asia/Seoul"
TEST_START = datetime(2026, 10, 19, 10, 0, 0, tzinfo=ZoneInfo(TEST_TIMEZONE))


class ManualClock(Clock):
    """Clock that only moves when a test advances it."""

    def __init__(self, start: datetime = TEST_START, tz_name: str = TEST_TIMEZONE) -> None:
        super().__init__(tz_name)
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += timedelta(seconds=seconds)


def build_settings(**overrides: Any) -> Settings:
    """Return settings that ignore any local .env file."""
    values: dict[str, Any] = {"store_backend": "memory", "timezone": TEST_TIMEZONE}
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def store(clock: ManualClock) -> MemoryStore:
    return MemoryStore(time_fn=clock.timestamp)


@pytest.fixture()
def registry(store: MemoryStore, clock: ManualClock) -> ConcurrencyRegistry:
    return ConcurrencyRegistry(store, clock)


@pytest.fixture()
def counter(store: MemoryStore) -> DailyQuotaCounter:
    return DailyQuotaCounter(store)


@pytest.fixture()
def make_engine(
    clock: ManualClock,
) -> Callable[..., AdmissionDecisionEngine]:
    """Return a factory building an engine over a given store and limits."""

    def _make(store: SharedStateStore, **overrides: Any) -> AdmissionDecisionEngine:
        settings = build_settings(**overrides)
        return AdmissionDecisionEngine(
            registry=ConcurrencyRegistry(store, clock),
            counter=DailyQuotaCounter(store),
            clock=clock,
            settings=settings,
        )

    return _make


@pytest.fixture()
def make_app(store: MemoryStore, clock: ManualClock) -> Callable[..., FastAPI]:
    """Return a factory building an app sharing the test store and clock."""

    def _make(store_override: SharedStateStore | None = None, **overrides: Any) -> FastAPI:
        return create_app(
            build_settings(**overrides),
            store=store_override if store_override is not None else store,
            clock=clock,
        )

    return _make


@pytest.fixture()
def app(make_app: Callable[..., FastAPI]) -> FastAPI:
    return make_app()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    """A single browser talking to the default app."""
    return TestClient(app)


@pytest.fixture()
def make_settings() -> Callable[..., Settings]:
    return build_settings
