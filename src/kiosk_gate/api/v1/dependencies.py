"""Shared FastAPI dependencies for the API layer.

Settings, the store and the clock are created once per application and kept
on ``app.state``; services are cheap wrappers built per request around them.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Cookie, Depends, Request

from kiosk_gate.core.clock import Clock
from kiosk_gate.core.settings import Settings
from kiosk_gate.services.admission import AdmissionDecisionEngine, ClientIdentity
from kiosk_gate.services.presence import ConcurrencyRegistry
from kiosk_gate.services.quota import DailyQuotaCounter
from kiosk_gate.services.sessions import PresenceHeartbeat, SessionTeardown
from kiosk_gate.store.base import SharedStateStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> SharedStateStore:
    return request.app.state.store


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreDep = Annotated[SharedStateStore, Depends(get_store)]
ClockDep = Annotated[Clock, Depends(get_clock)]


def get_registry(store: StoreDep, clock: ClockDep, settings: SettingsDep) -> ConcurrencyRegistry:
    """Return a presence registry bound to the application store."""
    return ConcurrencyRegistry(store, clock, session_ttl_seconds=settings.session_ttl_seconds)


def get_counter(store: StoreDep, settings: SettingsDep) -> DailyQuotaCounter:
    """Return the daily admission counter bound to the application store."""
    return DailyQuotaCounter(store, ttl_seconds=settings.counter_ttl_seconds)


RegistryDep = Annotated[ConcurrencyRegistry, Depends(get_registry)]
CounterDep = Annotated[DailyQuotaCounter, Depends(get_counter)]


def get_admission_engine(
    registry: RegistryDep,
    counter: CounterDep,
    clock: ClockDep,
    settings: SettingsDep,
) -> AdmissionDecisionEngine:
    return AdmissionDecisionEngine(
        registry=registry,
        counter=counter,
        clock=clock,
        settings=settings,
    )


def get_heartbeat(registry: RegistryDep) -> PresenceHeartbeat:
    return PresenceHeartbeat(registry)


def get_teardown(registry: RegistryDep) -> SessionTeardown:
    return SessionTeardown(registry)


def get_client_identity(
    visited_date: Annotated[str | None, Cookie()] = None,
    used_today: Annotated[str | None, Cookie()] = None,
    session_id: Annotated[str | None, Cookie()] = None,
) -> ClientIdentity:
    """Collect the admission cookies into an immutable value object."""
    return ClientIdentity(
        visited_date=visited_date or None,
        used_today=used_today or None,
        session_id=session_id or None,
    )


AdmissionEngineDep = Annotated[AdmissionDecisionEngine, Depends(get_admission_engine)]
HeartbeatDep = Annotated[PresenceHeartbeat, Depends(get_heartbeat)]
TeardownDep = Annotated[SessionTeardown, Depends(get_teardown)]
ClientIdentityDep = Annotated[ClientIdentity, Depends(get_client_identity)]
