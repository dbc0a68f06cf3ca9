"""Operational and transparency endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from kiosk_gate.api.v1.dependencies import (
    ClockDep,
    CounterDep,
    RegistryDep,
    SettingsDep,
    StoreDep,
)
from kiosk_gate.schemas.admission import ErrorResponse
from kiosk_gate.schemas.system import UsageSnapshot

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
def get_public_config(settings: SettingsDep, store: StoreDep) -> dict[str, object]:
    """Return a sanitized snapshot of admission configuration.

    Excludes store URLs and tokens; suitable for the kiosk frontend, which
    reads the heartbeat interval from here.

    Pings the store, so the response also shows whether it currently answers.

    Returns:
        Dictionary with app metadata, limits, presence timing and store status
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "limits": settings.limits,
        "presence": {
            "liveness_window_seconds": settings.liveness_window_seconds,
            "heartbeat_interval_seconds": settings.heartbeat_interval_seconds,
            "session_ttl_seconds": settings.session_ttl_seconds,
        },
        "store": {
            "backend": store.backend,
            "configured": store.configured,
            "reachable": store.ping(),
        },
        "timezone": settings.timezone,
    }


@router.get(
    "/usage",
    response_model=UsageSnapshot,
    responses={503: {"model": ErrorResponse}},
)
def get_usage(
    counter: CounterDep,
    registry: RegistryDep,
    clock: ClockDep,
    settings: SettingsDep,
) -> UsageSnapshot:
    """Report today's admissions and the current presence count.

    Read-only with respect to the daily counter; counting presence may prune
    stale sessions from the online set.
    """
    today = clock.today()
    return UsageSnapshot(
        date=today,
        total=counter.get(today),
        concurrent_users=registry.count_active(settings.liveness_window_seconds),
    )
