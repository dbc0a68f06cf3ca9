"""Enter, heartbeat and leave endpoints for the kiosk frontend."""

from __future__ import annotations

from dataclasses import fields
from typing import Annotated

from fastapi import APIRouter, Cookie, Response

from kiosk_gate.api.v1.dependencies import (
    AdmissionEngineDep,
    ClientIdentityDep,
    HeartbeatDep,
    SettingsDep,
    TeardownDep,
)
from kiosk_gate.schemas.admission import (
    EnterResponse,
    ErrorResponse,
    HeartbeatResponse,
    LeaveResponse,
)
from kiosk_gate.services.admission import ClientIdentity

router = APIRouter(tags=["admission"])

_STORE_UNAVAILABLE = {503: {"model": ErrorResponse}}


def _write_client_cookies(
    response: Response,
    before: ClientIdentity,
    after: ClientIdentity,
    max_age: int,
) -> None:
    """Set a cookie for every client field the decision changed."""
    for field in fields(ClientIdentity):
        value = getattr(after, field.name)
        if value is None or value == getattr(before, field.name):
            continue
        response.set_cookie(
            field.name,
            value,
            max_age=max_age,
            httponly=False,
            samesite="lax",
        )


@router.get("/enter", response_model=EnterResponse, response_model_exclude_none=True)
def enter(
    response: Response,
    client: ClientIdentityDep,
    engine: AdmissionEngineDep,
    settings: SettingsDep,
) -> EnterResponse:
    """Decide whether this browser may start a kiosk session.

    Always answers 200; a refusal is reported through ``allowed`` and
    ``reason``. Store failures produce an allow with a ``warning``.
    """
    decision = engine.attempt_enter(client)
    _write_client_cookies(response, client, decision.client_state, settings.cookie_max_age_seconds)
    return EnterResponse.from_decision(decision)


@router.post(
    "/heartbeat",
    response_model=HeartbeatResponse,
    responses={400: {"model": ErrorResponse}, **_STORE_UNAVAILABLE},
)
def heartbeat(
    beats: HeartbeatDep,
    session_id: Annotated[str | None, Cookie()] = None,
) -> HeartbeatResponse:
    """Mark the caller's session as still present."""
    timestamp = beats.beat(session_id)
    return HeartbeatResponse(success=True, timestamp=timestamp)


@router.post("/leave", response_model=LeaveResponse, responses=_STORE_UNAVAILABLE)
def leave(
    teardown: TeardownDep,
    session_id: Annotated[str | None, Cookie()] = None,
) -> LeaveResponse:
    """Release the caller's session, if it has one."""
    teardown.leave(session_id)
    return LeaveResponse(success=True)
