"""Schemas for the enter, heartbeat and leave endpoints."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from kiosk_gate.services.admission import Decision


class EnterResponse(BaseModel):
    """Result of an entry attempt. Denials are returned with HTTP 200."""

    model_config = ConfigDict(populate_by_name=True)

    allowed: bool
    reason: str | None = None
    message: str | None = None
    total: int | None = None
    concurrent_users: int | None = Field(default=None, alias="concurrentUsers")
    session_id: str | None = Field(default=None, alias="sessionId")
    warning: str | None = None

    @classmethod
    def from_decision(cls, decision: Decision) -> EnterResponse:
        return cls(
            allowed=decision.allowed,
            reason=decision.reason.value if decision.reason else None,
            message=decision.message,
            total=decision.total,
            concurrent_users=decision.concurrent_users,
            session_id=decision.session_id,
            warning=decision.warning,
        )


class HeartbeatResponse(BaseModel):
    """Acknowledgement of a liveness renewal."""

    success: bool = True
    timestamp: int


class LeaveResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
