"""Admission control and presence services."""

from .admission import (
    AdmissionDecisionEngine,
    ClientIdentity,
    Decision,
    DenialReason,
    new_session_token,
)
from .presence import ConcurrencyRegistry
from .quota import DailyQuotaCounter
from .sessions import NoSessionError, PresenceHeartbeat, SessionTeardown

__all__ = [
    "AdmissionDecisionEngine",
    "ClientIdentity",
    "Decision",
    "DenialReason",
    "new_session_token",
    "ConcurrencyRegistry",
    "DailyQuotaCounter",
    "NoSessionError",
    "PresenceHeartbeat",
    "SessionTeardown",
]
