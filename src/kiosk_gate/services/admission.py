"""Admission decisions for the kiosk.

``AdmissionDecisionEngine.attempt_enter`` runs the gating sequence:

1. one entry per client per day (cookie marker, no store access),
2. concurrency limit over sessions seen within the liveness window,
3. daily limit over first-of-day visits,

then issues a session, registers it as present and returns the client state
the caller should persist in cookies.

Denials are ordinary ``Decision`` values. Store failures never deny: the
limits are soft caps, so the engine lets the visitor in and flags the
decision with a warning.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from kiosk_gate.core.clock import Clock
from kiosk_gate.core.settings import Settings
from kiosk_gate.services.presence import ConcurrencyRegistry
from kiosk_gate.services.quota import DailyQuotaCounter
from kiosk_gate.store.base import StoreError, StoreUnconfiguredError

# Configure logger for this module
logger = logging.getLogger(__name__)

SESSION_TOKEN_BYTES = 16

WARNING_UNCONFIGURED = "Access control is disabled (shared store not configured)"
WARNING_CHECK_FAILED = "Access control check failed, allowing access"


class DenialReason(str, Enum):
    """Machine-readable reasons an entry was refused."""

    ONCE_PER_DAY = "ONCE_PER_DAY"
    CONCURRENCY_LIMIT = "CONCURRENCY_LIMIT"
    DAILY_LIMIT = "DAILY_LIMIT"


DENIAL_MESSAGES: dict[DenialReason, str] = {
    DenialReason.ONCE_PER_DAY: "You have already used the service today. Please come back tomorrow.",
    DenialReason.CONCURRENCY_LIMIT: "The service is busy right now. Please try again shortly.",
    DenialReason.DAILY_LIMIT: "Today's visitor limit has been reached. Please come back tomorrow.",
}


@dataclass(frozen=True)
class ClientIdentity:
    """Cookie-held hints about a browser. Not authoritative for limits."""

    visited_date: str | None = None
    used_today: str | None = None
    session_id: str | None = None


@dataclass(frozen=True)
class Decision:
    """Outcome of an entry attempt.

    ``client_state`` is the identity the caller should write back to the
    client; it differs from the input only in the fields that changed.
    """

    allowed: bool
    client_state: ClientIdentity
    reason: DenialReason | None = None
    total: int | None = None
    concurrent_users: int | None = None
    session_id: str | None = None
    warning: str | None = None

    @property
    def message(self) -> str | None:
        if self.reason is None:
            return None
        return DENIAL_MESSAGES[self.reason]


def new_session_token() -> str:
    """Return an unguessable hex session token with 128 bits of randomness."""
    return secrets.token_hex(SESSION_TOKEN_BYTES)


class AdmissionDecisionEngine:
    """Decide whether a client may start using the kiosk."""

    def __init__(
        self,
        *,
        registry: ConcurrencyRegistry,
        counter: DailyQuotaCounter,
        clock: Clock,
        settings: Settings,
        token_factory: Callable[[], str] = new_session_token,
    ) -> None:
        self._registry = registry
        self._counter = counter
        self._clock = clock
        self._concurrency_limit = settings.concurrency_limit
        self._daily_limit = settings.daily_limit
        self._window_seconds = settings.liveness_window_seconds
        self._token_factory = token_factory

    def attempt_enter(self, client: ClientIdentity) -> Decision:
        """Run the admission checks for ``client`` and return the decision."""
        today = self._clock.today()

        if client.used_today == today:
            return Decision(
                allowed=False,
                client_state=client,
                reason=DenialReason.ONCE_PER_DAY,
            )

        try:
            concurrent_users = self._registry.count_active(self._window_seconds)
            if concurrent_users >= self._concurrency_limit:
                return Decision(
                    allowed=False,
                    client_state=client,
                    reason=DenialReason.CONCURRENCY_LIMIT,
                    concurrent_users=concurrent_users,
                )

            if client.visited_date != today:
                total = self._counter.increment(today)
                # Counted from here on, even if a later store call fails.
                client = replace(client, visited_date=today)
            else:
                total = self._counter.get(today)

            if total > self._daily_limit:
                return Decision(
                    allowed=False,
                    client_state=client,
                    reason=DenialReason.DAILY_LIMIT,
                    total=total,
                )

            return self._admit(client, today, total)
        except StoreError as exc:
            return self._fail_open(client, exc)

    def _admit(self, client: ClientIdentity, today: str, total: int) -> Decision:
        session_id = client.session_id or self._token_factory()
        self._registry.touch(session_id)
        self._registry.add_member(session_id)

        client = replace(client, used_today=today, session_id=session_id)
        return Decision(
            allowed=True,
            client_state=client,
            total=total,
            concurrent_users=self._registry.count_active(self._window_seconds),
            session_id=session_id,
        )

    def _fail_open(self, client: ClientIdentity, exc: StoreError) -> Decision:
        if isinstance(exc, StoreUnconfiguredError):
            logger.warning("Admission control skipped, store not configured: %s", exc)
            warning = WARNING_UNCONFIGURED
        else:
            logger.warning("Admission control check failed, allowing entry: %s", exc)
            warning = WARNING_CHECK_FAILED
        return Decision(
            allowed=True,
            client_state=client,
            total=0,
            concurrent_users=0,
            warning=warning,
        )
