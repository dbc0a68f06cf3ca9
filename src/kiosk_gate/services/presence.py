"""Presence tracking for concurrently active sessions.

Two kinds of keys are involved:

- ``session:<token>`` holds the session's last-activity time in epoch
  milliseconds and expires after the session TTL.
- ``online_sessions`` holds the list of tokens believed to be present.

A session is *active* while its last activity lies inside the liveness
window. Staleness is never written; it is derived from the timestamp each
time the set is counted, and stale members are pruned lazily at that point.
"""

from __future__ import annotations

import logging
from typing import Any, Final

from kiosk_gate.core.clock import Clock
from kiosk_gate.store.base import SharedStateStore

# Configure logger for this module
logger = logging.getLogger(__name__)

SESSION_PREFIX: Final[str] = "session:"
ONLINE_SESSIONS_KEY: Final[str] = "online_sessions"
DEFAULT_SESSION_TTL_SECONDS: Final[int] = 86_400  # 24 hours
DEFAULT_LIVENESS_WINDOW_SECONDS: Final[int] = 60


class ConcurrencyRegistry:
    """Owns the online set and the per-session activity records."""

    def __init__(
        self,
        store: SharedStateStore,
        clock: Clock,
        *,
        session_ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
    ) -> None:
        self._store = store
        self._clock = clock
        self._ttl_seconds = session_ttl_seconds

    @staticmethod
    def session_key(session_id: str) -> str:
        return f"{SESSION_PREFIX}{session_id}"

    def members(self) -> list[str]:
        """Return the stored online set, tolerating a missing or corrupt value."""
        data: Any = self._store.get(ONLINE_SESSIONS_KEY)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Discarding malformed online set of type %s", type(data).__name__)
            return []
        return [str(member) for member in data]

    def _save_members(self, members: list[str]) -> None:
        self._store.set(ONLINE_SESSIONS_KEY, members, self._ttl_seconds)

    def last_active(self, session_id: str) -> int | None:
        """Return the last-activity timestamp of ``session_id`` in epoch ms."""
        value = self._store.get(self.session_key(session_id))
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed activity record for session %s", session_id)
            return None

    def touch(self, session_id: str, at_ms: int | None = None) -> int:
        """Record activity for ``session_id`` and return the timestamp written."""
        timestamp = self._clock.now_ms() if at_ms is None else at_ms
        self._store.set(self.session_key(session_id), timestamp, self._ttl_seconds)
        return timestamp

    def drop_record(self, session_id: str) -> None:
        """Delete the activity record of ``session_id``."""
        self._store.delete(self.session_key(session_id))

    def add_member(self, session_id: str) -> None:
        """Add ``session_id`` to the online set; no write if already present."""
        members = self.members()
        if session_id in members:
            return
        members.append(session_id)
        self._save_members(members)

    def remove_member(self, session_id: str) -> None:
        """Remove ``session_id`` from the online set; no write if it was absent."""
        members = self.members()
        remaining = [member for member in members if member != session_id]
        if len(remaining) != len(members):
            self._save_members(remaining)

    def count_active(self, window_seconds: int = DEFAULT_LIVENESS_WINDOW_SECONDS) -> int:
        """Return how many members were active within ``window_seconds``.

        Members without a record, or whose last activity is at least
        ``window_seconds`` old, are dropped from the online set. The pruned set
        is written back once, and only when something was dropped.
        """
        members = self.members()
        now_ms = self._clock.now_ms()
        window_ms = window_seconds * 1000

        active: list[str] = []
        for session_id in members:
            last_active = self.last_active(session_id)
            if last_active is not None and now_ms - last_active < window_ms:
                active.append(session_id)

        if len(active) != len(members):
            logger.debug("Pruning %d stale sessions from online set", len(members) - len(active))
            self._save_members(active)
        return len(active)
