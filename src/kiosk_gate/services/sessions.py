"""Session liveness renewal and explicit release."""

from __future__ import annotations

from kiosk_gate.services.presence import ConcurrencyRegistry


class NoSessionError(ValueError):
    """Raised when a heartbeat arrives without a session identity."""


class PresenceHeartbeat:
    """Keep an admitted session counted as present."""

    def __init__(self, registry: ConcurrencyRegistry) -> None:
        self._registry = registry

    def beat(self, session_id: str | None) -> int:
        """Refresh ``session_id`` and return the activity timestamp in epoch ms.

        Raises:
            NoSessionError: If ``session_id`` is empty.
            StoreError: If the store cannot record the beat.
        """
        if not session_id:
            raise NoSessionError("No session ID")
        timestamp = self._registry.touch(session_id)
        self._registry.add_member(session_id)
        return timestamp


class SessionTeardown:
    """Release a session before its record expires on its own."""

    def __init__(self, registry: ConcurrencyRegistry) -> None:
        self._registry = registry

    def leave(self, session_id: str | None) -> None:
        """Forget ``session_id``. Empty, unknown and already-released ids succeed."""
        if not session_id:
            return
        self._registry.drop_record(session_id)
        self._registry.remove_member(session_id)
