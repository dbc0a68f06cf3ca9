"""Store used when no backend is configured."""

from __future__ import annotations

from typing import Any

from kiosk_gate.store.base import SharedStateStore, StoreUnconfiguredError


class NullStore(SharedStateStore):
    """Stand-in store whose every operation reports the missing configuration."""

    backend = "none"
    configured = False

    def __init__(self, reason: str = "No shared state store is configured") -> None:
        self.reason = reason

    def get(self, key: str) -> Any | None:
        raise StoreUnconfiguredError(self.reason, operation="get", key=key)

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        raise StoreUnconfiguredError(self.reason, operation="set", key=key)

    def delete(self, key: str) -> None:
        raise StoreUnconfiguredError(self.reason, operation="delete", key=key)

    def increment_and_get(self, key: str, ttl_seconds: int) -> int:
        raise StoreUnconfiguredError(self.reason, operation="increment", key=key)
