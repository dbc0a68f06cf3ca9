"""In-process store for tests and single-worker development."""

from __future__ import annotations

import copy
import time
from collections.abc import Callable
from threading import Lock
from typing import Any

from kiosk_gate.store.base import SharedStateStore


class MemoryStore(SharedStateStore):
    """Dictionary-backed store honouring per-key TTLs.

    State is private to the process, so it only coordinates handlers that
    share one worker. Values are deep-copied on the way in and out to mimic a
    remote store.
    """

    backend = "memory"

    def __init__(self, time_fn: Callable[[], float] = time.time) -> None:
        self._time_fn = time_fn
        self._data: dict[str, tuple[Any, float]] = {}
        self._lock = Lock()

    def _live_entry(self, key: str) -> tuple[Any, float] | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        if entry[1] <= self._time_fn():
            self._data.pop(key, None)
            return None
        return entry

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                return None
            return copy.deepcopy(entry[0])

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        with self._lock:
            self._data[key] = (copy.deepcopy(value), self._time_fn() + ttl_seconds)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def ttl(self, key: str) -> float | None:
        """Return seconds until ``key`` expires, or ``None`` when absent."""
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                return None
            return entry[1] - self._time_fn()

    def keys(self) -> list[str]:
        with self._lock:
            return [key for key in list(self._data) if self._live_entry(key) is not None]
