"""Tests for the concurrency registry."""

from __future__ import annotations

from typing import Any

from kiosk_gate.services.presence import ONLINE_SESSIONS_KEY, ConcurrencyRegistry
from kiosk_gate.store.memory import MemoryStore

LIVENESS_WINDOW = 60


class RecordingStore(MemoryStore):
    """Memory store that remembers which keys were written."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.writes: list[str] = []

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        self.writes.append(key)
        super().set(key, value, ttl_seconds)


def _register(registry: ConcurrencyRegistry, session_id: str) -> None:
    registry.touch(session_id)
    registry.add_member(session_id)


def test_count_active_on_empty_store(registry) -> None:
    assert registry.count_active(LIVENESS_WINDOW) == 0
    assert registry.members() == []


def test_touched_session_is_counted(registry) -> None:
    _register(registry, "a" * 32)
    assert registry.count_active(LIVENESS_WINDOW) == 1


def test_stale_session_excluded_but_record_kept(registry, clock) -> None:
    """A session silent for 61s drops out of the count before its record expires."""
    _register(registry, "stale")
    clock.advance(61)
    _register(registry, "fresh")

    assert registry.count_active(LIVENESS_WINDOW) == 1
    assert registry.last_active("stale") is not None
    assert registry.members() == ["fresh"]


def test_session_at_exact_window_boundary_is_stale(registry, clock) -> None:
    _register(registry, "edge")
    clock.advance(LIVENESS_WINDOW)
    assert registry.count_active(LIVENESS_WINDOW) == 0


def test_session_just_inside_window_is_active(registry, clock) -> None:
    _register(registry, "inside")
    clock.advance(LIVENESS_WINDOW - 0.001)
    assert registry.count_active(LIVENESS_WINDOW) == 1


def test_member_without_record_is_pruned(registry, store) -> None:
    store.set(ONLINE_SESSIONS_KEY, ["ghost"], 86_400)
    assert registry.count_active(LIVENESS_WINDOW) == 0
    assert registry.members() == []


def test_count_active_writes_only_when_pruning(clock) -> None:
    store = RecordingStore(time_fn=clock.timestamp)
    registry = ConcurrencyRegistry(store, clock)
    _register(registry, "one")
    _register(registry, "two")
    store.writes.clear()

    registry.count_active(LIVENESS_WINDOW)
    assert store.writes == []

    clock.advance(LIVENESS_WINDOW + 1)
    registry.touch("two")
    store.writes.clear()

    assert registry.count_active(LIVENESS_WINDOW) == 1
    assert store.writes == [ONLINE_SESSIONS_KEY]


def test_add_member_is_idempotent(clock) -> None:
    store = RecordingStore(time_fn=clock.timestamp)
    registry = ConcurrencyRegistry(store, clock)

    registry.add_member("s1")
    registry.add_member("s1")

    assert registry.members() == ["s1"]
    assert store.writes == [ONLINE_SESSIONS_KEY]


def test_remove_member_skips_write_when_absent(clock) -> None:
    store = RecordingStore(time_fn=clock.timestamp)
    registry = ConcurrencyRegistry(store, clock)
    registry.add_member("s1")
    store.writes.clear()

    registry.remove_member("missing")
    assert store.writes == []

    registry.remove_member("s1")
    assert store.writes == [ONLINE_SESSIONS_KEY]
    assert registry.members() == []


def test_records_expire_after_session_ttl(registry, store, clock) -> None:
    _register(registry, "old")
    assert store.ttl(ConcurrencyRegistry.session_key("old")) == 86_400

    clock.advance(86_400)
    assert registry.last_active("old") is None
    assert registry.members() == []


def test_malformed_online_set_is_ignored(registry, store) -> None:
    store.set(ONLINE_SESSIONS_KEY, {"not": "a list"}, 60)
    assert registry.members() == []
    assert registry.count_active(LIVENESS_WINDOW) == 0


def test_touch_returns_written_timestamp(registry, clock) -> None:
    timestamp = registry.touch("s1")
    assert timestamp == clock.now_ms()
    assert registry.last_active("s1") == timestamp
