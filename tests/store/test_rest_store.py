"""Tests for the REST KV store using an in-memory HTTP transport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from kiosk_gate.store.base import StoreError, StoreUnconfiguredError, StoreUnreachableError
from kiosk_gate.store.rest_store import RestKVStore

BASE_URL = "https://kv.example.test"
TOKEN = "test-token"


def _store(handler: Callable[[httpx.Request], httpx.Response]) -> RestKVStore:
    return RestKVStore(BASE_URL, TOKEN, transport=httpx.MockTransport(handler))


class FakeKV:
    """Minimal command interpreter standing in for the hosted KV."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.commands: list[list[object]] = []
        self.auth_headers: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        command = json.loads(request.content)
        self.commands.append(command)
        self.auth_headers.append(request.headers["Authorization"])
        name, key = command[0], command[1]
        if name == "GET":
            return httpx.Response(200, json={"result": self.data.get(key)})
        if name == "SET":
            self.data[key] = command[2]
            return httpx.Response(200, json={"result": "OK"})
        if name == "DEL":
            removed = 1 if self.data.pop(key, None) is not None else 0
            return httpx.Response(200, json={"result": removed})
        return httpx.Response(400, json={"error": f"unknown command {name}"})


def test_set_and_get_round_trip_json() -> None:
    kv = FakeKV()
    store = _store(kv)

    store.set("online_sessions", ["s1"], 86_400)

    assert kv.commands[0] == ["SET", "online_sessions", '["s1"]', "EX", 86_400]
    assert kv.auth_headers[0] == f"Bearer {TOKEN}"
    assert store.get("online_sessions") == ["s1"]


def test_get_missing_returns_none() -> None:
    assert _store(FakeKV()).get("missing") is None


def test_get_plain_string_value() -> None:
    kv = FakeKV()
    kv.data["legacy"] = "not-json"
    assert _store(kv).get("legacy") == "not-json"


def test_delete() -> None:
    kv = FakeKV()
    kv.data["session:s1"] = "1"
    store = _store(kv)

    store.delete("session:s1")
    store.delete("session:s1")

    assert "session:s1" not in kv.data


def test_increment_is_read_modify_write() -> None:
    kv = FakeKV()
    store = _store(kv)

    assert store.increment_and_get("daily_count:2026-10-19", 172_800) == 1
    assert store.increment_and_get("daily_count:2026-10-19", 172_800) == 2
    assert [command[0] for command in kv.commands] == ["GET", "SET", "GET", "SET"]


@pytest.mark.parametrize("status_code", [401, 403])
def test_rejected_token_is_unconfigured(status_code: int) -> None:
    store = _store(lambda request: httpx.Response(status_code, json={"error": "Unauthorized"}))
    with pytest.raises(StoreUnconfiguredError):
        store.get("k")


def test_timeout_is_unreachable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(StoreUnreachableError) as excinfo:
        _store(handler).get("online_sessions")
    assert excinfo.value.key == "online_sessions"


def test_connection_error_is_unreachable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(StoreUnreachableError):
        _store(handler).set("k", 1, 10)


def test_server_error_is_unreachable() -> None:
    store = _store(lambda request: httpx.Response(502, text="bad gateway"))
    with pytest.raises(StoreUnreachableError):
        store.get("k")


def test_command_error_raises_store_error() -> None:
    store = _store(lambda request: httpx.Response(400, json={"error": "WRONGTYPE"}))
    with pytest.raises(StoreError):
        store.get("k")


def test_ping_reports_failure_without_raising() -> None:
    store = _store(lambda request: httpx.Response(503, text="unavailable"))
    assert store.ping() is False
    assert _store(FakeKV()).ping() is True
