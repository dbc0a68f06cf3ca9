"""HTTP key-value store speaking the Redis-over-REST protocol.

Hosted KV services (Upstash, Vercel KV) accept a Redis command as a JSON array
POSTed to the endpoint root and reply with ``{"result": ...}`` or
``{"error": "..."}``. Values are JSON-encoded before they are stored, matching
the behaviour of the hosted clients.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from kiosk_gate.store.base import (
    SharedStateStore,
    StoreError,
    StoreUnconfiguredError,
    StoreUnreachableError,
)

# Configure logger for this module
logger = logging.getLogger(__name__)

HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403


class RestKVStore(SharedStateStore):
    """Store backed by a REST KV endpoint authenticated with a bearer token."""

    backend = "rest"

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout_seconds: float = 2.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout_seconds,
            transport=transport,
        )

    def _command(self, *args: Any) -> Any:
        operation = str(args[0]).lower()
        key = str(args[1]) if len(args) > 1 else None
        try:
            response = self._client.post("/", json=list(args))
        except httpx.TimeoutException as exc:
            raise StoreUnreachableError(
                "KV request timed out", operation=operation, key=key
            ) from exc
        except httpx.HTTPError as exc:
            raise StoreUnreachableError(
                f"KV request failed: {exc}", operation=operation, key=key
            ) from exc

        if response.status_code in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
            raise StoreUnconfiguredError(
                "KV endpoint rejected the configured token", operation=operation, key=key
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise StoreUnreachableError(
                f"KV returned a non-JSON response (HTTP {response.status_code})",
                operation=operation,
                key=key,
            ) from exc

        if isinstance(payload, dict) and payload.get("error"):
            raise StoreError(f"KV error: {payload['error']}", operation=operation, key=key)
        if response.is_error:
            raise StoreUnreachableError(
                f"KV returned HTTP {response.status_code}", operation=operation, key=key
            )
        if not isinstance(payload, dict):
            raise StoreError("KV response is missing a result", operation=operation, key=key)
        return payload.get("result")

    def get(self, key: str) -> Any | None:
        raw = self._command("GET", key)
        if raw is None:
            return None
        if not isinstance(raw, str):
            return raw
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            # Plain strings written by other clients come back verbatim.
            return raw

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._command("SET", key, json.dumps(value), "EX", int(ttl_seconds))

    def delete(self, key: str) -> None:
        self._command("DEL", key)

    def close(self) -> None:
        self._client.close()
