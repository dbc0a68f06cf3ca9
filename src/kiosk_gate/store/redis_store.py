"""Redis-backed shared state store."""

from __future__ import annotations

import json
import logging
from typing import Any

import redis

from kiosk_gate.store.base import (
    SharedStateStore,
    StoreError,
    StoreUnconfiguredError,
    StoreUnreachableError,
)

# Configure logger for this module
logger = logging.getLogger(__name__)


class RedisStore(SharedStateStore):
    """Store values as JSON strings in Redis with ``EX`` expiry.

    Connection and read timeouts are kept short so a stalled Redis turns into
    a ``StoreUnreachableError`` instead of a hung request.
    """

    backend = "redis"

    def __init__(self, client: redis.Redis) -> None:
        self._redis = client

    @classmethod
    def from_url(cls, url: str, *, timeout_seconds: float = 2.0) -> RedisStore:
        """Build a store from a ``redis://`` or ``rediss://`` URL.

        Raises:
            StoreUnconfiguredError: If the URL cannot be parsed.
        """
        try:
            client = redis.Redis.from_url(
                url,
                socket_timeout=timeout_seconds,
                socket_connect_timeout=timeout_seconds,
                decode_responses=True,
            )
        except ValueError as exc:
            raise StoreUnconfiguredError(f"Invalid REDIS_URL: {exc}") from exc
        return cls(client)

    def _wrap(self, exc: Exception, operation: str, key: str) -> StoreError:
        if isinstance(exc, redis.AuthenticationError):
            return StoreUnconfiguredError(
                "Redis rejected the configured credentials", operation=operation, key=key
            )
        return StoreUnreachableError(f"Redis error: {exc}", operation=operation, key=key)

    def get(self, key: str) -> Any | None:
        try:
            raw = self._redis.get(key)
        except redis.RedisError as exc:
            raise self._wrap(exc, "get", key) from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreError("Stored value is not valid JSON", operation="get", key=key) from exc

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            self._redis.set(key, json.dumps(value), ex=int(ttl_seconds))
        except redis.RedisError as exc:
            raise self._wrap(exc, "set", key) from exc

    def delete(self, key: str) -> None:
        try:
            self._redis.delete(key)
        except redis.RedisError as exc:
            raise self._wrap(exc, "delete", key) from exc

    def increment_and_get(self, key: str, ttl_seconds: int) -> int:
        """Increment with ``INCR`` and refresh expiry in one round trip."""
        try:
            pipe = self._redis.pipeline()
            pipe.incr(key)
            pipe.expire(key, int(ttl_seconds))
            count, _ = pipe.execute()
        except redis.ResponseError as exc:
            raise StoreError(
                f"Counter holds a non-integer value: {exc}", operation="increment", key=key
            ) from exc
        except redis.RedisError as exc:
            raise self._wrap(exc, "increment", key) from exc
        return int(count)

    def ping(self) -> bool:
        try:
            return bool(self._redis.ping())
        except redis.RedisError as exc:
            logger.warning("Redis ping failed: %s", exc)
            return False

    def close(self) -> None:
        try:
            self._redis.close()
        except redis.RedisError:  # pragma: no cover - best effort on shutdown
            logger.debug("Ignoring error while closing Redis client", exc_info=True)
