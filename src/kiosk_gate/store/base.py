"""Shared state store interface.

Every request handler is stateless; the only place state lives between
requests is a key-value store with per-key expiry. This module defines the
contract the admission services are written against and the exceptions a
backend raises when it cannot serve a request.

A missing key is reported as ``None``. A store that cannot answer at all
raises a ``StoreError`` subclass, so callers can tell "nothing there" apart
from "don't know".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StoreError(RuntimeError):
    """Base exception raised when the shared store cannot serve a request."""

    def __init__(self, message: str, *, operation: str | None = None, key: str | None = None):
        super().__init__(message)
        self.operation = operation
        self.key = key

    def __str__(self) -> str:
        message = super().__str__()
        context = [f"{name}={value}" for name, value in (
            ("operation", self.operation),
            ("key", self.key),
        ) if value]
        if context:
            return f"{message} ({', '.join(context)})"
        return message


class StoreUnconfiguredError(StoreError):
    """Raised when no usable store configuration exists.

    Covers missing settings, placeholder values and credentials the backend
    rejected.
    """


class StoreUnreachableError(StoreError):
    """Raised when the store is configured but did not answer in time."""


class SharedStateStore(ABC):
    """Key-value store with per-key TTL shared by all request handlers.

    Values are JSON-compatible (integers, strings, lists of strings).
    """

    backend: str = "abstract"
    configured: bool = True

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value stored under ``key`` or ``None`` when absent."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` and expire it after ``ttl_seconds``."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is not an error."""

    def increment_and_get(self, key: str, ttl_seconds: int) -> int:
        """Add one to the integer under ``key`` and return the new value.

        Best-effort: the default implementation is a read-modify-write with no
        locking, so concurrent increments may undercount. Backends with a
        native increment override this without changing the contract.
        """
        current = self.get(key)
        try:
            count = int(current or 0) + 1
        except (TypeError, ValueError) as exc:
            raise StoreError(
                f"Counter holds a non-integer value: {current!r}",
                operation="increment",
                key=key,
            ) from exc
        self.set(key, count, ttl_seconds)
        return count

    def ping(self) -> bool:
        """Return True if the store answers; never raises."""
        try:
            self.get("__ping__")
        except StoreError:
            return False
        return True

    def close(self) -> None:
        """Release network resources held by the store."""
