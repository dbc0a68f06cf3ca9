"""Shared state store backends."""

from .base import SharedStateStore, StoreError, StoreUnconfiguredError, StoreUnreachableError
from .factory import build_store
from .memory import MemoryStore
from .null import NullStore
from .redis_store import RedisStore
from .rest_store import RestKVStore

__all__ = [
    "SharedStateStore",
    "StoreError",
    "StoreUnconfiguredError",
    "StoreUnreachableError",
    "build_store",
    "MemoryStore",
    "NullStore",
    "RedisStore",
    "RestKVStore",
]
