"""Select a shared state store from application settings."""

from __future__ import annotations

import logging

from kiosk_gate.core.settings import Settings
from kiosk_gate.store.base import SharedStateStore, StoreUnconfiguredError
from kiosk_gate.store.memory import MemoryStore
from kiosk_gate.store.null import NullStore
from kiosk_gate.store.redis_store import RedisStore
from kiosk_gate.store.rest_store import RestKVStore

# Configure logger for this module
logger = logging.getLogger(__name__)

_PLACEHOLDER_MARKERS = (
    "placeholder",
    "your_kv_rest_api_url_here",
    "your_kv_rest_api_token_here",
)


def _rest_config_problem(url: str, token: str) -> str | None:
    """Return why the REST KV settings are unusable, or None if they look valid."""
    if any(marker in value for value in (url, token) for marker in _PLACEHOLDER_MARKERS):
        return "KV_REST_API_URL or KV_REST_API_TOKEN still holds a placeholder value"
    if not url.startswith("https://"):
        return "KV_REST_API_URL must start with https://"
    return None


def _build_redis(settings: Settings) -> SharedStateStore:
    if not settings.redis_url:
        return NullStore("REDIS_URL is not set")
    try:
        return RedisStore.from_url(
            settings.redis_url,
            timeout_seconds=settings.store_timeout_seconds,
        )
    except StoreUnconfiguredError as exc:
        return NullStore(str(exc))


def _build_rest(settings: Settings) -> SharedStateStore:
    url, token = settings.kv_rest_api_url, settings.kv_rest_api_token
    if not url or not token:
        return NullStore("KV_REST_API_URL and KV_REST_API_TOKEN must both be set")
    problem = _rest_config_problem(url, token)
    if problem:
        return NullStore(problem)
    return RestKVStore(
        url,
        token,
        timeout_seconds=settings.store_timeout_seconds,
    )


def build_store(settings: Settings) -> SharedStateStore:
    """Return the store selected by ``settings.store_backend``.

    ``auto`` prefers Redis when ``REDIS_URL`` is set, then the REST KV. When
    nothing usable is configured a ``NullStore`` is returned so the admission
    path can fail open; the reason is logged once here.
    """
    backend = settings.store_backend
    if backend == "memory":
        logger.warning("Using in-process memory store; limits are not shared across workers")
        return MemoryStore()
    if backend == "none":
        store: SharedStateStore = NullStore("Shared state store disabled by STORE_BACKEND=none")
    elif backend == "redis" or (backend == "auto" and settings.redis_url):
        store = _build_redis(settings)
    else:
        store = _build_rest(settings)

    if isinstance(store, NullStore):
        logger.warning("Admission control is disabled: %s", store.reason)
    else:
        logger.info("Using %s shared state store", store.backend)
    return store
