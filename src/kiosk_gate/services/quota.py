"""Per-day admission counter."""

from __future__ import annotations

import logging
from typing import Final

from kiosk_gate.store.base import SharedStateStore

# Configure logger for this module
logger = logging.getLogger(__name__)

DAILY_COUNT_PREFIX: Final[str] = "daily_count:"
DEFAULT_COUNTER_TTL_SECONDS: Final[int] = 172_800  # 48 hours


class DailyQuotaCounter:
    """Count first-of-day admissions per local calendar date.

    Each date gets its own key, so a new day starts from zero without an
    explicit reset and yesterday's key simply expires. Increments are
    best-effort and may undercount when two handlers collide.
    """

    def __init__(
        self,
        store: SharedStateStore,
        *,
        ttl_seconds: int = DEFAULT_COUNTER_TTL_SECONDS,
    ) -> None:
        self._store = store
        self._ttl_seconds = ttl_seconds

    @staticmethod
    def key_for(date: str) -> str:
        return f"{DAILY_COUNT_PREFIX}{date}"

    def increment(self, date: str) -> int:
        """Add one admission to ``date`` and return the resulting total."""
        return self._store.increment_and_get(self.key_for(date), self._ttl_seconds)

    def get(self, date: str) -> int:
        """Return the total for ``date`` without changing it; 0 when absent."""
        value = self._store.get(self.key_for(date))
        if value is None:
            return 0
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed daily count %r for %s", value, date)
            return 0
