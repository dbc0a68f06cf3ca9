"""Time utilities for presence tracking and daily counters."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo


class Clock:
    """Wall clock bound to the time zone that defines a calendar day."""

    def __init__(self, tz_name: str = "Asia/Seoul") -> None:
        self._tz = ZoneInfo(tz_name)

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        return datetime.now(self._tz)

    def timestamp(self) -> float:
        """Return the current time in epoch seconds."""
        return self.now().timestamp()

    def now_ms(self) -> int:
        """Return the current time in epoch milliseconds."""
        return int(self.timestamp() * 1000)

    def today(self) -> str:
        """Return the local calendar date as ``YYYY-MM-DD``."""
        return self.now().date().isoformat()
