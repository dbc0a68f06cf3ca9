"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .admission import EnterResponse, ErrorResponse, HeartbeatResponse, LeaveResponse
from .system import UsageSnapshot

__all__ = [
    "EnterResponse", "ErrorResponse",
    "HeartbeatResponse", "LeaveResponse",
    "UsageSnapshot",
]
