"""API endpoint modules."""

from .admission import router as admission_router
from .system import router as system_router

__all__ = [
    "admission_router",
    "system_router",
]
