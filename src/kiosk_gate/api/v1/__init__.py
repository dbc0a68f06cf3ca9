# src/kiosk_gate/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import admission_router, system_router

__all__ = [
    "admission_router",
    "system_router",
]
