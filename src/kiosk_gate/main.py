# src/kiosk_gate/main.py
"""Main entry point for the Kiosk Gate application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from kiosk_gate.api.v1 import admission_router, system_router
from kiosk_gate.core.clock import Clock
from kiosk_gate.core.settings import Settings
from kiosk_gate.services.sessions import NoSessionError
from kiosk_gate.store import SharedStateStore, StoreError, build_store

# Configure logger for this module
logger = logging.getLogger(__name__)


async def _store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Shared store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"error": "Shared state store unavailable"})


async def _no_session_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


def create_app(
    settings: Settings | None = None,
    *,
    store: SharedStateStore | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted
        store: Shared state store; selected from ``settings`` when omitted
        clock: Clock defining "now" and "today"; built from ``settings.timezone``
            when omitted

    Returns:
        Configured FastAPI application with routers, middleware and handlers
    """
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Daily and concurrent admission control for kiosk sessions",
        version=settings.app_version,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else build_store(settings)
    app.state.clock = clock or Clock(settings.timezone)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    app.add_exception_handler(StoreError, _store_error_handler)
    app.add_exception_handler(NoSessionError, _no_session_handler)

    # Include API routers
    app.include_router(admission_router, prefix="/api")
    app.include_router(system_router, prefix="/api")

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        app.state.store.close()

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": f"{settings.app_name} API",
            "version": settings.app_version,
            "description": "Daily and concurrent admission control for kiosk sessions",
            "docs": "/docs",
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("kiosk_gate.main:app", host="0.0.0.0", port=8000, reload=app.state.settings.debug)
