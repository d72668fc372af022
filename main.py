# ============================================================================
# SERVICE HEALTH - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: Wire configuration, database pool, probes and health routes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Service Health Main Application

FastAPI application that:
1. Reads configuration from the environment
2. Registers dependency probes before the server accepts requests
3. Serves /health and /health/detailed without authentication

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE
from core.config import HealthSettings, get_defaults
from core.logging import ComponentType, configure_logging, get_logger
from health import create_health_router
from health.bootstrap import build_evaluator, build_registry
from health.probes import RedisProbe
from repositories.database import create_pool, open_pool, close_pool

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__, ComponentType.API)

PROCESS_STARTED_AT = time.monotonic()


def create_app(settings: Optional[HealthSettings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Health settings (read from the environment if None)
    """
    settings = settings or get_defaults()
    service_name = settings.health.service_name

    pool = create_pool(settings.database) if settings.database.enabled else None
    registry = build_registry(settings, pool=pool)
    evaluator = build_evaluator(settings, registry, started_at=PROCESS_STARTED_AT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open dependency clients on startup, release them on shutdown."""
        logger.info(f"Starting {service_name} v{__version__} (Build {BUILD_DATE})")

        if pool is not None:
            await open_pool()
        logger.info(f"Health checks initialized ({len(registry)} probes registered)")

        yield

        logger.info(f"Shutting down {service_name}...")
        for _, probe in registry.list_all():
            if isinstance(probe, RedisProbe):
                await probe.close()
        await close_pool()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="Service Health",
        description="Liveness and dependency readiness probes",
        version=__version__,
        lifespan=lifespan,
    )

    # Health routes carry no auth dependency
    app.include_router(
        create_health_router(evaluator, service=service_name, version=__version__)
    )

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": service_name,
            "version": __version__,
            "build_date": BUILD_DATE,
            "health": "/health",
            "detailed": "/health/detailed",
        }

    return app


app = create_app()


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
