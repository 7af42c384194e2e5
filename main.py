# ============================================================================
# HEALTH CHECK SERVICE - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: Serve the health check report for this deployment
# CREATED: 06 MAR 2026
# ============================================================================
"""
Health Check Service Main Application

FastAPI application that:
1. Reads settings from the environment
2. Loads check definitions from HEALTH_CHECKS_FILE (YAML)
3. Serves the report on HEALTH_ROUTE_PATH (default /is_it_working)

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE
from core.config import HealthSettings, get_settings
from core.logging import configure_logging, get_logger
from health import build_handler, create_health_router

logger = get_logger(__name__)


def create_app(settings: Optional[HealthSettings] = None) -> FastAPI:
    """Build the application from settings (environment if omitted)."""
    settings = settings or get_settings()
    handler = build_handler(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Starting health check service v{__version__} "
            f"({len(handler.filters)} checks on {handler.route_path})"
        )
        yield
        logger.info("Health check service stopped")

    app = FastAPI(
        title="Health Check Service",
        description="On-demand dependency health checks",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.health_handler = handler
    app.include_router(create_health_router(handler))

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": "Health Check Service",
            "version": __version__,
            "build_date": BUILD_DATE,
            "health": handler.route_path,
        }

    return app


_settings = get_settings()
configure_logging(level=_settings.log_level, json_output=_settings.log_json)
app = create_app(_settings)


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
