# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Adapter - FastAPI endpoints
# PURPOSE: Serve a Handler's report over HTTP
# CREATED: 06 MAR 2026
# ============================================================================
"""
Health Check Router

FastAPI adapter around a Handler.

Endpoints:
    GET <route_path>  - Run every check (default /is_it_working)
                        200 with a plain-text report if all checks pass,
                        500 with the same report if any check fails.

    GET /livez        - Liveness probe (is the process alive?)
                        Instant, no checks run.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import Response

from health.handler import Handler
from __version__ import __version__, BUILD_DATE

logger = logging.getLogger(__name__)


def create_health_router(handler: Handler) -> APIRouter:
    """
    Build a router serving the handler's report.

    The report endpoint is a plain (sync) function: FastAPI runs it on its
    threadpool, so the blocking wait on checks never stalls the event loop.
    """
    router = APIRouter(tags=["Health"])

    @router.get(handler.route_path, response_class=Response)
    def run_health_checks():
        """Run all registered checks and return the text report."""
        report = handler.dispatch(handler.route_path)
        return Response(
            content=report.body,
            status_code=report.status_code,
            headers=report.headers,
        )

    @router.get("/livez")
    async def liveness_probe():
        """Instant liveness probe; no external dependencies."""
        return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}

    return router


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "create_health_router",
]
