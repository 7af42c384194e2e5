# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# STATUS: Core - Health check orchestration
# PURPOSE: Run diagnostic probes on demand and report one verdict
# CREATED: 04 MAR 2026
# ============================================================================
"""
Health Check Module

Runs a configured set of independent probes on every request and renders
one aggregate verdict plus a plain-text report.

Architecture:
- Status / CheckStatus: per-invocation, thread-safe result accumulator
- Filter: a named probe plus its execution mode (concurrent or inline)
- InlineRunner / ConcurrentRunner: execution strategies
- Handler: check registry and dispatcher (also usable as middleware)
- CheckRegistry: built-in and custom check classes by name

Usage:
    from health import Handler, create_health_router

    handler = Handler()
    handler.check("directory", {"path": "/var/data", "concurrent": False})

    @handler.register("queue")
    def queue_check(status):
        status.ok("queue reachable")

    app.include_router(create_health_router(handler))
"""

from health.core import (
    HealthCheckError,
    CheckConfigurationError,
    Outcome,
    Message,
    Status,
    CheckStatus,
    HealthCheck,
    HealthResponse,
)
from health.filter import Filter, Runner, InlineRunner, ConcurrentRunner
from health.registry import (
    CheckKind,
    CheckNotFoundError,
    CheckRegistry,
    get_registry,
    lookup_check,
)
from health.handler import Handler, HandlerSettings
from health.loader import CheckDefinition, load_check_definitions, build_handler
from health.router import create_health_router

__all__ = [
    # Core types
    "HealthCheckError",
    "CheckConfigurationError",
    "Outcome",
    "Message",
    "Status",
    "CheckStatus",
    "HealthCheck",
    "HealthResponse",
    # Execution
    "Filter",
    "Runner",
    "InlineRunner",
    "ConcurrentRunner",
    # Registry
    "CheckKind",
    "CheckNotFoundError",
    "CheckRegistry",
    "get_registry",
    "lookup_check",
    # Handler
    "Handler",
    "HandlerSettings",
    # Config
    "CheckDefinition",
    "load_check_definitions",
    "build_handler",
    # Router
    "create_health_router",
]
