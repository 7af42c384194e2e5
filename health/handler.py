# ============================================================================
# HEALTH CHECK HANDLER
# ============================================================================
# STATUS: Core - Check registry and dispatcher
# PURPOSE: Run every registered check and render one aggregate report
# CREATED: 05 MAR 2026
# ============================================================================
"""
Health Check Handler

Holds the ordered list of checks and runs them on demand.

Dispatch:
1. If a downstream app is wrapped and the request path is not the check
   route, the request is handed to the app untouched.
2. Otherwise a fresh Status is created and every Filter's runner is
   started in registration order. Concurrent checks each start on their
   own thread and overlap; inline checks finish before the next one starts.
3. Only after every runner has started does the handler wait on each,
   again in registration order.
4. The Status is closed and rendered: 200 if every check passed, else 500,
   with one report line per recorded message.

Usage:
    handler = Handler()
    handler.check("directory", {"path": "/var/data", "concurrent": False})
    handler.check("api", UrlCheck("https://api.internal/ping"))

    @handler.register("queue")
    def queue_check(status):
        status.ok("queue reachable")

    status_code, lines = handler.dispatch("/is_it_working")
"""

import logging
import os
import socket
import threading
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar, Union

from core.config import DEFAULT_ROUTE_PATH
from core.logging import log_context
from health.core import CheckConfigurationError, HealthResponse, Probe, Status
from health.filter import Filter
from health.registry import (
    BlockSource,
    CheckRegistry,
    InstanceSource,
    LookupSource,
    ProbeSource,
    check_name,
    get_registry,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class HandlerSettings:
    """Handler-level configuration read by every dispatch."""
    hostname: str = ""


def request_path(request: Any) -> Optional[str]:
    """
    Extract the path from whatever the transport hands over.

    Accepts a path string, a WSGI-style environ (PATH_INFO), a mapping with
    a "path" key, or an object with a ``path`` attribute.
    """
    if request is None:
        return None
    if isinstance(request, str):
        return request
    if isinstance(request, Mapping):
        return request.get("PATH_INFO", request.get("path"))
    return getattr(request, "path", None)


class Handler:
    """
    Registry and dispatcher for health checks.

    Filters are registered at configuration time and reused by every
    dispatch; dispatches are independent and may run concurrently.

    Args:
        app: Downstream handler for requests not addressed to the route
        route_path: Path the report is served on
        hostname: Host name shown in the report (None = this machine)
        default_timeout: Timeout for concurrent checks registered without one
        registry: Check registry used for name lookups
        configure: Called with the handler once, to register checks
    """

    def __init__(
        self,
        app: Optional[Callable[[Any], Any]] = None,
        route_path: str = DEFAULT_ROUTE_PATH,
        *,
        hostname: Optional[str] = None,
        default_timeout: Optional[float] = None,
        registry: Optional[CheckRegistry] = None,
        configure: Optional[Callable[["Handler"], None]] = None,
    ):
        self.app = app
        self.route_path = route_path
        self.default_timeout = default_timeout
        self.registry = registry or get_registry()

        self._filters: List[Filter] = []
        self._lock = threading.RLock()
        self._settings = HandlerSettings(
            hostname=socket.gethostname() if hostname is None else hostname,
        )

        if configure is not None:
            configure(self)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def filters(self) -> Tuple[Filter, ...]:
        return tuple(self._filters)

    @property
    def settings(self) -> HandlerSettings:
        return self._settings

    @property
    def hostname(self) -> str:
        return self._settings.hostname

    @hostname.setter
    def hostname(self, value: str) -> None:
        self.synchronize(self._update_settings, hostname=value or "")

    def _update_settings(self, **changes) -> None:
        # Readers pick up the new snapshot on their next dispatch
        self._settings = replace(self._settings, **changes)

    def synchronize(self, func: Callable[..., T], *args, **kwargs) -> T:
        """Run func while holding the handler lock and return its result."""
        with self._lock:
            return func(*args, **kwargs)

    def check(
        self,
        name: str,
        check: Union[Probe, Mapping[str, Any], None] = None,
        options: Optional[Mapping[str, Any]] = None,
        *,
        block: Optional[Probe] = None,
    ) -> Filter:
        """
        Register a check.

        Forms:
            check(name, block=func)            func is the probe
            check(name, options, block=func)   same, with options
            check(name, probe)                 probe object (block ignored)
            check(name, probe, options)        same, with options
            check(name, options)               class looked up by name

        Options:
            concurrent: Run on a separate thread (default True)
            timeout: Seconds to wait for a concurrent check
            anything else: passed to the looked-up check class

        Raises:
            CheckNotFoundError: If a name lookup finds nothing
            CheckConfigurationError: If the resolved check is not callable
        """
        if isinstance(check, Mapping):
            if options is not None:
                raise TypeError("check() got options twice")
            check, options = None, check

        name = check_name(name)
        options = dict(options or {})

        source: ProbeSource
        if check is not None:
            source = InstanceSource(check)
        elif block is not None:
            source = BlockSource(block)
        else:
            source = LookupSource(name, {"concurrent": True, **options})

        probe = source.resolve(self._lookup_check)
        if not callable(probe):
            raise CheckConfigurationError(f"Check {name} is not callable: {probe!r}")

        timeout = options["timeout"] if "timeout" in options else self.default_timeout
        new_filter = Filter(
            name=name,
            probe=probe,
            concurrent=bool(options.get("concurrent", True)),
            timeout=None if timeout is None else float(timeout),
        )
        self.synchronize(self._filters.append, new_filter)

        logger.debug(
            f"Registered check {name} "
            f"(concurrent={new_filter.concurrent}, timeout={new_filter.timeout})"
        )
        return new_filter

    def register(
        self,
        name: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Callable[[Probe], Probe]:
        """
        Decorator form of check(name, options, block=func).

        Example:
            @handler.register("cache", {"concurrent": False})
            def cache_check(status):
                status.ok("warm")
        """
        def decorator(func: Probe) -> Probe:
            self.check(name, options, block=func)
            return func

        return decorator

    def _lookup_check(self, name: str, options: Dict[str, Any]) -> Probe:
        return self.registry.lookup(name, options)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, request: Any = None) -> Any:
        """
        Handle one request.

        Returns:
            The downstream app's response for other paths, otherwise a
            HealthResponse unpacking to (status_code, lines)
        """
        if self.app is not None and request_path(request) != self.route_path:
            return self.app(request)
        return self.run_checks()

    __call__ = dispatch

    def run_checks(self) -> HealthResponse:
        """Run every registered check and render the report."""
        settings = self._settings
        filters = self.filters
        invocation_id = uuid.uuid4().hex[:8]

        with log_context(invocation_id=invocation_id, host=settings.hostname or None):
            status = Status()
            runners = []
            for check_filter in filters:
                runner = check_filter.runner(status)
                runner.start()
                runners.append(runner)

            for runner in runners:
                runner.wait()

            status.close()
            response = self.render(status, settings)

            logger.info(
                f"Health check {'passed' if status.success else 'failed'}: "
                f"{len(filters)} checks in {status.elapsed * 1000:.0f}ms"
            )

        return response

    def render(self, status: Status, settings: Optional[HandlerSettings] = None) -> HealthResponse:
        """Render a Status as a status code and report lines."""
        settings = settings or self._settings

        info = []
        if settings.hostname:
            info.append(f"Host: {settings.hostname}")
        info.append(f"PID:  {os.getpid()}")
        info.append(f"Timestamp: {datetime.now(timezone.utc).isoformat()}")
        info.append(f"Elapsed Time: {round(status.elapsed * 1000)}ms")

        lines = info + [""] + [message.render() for message in status.messages]
        return HealthResponse(status_code=200 if status.success else 500, lines=lines)

    def __repr__(self) -> str:
        return (
            f"Handler(route_path={self.route_path!r}, "
            f"checks={[f.name for f in self._filters]})"
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "Handler",
    "HandlerSettings",
    "request_path",
]
