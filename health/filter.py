# ============================================================================
# HEALTH CHECK FILTERS AND RUNNERS
# ============================================================================
# STATUS: Core - Check execution strategies
# PURPOSE: Bind named probes to an execution mode and run them
# CREATED: 04 MAR 2026
# ============================================================================
"""
Filters and Runners

A Filter binds a check name to a probe and an execution mode. Filters are
built once at configuration time and reused by every invocation; all
per-invocation state lives in the Status.

Each invocation creates one Runner per Filter:
- InlineRunner: runs the probe on the dispatching thread during start();
  wait() has nothing left to do.
- ConcurrentRunner: starts the probe on its own daemon thread during
  start(); wait() joins it until it finishes or its timeout expires.

Cheap in-process checks gain nothing from a thread hop. Slow I/O checks
(network, database) run side by side, so an invocation costs roughly the
slowest concurrent check rather than the sum of them.

Each concurrent probe gets a fresh thread, so a probe never waits behind
another one and a hung probe only ever holds its own thread.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from core.logging import LogContext, get_current_context, inherit_context, log_context
from health.core import CheckStatus, Probe, Status

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Filter:
    """
    A named probe plus its execution mode.

    Attributes:
        name: Check name used as the report label
        probe: Callable receiving a CheckStatus
        concurrent: Run on a separate thread (True) or inline (False)
        timeout: Seconds to wait for a concurrent probe (None = forever)
    """
    name: str
    probe: Probe
    concurrent: bool = True
    timeout: Optional[float] = None

    def run(self, status: CheckStatus) -> None:
        """
        Invoke the probe against a scoped status.

        Anything the probe raises is recorded as a failure, including
        BaseException subclasses such as asyncio.CancelledError. Only
        KeyboardInterrupt and SystemExit propagate.
        """
        with log_context(check=self.name):
            try:
                self.probe(status)
            except (KeyboardInterrupt, SystemExit):
                raise
            except BaseException as e:
                logger.exception(f"Check {self.name} raised {type(e).__name__}")
                status.fail(f"{self.name} error: {e!r}")

    def runner(self, status: Status) -> "Runner":
        """Create the runner for one invocation, chosen by execution mode."""
        scope = status.for_check(self.name)
        if self.concurrent:
            return ConcurrentRunner(self, scope)
        return InlineRunner(self, scope)


# ============================================================================
# RUNNERS
# ============================================================================

class Runner(ABC):
    """Executes one Filter for one invocation."""

    def __init__(self, filter: Filter, status: CheckStatus):
        self.filter = filter
        self.status = status

    @abstractmethod
    def start(self) -> None:
        """Begin running the probe."""
        pass

    @abstractmethod
    def wait(self) -> None:
        """Block until the probe has finished (or been given up on)."""
        pass


class InlineRunner(Runner):
    """Runs the probe immediately on the caller's thread."""

    def start(self) -> None:
        self.filter.run(self.status)

    def wait(self) -> None:
        pass


class ConcurrentRunner(Runner):
    """
    Runs the probe on its own daemon thread.

    The timeout is measured from start(), when the thread begins running,
    so waiting on several runners in sequence does not stretch anyone's
    deadline. A timed-out thread is left to finish on its own; its scope
    is abandoned so nothing it records afterwards reaches the report.
    """

    def __init__(self, filter: Filter, status: CheckStatus):
        super().__init__(filter, status)
        self._thread: Optional[threading.Thread] = None
        self._deadline: Optional[float] = None
        self._error: Optional[BaseException] = None

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self._run,
            args=(get_current_context(),),
            name=f"health-check-{self.filter.name}",
            daemon=True,
        )
        if self.filter.timeout is not None:
            self._deadline = time.monotonic() + self.filter.timeout
        self._thread.start()

    def _run(self, context: LogContext) -> None:
        try:
            with inherit_context(context):
                self.filter.run(self.status)
        except BaseException as e:
            # Interrupts raised on a worker thread cannot reach the caller
            self._error = e

    def wait(self) -> None:
        if self._thread is None:
            raise RuntimeError(f"Runner for {self.filter.name} was never started")

        remaining = None
        if self._deadline is not None:
            remaining = max(0.0, self._deadline - time.monotonic())

        self._thread.join(remaining)

        if self._thread.is_alive():
            logger.warning(
                f"Check {self.filter.name} timed out after {self.filter.timeout}s"
            )
            self.status.fail(f"timed out after {self.filter.timeout}s")
            self.status.abandon()
        elif self._error is not None:
            logger.error(
                f"Runner for {self.filter.name} failed: {self._error!r}",
                exc_info=self._error,
            )
            self.status.fail(f"{self.filter.name} error: {self._error!r}")

    @property
    def done(self) -> bool:
        return self._thread is not None and not self._thread.is_alive()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "Filter",
    "Runner",
    "InlineRunner",
    "ConcurrentRunner",
]
