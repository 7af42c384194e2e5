# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Core - Result aggregation types
# PURPOSE: Status accumulator, messages and the probe interface
# CREATED: 04 MAR 2026
# ============================================================================
"""
Health Check Core Types

Defines the per-invocation result accumulator and the probe interface.

Aggregation (any failure wins):
- A Status starts successful.
- Any check recording a failure flips it to failed, permanently.
- ok / info messages never change the aggregate.

A Status is shared by every check of one invocation. Probes never see it
directly: each probe receives a CheckStatus, a view that labels every
message with the check's name and appends it to the shared Status as one
atomic unit.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class HealthCheckError(Exception):
    """Base exception for health check configuration errors."""
    pass


class CheckConfigurationError(HealthCheckError):
    """Raised when check definitions cannot be loaded or resolved."""
    pass


# ============================================================================
# MESSAGES
# ============================================================================

class Outcome(str, Enum):
    """Outcome of a single reported message."""
    OK = "ok"
    FAIL = "fail"
    INFO = "info"

    @property
    def tag(self) -> str:
        """Fixed-width report prefix."""
        return {
            Outcome.OK: "OK:  ",
            Outcome.FAIL: "FAIL:",
            Outcome.INFO: "INFO:",
        }[self]


@dataclass(frozen=True)
class Message:
    """One labeled outcome recorded by a check."""
    label: str
    outcome: Outcome
    text: str
    elapsed_ms: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.outcome is not Outcome.FAIL

    def render(self) -> str:
        """Format as a single report line."""
        timing = "?" if self.elapsed_ms is None else f"{self.elapsed_ms:.1f}"
        return f"{self.outcome.tag} {self.label} - {self.text} ({timing}ms)"


# ============================================================================
# STATUS
# ============================================================================

class Status:
    """
    Append-only result accumulator for one invocation.

    Thread-safe: probes running on worker threads append through
    CheckStatus views concurrently. Messages are kept in the order they
    were recorded, which is completion order, not registration order.

    Once closed (at render time) further appends are dropped, so a probe
    abandoned after a timeout cannot change a report already sent.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._messages: List[Message] = []
        self._success = True
        self._closed = False
        self.started_at = time.monotonic()
        self._finished_at: Optional[float] = None

    @property
    def success(self) -> bool:
        """False once any check has failed."""
        return self._success

    @property
    def messages(self) -> Tuple[Message, ...]:
        with self._lock:
            return tuple(self._messages)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def elapsed(self) -> float:
        """Seconds since creation, frozen once closed."""
        end = self._finished_at if self._finished_at is not None else time.monotonic()
        return end - self.started_at

    def for_check(self, name: str) -> "CheckStatus":
        """Return a view labeling messages with the given check name."""
        return CheckStatus(self, str(name))

    def record(
        self,
        label: str,
        outcome: Outcome,
        text: str,
        elapsed_ms: Optional[float] = None,
    ) -> bool:
        """
        Append one message.

        Returns:
            False if the Status was already closed and the message dropped
        """
        message = Message(label=label, outcome=outcome, text=str(text), elapsed_ms=elapsed_ms)
        with self._lock:
            if self._closed:
                dropped = True
            else:
                dropped = False
                self._messages.append(message)
                if outcome is Outcome.FAIL:
                    self._success = False

        if dropped:
            logger.warning(
                f"Dropped late message from {label} after report was rendered: {message.text}"
            )
            return False
        return True

    def close(self) -> None:
        """Seal the Status and freeze its elapsed time."""
        with self._lock:
            if not self._closed:
                self._closed = True
                self._finished_at = time.monotonic()

    def __len__(self) -> int:
        return len(self._messages)


class _ScopeState:
    """State shared by a CheckStatus and its sub-scopes."""

    def __init__(self, started_at: float):
        self.lock = threading.Lock()
        self.messages: List[Message] = []
        self.abandoned = False
        self.started_at = started_at


class CheckStatus:
    """
    View of a Status scoped to a single check.

    This is the object a probe receives. Messages recorded here carry the
    check's label and the time elapsed since the check started.
    """

    def __init__(self, status: Status, label: str, _state: Optional[_ScopeState] = None):
        self._status = status
        self.label = label
        self._state = _state or _ScopeState(time.monotonic())

    def ok(self, text: str) -> None:
        """Record a success."""
        self._record(Outcome.OK, text)

    def fail(self, text: str) -> None:
        """Record a failure; the whole invocation is reported as failed."""
        self._record(Outcome.FAIL, text)

    def info(self, text: str) -> None:
        """Record an informational message."""
        self._record(Outcome.INFO, text)

    def scoped(self, suffix: str) -> "CheckStatus":
        """Return a sub-view whose label is suffixed with a description."""
        return CheckStatus(self._status, f"{self.label} {suffix}", _state=self._state)

    @property
    def success(self) -> bool:
        """False once this check (or one of its sub-scopes) has failed."""
        with self._state.lock:
            return all(m.ok for m in self._state.messages)

    @property
    def messages(self) -> Tuple[Message, ...]:
        """Messages recorded by this check, in order."""
        with self._state.lock:
            return tuple(self._state.messages)

    @property
    def elapsed_ms(self) -> float:
        return (time.monotonic() - self._state.started_at) * 1000

    @property
    def abandoned(self) -> bool:
        return self._state.abandoned

    def abandon(self) -> None:
        """Ignore anything this check records from now on."""
        with self._state.lock:
            self._state.abandoned = True

    def _record(self, outcome: Outcome, text: str) -> None:
        elapsed_ms = self.elapsed_ms
        with self._state.lock:
            if self._state.abandoned:
                return
            message = Message(self.label, outcome, str(text), elapsed_ms)
            self._state.messages.append(message)
        if outcome is Outcome.FAIL:
            logger.warning(f"Check {self.label} failed: {text}")
        self._status.record(self.label, outcome, text, elapsed_ms)

    def __repr__(self) -> str:
        return f"CheckStatus(label={self.label!r}, messages={len(self._state.messages)})"


# ============================================================================
# PROBES
# ============================================================================

Probe = Callable[[CheckStatus], None]


class HealthCheck(ABC):
    """
    Base class for probes.

    A probe is any callable taking a CheckStatus and recording at least one
    outcome through ok() / fail(). Subclass this for reusable checks that
    are configured once and called on every invocation; plain functions
    work just as well for one-off checks.

    Example:
        class DiskCheck(HealthCheck):
            def __init__(self, path="/"):
                self.path = path

            def __call__(self, status):
                status.ok(f"{self.path} mounted")
    """

    @abstractmethod
    def __call__(self, status: CheckStatus) -> None:
        """Run the probe and record its outcome on the status."""
        pass


# ============================================================================
# RESPONSE
# ============================================================================

REPORT_HEADERS: Dict[str, str] = {
    "Content-Type": "text/plain; charset=utf-8",
    "Cache-Control": "no-cache",
}


class HealthResponse(NamedTuple):
    """Rendered report: unpacks to (status_code, lines)."""
    status_code: int
    lines: List[str]

    @property
    def success(self) -> bool:
        return self.status_code == 200

    @property
    def headers(self) -> Dict[str, str]:
        return dict(REPORT_HEADERS)

    @property
    def body(self) -> str:
        return "\n".join(self.lines)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthCheckError",
    "CheckConfigurationError",
    "Outcome",
    "Message",
    "Status",
    "CheckStatus",
    "Probe",
    "HealthCheck",
    "HealthResponse",
    "REPORT_HEADERS",
]
