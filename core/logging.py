# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with context
# PURPOSE: Tag every log record with the invocation and check it belongs to
# CREATED: 04 MAR 2026
# ============================================================================
"""
Structured Logging

Every dispatch runs under an invocation id, and every probe under its check
name. Those fields live on a thread-local context stack and are stamped on
each record by the formatters, so concurrent invocations can be told apart
in the log stream.

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger(__name__)

    with log_context(invocation_id="a1b2c3d4", check="database"):
        logger.info("Running check")
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class LogContext:
    """Fields attached to every record logged inside a log_context."""
    invocation_id: Optional[str] = None
    check: Optional[str] = None
    host: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only."""
        return {
            key: value
            for key, value in (
                ("invocation_id", self.invocation_id),
                ("check", self.check),
                ("host", self.host),
            )
            if value is not None
        }


_local = threading.local()


def _stack() -> list:
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack


def get_current_context() -> LogContext:
    """Innermost context on this thread (empty if none)."""
    stack = _stack()
    return stack[-1] if stack else LogContext()


@contextmanager
def log_context(**fields):
    """
    Push a context layered over the current one.

    Example:
        with log_context(invocation_id="a1b2c3d4", check="redis"):
            logger.info("Probing cache")
    """
    with inherit_context(replace(get_current_context(), **fields)) as context:
        yield context


@contextmanager
def inherit_context(context: LogContext):
    """
    Re-enter a context captured on another thread.

    Probe threads start with an empty stack; the runner captures the
    dispatching thread's context and replays it here.
    """
    stack = _stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "thread": record.threadName,
        }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line records with the context inline, for development."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context()
        tags = []
        if context.invocation_id:
            tags.append(f"inv={context.invocation_id}")
        if context.check:
            tags.append(f"check={context.check}")
        tag_str = f" [{', '.join(tags)}]" if tags else ""

        result = f"{timestamp} {level} {record.name}{tag_str}: {record.getMessage()}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"

        return result


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that copies the current context onto each record."""

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra.update(get_current_context().to_dict())
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Context-aware logger for a module."""
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (also enabled by LOG_FORMAT=json)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "inherit_context",
    "get_current_context",
]
