# ============================================================================
# HEALTH CHECK SETTINGS
# ============================================================================
# STATUS: Core - Environment-driven settings
# PURPOSE: Centralized configuration for the health check endpoint
# CREATED: 04 MAR 2026
# ============================================================================
"""
Health Check Settings

Process-level settings for the health check endpoint, read once from
environment variables.

Design:
- Immutable dataclass
- Environment variable overrides
- Type-safe access
"""

import os
import socket
from dataclasses import dataclass
from typing import Optional

DEFAULT_ROUTE_PATH = "/is_it_working"


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    return float(value)


@dataclass(frozen=True)
class HealthSettings:
    """
    Settings for the health check endpoint.

    Attributes:
        route_path: Path the report is served on
        hostname: Host name shown in the report (empty hides the line)
        check_timeout: Default per-check timeout in seconds (None = wait forever)
        checks_file: Optional YAML file with check definitions
        log_level: Root log level
        log_json: Emit JSON log records
    """
    route_path: str = DEFAULT_ROUTE_PATH
    hostname: str = ""
    check_timeout: Optional[float] = 30.0
    checks_file: Optional[str] = None
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "HealthSettings":
        """Create from environment variables."""
        return cls(
            route_path=os.getenv("HEALTH_ROUTE_PATH", DEFAULT_ROUTE_PATH),
            hostname=os.getenv("HEALTH_HOSTNAME", socket.gethostname()),
            check_timeout=_optional_float(os.getenv("HEALTH_CHECK_TIMEOUT", "30")),
            checks_file=os.getenv("HEALTH_CHECKS_FILE") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=os.getenv("LOG_FORMAT", "").lower() == "json",
        )


_settings: Optional[HealthSettings] = None


def get_settings() -> HealthSettings:
    """Get global settings instance."""
    global _settings
    if _settings is None:
        _settings = HealthSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DEFAULT_ROUTE_PATH",
    "HealthSettings",
    "get_settings",
    "reset_settings",
]
