# ============================================================================
# BUILT-IN HEALTH CHECKS
# ============================================================================
# STATUS: Checks - Built-in probe table
# PURPOSE: Name every built-in check and the class implementing it
# CREATED: 05 MAR 2026
# ============================================================================
"""
Built-in Health Checks

Concrete probes available by name through the check registry:

- directory: DirectoryCheck (path exists with read/write permissions)
- ping:      PingCheck (TCP port accepts connections)
- url:       UrlCheck (HTTP GET answers 2xx)
- postgres:  PostgresCheck (PostgreSQL answers SELECT 1)
- redis:     RedisCheck (Redis answers PING)
- smtp:      SmtpCheck (SMTP server answers NOOP)
"""

from enum import Enum
from typing import Dict, Type

from health.core import HealthCheck
from health.checks.filesystem import DirectoryCheck
from health.checks.infrastructure import PingCheck, SmtpCheck, RedisCheck
from health.checks.database import PostgresCheck
from health.checks.url import UrlCheck


class CheckKind(str, Enum):
    """Names of the built-in checks."""
    DIRECTORY = "directory"
    PING = "ping"
    URL = "url"
    POSTGRES = "postgres"
    REDIS = "redis"
    SMTP = "smtp"


BUILTIN_CHECKS: Dict[CheckKind, Type[HealthCheck]] = {
    CheckKind.DIRECTORY: DirectoryCheck,
    CheckKind.PING: PingCheck,
    CheckKind.URL: UrlCheck,
    CheckKind.POSTGRES: PostgresCheck,
    CheckKind.REDIS: RedisCheck,
    CheckKind.SMTP: SmtpCheck,
}

__all__ = [
    "CheckKind",
    "BUILTIN_CHECKS",
    "DirectoryCheck",
    "PingCheck",
    "SmtpCheck",
    "RedisCheck",
    "PostgresCheck",
    "UrlCheck",
]
