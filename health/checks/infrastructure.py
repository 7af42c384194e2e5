# ============================================================================
# INFRASTRUCTURE HEALTH CHECKS
# ============================================================================
# STATUS: Checks - Network services
# PURPOSE: TCP, SMTP and Redis connectivity
# CREATED: 05 MAR 2026
# ============================================================================
"""
Infrastructure Health Checks

Network service connectivity checks:
- PingCheck: a TCP port accepts connections
- SmtpCheck: an SMTP server accepts connections and answers NOOP
- RedisCheck: a Redis server answers PING
"""

import logging
import smtplib
import socket
from typing import Optional
from urllib.parse import urlsplit

import redis

from health.core import CheckStatus, HealthCheck

logger = logging.getLogger(__name__)


class PingCheck(HealthCheck):
    """
    TCP connectivity health check.

    Opens (and immediately closes) a connection to host:port.
    """

    def __init__(
        self,
        host: str,
        port: int,
        alias: Optional[str] = None,
        timeout: float = 2.0,
    ):
        self.host = host
        self.port = int(port)
        self.alias = alias or host
        self.timeout = float(timeout)

    def __call__(self, status: CheckStatus) -> None:
        try:
            self._connect()
        except socket.gaierror:
            status.fail(f"{self.alias} is not reachable")
        except OSError as e:
            logger.debug(f"Connection to {self.host}:{self.port} failed: {e}")
            status.fail(f"{self.alias} is not accepting connections on port {self.port}")
        else:
            status.ok(f"{self.alias} is accepting connections on port {self.port}")

    def _connect(self) -> None:
        with socket.create_connection((self.host, self.port), timeout=self.timeout):
            pass


class SmtpCheck(PingCheck):
    """
    SMTP health check.

    Connects to the mail server and issues NOOP; any reply other than 250
    counts as not accepting connections.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 25,
        alias: Optional[str] = None,
        timeout: float = 5.0,
    ):
        super().__init__(host=host, port=port, alias=alias, timeout=timeout)

    def _connect(self) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            code, reply = smtp.noop()
            if code != 250:
                raise smtplib.SMTPResponseException(code, reply)


class RedisCheck(HealthCheck):
    """
    Redis health check.

    The client is created once; redis-py connects lazily on the first PING
    and reuses its pool afterwards.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        alias: Optional[str] = None,
        timeout: float = 2.0,
        client: Optional[redis.Redis] = None,
    ):
        self.url = url
        self.alias = alias or self._describe(url)
        self.client = client or redis.Redis.from_url(
            url,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )

    @staticmethod
    def _describe(url: str) -> str:
        """host:port without credentials."""
        parts = urlsplit(url)
        return f"{parts.hostname or 'localhost'}:{parts.port or 6379}"

    def __call__(self, status: CheckStatus) -> None:
        try:
            available = self.client.ping()
        except redis.RedisError as e:
            status.fail(f"redis server {self.alias} is not available")
            status.info(f"{type(e).__name__}: {e}")
            return

        if available:
            status.ok(f"redis server {self.alias} is available")
        else:
            status.fail(f"redis server {self.alias} is not available")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PingCheck",
    "SmtpCheck",
    "RedisCheck",
]
