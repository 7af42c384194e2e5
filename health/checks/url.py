# ============================================================================
# URL HEALTH CHECK
# ============================================================================
# STATUS: Checks - Outbound HTTP reachability
# PURPOSE: Verify a dependency answers HTTP requests successfully
# CREATED: 05 MAR 2026
# ============================================================================
"""
URL Health Check

Issues a GET and treats any 2xx response as healthy. Redirects are not
followed: a 3xx usually means the URL is misconfigured.
"""

import logging
from typing import Dict, Optional

import httpx

from health.core import CheckStatus, HealthCheck

logger = logging.getLogger(__name__)


class UrlCheck(HealthCheck):
    """
    HTTP reachability health check.

    Args:
        url: URL to GET
        alias: Name shown in the report (defaults to the URL)
        headers: Extra request headers
        username: Basic auth user
        password: Basic auth password
        timeout: Seconds for connect and read
        proxy: Optional proxy URL
        verify: Verify TLS certificates
        transport: Optional httpx transport (testing, custom TLS)
    """

    def __init__(
        self,
        url: str,
        alias: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 10.0,
        proxy: Optional[str] = None,
        verify: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = url
        self.alias = alias or url
        self.headers = dict(headers or {})
        self.auth = (username, password or "") if username else None
        self.timeout = float(timeout)
        self.proxy = proxy
        self.verify = verify
        self.transport = transport

    def __call__(self, status: CheckStatus) -> None:
        try:
            with httpx.Client(
                timeout=self.timeout,
                proxy=self.proxy,
                verify=self.verify,
                transport=self.transport,
            ) as client:
                response = client.get(self.url, headers=self.headers, auth=self.auth)
        except httpx.TimeoutException:
            status.fail(f"GET {self.alias} timed out after {self.timeout:g} seconds")
            return
        except httpx.HTTPError as e:
            status.fail(f"GET {self.alias} failed with error {e!r}")
            return

        summary = f"'{response.status_code} {response.reason_phrase}'"
        if response.is_success:
            status.ok(f"GET {self.alias} responded with response {summary}")
        else:
            status.fail(f"GET {self.alias} failed with response {summary}")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "UrlCheck",
]
