# ============================================================================
# DATABASE HEALTH CHECKS
# ============================================================================
# STATUS: Checks - PostgreSQL connectivity
# PURPOSE: Verify the database accepts connections and answers queries
# CREATED: 05 MAR 2026
# ============================================================================
"""
Database Health Checks

- PostgresCheck: connects and runs SELECT 1

Connection parameters come from a libpq conninfo string or URL. When none
is given, libpq falls back to the standard PG* environment variables.
"""

import logging
import os
from typing import Any, Callable, ContextManager, Optional

import psycopg
from psycopg.conninfo import conninfo_to_dict

from health.core import CheckStatus, HealthCheck

logger = logging.getLogger(__name__)


class PostgresCheck(HealthCheck):
    """
    PostgreSQL connectivity health check.

    Args:
        conninfo: libpq connection string or postgresql:// URL (None = PG*
            environment variables only)
        alias: Name shown in the report (defaults to dbname@host)
        connect_timeout: Seconds to wait for a connection
        connection_factory: Callable returning a connection context
            manager, e.g. a psycopg_pool pool's ``connection`` method.
            Overrides conninfo.
    """

    def __init__(
        self,
        conninfo: Optional[str] = None,
        alias: Optional[str] = None,
        connect_timeout: int = 5,
        connection_factory: Optional[Callable[[], ContextManager[Any]]] = None,
    ):
        self.conninfo = conninfo
        self.connect_timeout = int(connect_timeout)
        self.connection_factory = connection_factory
        self.alias = alias or self._describe(conninfo)

    @staticmethod
    def _describe(conninfo: Optional[str]) -> str:
        """dbname@host without credentials."""
        try:
            params = conninfo_to_dict(conninfo) if conninfo else {}
        except psycopg.ProgrammingError:
            params = {}
        host = params.get("host") or os.environ.get("PGHOST", "localhost")
        dbname = params.get("dbname") or os.environ.get("PGDATABASE", "postgres")
        return f"{dbname}@{host}"

    def _connect(self) -> ContextManager[Any]:
        if self.connection_factory is not None:
            return self.connection_factory()
        return psycopg.connect(self.conninfo or "", connect_timeout=self.connect_timeout)

    def __call__(self, status: CheckStatus) -> None:
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT 1").fetchone()
        except psycopg.Error as e:
            status.fail(f"{self.alias} connection is not active")
            status.info(f"{type(e).__name__}: {e}")
            return

        if row and row[0] == 1:
            status.ok(f"{self.alias} connection is active")
        else:
            status.fail(f"{self.alias} connection is not active")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PostgresCheck",
]
