# ============================================================================
# FILESYSTEM HEALTH CHECKS
# ============================================================================
# STATUS: Checks - Local filesystem
# PURPOSE: Directory existence and permission checks
# CREATED: 05 MAR 2026
# ============================================================================
"""
Filesystem Health Checks

- DirectoryCheck: a directory exists and the process can read/write it

Cheap and in-process; usually registered with concurrent=False.
"""

import getpass
import logging
import os
from typing import Iterable, Union

from health.core import CheckStatus, HealthCheck

logger = logging.getLogger(__name__)


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return f"uid {os.getuid()}" if hasattr(os, "getuid") else "current user"


class DirectoryCheck(HealthCheck):
    """
    Directory health check.

    Fails if the path is missing, is not a directory, or lacks one of the
    requested permissions for the user running the process.
    """

    PERMISSIONS = {
        "read": (os.R_OK, "readable"),
        "write": (os.W_OK, "writable"),
    }

    def __init__(
        self,
        path: str,
        permissions: Union[str, Iterable[str]] = ("read",),
    ):
        if isinstance(permissions, str):
            permissions = [permissions]
        permissions = [str(p).lower() for p in permissions]

        unknown = [p for p in permissions if p not in self.PERMISSIONS]
        if unknown:
            raise ValueError(
                f"Unknown directory permissions {unknown}; expected {sorted(self.PERMISSIONS)}"
            )

        self.path = os.fspath(path)
        self.permissions = tuple(permissions)

    def __call__(self, status: CheckStatus) -> None:
        if not os.path.exists(self.path):
            status.fail(f"{self.path} does not exist")
            return

        if not os.path.isdir(self.path):
            status.fail(f"{self.path} is not a directory")
            return

        for permission in self.permissions:
            mode, adjective = self.PERMISSIONS[permission]
            if not os.access(self.path, mode):
                status.fail(f"{self.path} is not {adjective} by {_current_user()}")
                return

        status.ok(f"directory {self.path} exists")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DirectoryCheck",
]
