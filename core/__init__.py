# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export logging and configuration helpers
# ============================================================================

from core.logging import configure_logging, get_logger, log_context
from core.config import HealthSettings, get_settings

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
    # Config
    "HealthSettings",
    "get_settings",
]
