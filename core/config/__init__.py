# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration
# PURPOSE: Centralized configuration management
# CREATED: 04 MAR 2026
# ============================================================================
"""
Configuration Module

Provides centralized settings for the health check orchestrator.
"""

from core.config.settings import (
    DEFAULT_ROUTE_PATH,
    HealthSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "DEFAULT_ROUTE_PATH",
    "HealthSettings",
    "get_settings",
    "reset_settings",
]
