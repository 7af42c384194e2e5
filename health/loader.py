# ============================================================================
# HEALTH CHECK DEFINITIONS LOADER
# ============================================================================
# STATUS: Config - YAML check definitions
# PURPOSE: Build a configured Handler from settings and a checks file
# CREATED: 06 MAR 2026
# ============================================================================
"""
Check Definitions Loader

Check definitions can live in a YAML file instead of code:

    checks:
      - name: uploads
        kind: directory
        concurrent: false
        options:
          path: /var/uploads
          permissions: [read, write]

      - name: primary-db
        kind: postgres
        timeout: 5
        options:
          conninfo: postgresql://app@db/app

      - name: ping          # kind defaults to the name
        options:
          host: cache.internal
          port: 11211

A definition without ``kind`` goes through Handler.check(name, options),
exactly as if it had been registered in code.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.config import HealthSettings
from health.core import CheckConfigurationError
from health.handler import Handler

logger = logging.getLogger(__name__)


class CheckDefinition(BaseModel):
    """One check entry in a checks file."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    kind: Optional[str] = None
    concurrent: bool = True
    timeout: Optional[float] = None
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("timeout must be positive")
        return v

    def filter_options(self) -> Dict[str, Any]:
        """Options consumed by the Filter rather than the check class."""
        options: Dict[str, Any] = {"concurrent": self.concurrent}
        if self.timeout is not None:
            options["timeout"] = self.timeout
        return options


class ChecksFile(BaseModel):
    """Top-level layout of a checks file."""
    model_config = ConfigDict(extra="forbid")

    checks: List[CheckDefinition] = Field(default_factory=list)


def load_check_definitions(path: Union[str, Path]) -> List[CheckDefinition]:
    """
    Load and validate check definitions from YAML.

    Raises:
        CheckConfigurationError: If the file is unreadable or invalid
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CheckConfigurationError(f"Cannot read checks file {path}: {e}") from e

    try:
        checks_file = ChecksFile.model_validate(data or {})
    except ValidationError as e:
        raise CheckConfigurationError(f"Invalid checks file {path}: {e}") from e

    logger.info(f"Loaded {len(checks_file.checks)} check definitions from {path}")
    return checks_file.checks


def apply_definitions(handler: Handler, definitions: List[CheckDefinition]) -> Handler:
    """Register each definition on the handler, in order."""
    for definition in definitions:
        if definition.kind is None:
            handler.check(definition.name, {**definition.options, **definition.filter_options()})
        else:
            probe = handler.registry.lookup(definition.kind, definition.options)
            handler.check(definition.name, probe, definition.filter_options())
    return handler


def build_handler(
    settings: HealthSettings,
    app: Optional[Callable[[Any], Any]] = None,
    definitions: Optional[List[CheckDefinition]] = None,
) -> Handler:
    """
    Create a Handler from settings.

    Definitions are read from settings.checks_file unless given explicitly.
    """
    if definitions is None:
        definitions = load_check_definitions(settings.checks_file) if settings.checks_file else []

    handler = Handler(
        app,
        settings.route_path,
        hostname=settings.hostname,
        default_timeout=settings.check_timeout,
    )
    return apply_definitions(handler, definitions)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckDefinition",
    "ChecksFile",
    "load_check_definitions",
    "apply_definitions",
    "build_handler",
]
