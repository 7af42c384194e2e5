# ============================================================================
# HEALTH CHECK REGISTRY
# ============================================================================
# STATUS: Core - Check lookup by name
# PURPOSE: Resolve check names to probe classes and registration sources
# CREATED: 05 MAR 2026
# ============================================================================
"""
Health Check Registry

Maps check names to probe classes. The default registry holds the built-in
checks; applications add their own with register().

Usage:
    registry = get_registry()
    probe = registry.lookup("directory", {"path": "/var/data"})

    # Application-specific check
    registry.register("queue_depth", QueueDepthCheck)

Registration sources:
    Handler.check() accepts a function, a probe object, or just options.
    Each form is captured as a ProbeSource and resolved once, at
    registration time, into the probe a Filter runs.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from health.core import CheckConfigurationError, HealthCheckError, Probe
from health.checks import BUILTIN_CHECKS, CheckKind

logger = logging.getLogger(__name__)

# Options consumed by the Filter, never passed to a check class
FILTER_OPTIONS = frozenset({"concurrent", "timeout"})

CheckFactory = Callable[..., Probe]


def check_name(name: Union[str, Enum]) -> str:
    """Normalize a check name (plain string or enum member)."""
    if isinstance(name, Enum):
        return str(name.value)
    return str(name)


def expected_class_name(name: Union[str, Enum]) -> str:
    """Class name a check is expected to have, e.g. foo_bar -> FooBarCheck."""
    parts = check_name(name).replace("-", "_").split("_")
    return "".join(part[:1].upper() + part[1:] for part in parts if part) + "Check"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class CheckNotFoundError(HealthCheckError):
    """Raised when no check class is registered under a name."""
    def __init__(self, name: Union[str, Enum]):
        self.name = check_name(name)
        self.expected_class = expected_class_name(name)
        super().__init__(f"Check not defined {self.expected_class}")


# ============================================================================
# REGISTRY
# ============================================================================

class CheckRegistry:
    """
    Registry of check classes by name.

    One name maps to one class; there is no fallback.
    """

    def __init__(self, checks: Optional[Mapping[Union[str, Enum], CheckFactory]] = None):
        self._classes: Dict[str, CheckFactory] = {}
        for name, check_class in (BUILTIN_CHECKS if checks is None else checks).items():
            self.register(name, check_class)

    def register(self, name: Union[str, Enum], check_class: CheckFactory) -> None:
        """
        Register a check class (or any factory returning a probe).

        Args:
            name: Name used by Handler.check() and check definitions
            check_class: Called with the check's options
        """
        key = check_name(name)
        if key in self._classes:
            logger.warning(f"Overwriting health check class: {key}")

        self._classes[key] = check_class
        logger.debug(f"Registered health check class: {key}")

    def get(self, name: Union[str, Enum]) -> Optional[CheckFactory]:
        """Get check class by name."""
        return self._classes.get(check_name(name))

    def lookup(
        self,
        name: Union[str, Enum],
        options: Optional[Mapping[str, Any]] = None,
    ) -> Probe:
        """
        Instantiate the check registered under a name.

        Args:
            name: Registered check name
            options: Check options; filter options (concurrent, timeout)
                are accepted and stripped before construction

        Raises:
            CheckNotFoundError: If nothing is registered under the name
            CheckConfigurationError: If the class rejects the options
        """
        check_class = self.get(name)
        if check_class is None:
            raise CheckNotFoundError(name)

        kwargs = {
            key: value
            for key, value in (options or {}).items()
            if key not in FILTER_OPTIONS
        }
        try:
            return check_class(**kwargs)
        except (TypeError, ValueError) as e:
            raise CheckConfigurationError(
                f"Invalid options for {check_name(name)} check: {e}"
            ) from e

    def names(self) -> List[str]:
        """Registered names, in registration order."""
        return list(self._classes)

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, name: Union[str, Enum]) -> bool:
        return check_name(name) in self._classes


# ============================================================================
# REGISTRATION SOURCES
# ============================================================================

Lookup = Callable[[str, Dict[str, Any]], Probe]


@dataclass(frozen=True)
class BlockSource:
    """A function given as the check."""
    block: Probe

    def resolve(self, lookup: Lookup) -> Probe:
        return self.block


@dataclass(frozen=True)
class InstanceSource:
    """A probe object given as the check."""
    check: Probe

    def resolve(self, lookup: Lookup) -> Probe:
        return self.check


@dataclass(frozen=True)
class LookupSource:
    """Only a name and options: the probe comes from the registry."""
    name: str
    options: Dict[str, Any] = field(default_factory=dict)

    def resolve(self, lookup: Lookup) -> Probe:
        return lookup(self.name, dict(self.options))


ProbeSource = Union[BlockSource, InstanceSource, LookupSource]


# ============================================================================
# GLOBAL REGISTRY
# ============================================================================

_registry: Optional[CheckRegistry] = None


def get_registry() -> CheckRegistry:
    """Get the global check registry."""
    global _registry
    if _registry is None:
        _registry = CheckRegistry()
    return _registry


def lookup_check(name: Union[str, Enum], options: Optional[Mapping[str, Any]] = None) -> Probe:
    """Instantiate a check from the global registry."""
    return get_registry().lookup(name, options)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckKind",
    "FILTER_OPTIONS",
    "CheckNotFoundError",
    "CheckRegistry",
    "BlockSource",
    "InstanceSource",
    "LookupSource",
    "ProbeSource",
    "check_name",
    "expected_class_name",
    "get_registry",
    "lookup_check",
]
