"""Platform resolution for prebuilt gateway binaries."""

from .resolver import DEFAULT_MINIMUM_VERSION, PlatformResolver, resolve_platform
from .specs import KNOWN_EXECUTABLES, PLATFORM_BINARIES
from .types import (
    Architecture,
    ExecutableLocation,
    ExecutableSelection,
    IncompatibleRuntime,
    OSIdentifier,
    Resolved,
    RuntimeEnvironment,
    Unsupported,
)

__all__ = [
    "PlatformResolver",
    "resolve_platform",
    "DEFAULT_MINIMUM_VERSION",
    "KNOWN_EXECUTABLES",
    "PLATFORM_BINARIES",
    "Architecture",
    "ExecutableLocation",
    "ExecutableSelection",
    "IncompatibleRuntime",
    "OSIdentifier",
    "Resolved",
    "RuntimeEnvironment",
    "Unsupported",
]
