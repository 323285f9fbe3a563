"""Resolver mapping host facts to a delegate executable."""

from __future__ import annotations

import logging
from typing import Optional, Union

import semver

from .specs import (
    DISPLAY_NAMES,
    INSTALL_GUIDANCE,
    PLATFORM_BINARIES,
    supported_architectures,
    supported_platforms,
)
from .types import (
    Architecture,
    ExecutableSelection,
    IncompatibleRuntime,
    OSIdentifier,
    Resolved,
    RuntimeEnvironment,
    Unsupported,
)

logger = logging.getLogger(__name__)

DEFAULT_MINIMUM_VERSION = semver.Version(3, 10, 0)


class PlatformResolver:
    """Decides which prebuilt delegate, if any, fits a host.

    Works entirely from the table in ``specs``; it never touches the
    filesystem or spawns anything, and it never raises for unknown
    platforms.
    """

    def __init__(self, minimum_version: Optional[semver.Version] = None):
        """Initialize resolver.

        Args:
            minimum_version: Oldest interpreter version allowed to run the
                launcher. Defaults to ``DEFAULT_MINIMUM_VERSION``.
        """
        self.minimum_version = minimum_version or DEFAULT_MINIMUM_VERSION

    def resolve(self, environment: RuntimeEnvironment) -> ExecutableSelection:
        """Resolve the delegate for a captured environment.

        Precedence:
        1. Interpreter version (fatal when too old, checked before anything else)
        2. Operating system
        3. CPU architecture within that operating system

        Args:
            environment: Host facts captured at startup

        Returns:
            ``IncompatibleRuntime``, ``Resolved`` or ``Unsupported``
        """
        if environment.runtime_version < self.minimum_version:
            logger.debug(
                "Runtime %s is older than required %s",
                environment.runtime_version,
                self.minimum_version,
            )
            return IncompatibleRuntime(
                current=str(environment.runtime_version),
                required=str(self.minimum_version),
            )

        selection = self._resolve_platform(environment)
        logger.debug("Resolved %s to %r", environment.describe(), selection)
        return selection

    def _resolve_platform(self, environment: RuntimeEnvironment) -> ExecutableSelection:
        os_id = environment.os
        arch = environment.arch

        if os_id is OSIdentifier.OTHER:
            return self._unsupported_platform(environment)

        executable = PLATFORM_BINARIES.get((os_id, arch))
        if executable is not None:
            return Resolved(executable_name=executable)

        return self._unsupported_architecture(environment)

    def _unsupported_platform(self, environment: RuntimeEnvironment) -> Unsupported:
        guidance = [
            f"Unsupported platform: {environment.raw_os or environment.os.value}",
            f"Supported platforms: {', '.join(supported_platforms())}",
        ]
        return Unsupported(
            reason="platform not supported",
            guidance=guidance + INSTALL_GUIDANCE,
        )

    def _unsupported_architecture(self, environment: RuntimeEnvironment) -> Unsupported:
        display_name = DISPLAY_NAMES[environment.os]
        supported = ", ".join(arch.value for arch in supported_architectures(environment.os))
        guidance = [
            f"No prebuilt binary for {display_name} on "
            f"{environment.raw_arch or environment.arch.value}",
            f"Supported {display_name} architectures: {supported}",
        ]
        return Unsupported(
            reason=f"{display_name} architecture not prebuilt",
            guidance=guidance + INSTALL_GUIDANCE,
        )


def resolve_platform(
    runtime_version: Union[semver.Version, str, int],
    os_id: OSIdentifier,
    arch: Architecture,
    minimum_version: Union[semver.Version, str, int, None] = None,
) -> ExecutableSelection:
    """Resolve from bare facts rather than a captured environment.

    Integer versions are treated as a bare major version (``18`` -> ``18.0.0``).
    """
    environment = RuntimeEnvironment(
        runtime_version=_coerce_version(runtime_version),
        os=os_id,
        arch=arch,
    )
    minimum = _coerce_version(minimum_version) if minimum_version is not None else None
    return PlatformResolver(minimum).resolve(environment)


def _coerce_version(value: Union[semver.Version, str, int]) -> semver.Version:
    if isinstance(value, semver.Version):
        return value
    if isinstance(value, int):
        return semver.Version(value)
    return semver.Version.parse(value.lstrip("v"), optional_minor_and_patch=True)
