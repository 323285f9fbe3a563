"""Data types for platform resolution."""

from __future__ import annotations

import os
import platform
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Union

import semver


class OSIdentifier(Enum):
    """Operating systems the resolver knows how to dispatch on."""

    MACOS = "darwin"
    LINUX = "linux"
    OTHER = "other"

    @classmethod
    def from_platform(cls, raw: str) -> "OSIdentifier":
        """Map a ``sys.platform`` style string to an identifier.

        Unknown values map to ``OTHER``; this never raises.
        """
        value = (raw or "").strip().lower()
        if value == "darwin":
            return cls.MACOS
        # Python 2 era interpreters reported "linux2"
        if value.startswith("linux"):
            return cls.LINUX
        return cls.OTHER


class Architecture(Enum):
    """CPU architectures the resolver knows how to dispatch on."""

    ARM64 = "arm64"
    X64 = "x64"
    OTHER = "other"

    @classmethod
    def from_machine(cls, raw: str) -> "Architecture":
        """Map a ``platform.machine()`` string to an architecture.

        macOS reports ``arm64`` where Linux reports ``aarch64``, and Windows
        reports ``AMD64``. Anything else (``arm``, ``armv7l``, ``i686``...)
        maps to ``OTHER``.
        """
        value = (raw or "").strip().lower()
        return _MACHINE_ALIASES.get(value, cls.OTHER)


_MACHINE_ALIASES = {
    "arm64": Architecture.ARM64,
    "aarch64": Architecture.ARM64,
    "x86_64": Architecture.X64,
    "amd64": Architecture.X64,
    "x64": Architecture.X64,
}


@dataclass(frozen=True)
class RuntimeEnvironment:
    """Host facts captured once at startup.

    Attributes:
        runtime_version: Version of the interpreter running the launcher
        os: Normalized operating system
        arch: Normalized CPU architecture
        raw_os: Value the host reported, kept for diagnostics
        raw_arch: Value the host reported, kept for diagnostics
    """

    runtime_version: semver.Version
    os: OSIdentifier
    arch: Architecture
    raw_os: str = ""
    raw_arch: str = ""

    @classmethod
    def capture(cls) -> "RuntimeEnvironment":
        """Snapshot the running interpreter and host platform."""
        info = sys.version_info
        machine = platform.machine()
        return cls(
            runtime_version=semver.Version(info.major, info.minor, info.micro),
            os=OSIdentifier.from_platform(sys.platform),
            arch=Architecture.from_machine(machine),
            raw_os=sys.platform,
            raw_arch=machine,
        )

    def describe(self) -> str:
        os_name = self.raw_os or self.os.value
        arch_name = self.raw_arch or self.arch.value
        return f"{os_name}/{arch_name}"


@dataclass(frozen=True)
class Resolved:
    """A prebuilt delegate exists for this host."""

    executable_name: str


@dataclass(frozen=True)
class Unsupported:
    """No prebuilt delegate exists; the user needs installation guidance."""

    reason: str
    guidance: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class IncompatibleRuntime:
    """The interpreter is too old to run the launcher at all."""

    current: str
    required: str


ExecutableSelection = Union[Resolved, Unsupported, IncompatibleRuntime]


@dataclass(frozen=True)
class ExecutableLocation:
    """Where a delegate is expected on disk, and what was found there."""

    path: Path
    exists: bool
    executable: bool

    @classmethod
    def probe(cls, path: Path) -> "ExecutableLocation":
        exists = path.is_file()
        return cls(
            path=path,
            exists=exists,
            executable=exists and os.access(path, os.X_OK),
        )

    def __repr__(self) -> str:
        state = "missing"
        if self.exists:
            state = "executable" if self.executable else "not executable"
        return f"<ExecutableLocation {self.path} ({state})>"
