"""Declarative table of prebuilt delegate executables.

This is DATA, not code. To ship a new platform, add its entry here.
"""

from typing import Dict, FrozenSet, List, Tuple

from .types import Architecture, OSIdentifier

BINARY_PREFIX = "ai-gateway"

# (os, arch) -> executable name inside the delegate directory.
# Only names from this table may ever be resolved.
PLATFORM_BINARIES: Dict[Tuple[OSIdentifier, Architecture], str] = {
    (OSIdentifier.MACOS, Architecture.ARM64): f"{BINARY_PREFIX}-macos",
    (OSIdentifier.LINUX, Architecture.X64): f"{BINARY_PREFIX}-linux",
}

KNOWN_EXECUTABLES: FrozenSet[str] = frozenset(PLATFORM_BINARIES.values())

DISPLAY_NAMES: Dict[OSIdentifier, str] = {
    OSIdentifier.MACOS: "macOS",
    OSIdentifier.LINUX: "Linux",
    OSIdentifier.OTHER: "Other",
}

# Expected binary format per OS, used by the release-time distribution check
BINARY_FORMATS: Dict[OSIdentifier, str] = {
    OSIdentifier.MACOS: "Mach-O",
    OSIdentifier.LINUX: "ELF",
}

INSTALL_GUIDANCE: List[str] = [
    "Build the gateway from source instead:",
    "  cargo build --release --bin ai-gateway",
    "Then run target/release/ai-gateway directly.",
]


def supported_architectures(os_id: OSIdentifier) -> List[Architecture]:
    """Architectures with a prebuilt delegate for ``os_id``."""
    return [arch for (os_key, arch) in PLATFORM_BINARIES if os_key is os_id]


def supported_platforms() -> List[str]:
    """Human-readable list such as ``["macOS (arm64)", "Linux (x64)"]``."""
    return [
        f"{DISPLAY_NAMES[os_id]} ({arch.value})"
        for (os_id, arch) in PLATFORM_BINARIES
    ]


def os_for_executable(name: str) -> OSIdentifier:
    """Reverse lookup of the OS a known executable was built for.

    Raises:
        ValueError: If ``name`` is not a known executable
    """
    for (os_id, _arch), binary in PLATFORM_BINARIES.items():
        if binary == name:
            return os_id
    raise ValueError(
        f"Unknown executable '{name}'. "
        f"Known executables: {', '.join(sorted(KNOWN_EXECUTABLES))}"
    )
