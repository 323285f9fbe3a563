"""Pytest configuration and shared fixtures."""

import logging
import stat
from pathlib import Path
from typing import Callable

import pytest
import semver

from ai_gateway_launcher.config.parser import LauncherConfig
from ai_gateway_launcher.runtime import Architecture, OSIdentifier, RuntimeEnvironment

ELF_HEADER = b"\x7fELF\x02\x01\x01\x00"


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    """A fake installed package directory with an empty dist/ inside.

    Creates:
        tmp_path/
            ai_gateway_launcher/
                dist/
    """
    root = tmp_path / "ai_gateway_launcher"
    (root / "dist").mkdir(parents=True)
    return root


@pytest.fixture
def delegate_dir(install_root: Path) -> Path:
    return install_root / "dist"


@pytest.fixture
def launcher_config(install_root: Path) -> LauncherConfig:
    """Default configuration rooted at the fake install directory."""
    return LauncherConfig(install_root=install_root)


@pytest.fixture
def make_script(delegate_dir: Path) -> Callable[..., Path]:
    """Factory writing a /bin/sh script into the delegate directory.

    Example:
        >>> path = make_script("ai-gateway-linux", 'exit 3')
    """

    def _make(name: str, body: str, executable: bool = True) -> Path:
        path = delegate_dir / name
        path.write_text(f"#!/bin/sh\n{body}\n")
        mode = stat.S_IRUSR | stat.S_IWUSR
        if executable:
            mode |= stat.S_IXUSR
        path.chmod(mode)
        return path

    return _make


@pytest.fixture
def make_binary(delegate_dir: Path) -> Callable[..., Path]:
    """Factory writing a fake binary with a chosen header."""

    def _make(name: str, header: bytes = ELF_HEADER, executable: bool = True, size: int = 0) -> Path:
        path = delegate_dir / name
        payload = header + b"\x00" * max(0, size - len(header))
        path.write_bytes(payload)
        mode = stat.S_IRUSR | stat.S_IWUSR
        if executable:
            mode |= stat.S_IXUSR
        path.chmod(mode)
        return path

    return _make


def make_environment(
    version: str = "3.12.1",
    os_id: OSIdentifier = OSIdentifier.LINUX,
    arch: Architecture = Architecture.X64,
    raw_os: str = "",
    raw_arch: str = "",
) -> RuntimeEnvironment:
    return RuntimeEnvironment(
        runtime_version=semver.Version.parse(version),
        os=os_id,
        arch=arch,
        raw_os=raw_os,
        raw_arch=raw_arch,
    )


@pytest.fixture
def environment_factory() -> Callable[..., RuntimeEnvironment]:
    """Build a RuntimeEnvironment from keyword overrides."""
    return make_environment


@pytest.fixture
def linux_x64() -> RuntimeEnvironment:
    return make_environment(os_id=OSIdentifier.LINUX, arch=Architecture.X64, raw_os="linux", raw_arch="x86_64")


@pytest.fixture
def macos_arm64() -> RuntimeEnvironment:
    return make_environment(os_id=OSIdentifier.MACOS, arch=Architecture.ARM64, raw_os="darwin", raw_arch="arm64")


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo configure_logging() so caplog sees records in every test."""
    yield
    logger = logging.getLogger("ai_gateway_launcher")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
