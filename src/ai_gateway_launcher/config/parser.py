"""Configuration file parser for the launcher."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import semver

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

from ..runtime.resolver import DEFAULT_MINIMUM_VERSION

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "launcher.toml"
LOG_LEVEL_ENV = "AI_GATEWAY_LAUNCHER_LOG_LEVEL"
DELEGATE_DIRNAME = "dist"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LauncherSection:
    """Settings for the launch itself."""

    min_runtime_version: semver.Version = DEFAULT_MINIMUM_VERSION
    show_banner: bool = True
    banner: str = "🚀 Starting AI Gateway..."


@dataclass
class LoggingSection:
    """Settings for the launcher's own diagnostics."""

    level: str = "WARNING"


@dataclass
class LauncherConfig:
    """Complete launcher configuration."""

    launcher: LauncherSection = field(default_factory=LauncherSection)
    logging: LoggingSection = field(default_factory=LoggingSection)

    # Installed package directory; the delegate directory lives under it
    install_root: Path = field(default_factory=lambda: default_install_root())

    @property
    def delegate_dir(self) -> Path:
        """Directory holding the platform binaries.

        Always derived from the installation location, never the working
        directory or user input.
        """
        return self.install_root / DELEGATE_DIRNAME


def default_install_root() -> Path:
    """Directory the ``ai_gateway_launcher`` package is installed in."""
    return Path(__file__).resolve().parent.parent


def find_config_file(install_root: Path) -> Optional[Path]:
    """Find launcher.toml in the installed package.

    Args:
        install_root: Installed package directory

    Returns:
        Path to launcher.toml if found, None otherwise
    """
    config_file = install_root / CONFIG_FILENAME
    if config_file.is_file():
        return config_file
    return None


def load_config(install_root: Optional[Path] = None) -> LauncherConfig:
    """Load configuration from launcher.toml or use defaults.

    Invalid values are ignored individually; an unreadable file yields the
    defaults. The log level environment variable wins over the file.

    Args:
        install_root: Installed package directory (defaults to this package)

    Returns:
        LauncherConfig with loaded or default configuration
    """
    root = Path(install_root) if install_root is not None else default_install_root()
    config = LauncherConfig(install_root=root)

    config_file = find_config_file(root)
    if config_file:
        try:
            with open(config_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Ignoring unreadable %s: %s", config_file, e)
            data = {}

        _apply_launcher_section(config, data.get("launcher", {}))
        _apply_logging_section(config, data.get("logging", {}))

    env_level = os.getenv(LOG_LEVEL_ENV)
    if env_level:
        _set_log_level(config, env_level, source=LOG_LEVEL_ENV)

    return config


def _apply_launcher_section(config: LauncherConfig, section: object) -> None:
    if not isinstance(section, dict):
        return

    raw_version = section.get("min_runtime_version")
    if raw_version is not None:
        # TOML floats lose precision: 3.10 would parse as 3.1
        try:
            if not isinstance(raw_version, str):
                raise ValueError(f"expected a string, got {type(raw_version).__name__}")
            config.launcher.min_runtime_version = semver.Version.parse(
                raw_version, optional_minor_and_patch=True
            )
        except ValueError:
            logger.warning(
                "Invalid min_runtime_version %r, using %s",
                raw_version,
                config.launcher.min_runtime_version,
            )

    show_banner = section.get("show_banner")
    if isinstance(show_banner, bool):
        config.launcher.show_banner = show_banner

    banner = section.get("banner")
    if isinstance(banner, str):
        config.launcher.banner = banner


def _apply_logging_section(config: LauncherConfig, section: object) -> None:
    if not isinstance(section, dict):
        return

    level = section.get("level")
    if isinstance(level, str):
        _set_log_level(config, level, source=CONFIG_FILENAME)


def _set_log_level(config: LauncherConfig, level: str, source: str) -> None:
    normalized = level.strip().upper()
    if normalized in LOG_LEVELS:
        config.logging.level = normalized
    else:
        logger.warning("Unknown log level %r from %s", level, source)
