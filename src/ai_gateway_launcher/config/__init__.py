"""Configuration management for the launcher."""

from .parser import (
    LauncherConfig,
    default_install_root,
    find_config_file,
    load_config,
)

__all__ = [
    "LauncherConfig",
    "default_install_root",
    "find_config_file",
    "load_config",
]
