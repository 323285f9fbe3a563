"""Delegating launcher for the prebuilt gateway binary."""

from .process import (
    DelegateProcess,
    exit_status,
    launch,
    locate_executable,
    run_delegate,
    verify_executable,
)
from .reporting import print_error, print_guidance, print_status

__all__ = [
    "DelegateProcess",
    "exit_status",
    "launch",
    "locate_executable",
    "run_delegate",
    "verify_executable",
    "print_error",
    "print_guidance",
    "print_status",
]
