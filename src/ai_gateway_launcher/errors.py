"""Fatal launcher errors.

Each error carries the exit status the process should terminate with and the
lines shown to the user. They are raised where the problem is detected and
reported once, by the CLI entry point.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional


class LauncherError(Exception):
    """Base class for failures that end the invocation with a non-zero status."""

    exit_code = 1

    def __init__(self, message: str, hints: Optional[List[str]] = None):
        self.message = message
        self.hints = hints or []
        super().__init__(self._format_error_message())

    def _format_error_message(self) -> str:
        lines = [self.message]
        lines.extend(self.hints)
        return "\n".join(lines)


class RuntimeVersionError(LauncherError):
    """Raised when the interpreter is older than the launcher supports."""

    def __init__(self, current: str, required: str):
        self.current = current
        self.required = required
        super().__init__(
            f"Python {required} or higher is required.",
            [f"Current version: {current}"],
        )


class BinaryNotFoundError(LauncherError):
    """Raised when the resolved delegate is not where the package put it."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f"Binary not found at {path}",
            [
                "The package appears to be incomplete. Reinstall it, or place "
                "the compiled gateway binary in the dist/ directory."
            ],
        )


class BinaryNotExecutableError(LauncherError):
    """Raised when the delegate exists but lacks the executable bit."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f"Binary at {path} is not executable.",
            [f"Run: chmod +x {path}"],
        )


class SpawnError(LauncherError):
    """Raised when the operating system refuses to start the delegate."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error executing binary: {reason}")
