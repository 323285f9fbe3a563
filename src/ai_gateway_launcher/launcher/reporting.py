"""User-facing output.

Fatal problems go to stderr prefixed with ``ERROR_PREFIX``; installation
guidance goes to stderr prefixed with ``GUIDANCE_PREFIX`` so scripts can tell
a broken tool from a platform that needs a manual install. Status lines on
the success path go to stdout.
"""

from __future__ import annotations

import sys
from typing import Iterable, Optional, TextIO

from ..errors import LauncherError

ERROR_PREFIX = "❌ Error:"
GUIDANCE_PREFIX = "⚠️ "


def print_error(error: LauncherError, stream: Optional[TextIO] = None) -> None:
    out = stream or sys.stderr
    print(f"{ERROR_PREFIX} {error.message}", file=out)
    for hint in error.hints:
        print(hint, file=out)
    out.flush()


def print_guidance(reason: str, lines: Iterable[str], stream: Optional[TextIO] = None) -> None:
    out = stream or sys.stderr
    print(f"{GUIDANCE_PREFIX} No prebuilt binary available: {reason}", file=out)
    for line in lines:
        print(line, file=out)
    out.flush()


def print_status(message: str, stream: Optional[TextIO] = None) -> None:
    out = stream or sys.stdout
    print(message, file=out, flush=True)
