"""Command-line entry point.

The launcher has no flags of its own: every argument after the program name
is handed to the gateway binary untouched.
"""

from __future__ import annotations

import logging
import sys
from typing import List, NoReturn, Optional

from .config import load_config
from .errors import RuntimeVersionError
from .launcher import launch, print_error, print_guidance
from .runtime import (
    IncompatibleRuntime,
    PlatformResolver,
    Resolved,
    RuntimeEnvironment,
    Unsupported,
)
from .utils import configure_logging

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """Resolve the prebuilt gateway for this host and run it.

    Exit status:
        0: the gateway exited 0, or no prebuilt binary exists (guidance shown)
        1: interpreter too old, binary missing or not executable, spawn failure
        otherwise: the gateway's own exit status
    """
    forwarded_args = list(sys.argv[1:] if argv is None else argv)

    config = load_config()
    configure_logging(config.logging.level)

    environment = RuntimeEnvironment.capture()
    logger.debug("Captured environment %s", environment)

    selection = PlatformResolver(config.launcher.min_runtime_version).resolve(environment)

    if isinstance(selection, IncompatibleRuntime):
        print_error(RuntimeVersionError(selection.current, selection.required))
        sys.exit(1)

    if isinstance(selection, Unsupported):
        print_guidance(selection.reason, selection.guidance)
        sys.exit(0)

    if isinstance(selection, Resolved):
        launch(
            selection.executable_name,
            forwarded_args,
            base_dir=config.delegate_dir,
            banner=config.launcher.banner if config.launcher.show_banner else None,
        )


if __name__ == "__main__":
    main()
