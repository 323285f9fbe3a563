"""Delegation to the prebuilt gateway binary.

The launcher owns exactly one child process. It is spawned directly by path
(never through a shell), inherits this process's stdin, stdout and stderr
untouched, and receives any SIGINT/SIGTERM this process gets. The launcher
exits with whatever status the child exits with.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence, Union

from ..errors import (
    BinaryNotExecutableError,
    BinaryNotFoundError,
    LauncherError,
    SpawnError,
)
from ..runtime.specs import KNOWN_EXECUTABLES
from ..runtime.types import ExecutableLocation
from .reporting import print_error, print_status

logger = logging.getLogger(__name__)

RELAYED_SIGNALS = (signal.SIGINT, signal.SIGTERM)

# Seconds a still-running child gets after SIGTERM before it is killed
SHUTDOWN_GRACE = 5.0


def locate_executable(executable_name: str, base_dir: Union[str, Path]) -> ExecutableLocation:
    """Compute where a delegate is expected and probe it.

    Args:
        executable_name: One of ``KNOWN_EXECUTABLES``
        base_dir: Delegate directory inside the installed package

    Returns:
        ExecutableLocation probed fresh from disk

    Raises:
        ValueError: If the name is not a known delegate
    """
    if executable_name not in KNOWN_EXECUTABLES:
        raise ValueError(
            f"Refusing to launch unknown executable '{executable_name}'. "
            f"Known executables: {', '.join(sorted(KNOWN_EXECUTABLES))}"
        )
    return ExecutableLocation.probe(Path(base_dir) / executable_name)


def verify_executable(location: ExecutableLocation) -> None:
    """Raise unless the delegate is present and executable."""
    if not location.exists:
        raise BinaryNotFoundError(location.path)
    if not location.executable:
        raise BinaryNotExecutableError(location.path)


def exit_status(returncode: Optional[int]) -> int:
    """Map the child's return code to this process's exit status.

    A child killed by a signal has no exit code (asyncio reports it as a
    negative number); that maps to 0.
    """
    if returncode is None or returncode < 0:
        return 0
    return returncode


class DelegateProcess:
    """Async context manager owning the delegate child process.

    On entry the child is spawned and signal relays are installed. On exit,
    whichever way the block is left, the relays are removed and a child that
    is still running is terminated and reaped, so it is never orphaned.

    Example:
        >>> async with DelegateProcess(path, ["--help"]) as delegate:
        ...     code = await delegate.wait()
    """

    def __init__(
        self,
        path: Union[str, Path],
        args: Sequence[str],
        signals: Sequence[signal.Signals] = RELAYED_SIGNALS,
    ) -> None:
        self.path = Path(path)
        self.args = list(args)
        self.signals = tuple(signals)
        self._process: Optional[asyncio.subprocess.Process] = None
        self._installed: List[signal.Signals] = []
        self._pending: List[signal.Signals] = []

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process else None

    @property
    def returncode(self) -> Optional[int]:
        return self._process.returncode if self._process else None

    async def __aenter__(self) -> "DelegateProcess":
        # Relays go in before the spawn so a signal arriving mid-spawn is
        # queued and delivered instead of lost.
        self._install_relays()
        try:
            self._process = await asyncio.create_subprocess_exec(
                str(self.path),
                *self.args,
            )
        except OSError as e:
            self._remove_relays()
            raise SpawnError(self.path, e.strerror or str(e)) from e

        logger.debug("Spawned %s (pid %s) with %d args", self.path, self.pid, len(self.args))

        for sig in self._pending:
            self._relay(sig)
        self._pending.clear()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self._remove_relays()
        if self._process is not None and self._process.returncode is None:
            await self._shutdown()
        return False

    async def wait(self) -> int:
        """Block until the child exits and return its raw return code."""
        if self._process is None:
            raise RuntimeError("Delegate process has not been started")
        return await self._process.wait()

    def _install_relays(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in self.signals:
            loop.add_signal_handler(sig, self._relay, sig)
            self._installed.append(sig)

    def _remove_relays(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in self._installed:
            loop.remove_signal_handler(sig)
        self._installed.clear()

    def _relay(self, sig: signal.Signals) -> None:
        """Forward ``sig`` to the child; the parent's exit follows the child's."""
        if self._process is None:
            self._pending.append(sig)
            return
        if self._process.returncode is not None:
            return

        logger.debug("Relaying %s to pid %s", signal.Signals(sig).name, self.pid)
        try:
            self._process.send_signal(sig)
        except ProcessLookupError:
            # Child exited between the returncode check and the send
            logger.debug("Child already exited, %s not relayed", signal.Signals(sig).name)

    async def _shutdown(self) -> None:
        assert self._process is not None
        logger.debug("Terminating still-running delegate pid %s", self.pid)
        try:
            self._process.terminate()
            await asyncio.wait_for(self._process.wait(), timeout=SHUTDOWN_GRACE)
        except ProcessLookupError:
            return
        except asyncio.TimeoutError:
            logger.warning("Delegate pid %s ignored SIGTERM, killing it", self.pid)
            self._process.kill()
            await self._process.wait()


async def run_delegate(path: Union[str, Path], args: Sequence[str]) -> int:
    """Run the delegate to completion and return the mirrored exit status.

    Raises:
        SpawnError: If the operating system cannot start the binary
    """
    async with DelegateProcess(path, args) as delegate:
        returncode = await delegate.wait()

    logger.debug("Delegate exited with return code %s", returncode)
    return exit_status(returncode)


def launch(
    executable_name: str,
    forwarded_args: Sequence[str],
    base_dir: Union[str, Path],
    banner: Optional[str] = None,
) -> NoReturn:
    """Locate, verify and run a delegate, then exit with its status.

    Every failure is reported here and ends the process with status 1;
    nothing is retried.

    Args:
        executable_name: Resolved delegate name
        forwarded_args: Arguments passed through verbatim
        base_dir: Delegate directory inside the installed package
        banner: Startup line printed to stdout before the child starts
    """
    try:
        location = locate_executable(executable_name, base_dir)
        verify_executable(location)

        if banner:
            print_status(banner)
        # Anything printed so far must precede the child's output
        sys.stdout.flush()
        sys.stderr.flush()

        status = asyncio.run(run_delegate(location.path, forwarded_args))
    except LauncherError as e:
        print_error(e)
        sys.exit(e.exit_code)

    sys.exit(status)
