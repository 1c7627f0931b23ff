"""Async subprocess execution for git and gh."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from collections.abc import Sequence
from pathlib import Path

from boron.errors import ExternalCommandError

logger = logging.getLogger(__name__)


async def run_command(
    cmd: Sequence[str],
    cwd: Path | str | None = None,
    timeout: float | None = None,
) -> tuple[int, str, str]:
    """Run a subprocess, return (returncode, stdout, stderr).

    Uses asyncio.create_subprocess_exec -- never shell=True.
    No timeout unless one is given; a timed-out child is killed as a group
    (start_new_session=True) and reported with returncode -1.
    Raises OSError if the binary cannot be spawned.
    """
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=cwd,
        start_new_session=True,
    )
    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except TimeoutError:
        try:
            os.killpg(os.getpgid(proc.pid), signal.SIGKILL)
        except (ProcessLookupError, OSError):
            proc.kill()
        await proc.wait()
        return (-1, "", f"Command timed out after {timeout}s")

    return (
        proc.returncode or 0,
        stdout_bytes.decode(errors="replace"),
        stderr_bytes.decode(errors="replace"),
    )


class CommandRunner:
    """Adapter for CommandRunnerPort -- one binary bound to one working directory."""

    def __init__(self, binary: str, cwd: Path, timeout: float | None = None) -> None:
        self.binary = binary
        self.cwd = cwd
        self.timeout = timeout

    async def run(self, args: Sequence[str]) -> str:
        """Run the binary and return stripped stdout, raising on failure."""
        cmd = [self.binary, *args]
        logger.debug("Running %s in %s", cmd, self.cwd)
        try:
            returncode, stdout, stderr = await run_command(cmd, cwd=self.cwd, timeout=self.timeout)
        except OSError as exc:
            raise ExternalCommandError(self.binary, args, str(exc)) from exc

        if returncode != 0:
            detail = stderr.strip() or stdout.strip() or f"exit status {returncode}"
            raise ExternalCommandError(self.binary, args, detail)
        return stdout.strip()

    def __repr__(self) -> str:
        return f"CommandRunner(binary={self.binary!r}, cwd={str(self.cwd)!r})"
