"""Port: external command execution."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class CommandRunnerPort(Protocol):
    """Port for running one external binary (git, gh) in the working directory."""

    binary: str

    async def run(self, args: Sequence[str]) -> str:
        """Run the binary with args and return its stripped stdout.

        Raises ExternalCommandError on non-zero exit or spawn failure.
        """
        ...
