"""Two-step command fallback: try the primary command, then the documented secondary."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from boron.errors import ExternalCommandError
from boron.runner.base import CommandRunnerPort

logger = logging.getLogger(__name__)


async def run_with_fallback(
    runner: CommandRunnerPort,
    primary: Sequence[str],
    secondary: Sequence[str],
) -> tuple[str, bool]:
    """Run primary; on ExternalCommandError run secondary.

    Returns (output, used_secondary). If the secondary also fails its error
    propagates.
    """
    try:
        return await runner.run(primary), False
    except ExternalCommandError as exc:
        logger.warning(
            "%s %s failed, falling back to %s: %s",
            runner.binary,
            " ".join(primary),
            " ".join(secondary),
            exc.stderr,
        )
    return await runner.run(secondary), True
