"""Exception hierarchy for boron.

All exceptions inherit from BoronError (single catch point).
Messages are written for LLM consumption -- clear, actionable, no stack traces.
"""

from __future__ import annotations

from collections.abc import Sequence


class BoronError(Exception):
    """Base exception for all boron errors."""


class ValidationError(BoronError):
    """Tool arguments are malformed. Raised before any command runs."""


class PathTraversalError(ValidationError):
    """A caller-supplied file path resolves outside the working directory."""


class PreconditionError(BoronError):
    """The working directory is not ready for stack operations."""


class NotARepositoryError(PreconditionError):
    """The working directory is not a git repository."""


class NotInitializedError(PreconditionError):
    """git-branchless has not been initialized in the repository."""


class ExternalCommandError(BoronError):
    """An external command (git, gh) exited non-zero or could not be spawned."""

    def __init__(self, binary: str, args: Sequence[str], stderr: str) -> None:
        self.binary = binary
        self.command_args = list(args)
        self.stderr = stderr
        super().__init__(f"{binary} {' '.join(self.command_args)} failed:\n{stderr}")


class NoFilesFoundError(BoronError):
    """None of the files listed for a commit exist on disk."""


class UnknownToolError(BoronError):
    """The requested tool name is not one boron exposes."""


class ConfigError(BoronError):
    """The boron configuration file or environment is invalid."""
