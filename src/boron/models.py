"""Domain models for boron.

Argument values and results are frozen dataclasses. ExecutionReport is the one
mutable type: an append-only buffer owned by a single tool invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

# ─── Enumerations ─────────────────────────────────────────────


class Direction(StrEnum):
    NEXT = "next"
    PREV = "prev"


class MergeMethod(StrEnum):
    SQUASH = "squash"
    MERGE = "merge"
    REBASE = "rebase"


class LineKind(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    FAILURE = "failure"


# ─── Tool Argument Models ─────────────────────────────────────


@dataclass(frozen=True, slots=True)
class CommitSpec:
    """One planned commit in a stack: a branch, its message, and its files."""

    branch_name: str
    commit_message: str
    files: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CreateStackArgs:
    commits: list[CommitSpec]
    base_branch: str | None = None
    linear_issue: str | None = None


@dataclass(frozen=True, slots=True)
class SubmitStackArgs:
    draft: bool = False
    linear_issue: str | None = None


@dataclass(frozen=True, slots=True)
class NavigateStackArgs:
    direction: Direction
    distance: int = 1


@dataclass(frozen=True, slots=True)
class ModifyCommitArgs:
    files: list[str] | None = None
    message: str | None = None
    auto_restack: bool = True


@dataclass(frozen=True, slots=True)
class MergeStackArgs:
    method: MergeMethod = MergeMethod.SQUASH
    delete_branches: bool = True


# ─── Execution Report ─────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ReportLine:
    text: str
    kind: LineKind = LineKind.INFO


class ExecutionReport:
    """Ordered, append-only lines produced by one stack operation.

    Lines keep their kind so partial failures stay visible to callers after
    the report is rendered to text.
    """

    __slots__ = ("_lines",)

    def __init__(self) -> None:
        self._lines: list[ReportLine] = []

    def add(self, text: str, kind: LineKind = LineKind.INFO) -> None:
        self._lines.append(ReportLine(text=text, kind=kind))

    def success(self, text: str) -> None:
        self.add(text, LineKind.SUCCESS)

    def warning(self, text: str) -> None:
        self.add(text, LineKind.WARNING)

    def failure(self, text: str) -> None:
        self.add(text, LineKind.FAILURE)

    def blank(self) -> None:
        self.add("")

    @property
    def lines(self) -> tuple[ReportLine, ...]:
        return tuple(self._lines)

    @property
    def failures(self) -> list[str]:
        return [line.text for line in self._lines if line.kind == LineKind.FAILURE]

    @property
    def successes(self) -> list[str]:
        return [line.text for line in self._lines if line.kind == LineKind.SUCCESS]

    @property
    def warnings(self) -> list[str]:
        return [line.text for line in self._lines if line.kind == LineKind.WARNING]

    def render(self) -> str:
        """Join all lines into the text returned to the caller."""
        return "\n".join(line.text for line in self._lines)

    def __len__(self) -> int:
        return len(self._lines)


# ─── Tool Return Models ───────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Uniform tool output: a text report plus an error flag."""

    tool: str
    text: str
    is_error: bool = False


# ─── Settings ─────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide configuration, resolved once at startup."""

    base_branch: str = "main"
    remote: str = "origin"
    git_binary: str = "git"
    gh_binary: str = "gh"
    command_timeout: float | None = None
