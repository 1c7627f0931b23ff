"""Shared test fixtures: a recording command runner and a fake repository."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from boron.errors import ExternalCommandError
from boron.orchestrator.engine import StackOrchestrator

Handler = Callable[[list[str]], str]


class FakeRunner:
    """CommandRunnerPort double that records every call.

    Rules match on an argument prefix; the most recently added matching rule
    wins. Unmatched calls succeed with empty output.
    """

    def __init__(self, binary: str) -> None:
        self.binary = binary
        self.calls: list[list[str]] = []
        self._rules: list[tuple[tuple[str, ...], Handler]] = []

    def on(
        self,
        *prefix: str,
        output: str = "",
        fail: str | None = None,
        handler: Handler | None = None,
    ) -> None:
        if handler is None:
            if fail is not None:
                handler = self._failing(fail)
            else:
                handler = lambda _args, _out=output: _out  # noqa: E731
        self._rules.insert(0, (prefix, handler))

    def _failing(self, stderr: str) -> Handler:
        def handler(args: list[str]) -> str:
            raise ExternalCommandError(self.binary, args, stderr)

        return handler

    async def run(self, args: Sequence[str]) -> str:
        call = list(args)
        self.calls.append(call)
        for prefix, handler in self._rules:
            if tuple(call[: len(prefix)]) == prefix:
                return handler(call)
        return ""

    def calls_to(self, *prefix: str) -> list[list[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A working directory that passes the git-branchless precondition check."""
    (tmp_path / ".git" / "branchless").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def git() -> FakeRunner:
    return FakeRunner("git")


@pytest.fixture
def gh() -> FakeRunner:
    return FakeRunner("gh")


@pytest.fixture
def orchestrator(repo: Path, git: FakeRunner, gh: FakeRunner) -> StackOrchestrator:
    return StackOrchestrator(repo, git, gh)
