"""MCP server for stacked branches and chained pull requests."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from boron.config.loader import load_settings
from boron.models import Settings
from boron.orchestrator.engine import StackOrchestrator
from boron.runner.base import CommandRunnerPort
from boron.runner.subprocess import CommandRunner
from boron.tools.history import modify_commit, restack, sync_stack, undo_last
from boron.tools.navigation import navigate_stack, view_stack
from boron.tools.stack import create_stack, merge_stack, submit_stack

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations.

    Built once per process. The working directory is the process's cwd at
    startup; every relative path a tool receives is resolved against it.
    """

    cwd: Path
    settings: Settings
    git: CommandRunnerPort
    gh: CommandRunnerPort
    orchestrator: StackOrchestrator


def build_app_context(cwd: Path) -> AppContext:
    """Wire settings, command runners, and the orchestrator for cwd."""
    settings = load_settings(cwd)
    git = CommandRunner(settings.git_binary, cwd, timeout=settings.command_timeout)
    gh = CommandRunner(settings.gh_binary, cwd, timeout=settings.command_timeout)
    return AppContext(
        cwd=cwd,
        settings=settings,
        git=git,
        gh=gh,
        orchestrator=StackOrchestrator(cwd, git, gh, settings),
    )


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Composition root: one AppContext for the lifetime of the server."""
    app = build_app_context(Path.cwd())
    logger.info(
        "boron serving %s (base=%s, remote=%s)",
        app.cwd,
        app.settings.base_branch,
        app.settings.remote,
    )
    yield app


mcp = FastMCP(
    "boron",
    instructions=(
        "boron manages stacks of dependent git branches and their chained GitHub "
        "pull requests, using git-branchless and the gh CLI in the current repository.\n\n"
        "### Typical workflow\n"
        "1. **create_stack** — split working-tree changes into one branch and commit "
        "per logical step, bottom to top.\n"
        "2. **submit_stack** — push every branch and open PRs, each based on the "
        "previous branch. Safe to re-run: existing PRs are reused.\n"
        "3. **modify_commit** / **navigate_stack** / **restack** — address review "
        "feedback mid-stack; descendants are rebased automatically.\n"
        "4. **sync_stack** — pull the latest base branch and rebase all stacks.\n"
        "5. **merge_stack** — land the PRs bottom to top.\n\n"
        "Use **view_stack** to inspect the graph at any time and **undo_last** to "
        "revert the most recent git-branchless operation.\n\n"
        "### Reading results\n"
        "Every tool returns `text` and `is_error`. submit_stack keeps going when one "
        "branch fails and merge_stack stops at the first failure; in both cases the "
        "failing branch appears as a 'Failed ...' line while is_error stays false. "
        "Always read the lines, not just the flag."
    ),
    lifespan=app_lifespan,
    log_level=os.environ.get("BORON_LOG_LEVEL", "INFO").upper(),
)

# ─── Read-only tools ──────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(view_stack)

# ─── Destructive tools ────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(create_stack)
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(submit_stack)
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(restack)
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(sync_stack)
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(navigate_stack)
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(modify_commit)
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(merge_stack)
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(undo_last)
