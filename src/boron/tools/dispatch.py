"""Map tool names and raw argument payloads to StackOrchestrator operations."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from boron.errors import BoronError, UnknownToolError
from boron.models import ExecutionReport, ToolResult
from boron.orchestrator.engine import StackOrchestrator
from boron.validation import (
    parse_create_stack_args,
    parse_merge_stack_args,
    parse_modify_commit_args,
    parse_navigate_stack_args,
    parse_submit_stack_args,
)

logger = logging.getLogger(__name__)

Handler = Callable[[StackOrchestrator, object], Awaitable[ExecutionReport]]


async def _create_stack(orch: StackOrchestrator, raw: object) -> ExecutionReport:
    return await orch.create_stack(parse_create_stack_args(raw))


async def _submit_stack(orch: StackOrchestrator, raw: object) -> ExecutionReport:
    return await orch.submit_stack(parse_submit_stack_args(raw))


async def _restack(orch: StackOrchestrator, raw: object) -> ExecutionReport:
    return await orch.restack()


async def _view_stack(orch: StackOrchestrator, raw: object) -> ExecutionReport:
    return await orch.view_stack()


async def _sync_stack(orch: StackOrchestrator, raw: object) -> ExecutionReport:
    return await orch.sync_stack()


async def _navigate_stack(orch: StackOrchestrator, raw: object) -> ExecutionReport:
    return await orch.navigate_stack(parse_navigate_stack_args(raw))


async def _modify_commit(orch: StackOrchestrator, raw: object) -> ExecutionReport:
    return await orch.modify_commit(parse_modify_commit_args(raw))


async def _merge_stack(orch: StackOrchestrator, raw: object) -> ExecutionReport:
    return await orch.merge_stack(parse_merge_stack_args(raw))


async def _undo_last(orch: StackOrchestrator, raw: object) -> ExecutionReport:
    return await orch.undo_last()


HANDLERS: dict[str, Handler] = {
    "create_stack": _create_stack,
    "submit_stack": _submit_stack,
    "restack": _restack,
    "view_stack": _view_stack,
    "sync_stack": _sync_stack,
    "navigate_stack": _navigate_stack,
    "modify_commit": _modify_commit,
    "merge_stack": _merge_stack,
    "undo_last": _undo_last,
}


async def call_tool(
    name: str,
    arguments: object,
    orchestrator: StackOrchestrator,
) -> ToolResult:
    """Run one tool call and convert any BoronError into an error-flagged result.

    The error flag is set only when the whole operation failed. Per-branch
    failures inside submit_stack or merge_stack are lines in a normal report.
    """
    try:
        handler = HANDLERS.get(name)
        if handler is None:
            raise UnknownToolError(f"Unknown tool: {name}")
        report = await handler(orchestrator, arguments)
    except BoronError as exc:
        logger.warning("Tool %s failed: %s", name, exc)
        return ToolResult(tool=name, text=f"Error: {exc}", is_error=True)

    return ToolResult(tool=name, text=report.render())
