"""Tools that rewrite stack history: amend, restack, sync, undo."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from boron.tools._helpers import RawBool, RawStr, RawStrList, run_tool


async def modify_commit(
    ctx: Context,
    files: RawStrList = None,
    message: RawStr = None,
    auto_restack: RawBool = True,
) -> dict[str, object]:
    """Amend the current commit with new file changes and/or a new message.

    Automatically restacks descendant branches unless disabled. At least
    one of files or message is required.

    Args:
        files: File paths to stage and amend into the current commit.
        message: New commit message (replaces the existing one).
        auto_restack: Restack descendants after amending (default True).
    """
    return await run_tool(
        "modify_commit",
        {"files": files, "message": message, "auto_restack": auto_restack},
        ctx,
    )


async def restack(ctx: Context) -> dict[str, object]:
    """Rebase all descendant branches after amending a mid-stack commit."""
    return await run_tool("restack", {}, ctx)


async def sync_stack(ctx: Context) -> dict[str, object]:
    """Fetch from the remote and rebase all local stacks onto the updated base.

    Equivalent to git fetch + git sync --pull.
    """
    return await run_tool("sync_stack", {}, ctx)


async def undo_last(ctx: Context) -> dict[str, object]:
    """Undo the most recent git-branchless operation (commit, restack, checkout, ...)."""
    return await run_tool("undo_last", {}, ctx)
