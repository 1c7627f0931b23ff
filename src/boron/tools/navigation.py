"""Tools for looking at and moving through the stack."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from boron.tools._helpers import RawInt, RawStr, run_tool


async def view_stack(ctx: Context) -> dict[str, object]:
    """Display the current commit stack as a graph using git-branchless smartlog.

    Shows branches, commit messages, and parent-child relationships. Falls
    back to a plain git log graph when smartlog is unavailable.
    """
    return await run_tool("view_stack", {}, ctx)


async def navigate_stack(
    direction: RawStr,
    ctx: Context,
    distance: RawInt = 1,
) -> dict[str, object]:
    """Move between commits in the stack with git-branchless next/prev.

    Args:
        direction: "next" moves toward the tip, "prev" toward the base.
        distance: Number of commits to move (1-100, default 1).

    Returns:
        tool, text (current branch and commit after the move) and is_error.
    """
    return await run_tool("navigate_stack", {"direction": direction, "distance": distance}, ctx)
