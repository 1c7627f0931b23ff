"""Tools that build, publish, and land a whole stack."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from boron.tools._helpers import RawBool, RawCommits, RawStr, run_tool


async def create_stack(
    commits: RawCommits,
    ctx: Context,
    base_branch: RawStr = None,
    linear_issue: RawStr = None,
) -> dict[str, object]:
    """Create a stack of git branches from working-tree changes.

    Each entry becomes a branch with one atomic commit. Branches chain
    sequentially: each builds on the previous one. Requires git-branchless
    to be initialized. Stops at the first commit that fails.

    Args:
        commits: Commits in stack order (bottom to top). Each item has
            branch_name (e.g. "feat/tm-161-01-migrations"), commit_message
            (e.g. "feat: add authorization tables") and files (paths to
            include in this commit).
        base_branch: Branch to stack on. Defaults to the configured base
            branch ("main").
        linear_issue: Linear issue ID to reference in commit messages,
            e.g. "TM-161".

    Returns:
        tool, text (the step-by-step report) and is_error.
    """
    return await run_tool(
        "create_stack",
        {"commits": commits, "base_branch": base_branch, "linear_issue": linear_issue},
        ctx,
    )


async def submit_stack(
    ctx: Context,
    draft: RawBool = False,
    linear_issue: RawStr = None,
) -> dict[str, object]:
    """Push all stack branches and create chained GitHub PRs.

    Each PR targets the previous branch as its base, forming a reviewable
    dependency chain. Existing PRs are reused and updated by the push, so
    running this again never opens duplicates. A branch that fails is
    reported and the remaining branches are still submitted.

    Args:
        draft: Create new PRs as drafts.
        linear_issue: Linear issue ID to link in PR bodies.

    Returns:
        tool, text (one line per branch with its PR URL or failure) and is_error.
    """
    return await run_tool("submit_stack", {"draft": draft, "linear_issue": linear_issue}, ctx)


async def merge_stack(
    ctx: Context,
    method: RawStr = "squash",
    delete_branches: RawBool = True,
) -> dict[str, object]:
    """Merge all PRs in the current stack from bottom to top.

    Stops at the first PR that fails to merge and leaves the rest open.

    Args:
        method: "squash" (default), "merge" or "rebase".
        delete_branches: Delete local branches afterwards (default True).

    Returns:
        tool, text and is_error.
    """
    return await run_tool(
        "merge_stack", {"method": method, "delete_branches": delete_branches}, ctx
    )
