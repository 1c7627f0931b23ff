"""Render the body of a stacked pull request."""

from __future__ import annotations

_FOOTER = "Generated with [Boron](https://github.com/ashikshafi08/Boron)"


def build_pr_body(branch: str, stack: list[str], linear_issue: str | None = None) -> str:
    """List the whole stack, marking the PR's own branch with '>'."""
    lines = ["Part of stacked PR chain.", "", "**Stack:**"]
    for idx, name in enumerate(stack, start=1):
        indicator = ">" if name == branch else " "
        lines.append(f"{indicator} {idx}. `{name}`")

    if linear_issue:
        lines.extend(["", f"**Linear Issue:** {linear_issue}"])

    lines.extend(["", _FOOTER])
    return "\n".join(lines)
