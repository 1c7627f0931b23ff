"""Tool-boundary plumbing: raw argument types, orchestrator lookup, result shaping.

Tool parameters are declared as raw JSON values (``Any`` with an advertised
schema) so FastMCP hands them through untouched and ``boron.validation``
is the only place that accepts or rejects a type.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Annotated, Any

from mcp.server.fastmcp import Context
from pydantic import WithJsonSchema

from boron.models import ToolResult
from boron.tools.dispatch import call_tool

if TYPE_CHECKING:
    from boron.server import AppContext

# ─── Raw argument types ───────────────────────────────────────

RawStr = Annotated[Any, WithJsonSchema({"type": "string"})]
RawBool = Annotated[Any, WithJsonSchema({"type": "boolean"})]
RawInt = Annotated[Any, WithJsonSchema({"type": "integer"})]
RawStrList = Annotated[Any, WithJsonSchema({"type": "array", "items": {"type": "string"}})]
RawCommits = Annotated[
    Any,
    WithJsonSchema(
        {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "branch_name": {"type": "string"},
                    "commit_message": {"type": "string"},
                    "files": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["branch_name", "commit_message", "files"],
            },
        }
    ),
]


def get_context(ctx: Context) -> AppContext:
    """Return the AppContext (cwd, runners, orchestrator) built by app_lifespan.

    Raises TypeError when the server was started without app_lifespan, so a
    wiring mistake fails loudly instead of reaching git with no orchestrator.
    """
    from boron.server import AppContext

    app = ctx.request_context.lifespan_context
    if isinstance(app, AppContext):
        return app
    raise TypeError(
        f"boron needs an AppContext as lifespan_context, got {type(app).__name__}. "
        "Start the server through boron.server.mcp."
    )


async def run_tool(name: str, arguments: dict[str, object], ctx: Context) -> dict[str, object]:
    """Dispatch a tool call and return its ToolResult as a dict. Never raises."""
    try:
        app = get_context(ctx)
        result = await call_tool(name, arguments, app.orchestrator)
    except Exception as exc:
        await ctx.error(f"Unexpected error in {name}: {exc}")
        result = ToolResult(tool=name, text=f"Internal error: {type(exc).__name__}", is_error=True)
    return asdict(result)
