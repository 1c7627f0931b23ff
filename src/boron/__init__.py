"""boron: an MCP server that builds, submits, and lands stacks of git-branchless branches."""

from __future__ import annotations

from importlib import metadata

DIST_NAME = "boron-mcp"
_UNINSTALLED_VERSION = "0.0.0+local"


def _installed_version() -> str:
    # Source checkouts run without dist metadata.
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return _UNINSTALLED_VERSION


__version__ = _installed_version()


def main() -> None:
    """Serve the stack tools over stdio for the repository in the current directory."""
    from boron.server import mcp

    mcp.run(transport="stdio")
