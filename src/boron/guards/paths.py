"""Reject caller-supplied file paths that escape the working directory."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from boron.errors import PathTraversalError


def validate_paths(paths: Iterable[str], cwd: Path) -> None:
    """Raise PathTraversalError if any path resolves outside cwd.

    Paths are resolved against the absolute working directory, so absolute
    paths, ``..`` segments and escaping symlinks are all caught.
    """
    root = cwd.resolve()
    for raw in paths:
        resolved = (root / raw).resolve()
        if not resolved.is_relative_to(root):
            raise PathTraversalError(f"Path traversal blocked: {raw}")


def existing_files(paths: Iterable[str], cwd: Path) -> tuple[list[str], list[str]]:
    """Split paths into (existing, missing) relative to cwd, preserving order."""
    existing: list[str] = []
    missing: list[str] = []
    for raw in paths:
        (existing if (cwd / raw).exists() else missing).append(raw)
    return existing, missing
