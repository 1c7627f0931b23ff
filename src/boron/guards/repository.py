"""Check that the working directory is a git-branchless repository."""

from __future__ import annotations

import logging
from pathlib import Path

from boron.errors import NotARepositoryError, NotInitializedError

logger = logging.getLogger(__name__)

_GITDIR_PREFIX = "gitdir:"


def ensure_ready(cwd: Path) -> None:
    """Raise a PreconditionError unless cwd is a repo with git-branchless initialized."""
    git_dir = resolve_git_dir(cwd)
    if git_dir is None:
        raise NotARepositoryError(f"Not in a git repository: {cwd}")
    if not (_common_dir(git_dir) / "branchless").is_dir():
        raise NotInitializedError("git-branchless not initialized. Run: git branchless init")


def resolve_git_dir(cwd: Path) -> Path | None:
    """Return the git directory for cwd, following a ``.git`` file pointer if present."""
    dot_git = cwd / ".git"
    if dot_git.is_dir():
        return dot_git
    if not dot_git.is_file():
        return None

    # Worktrees and submodules keep a "gitdir: <path>" pointer file.
    try:
        content = dot_git.read_text(encoding="utf-8").strip()
    except OSError as exc:
        logger.warning("Could not read %s: %s", dot_git, exc)
        return None
    if not content.startswith(_GITDIR_PREFIX):
        return None
    target = Path(content[len(_GITDIR_PREFIX) :].strip())
    if not target.is_absolute():
        target = cwd / target
    return target if target.is_dir() else None


def _common_dir(git_dir: Path) -> Path:
    """Linked worktrees share branchless state through the main repo's git dir."""
    pointer = git_dir / "commondir"
    if not pointer.is_file():
        return git_dir
    common = Path(pointer.read_text(encoding="utf-8").strip())
    return common if common.is_absolute() else (git_dir / common).resolve()
