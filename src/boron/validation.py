"""Structural validation of raw tool arguments into typed argument values.

Every parser rejects with ValidationError before any command runs and never
coerces: a string is not a bool, a bool is not an int.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from boron.errors import ValidationError
from boron.models import (
    CommitSpec,
    CreateStackArgs,
    Direction,
    MergeMethod,
    MergeStackArgs,
    ModifyCommitArgs,
    NavigateStackArgs,
    SubmitStackArgs,
)

BRANCH_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._/-]*$")
MAX_COMMITS = 50
MAX_DISTANCE = 100


# ─── Field checks ─────────────────────────────────────────────


def _require_mapping(value: object, label: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise ValidationError(f"{label}: expected an object")
    return value


def _string(value: object, label: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    if "\0" in value:
        raise ValidationError(f"{label} contains null bytes")
    return value


def _optional_string(value: object, label: str) -> str | None:
    if value is None:
        return None
    return _string(value, label)


def _bool(value: object, label: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{label} must be a boolean")
    return value


def _string_list(value: object, label: str) -> list[str]:
    if not isinstance(value, list):
        raise ValidationError(f"{label} must be an array")
    return [_string(item, f"{label}[{i}]") for i, item in enumerate(value)]


def validate_branch_name(value: object, label: str) -> str:
    """Return value if it is a safe branch name, else raise ValidationError."""
    name = _string(value, label)
    if not BRANCH_NAME_RE.match(name):
        raise ValidationError(
            f"{label} contains invalid characters. Must start with alphanumeric and "
            "contain only alphanumeric, '.', '_', '/', '-'."
        )
    return name


# ─── Per-tool parsers ─────────────────────────────────────────


def parse_create_stack_args(raw: object) -> CreateStackArgs:
    obj = _require_mapping(raw, "create_stack")

    commits_raw = obj.get("commits")
    if not isinstance(commits_raw, list) or not commits_raw:
        raise ValidationError("create_stack: 'commits' must be a non-empty array")
    if len(commits_raw) > MAX_COMMITS:
        raise ValidationError(f"create_stack: maximum {MAX_COMMITS} commits per stack")

    commits: list[CommitSpec] = []
    for i, entry in enumerate(commits_raw):
        commit = _require_mapping(entry, f"commits[{i}]")
        commits.append(
            CommitSpec(
                branch_name=validate_branch_name(
                    commit.get("branch_name"), f"commits[{i}].branch_name"
                ),
                commit_message=_string(commit.get("commit_message"), f"commits[{i}].commit_message"),
                files=_string_list(commit.get("files"), f"commits[{i}].files"),
            )
        )

    base_branch = obj.get("base_branch")
    if base_branch is not None:
        base_branch = validate_branch_name(base_branch, "create_stack: base_branch")

    return CreateStackArgs(
        commits=commits,
        base_branch=base_branch,
        linear_issue=_optional_string(obj.get("linear_issue"), "create_stack: linear_issue"),
    )


def parse_submit_stack_args(raw: object) -> SubmitStackArgs:
    obj = _require_mapping(raw if raw is not None else {}, "submit_stack")
    return SubmitStackArgs(
        draft=_bool(obj.get("draft"), "submit_stack: 'draft'", default=False),
        linear_issue=_optional_string(obj.get("linear_issue"), "submit_stack: 'linear_issue'"),
    )


def parse_navigate_stack_args(raw: object) -> NavigateStackArgs:
    obj = _require_mapping(raw, "navigate_stack")

    direction = obj.get("direction")
    if direction not in (Direction.NEXT.value, Direction.PREV.value):
        raise ValidationError("navigate_stack: 'direction' must be 'next' or 'prev'")

    # Absent means one step; an explicit null is rejected with other non-integers.
    distance = obj["distance"] if "distance" in obj else 1
    if (
        isinstance(distance, bool)
        or not isinstance(distance, int)
        or not 1 <= distance <= MAX_DISTANCE
    ):
        raise ValidationError(
            f"navigate_stack: 'distance' must be an integer between 1 and {MAX_DISTANCE}"
        )

    return NavigateStackArgs(direction=Direction(direction), distance=distance)


def parse_modify_commit_args(raw: object) -> ModifyCommitArgs:
    obj = _require_mapping(raw, "modify_commit")

    files_raw = obj.get("files")
    files = _string_list(files_raw, "modify_commit: files") if files_raw is not None else None
    message = _optional_string(obj.get("message"), "modify_commit: 'message'")
    auto_restack = _bool(obj.get("auto_restack"), "modify_commit: 'auto_restack'", default=True)

    if not files and not message:
        raise ValidationError(
            "modify_commit: at least one of 'files' or 'message' must be provided"
        )

    return ModifyCommitArgs(files=files or None, message=message or None, auto_restack=auto_restack)


def parse_merge_stack_args(raw: object) -> MergeStackArgs:
    obj = _require_mapping(raw if raw is not None else {}, "merge_stack")

    method = obj.get("method")
    if method is None:
        method = MergeMethod.SQUASH.value
    valid = [m.value for m in MergeMethod]
    if not isinstance(method, str) or method not in valid:
        raise ValidationError(f"merge_stack: 'method' must be one of: {', '.join(valid)}")

    return MergeStackArgs(
        method=MergeMethod(method),
        delete_branches=_bool(
            obj.get("delete_branches"), "merge_stack: 'delete_branches'", default=True
        ),
    )
