"""Tests for domain models (models.py)."""

from __future__ import annotations

import dataclasses

import pytest

from boron.models import (
    CommitSpec,
    ExecutionReport,
    LineKind,
    MergeMethod,
    Settings,
    ToolResult,
)


class TestExecutionReport:
    def test_preserves_order_and_kinds(self):
        report = ExecutionReport()
        report.add("Submitting 2 branches")
        report.success("Submitted b1")
        report.failure("Failed on b2: rejected")
        report.warning("Warning: files not found: x")

        assert [line.kind for line in report.lines] == [
            LineKind.INFO,
            LineKind.SUCCESS,
            LineKind.FAILURE,
            LineKind.WARNING,
        ]
        assert report.successes == ["Submitted b1"]
        assert report.failures == ["Failed on b2: rejected"]
        assert report.warnings == ["Warning: files not found: x"]
        assert len(report) == 4

    def test_render_joins_lines(self):
        report = ExecutionReport()
        report.add("Stack rebased.")
        report.blank()
        report.add("done")

        assert report.render() == "Stack rebased.\n\ndone"

    def test_empty_report_renders_empty(self):
        assert ExecutionReport().render() == ""

    def test_lines_is_a_snapshot(self):
        report = ExecutionReport()
        report.add("one")
        snapshot = report.lines
        report.add("two")

        assert len(snapshot) == 1


class TestValueModels:
    def test_commit_spec_is_frozen(self):
        spec = CommitSpec("a", "m", ["x"])

        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.branch_name = "b"  # type: ignore[misc]

    def test_tool_result_as_dict(self):
        result = ToolResult(tool="restack", text="ok")

        assert dataclasses.asdict(result) == {"tool": "restack", "text": "ok", "is_error": False}

    def test_settings_defaults(self):
        settings = Settings()

        assert settings.base_branch == "main"
        assert settings.remote == "origin"
        assert settings.command_timeout is None

    def test_merge_method_is_str(self):
        assert f"--{MergeMethod.SQUASH}" == "--squash"
