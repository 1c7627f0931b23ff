"""Tests for server.py -- composition root, lifespan, and tool registration."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from boron.config.loader import CONFIG_FILENAME
from boron.errors import ConfigError
from boron.models import Settings
from boron.orchestrator.engine import StackOrchestrator
from boron.runner.subprocess import CommandRunner
from boron.server import AppContext, app_lifespan, build_app_context, mcp


class TestBuildAppContext:
    def test_wires_runners_and_orchestrator(self, tmp_path, monkeypatch):
        for var in ("BORON_GIT", "BORON_GH", "BORON_COMMAND_TIMEOUT"):
            monkeypatch.delenv(var, raising=False)
        (tmp_path / CONFIG_FILENAME).write_text("git_binary: /usr/local/bin/git\n")

        app = build_app_context(tmp_path)

        assert isinstance(app.git, CommandRunner)
        assert app.git.binary == "/usr/local/bin/git"
        assert app.gh.binary == "gh"
        assert app.git.cwd == tmp_path
        assert isinstance(app.orchestrator, StackOrchestrator)
        assert app.orchestrator.git is app.git
        assert app.orchestrator.settings is app.settings

    def test_invalid_config_fails_fast(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("- not a mapping\n")

        with pytest.raises(ConfigError):
            build_app_context(tmp_path)


class TestAppLifespan:
    async def test_yields_context_for_process_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        async with app_lifespan(MagicMock()) as app:
            assert isinstance(app, AppContext)
            assert app.cwd.resolve() == tmp_path.resolve()


class TestRegisteredTools:
    async def test_all_tools_registered(self):
        tools = await mcp.list_tools()

        assert {t.name for t in tools} == {
            "create_stack",
            "submit_stack",
            "restack",
            "view_stack",
            "sync_stack",
            "navigate_stack",
            "modify_commit",
            "merge_stack",
            "undo_last",
        }

    async def test_read_only_annotation(self):
        tools = {t.name: t for t in await mcp.list_tools()}

        assert tools["view_stack"].annotations.readOnlyHint is True
        assert tools["merge_stack"].annotations.destructiveHint is True

    async def test_context_not_in_schema(self):
        tools = {t.name: t for t in await mcp.list_tools()}

        schema = tools["create_stack"].inputSchema
        assert "ctx" not in schema["properties"]
        assert schema["required"] == ["commits"]

    async def test_argument_schemas_keep_json_types(self):
        tools = {t.name: t for t in await mcp.list_tools()}

        assert tools["navigate_stack"].inputSchema["properties"]["distance"]["type"] == "integer"
        assert tools["submit_stack"].inputSchema["properties"]["draft"]["type"] == "boolean"
        files = tools["modify_commit"].inputSchema["properties"]["files"]
        assert files["items"] == {"type": "string"}


# ─── Argument handling through the MCP layer ─────────────────


def _payload(result) -> dict:
    content = result[0] if isinstance(result, tuple) else result
    return json.loads(content[0].text)


class TestArgumentsReachValidation:
    """Wrongly typed arguments are rejected, never coerced, before any command runs."""

    @pytest.fixture
    def app(self, repo, git, gh) -> AppContext:
        return AppContext(
            cwd=repo,
            settings=Settings(),
            git=git,
            gh=gh,
            orchestrator=StackOrchestrator(repo, git, gh),
        )

    async def _call(self, app: AppContext, name: str, arguments: dict) -> dict:
        with patch("boron.tools._helpers.get_context", return_value=app):
            return _payload(await mcp.call_tool(name, arguments))

    async def test_string_distance_is_rejected(self, app, git, gh):
        payload = await self._call(app, "navigate_stack", {"direction": "next", "distance": "5"})

        assert payload["is_error"] is True
        assert "distance" in payload["text"]
        assert git.calls == []

    async def test_string_draft_is_rejected(self, app, git, gh):
        payload = await self._call(app, "submit_stack", {"draft": "yes"})

        assert payload["is_error"] is True
        assert "draft" in payload["text"]
        assert git.calls == []
        assert gh.calls == []

    async def test_numeric_auto_restack_is_rejected(self, app, git):
        payload = await self._call(app, "modify_commit", {"message": "fix", "auto_restack": 0})

        assert payload["is_error"] is True
        assert "auto_restack" in payload["text"]
        assert git.calls == []

    async def test_well_typed_arguments_pass_through(self, app, git):
        git.on("branch", "--show-current", output="feat/two")
        git.on("log", output="feat: two")

        payload = await self._call(app, "navigate_stack", {"direction": "next", "distance": 2})

        assert payload["is_error"] is False
        assert git.calls[0] == ["next", "2"]
