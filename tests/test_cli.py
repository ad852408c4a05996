"""Tests for the figmamcp command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from figmamcp import __version__
from figmamcp.cli.main import cli
from tests.helpers import sample_document


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_tools_lists_every_tool() -> None:
    result = CliRunner().invoke(cli, ["tools"])

    assert result.exit_code == 0
    assert result.stdout == ""
    for name in (
        "list_teams",
        "list_projects",
        "list_files",
        "query_file",
        "get_node_details",
        "export_images",
    ):
        assert name in result.stderr


def test_serve_requires_access_token(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("FIGMA_ACCESS_TOKEN", raising=False)
    env_file = tmp_path / "empty.env"
    env_file.write_text("", encoding="utf-8")

    result = CliRunner().invoke(cli, ["--env-file", str(env_file), "serve"])

    assert result.exit_code == 1
    assert "FIGMA_ACCESS_TOKEN environment variable is required" in result.stderr


def test_serve_rejects_unknown_transport() -> None:
    result = CliRunner().invoke(cli, ["serve", "--transport", "websocket"])

    assert result.exit_code == 2


def test_query_runs_against_saved_file(tmp_path: Path) -> None:
    saved = tmp_path / "file.json"
    saved.write_text(
        json.dumps({"name": "Login Flow", "document": sample_document()}),
        encoding="utf-8",
    )

    result = CliRunner().invoke(
        cli,
        ["query", str(saved), "[t['text'] for t in getAllText()]", "--timeout", "30"],
    )

    assert result.exit_code == 0, result.stderr
    assert json.loads(result.stdout) == ["Welcome back", "Sign in"]


def test_query_rejects_invalid_json(tmp_path: Path) -> None:
    saved = tmp_path / "broken.json"
    saved.write_text("{not json", encoding="utf-8")

    result = CliRunner().invoke(cli, ["query", str(saved), "document"])

    assert result.exit_code == 1
    assert "is not valid JSON" in result.stderr


@pytest.mark.parametrize(("args", "expected"), [(["-v", "tools"], True), (["tools"], False)])
def test_verbose_flag_configures_logging(
    monkeypatch: pytest.MonkeyPatch, args: list[str], expected: bool
) -> None:
    calls: list[bool] = []
    monkeypatch.setattr("figmamcp.cli.main.configure_logging", calls.append)

    result = CliRunner().invoke(cli, args)

    assert result.exit_code == 0
    assert calls == [expected]
