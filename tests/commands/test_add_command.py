"""Tests for the add CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from locus.cli import cli
from locus.domain.frontmatter import decode


@pytest.mark.usefixtures("_isolated_tasks")
class TestAddCommand:
    def test_add(self, cli_runner: CliRunner, task_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "add", "Fix login bug"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        path = Path(data["path"])
        assert path.parent == task_root
        assert "fix-login-bug" in path.name

        doc = decode(path.read_text(encoding="utf-8"))
        assert list(doc.frontmatter) == ["date", "created", "status", "priority", "tags"]
        assert doc.body == "# Fix login bug\n"

    def test_add_with_options(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "add",
                "Ship it",
                "points=3",
                "--tag",
                "backend",
                "--tag",
                "auth",
                "--priority",
                "high",
            ],
        )
        assert result.exit_code == 0, result.output
        fm = json.loads(result.output)["data"]["frontmatter"]
        assert fm["tags"] == ["backend", "auth"]
        assert fm["priority"] == "high"
        assert fm["status"] == "todo"
        assert fm["points"] == 3

    def test_quiet_prints_path(self, cli_runner: CliRunner, task_root: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "add", "Quiet task"])
        assert result.exit_code == 0
        path = Path(result.output.strip())
        assert path.is_file()
        assert path.parent == task_root

    def test_config_defaults(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "locus.toml"
        config.write_text('[defaults]\nstatus = "backlog"\ntags = ["inbox"]\n')
        result = cli_runner.invoke(cli, ["--json", "-c", str(config), "add", "Configured"])
        assert result.exit_code == 0, result.output
        fm = json.loads(result.output)["data"]["frontmatter"]
        assert fm["status"] == "backlog"
        assert fm["tags"] == ["inbox"]
