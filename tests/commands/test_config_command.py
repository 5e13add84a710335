"""Tests for the config command group."""

from __future__ import annotations

import json
import tomllib
from pathlib import Path

import pytest
from click.testing import CliRunner

from locus.cli import cli


@pytest.fixture
def xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home


@pytest.mark.usefixtures("_isolated_tasks")
class TestConfigCommand:
    def test_show(self, cli_runner: CliRunner, task_root: Path) -> None:
        result = cli_runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0, result.output
        assert f"task_directory: {task_root}" in result.output
        assert "[file_naming]" in result.output
        assert "(none, using defaults)" in result.output
        assert f"LOCUS_TASK_DIRECTORY={task_root}" in result.output

    def test_show_json(self, cli_runner: CliRunner) -> None:
        data = json.loads(cli_runner.invoke(cli, ["--json", "config", "show"]).output)
        assert data["op"] == "config_show"
        assert data["data"]["settings"]["git"]["extract_username"] is False

    def test_path_without_file(self, cli_runner: CliRunner, xdg_home: Path) -> None:
        result = cli_runner.invoke(cli, ["config", "path"])
        assert result.exit_code == 0
        assert "No config file found." in result.output
        assert str(xdg_home / "locus" / "locus.toml") in result.output

    def test_path_with_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "locus.toml"
        config.write_text("", encoding="utf-8")
        result = cli_runner.invoke(cli, ["-c", str(config), "config", "path"])
        assert result.output == f"{config}\n"

    def test_init_then_force(self, cli_runner: CliRunner, xdg_home: Path) -> None:
        target = xdg_home / "locus" / "locus.toml"
        result = cli_runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 0, result.output
        assert str(target) in result.output
        assert tomllib.loads(target.read_text(encoding="utf-8"))["defaults"]["status"] == "todo"

        again = cli_runner.invoke(cli, ["config", "init"])
        assert again.exit_code == 1
        assert "already exists" in again.output

        forced = cli_runner.invoke(cli, ["config", "init", "--force"])
        assert forced.exit_code == 0
        assert "overwritten: true" in forced.output
