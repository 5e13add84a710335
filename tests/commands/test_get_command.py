"""Tests for the get CLI command."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from locus.cli import cli
from tests.conftest import base_frontmatter, write_task


@pytest.mark.usefixtures("_isolated_tasks")
class TestGetCommand:
    def test_single_property(self, cli_runner: CliRunner, task_root: Path) -> None:
        write_task(task_root, "login.md", base_frontmatter(status="done"))
        result = cli_runner.invoke(cli, ["get", "login", "status"])
        assert result.exit_code == 0
        assert result.output == "done\n"

    def test_list_property_as_json(self, cli_runner: CliRunner, task_root: Path) -> None:
        write_task(task_root, "login.md", base_frontmatter(tags=["a", "b"]))
        result = cli_runner.invoke(cli, ["get", "login", "tags"])
        assert result.output == '[\n  "a",\n  "b"\n]\n'

    def test_all_properties(self, cli_runner: CliRunner, task_root: Path) -> None:
        write_task(task_root, "login.md", base_frontmatter(status="done", points=3))
        result = cli_runner.invoke(cli, ["get", "login"])
        assert result.exit_code == 0
        assert "status: done" in result.output
        assert "points: 3" in result.output
        assert "date: 2025-01-15" in result.output

    def test_missing_property(self, cli_runner: CliRunner, task_root: Path) -> None:
        write_task(task_root, "login.md", base_frontmatter())
        result = cli_runner.invoke(cli, ["get", "login", "owner"])
        assert result.exit_code == 1
        assert "Property not found: owner" in result.output
