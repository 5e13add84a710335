"""Tests for the list CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from locus.cli import cli
from tests.conftest import write_task


def _task(directory: Path, name: str, created: str, **fields: object) -> Path:
    fm = {"date": created[:10], "created": created, **fields}
    return write_task(directory, name, fm, f"# {name[:-3].title()}\n")


@pytest.fixture
def tasks(task_root: Path) -> Path:
    _task(task_root, "alpha.md", "2025-01-10T09:00:00.000Z", status="todo", tags=["api"])
    _task(task_root, "bravo.md", "2025-01-20T09:00:00.000Z", status="done", priority="high")
    _task(task_root / "alice" / "project", "gamma.md", "2025-01-05T09:00:00.000Z")
    return task_root


@pytest.mark.usefixtures("_isolated_tasks", "tasks")
class TestListCommand:
    def test_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list"])
        assert result.exit_code == 0, result.output
        assert "All tasks" in result.output
        assert "3 task(s)" in result.output
        for header in ("Title", "Status", "Priority", "Tags", "Created"):
            assert header in result.output
        assert result.output.index("Bravo") < result.output.index("Alpha")
        assert "2025-01-20" in result.output

    def test_filters(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "list", "-s", "todo", "-t", "api,web"])
        data = json.loads(result.output)
        assert data["op"] == "list"
        assert [i["file_name"] for i in data["data"]["items"]] == ["alpha.md"]

    def test_repeated_tag_options(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "list", "-t", "web", "-t", "api"])
        assert json.loads(result.output)["data"]["count"] == 1

    def test_sort_priority(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "list", "--sort", "priority"])
        items = json.loads(result.output)["data"]["items"]
        assert items[0]["file_name"] == "bravo.md"

    def test_bad_sort_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "--sort", "size"])
        assert result.exit_code == 2

    def test_detail(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "--detail", "-s", "done"])
        assert result.exit_code == 0
        assert "file: bravo.md" in result.output
        assert "priority: high" in result.output

    def test_group_by_repo(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "--group-by-repo"])
        assert result.exit_code == 0
        assert "━━━ alice/project ━━━" in result.output
        assert "━━━ default ━━━" in result.output
        assert result.output.index("alice/project") < result.output.index("default")

    def test_quiet_prints_paths(self, cli_runner: CliRunner, task_root: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "list", "-s", "done"])
        assert result.output.strip() == str(task_root / "bravo.md")

    def test_ls_alias(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["ls"])
        assert result.exit_code == 0
        assert "3 task(s)" in result.output

    def test_no_matches(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "-s", "cancelled"])
        assert result.exit_code == 0
        assert "No tasks found." in result.output


@pytest.mark.usefixtures("_isolated_tasks", "tasks")
class TestListRepoScope:
    @pytest.fixture(autouse=True)
    def _scoped(self, _isolated_tasks: None, monkeypatch: pytest.MonkeyPatch) -> None:
        from locus.domain.types import RepoInfo
        from locus.infrastructure import git

        monkeypatch.setenv("LOCUS_GIT__EXTRACT_USERNAME", "true")
        monkeypatch.setattr(
            git,
            "detect_repo_info",
            lambda cwd=None: RepoInfo(host="github.com", owner="alice", repo="project"),
        )

    def test_scoped_to_repo(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list"])
        assert result.exit_code == 0, result.output
        assert "Repository: alice/project" in result.output
        assert "Gamma" in result.output
        assert "Alpha" not in result.output

    def test_all_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "list", "--all"])
        data = json.loads(result.output)["data"]
        assert data["count"] == 3
        assert data["scope"] is None
