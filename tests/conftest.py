"""Shared pytest fixtures and test helpers for locus tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from locus.config.settings import LocusSettings
from locus.domain.frontmatter import encode
from locus.infrastructure.filesystem import LocalFileSystem
from locus.infrastructure.resolver import TaskFileResolver
from locus.services.tags import TagsService


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def task_root(tmp_path: Path) -> Path:
    """Empty task directory.

    This is the single source of truth for the task directory layout.
    """
    root = tmp_path / "locus"
    root.mkdir()
    return root


@pytest.fixture
def resolver(task_root: Path) -> TaskFileResolver:
    return TaskFileResolver(LocalFileSystem(), task_root)


@pytest.fixture
def tags_service(resolver: TaskFileResolver) -> TagsService:
    return TagsService(LocalFileSystem(), resolver)


@pytest.fixture
def settings(task_root: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> LocusSettings:
    """Settings pointing at *task_root* with no config file on disk."""
    monkeypatch.setenv("LOCUS_CONFIG", str(tmp_path / "missing.toml"))
    return LocusSettings.from_cli(task_directory=str(task_root), no_git=True)


@pytest.fixture
def _isolated_tasks(task_root: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the CLI at *task_root* with no config file and no git scoping.

    Use via ``@pytest.mark.usefixtures("_isolated_tasks")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOCUS_TASK_DIRECTORY", str(task_root))
    monkeypatch.setenv("LOCUS_CONFIG", str(tmp_path / "missing.toml"))
    monkeypatch.setenv("LOCUS_GIT__EXTRACT_USERNAME", "false")


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_task(
    directory: Path,
    name: str,
    frontmatter: dict[str, Any] | None = None,
    body: str = "",
) -> Path:
    """Write a task file through the codec and return its path."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode(frontmatter or {}, body), encoding="utf-8")
    return path


def base_frontmatter(**extra: Any) -> dict[str, Any]:
    """Frontmatter with the two system-managed keys plus *extra*."""
    return {
        "date": "2025-01-15",
        "created": "2025-01-15T09:30:00.000Z",
        **extra,
    }
