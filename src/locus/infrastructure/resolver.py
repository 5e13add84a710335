"""Task file resolution — turn a user-supplied fragment into one path.

Search order inside the scope directory (case-insensitive, first rule with
any hit decides):

1. Exact file name, with or without the ``.md`` suffix.
2. Substring of the file name.
3. Substring of the task title (``title`` field, else first ``# `` heading).

A rule with exactly one hit resolves; a rule with several hits raises
:class:`AmbiguousMatchError` listing every candidate. Absolute paths bypass
the search entirely.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from locus.domain.errors import AmbiguousMatchError, LocusError, TaskNotFoundError
from locus.infrastructure.filesystem import (
    TASK_SUFFIX,
    ensure_markdown_extension,
    find_task_files,
    read_task_file,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from locus.domain.types import RepoInfo
    from locus.infrastructure.filesystem import FileSystem

logger = logging.getLogger(__name__)


class TaskFileResolver:
    """Locate task files under a root directory.

    Args:
        fs: Filesystem capability used for listing and reading.
        task_root: Root task directory (``task_directory`` setting).
        repo_scoping: When False, :class:`RepoInfo` is ignored and every
            lookup searches *task_root*.
    """

    def __init__(self, fs: FileSystem, task_root: Path, *, repo_scoping: bool = True) -> None:
        self._fs = fs
        self._root = task_root
        self._repo_scoping = repo_scoping

    @property
    def root(self) -> Path:
        return self._root

    def scope_dir(self, repo_info: RepoInfo | None = None) -> Path:
        """Directory searched for *repo_info*: ``<root>/<owner>/<repo>`` or the root."""
        if repo_info is None or not self._repo_scoping:
            return self._root
        return self._root.joinpath(*repo_info.owner.split("/"), repo_info.repo)

    def task_files(self, repo_info: RepoInfo | None = None) -> list[Path]:
        """Every task file in scope, in stable sorted order."""
        return find_task_files(self._fs, self.scope_dir(repo_info))

    def resolve(self, fragment: str, repo_info: RepoInfo | None = None) -> Path:
        """Resolve *fragment* to a single task file path.

        Raises:
            TaskNotFoundError: No file name or title matches.
            AmbiguousMatchError: The deciding rule matched several files.
        """
        direct = Path(fragment).expanduser()
        if direct.is_absolute():
            return direct

        needle = fragment.strip().lower()
        if not needle:
            raise TaskNotFoundError(fragment)

        files = self.task_files(repo_info)
        stem = needle[: -len(TASK_SUFFIX)] if needle.endswith(TASK_SUFFIX) else needle

        rules: list[tuple[str, Callable[[Path], bool]]] = [
            ("exact", lambda p: p.name.lower() == ensure_markdown_extension(needle)),
            ("name", lambda p: stem in p.name.lower()),
            ("title", lambda p: self._title_contains(p, needle)),
        ]
        for rule, predicate in rules:
            matches = [p for p in files if predicate(p)]
            if len(matches) == 1:
                logger.debug("Resolved %r by %s match: %s", fragment, rule, matches[0])
                return matches[0]
            if matches:
                raise AmbiguousMatchError(fragment, [str(p) for p in matches])

        raise TaskNotFoundError(fragment)

    def _title_contains(self, path: Path, needle: str) -> bool:
        try:
            title = read_task_file(self._fs, path).title
        except (OSError, UnicodeDecodeError, LocusError) as exc:
            logger.debug("Skipping %s during title search: %s", path, exc)
            return False
        return title is not None and needle in title.lower()
