"""Filesystem access for task files.

INVARIANT: Files are truth. Every read and write of a task file goes
through a :class:`FileSystem`, so services can run against
:class:`LocalFileSystem` in production and an in-memory implementation in
tests.

Writes are atomic: content goes to a temporary file in the target
directory which then replaces the original, so a failed write never leaves
a truncated task file behind.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol

from locus.domain.frontmatter import FrontmatterDocument, decode, encode

TASK_SUFFIX = ".md"

# Directories to skip when discovering task files.
_SKIP_DIRS = frozenset({".git", ".obsidian", ".locus"})


class FileSystem(Protocol):
    """Capability interface the resolver and services depend on."""

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...

    def list_entries(self, directory: Path) -> list[Path]: ...

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...


class LocalFileSystem:
    """:class:`FileSystem` backed by the local disk (UTF-8 text)."""

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        """Atomically replace *path* with *content*.

        Creates parent directories if they don't exist.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def list_entries(self, directory: Path) -> list[Path]:
        """Immediate children of *directory*; empty if it does not exist."""
        if not directory.is_dir():
            return []
        return sorted(directory.iterdir())

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()


# ---------------------------------------------------------------------------
# Task file helpers
# ---------------------------------------------------------------------------


def read_task_file(fs: FileSystem, path: Path) -> FrontmatterDocument:
    """Read and decode a task file."""
    return decode(fs.read_text(path))


def write_task_file(fs: FileSystem, path: Path, document: FrontmatterDocument) -> None:
    """Encode and write a task file in a single write."""
    fs.write_text(path, encode(document.frontmatter, document.body))


def find_task_files(fs: FileSystem, root: Path) -> list[Path]:
    """Discover every ``*.md`` file under *root*, depth-first in sorted order.

    Skips ``.git/``, ``.obsidian/``, and ``.locus/``.
    """
    results: list[Path] = []
    for entry in fs.list_entries(root):
        if fs.is_dir(entry):
            if entry.name not in _SKIP_DIRS:
                results.extend(find_task_files(fs, entry))
        elif entry.name.lower().endswith(TASK_SUFFIX):
            results.append(entry)
    return results


def ensure_markdown_extension(file_name: str) -> str:
    """Append ``.md`` unless *file_name* already ends with it."""
    return file_name if file_name.lower().endswith(TASK_SUFFIX) else f"{file_name}{TASK_SUFFIX}"
