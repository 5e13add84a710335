"""BaseService — shared plumbing for locus services.

Services receive their collaborators explicitly (no process-wide
container): a :class:`FileSystem` for all disk access and a
:class:`TaskFileResolver` scoped to the task root.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from locus.domain.errors import InvalidFormatError, LocusError, TaskNotFoundError
from locus.infrastructure.filesystem import read_task_file, write_task_file
from locus.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from locus.domain.frontmatter import FrontmatterDocument
    from locus.domain.types import RepoInfo
    from locus.infrastructure.filesystem import FileSystem
    from locus.infrastructure.resolver import TaskFileResolver

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Subclasses catch :class:`LocusError` and :class:`OSError` at the edge of
    each public method and hand them to :meth:`_failure`.
    """

    def __init__(self, fs: FileSystem, resolver: TaskFileResolver) -> None:
        self._fs = fs
        self._resolver = resolver

    def _locate(self, file_name: str, repo_info: RepoInfo | None) -> Path:
        """Resolve *file_name* to a task file that exists on disk."""
        path = self._resolver.resolve(file_name, repo_info)
        if not self._fs.exists(path):
            raise TaskNotFoundError(file_name)
        return path

    def _load(self, file_name: str, repo_info: RepoInfo | None) -> tuple[Path, FrontmatterDocument]:
        """Resolve *file_name* and decode the task file it names."""
        path = self._locate(file_name, repo_info)
        return path, self._read(path)

    def _read(self, path: Path) -> FrontmatterDocument:
        try:
            return read_task_file(self._fs, path)
        except UnicodeDecodeError as exc:
            msg = f"{path} is not valid UTF-8 text"
            raise InvalidFormatError(msg, file=str(path)) from exc

    def _write(self, path: Path, document: FrontmatterDocument) -> None:
        write_task_file(self._fs, path, document)
        logger.debug("Wrote %s (%d properties)", path, len(document.frontmatter))

    @staticmethod
    def _failure(op: str, exc: LocusError | OSError, **detail: Any) -> ServiceResult:
        """Convert a raised error into a failed ServiceResult."""
        result = ServiceResult.failure(op, exc, **detail)
        if result.error is not None:
            logger.debug("%s failed: %s (%s)", op, result.error.message, result.error.code)
        return result
