"""CreateService — new task files with system-managed frontmatter.

Initial frontmatter order: ``date``, ``created``, ``status``,
``priority``, ``tags``, then any extra ``key=value`` properties. Values for
status/priority/tags fall back to the ``[defaults]`` config section.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from locus.domain.errors import InvalidFormatError, LocusError, ProtectedKeyError, TaskExistsError
from locus.domain.filenames import render_file_name
from locus.domain.frontmatter import PROTECTED_KEYS, FrontmatterDocument
from locus.domain.values import iso_timestamp, parse_assignment, to_frontmatter_value
from locus.services.base import BaseService
from locus.services.result import ServiceResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from locus.config.models import DefaultsConfig, FileNamingConfig
    from locus.domain.types import RepoInfo
    from locus.infrastructure.filesystem import FileSystem
    from locus.infrastructure.resolver import TaskFileResolver

logger = logging.getLogger(__name__)


class CreateService(BaseService):
    """Creates task files in the (optionally repo-scoped) task directory."""

    def __init__(
        self,
        fs: FileSystem,
        resolver: TaskFileResolver,
        *,
        naming: FileNamingConfig,
        defaults: DefaultsConfig,
    ) -> None:
        super().__init__(fs, resolver)
        self._naming = naming
        self._defaults = defaults

    def create_task(
        self,
        title: str,
        *,
        body: str | None = None,
        tags: Sequence[str] | None = None,
        priority: str | None = None,
        status: str | None = None,
        properties: Sequence[str] = (),
        repo_info: RepoInfo | None = None,
        now: datetime | None = None,
    ) -> ServiceResult:
        """Write a new task file and return its path and frontmatter."""
        op = "add"
        moment = now or datetime.now(UTC)
        try:
            if not title.strip():
                msg = "Task title must not be empty"
                raise InvalidFormatError(msg)

            frontmatter: dict[str, Any] = {
                "date": moment.strftime("%Y-%m-%d"),
                "created": iso_timestamp(moment),
                "status": status or self._defaults.status,
                "priority": priority or self._defaults.priority,
                "tags": list(tags) if tags else list(self._defaults.tags),
            }
            for token in properties:
                assignment = parse_assignment(token)
                if assignment.key in PROTECTED_KEYS:
                    raise ProtectedKeyError(assignment.key)
                frontmatter[assignment.key] = to_frontmatter_value(assignment.parsed(now=moment))

            file_name = render_file_name(
                self._naming.pattern,
                title,
                moment,
                date_format=self._naming.date_format,
                hash_length=self._naming.hash_length,
            )
            path = self._resolver.scope_dir(repo_info) / file_name
            if self._fs.exists(path):
                raise TaskExistsError(str(path))

            document = FrontmatterDocument(frontmatter, body if body else f"# {title}\n")
            self._write(path, document)
        except (LocusError, OSError) as exc:
            return self._failure(op, exc)

        logger.debug("Created task %s", path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "file_name": file_name,
                "title": title,
                "frontmatter": frontmatter,
            },
        )
