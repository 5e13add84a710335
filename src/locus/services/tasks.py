"""TaskService — whole-task views and body edits.

``list_tasks`` summarizes every task file in scope (or under the whole
task root with ``all_repos``), filtered and sorted. ``read_task`` shows one
task, decoded or verbatim. ``edit_task`` appends to or replaces a task's
body and keeps its frontmatter; an unknown name creates the task instead.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from locus.domain.errors import InvalidFormatError, LocusError, TaskNotFoundError
from locus.domain.frontmatter import FrontmatterDocument, extract_title
from locus.domain.types import priority_rank
from locus.infrastructure.filesystem import TASK_SUFFIX, find_task_files
from locus.services.base import BaseService
from locus.services.result import ServiceResult

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime

    from locus.domain.types import RepoInfo
    from locus.infrastructure.filesystem import FileSystem
    from locus.infrastructure.resolver import TaskFileResolver
    from locus.services.create import CreateService

logger = logging.getLogger(__name__)

SORT_FIELDS: tuple[str, ...] = ("created", "status", "priority", "title")

# Each sort key pairs with its direction: newest and most urgent first.
_SORT_KEYS: dict[str, tuple[Callable[[dict[str, Any]], Any], bool]] = {
    "created": (lambda item: item["created"], True),
    "status": (lambda item: item["status"], False),
    "priority": (lambda item: priority_rank(item["priority"]), True),
    "title": (lambda item: item["title"].casefold(), False),
}

# Group label for tasks stored directly in the task root.
DEFAULT_GROUP = "default"


def _tag_list(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(tag) for tag in value]
    if isinstance(value, str) and value:
        return [value]
    return []


class TaskService(BaseService):
    """List, read, and edit task files as whole documents."""

    def __init__(
        self,
        fs: FileSystem,
        resolver: TaskFileResolver,
        *,
        creator: CreateService,
    ) -> None:
        super().__init__(fs, resolver)
        self._creator = creator

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_tasks(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        tags: Sequence[str] | None = None,
        sort: str | None = None,
        all_repos: bool = False,
        group_by_repo: bool = False,
        detail: bool = False,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Summaries of the task files in scope.

        A task passes the tag filter when it carries any of *tags*. Files
        without frontmatter are not tasks and are skipped; files that fail
        to decode become warnings.
        """
        op = "list"
        sort = sort or "created"
        try:
            if sort not in _SORT_KEYS:
                msg = f"Unknown sort field {sort!r} (expected one of {', '.join(SORT_FIELDS)})"
                raise InvalidFormatError(msg, sort=sort)
            scope = self._resolver.root if all_repos else self._resolver.scope_dir(repo_info)
            paths = find_task_files(self._fs, scope)
        except (LocusError, OSError) as exc:
            return self._failure(op, exc)

        warnings: list[str] = []
        items: list[dict[str, Any]] = []
        for path in paths:
            try:
                doc = self._read(path)
            except (LocusError, OSError) as exc:
                warnings.append(f"Skipped {path}: {exc}")
                continue
            if doc.has_frontmatter:
                items.append(self._summarize(path, doc))

        wanted_tags = set(tags or ())
        items = [
            item
            for item in items
            if (status is None or item["status"] == status)
            and (priority is None or item["priority"] == priority)
            and (not wanted_tags or wanted_tags.intersection(item["tags"]))
        ]
        key, newest_first = _SORT_KEYS[sort]
        items.sort(key=key, reverse=newest_first)

        data: dict[str, Any] = {
            "items": items,
            "count": len(items),
            "scope": None if all_repos or repo_info is None else repo_info.slug,
            "sort": sort,
            "detail": detail,
        }
        if group_by_repo:
            data["groups"] = self._group(items)
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def read_task(
        self,
        file_name: str,
        *,
        raw: bool = False,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Show one task: decoded fields and body, or the file verbatim."""
        op = "read_raw" if raw else "read"
        try:
            if raw:
                path = self._locate(file_name, repo_info)
                content = self._read_text(path)
                return ServiceResult(ok=True, op=op, data={"path": str(path), "content": content})
            path, doc = self._load(file_name, repo_info)
        except (LocusError, OSError) as exc:
            return self._failure(op, exc)

        return ServiceResult(ok=True, op=op, data={**self._summarize(path, doc), "body": doc.body})

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def edit_task(
        self,
        file_name: str,
        body: str,
        *,
        overwrite: bool = False,
        repo_info: RepoInfo | None = None,
        now: datetime | None = None,
    ) -> ServiceResult:
        """Append *body* to a task, or replace its body with *overwrite*.

        Appended text is separated from the existing body by one blank
        line. When no task matches a relative *file_name*, a new task is
        created with *body*, titled by its first ``# `` heading or else by
        *file_name*.
        """
        op = "edit"
        try:
            if not body.strip():
                msg = "No body text given"
                raise InvalidFormatError(msg, file=file_name)
            try:
                path, doc = self._load(file_name, repo_info)
            except TaskNotFoundError:
                if Path(file_name).expanduser().is_absolute():
                    raise
                return self._create_from_body(op, file_name, body, repo_info, now)

            if overwrite:
                action, new_body = "overwritten", body
            elif doc.body.strip():
                action, new_body = "appended", f"{doc.body.rstrip()}\n\n{body}"
            else:
                action, new_body = "appended", body
            self._write(path, FrontmatterDocument(doc.frontmatter, new_body))
        except (LocusError, OSError) as exc:
            return self._failure(op, exc)

        logger.debug("Body of %s %s", path, action)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "action": action,
                "title": doc.title or path.stem,
            },
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _create_from_body(
        self,
        op: str,
        file_name: str,
        body: str,
        repo_info: RepoInfo | None,
        now: datetime | None,
    ) -> ServiceResult:
        stem = file_name
        if stem.lower().endswith(TASK_SUFFIX):
            stem = stem[: -len(TASK_SUFFIX)]
        title = extract_title({}, body) or stem
        created = self._creator.create_task(title, body=body, repo_info=repo_info, now=now)
        if not created.ok:
            return created.model_copy(update={"op": op})
        data = {
            "path": created.data["path"],
            "action": "created",
            "title": title,
        }
        return created.model_copy(update={"op": op, "data": data})

    def _read_text(self, path: Path) -> str:
        try:
            return self._fs.read_text(path)
        except UnicodeDecodeError as exc:
            msg = f"{path} is not valid UTF-8 text"
            raise InvalidFormatError(msg, file=str(path)) from exc

    def _summarize(self, path: Path, doc: FrontmatterDocument) -> dict[str, Any]:
        root = self._resolver.root
        relative = path.relative_to(root) if path.is_relative_to(root) else Path(path.name)
        fm = doc.frontmatter
        repository = relative.parent.as_posix()
        return {
            "file_name": path.name,
            "path": str(path),
            "relative_path": relative.as_posix(),
            "title": doc.title or path.stem,
            "status": str(fm.get("status") or "todo"),
            "priority": str(fm.get("priority") or "normal"),
            "tags": _tag_list(fm.get("tags")),
            "created": str(fm.get("created") or fm.get("date") or ""),
            "repository": None if repository == "." else repository,
            "frontmatter": fm,
        }

    @staticmethod
    def _group(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Items bucketed by repository, buckets in name order."""
        buckets: dict[str, list[dict[str, Any]]] = {}
        for item in items:
            buckets.setdefault(item["repository"] or DEFAULT_GROUP, []).append(item)
        return [
            {
                "repository": name,
                "count": len(buckets[name]),
                "files": [item["relative_path"] for item in buckets[name]],
            }
            for name in sorted(buckets)
        ]
