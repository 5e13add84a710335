"""TagsService — read and mutate task frontmatter properties.

Pipeline per call: RESOLVE → DECODE → APPLY → (ENCODE → WRITE) → RESPOND

Mutating operations write the file exactly once, after every change has
been applied in memory. A failure at any earlier stage leaves the file on
disk untouched.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from locus.domain.errors import (
    EmptyKeyError,
    InvalidFormatError,
    LocusError,
    PropertyNotFoundError,
    ProtectedKeyError,
)
from locus.domain.frontmatter import PROTECTED_KEYS, FrontmatterDocument
from locus.domain.values import parse_assignment, to_frontmatter_value
from locus.services.base import BaseService
from locus.services.result import ServiceResult

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from locus.domain.types import RepoInfo

logger = logging.getLogger(__name__)

# Set once at creation; ``set`` refuses to overwrite it.
_IMMUTABLE_KEYS = frozenset({"created"})


class TagsService(BaseService):
    """Get, set, list, remove, and clear frontmatter properties."""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_tags(
        self,
        file_name: str | None = None,
        *,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """List one file's properties, or every task file in scope.

        Without *file_name*, files lacking frontmatter are skipped and
        undecodable files are reported as warnings.
        """
        if file_name is not None:
            op = "tags_list"
            try:
                path, doc = self._load(file_name, repo_info)
            except (LocusError, OSError) as exc:
                return self._failure(op, exc)
            return ServiceResult(ok=True, op=op, data=self._describe(path, doc))

        op = "tags_list_all"
        warnings: list[str] = []
        items: list[dict[str, Any]] = []
        try:
            paths = self._resolver.task_files(repo_info)
        except OSError as exc:
            return self._failure(op, exc)

        for path in paths:
            try:
                doc = self._read(path)
            except (LocusError, OSError) as exc:
                warnings.append(f"Skipped {path}: {exc}")
                continue
            if doc.has_frontmatter:
                items.append(self._describe(path, doc))

        return ServiceResult(
            ok=True,
            op=op,
            data={"items": items, "count": len(items)},
            warnings=warnings,
        )

    def get_tag(
        self,
        file_name: str,
        prop: str,
        *,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Read a single property value."""
        op = "tags_get"
        try:
            path, doc = self._load(file_name, repo_info)
            if prop not in doc.frontmatter:
                raise PropertyNotFoundError(prop)
        except (LocusError, OSError) as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "property": prop, "value": doc.frontmatter[prop]},
        )

    def resolve_path(self, file_name: str, *, repo_info: RepoInfo | None = None) -> ServiceResult:
        """Return the absolute path *file_name* resolves to."""
        op = "path"
        try:
            path, _doc = self._load(file_name, repo_info)
        except (LocusError, OSError) as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data={"path": str(path)})

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_tags(
        self,
        file_name: str,
        assignments: Sequence[str],
        *,
        repo_info: RepoInfo | None = None,
        now: datetime | None = None,
    ) -> ServiceResult:
        """Apply ``key=value`` *assignments* in order, then write once.

        The first failing assignment aborts the batch; nothing is written
        and ``error.detail["applied"]`` holds what had been applied in
        memory up to that point.
        """
        op = "set"
        applied: dict[str, Any] = {}
        moment = now or datetime.now(UTC)
        try:
            if not assignments:
                msg = "No properties given (expected key=value)"
                raise InvalidFormatError(msg)

            path, doc = self._load(file_name, repo_info)
            frontmatter = dict(doc.frontmatter)
            for token in assignments:
                assignment = parse_assignment(token)
                self._check_writable(assignment.key, frontmatter)
                value = to_frontmatter_value(assignment.parsed(now=moment))
                frontmatter[assignment.key] = value
                applied[assignment.key] = value

            self._write(path, FrontmatterDocument(frontmatter, doc.body))
        except (LocusError, OSError) as exc:
            return self._failure(op, exc, applied=applied)

        logger.debug("Set %s on %s", ", ".join(applied), path)
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "updated": applied, "count": len(applied)},
        )

    def set_tag(
        self,
        file_name: str,
        prop: str,
        value: Any,
        *,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Set one property to an already-typed *value*."""
        op = "tags_set"
        try:
            if not prop:
                raise EmptyKeyError(prop)
            path, doc = self._load(file_name, repo_info)
            self._check_writable(prop, doc.frontmatter)
            frontmatter = {**doc.frontmatter, prop: value}
            self._write(path, FrontmatterDocument(frontmatter, doc.body))
        except (LocusError, OSError) as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "property": prop, "value": value},
        )

    def remove_tag(
        self,
        file_name: str,
        prop: str,
        *,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Delete one property. Removing an absent property is a no-op."""
        op = "tags_remove"
        try:
            path, doc = self._load(file_name, repo_info)
            if prop in PROTECTED_KEYS:
                raise ProtectedKeyError(prop)
            removed = prop in doc.frontmatter
            if removed:
                frontmatter = {k: v for k, v in doc.frontmatter.items() if k != prop}
                self._write(path, FrontmatterDocument(frontmatter, doc.body))
        except (LocusError, OSError) as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "property": prop, "removed": removed},
        )

    def clear_tags(self, file_name: str, *, repo_info: RepoInfo | None = None) -> ServiceResult:
        """Drop every property except ``date`` and ``created``."""
        op = "tags_clear"
        try:
            path, doc = self._load(file_name, repo_info)
            kept = {k: v for k, v in doc.frontmatter.items() if k in PROTECTED_KEYS}
            removed = [k for k in doc.frontmatter if k not in PROTECTED_KEYS]
            if removed:
                self._write(path, FrontmatterDocument(kept, doc.body))
        except (LocusError, OSError) as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "removed": removed, "frontmatter": kept},
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_writable(key: str, frontmatter: dict[str, Any]) -> None:
        if key in _IMMUTABLE_KEYS and key in frontmatter:
            raise ProtectedKeyError(key)

    def _describe(self, path: Path, doc: FrontmatterDocument) -> dict[str, Any]:
        root = self._resolver.root
        relative = path.relative_to(root) if path.is_relative_to(root) else path
        return {
            "file_name": path.name,
            "path": str(path),
            "relative_path": str(relative),
            "title": doc.title,
            "frontmatter": doc.frontmatter,
        }
