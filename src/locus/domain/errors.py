"""Typed errors raised by the domain and infrastructure layers.

Every error carries a stable :class:`ErrorCode` and a ``detail`` dict naming
the offending identifier. The service layer converts them into
:class:`~locus.services.result.ServiceError` payloads; commands and output
never see these exceptions.
"""

from __future__ import annotations

from typing import Any

from locus.domain.types import ErrorCode


class LocusError(Exception):
    """Base class for all locus errors."""

    code: ErrorCode = ErrorCode.INVALID_FORMAT

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class TaskNotFoundError(LocusError):
    code = ErrorCode.TASK_NOT_FOUND

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Task not found: {identifier}", file=identifier)


class AmbiguousMatchError(LocusError):
    """More than one task file matched a fragment."""

    code = ErrorCode.AMBIGUOUS_MATCH

    def __init__(self, identifier: str, candidates: list[str]) -> None:
        super().__init__(
            f"Multiple tasks match {identifier!r}: {', '.join(candidates)}",
            file=identifier,
            candidates=candidates,
        )
        self.candidates = candidates


class PropertyNotFoundError(LocusError):
    code = ErrorCode.PROPERTY_NOT_FOUND

    def __init__(self, prop: str) -> None:
        super().__init__(f"Property not found: {prop}", property=prop)


class ProtectedKeyError(LocusError):
    code = ErrorCode.PROTECTED_KEY

    def __init__(self, prop: str) -> None:
        super().__init__(
            f"Property {prop!r} is managed by locus and cannot be changed", property=prop
        )


class InvalidFormatError(LocusError):
    code = ErrorCode.INVALID_FORMAT


class FrontmatterFormatError(InvalidFormatError):
    """The frontmatter block exists but is not a valid YAML mapping."""


class EmptyKeyError(LocusError):
    code = ErrorCode.EMPTY_KEY

    def __init__(self, token: str) -> None:
        super().__init__(f"Empty property name in {token!r}", token=token)


class TaskExistsError(LocusError):
    code = ErrorCode.FILE_EXISTS

    def __init__(self, path: str) -> None:
        super().__init__(f"Task file already exists: {path}", file=path)


class ConfigExistsError(LocusError):
    code = ErrorCode.FILE_EXISTS

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file already exists: {path} (use --force)", path=path)
