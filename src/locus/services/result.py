"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Every public service method returns a ServiceResult. Errors are
values: a failed operation carries an :class:`ErrorCode` and names the
offending identifier (``file``, ``property``, ``candidates``, ``token``,
``path``) in ``error.detail``; nothing is raised to the CLI.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from locus.domain.errors import LocusError
from locus.domain.types import ErrorCode


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: LocusError | OSError, **extra: Any) -> ServiceError:
        """Describe a raised domain or disk error.

        *extra* is merged over the exception's own detail, so callers can
        attach progress (``applied``) to whatever the error reported.
        """
        if isinstance(exc, LocusError):
            return cls(code=exc.code, message=exc.message, detail={**exc.detail, **extra})

        detail = dict(extra)
        if exc.filename is not None:
            detail.setdefault("path", str(exc.filename))
        reason = exc.strerror or str(exc)
        return cls(code=ErrorCode.IO_ERROR, message=f"I/O error: {reason}", detail=detail)


class ServiceResult(BaseModel):
    """Return type of every service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name; selects the renderer (``"set"``, ``"tags_get"``,
            ``"list"``...).
        data: Operation-specific payload on success.
        warnings: Files skipped or other non-fatal issues.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(cls, op: str, exc: LocusError | OSError, **extra: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc, **extra))

    @property
    def code(self) -> ErrorCode | None:
        """Error code of a failed result, None on success."""
        return self.error.code if self.error else None
