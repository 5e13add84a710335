"""Tests for ServiceResult/ServiceError construction from raised errors."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from locus.domain.errors import AmbiguousMatchError, PropertyNotFoundError
from locus.domain.types import ErrorCode
from locus.services.result import ServiceError, ServiceResult


class TestServiceError:
    def test_code_is_error_code(self) -> None:
        error = ServiceError(code="TASK_NOT_FOUND", message="x")
        assert error.code is ErrorCode.TASK_NOT_FOUND

    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceError(code="NOT_A_CODE", message="x")

    def test_from_locus_error_merges_detail(self) -> None:
        exc = AmbiguousMatchError("fix", ["/t/a.md", "/t/b.md"])
        error = ServiceError.from_exception(exc, applied={"a": 1})
        assert error.code is ErrorCode.AMBIGUOUS_MATCH
        assert error.detail == {
            "file": "fix",
            "candidates": ["/t/a.md", "/t/b.md"],
            "applied": {"a": 1},
        }

    def test_from_os_error(self) -> None:
        error = ServiceError.from_exception(OSError(28, "No space left on device", "/t/a.md"))
        assert error.code is ErrorCode.IO_ERROR
        assert error.message == "I/O error: No space left on device"
        assert error.detail == {"path": "/t/a.md"}

    def test_os_error_without_filename(self) -> None:
        error = ServiceError.from_exception(OSError("boom"))
        assert error.message == "I/O error: boom"
        assert error.detail == {}


class TestServiceResult:
    def test_failure(self) -> None:
        result = ServiceResult.failure("tags_get", PropertyNotFoundError("owner"))
        assert not result.ok
        assert result.op == "tags_get"
        assert result.code is ErrorCode.PROPERTY_NOT_FOUND
        assert result.error is not None
        assert result.error.detail == {"property": "owner"}

    def test_success_has_no_code(self) -> None:
        assert ServiceResult(ok=True, op="path").code is None

    def test_json_dump_uses_code_value(self) -> None:
        result = ServiceResult.failure("set", PropertyNotFoundError("x"))
        assert '"code":"PROPERTY_NOT_FOUND"' in result.model_dump_json()
