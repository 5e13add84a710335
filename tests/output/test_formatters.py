"""Tests for output mode dispatch."""

import json

from locus.output.formatters import OutputSettings, format_result
from locus.services.result import ServiceError, ServiceResult


class TestFormatResult:
    def test_json_mode(self) -> None:
        result = ServiceResult(ok=True, op="path", data={"path": "/t/a.md"})
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["ok"] is True
        assert parsed["op"] == "path"
        assert parsed["data"] == {"path": "/t/a.md"}
        assert parsed["error"] is None

    def test_json_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="set",
            error=ServiceError(code="EMPTY_KEY", message="Empty", detail={"applied": {}}),
        )
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["error"]["code"] == "EMPTY_KEY"
        assert parsed["error"]["detail"] == {"applied": {}}

    def test_json_wins_over_quiet(self) -> None:
        result = ServiceResult(ok=True, op="path", data={"path": "/t/a.md"})
        output = format_result(result, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "path"

    def test_quiet_mode(self) -> None:
        result = ServiceResult(ok=True, op="path", data={"path": "/t/a.md"})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "/t/a.md"

    def test_default_is_rich(self) -> None:
        result = ServiceResult(ok=True, op="set", data={"path": "/t/a.md"})
        assert "OK" in format_result(result)
