"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from locus.config.logging import bind_log_context, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    locus = logging.getLogger("locus")
    locus_level = locus.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    locus.setLevel(locus_level)
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("locus").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger("locus").level == logging.WARNING

    def test_single_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("locus.services.tags").debug("Set %s on %s", "status", "task.md")
        err = capfd.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(err)
        assert payload["event"] == "Set status on task.md"
        assert payload["level"] == "debug"
        assert payload["logger"] == "locus.services.tags"

    def test_structlog_logger_routes_through_stdlib(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("locus.test").warning("disk_full", path="/tasks/a.md")
        payload = json.loads(capfd.readouterr().err.strip().splitlines()[-1])
        assert payload["event"] == "disk_full"
        assert payload["path"] == "/tasks/a.md"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("ruamel.yaml").debug("parser noise")
        assert capfd.readouterr().err == ""

    def test_quiet_shows_errors_only(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("locus").level == logging.ERROR

    def test_verbose_wins_over_quiet(self) -> None:
        configure_logging(verbose=True, quiet=True)
        assert logging.getLogger("locus").level == logging.DEBUG


class TestBindLogContext:
    def test_fields_reach_every_record(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_log_context(command="set", task_root="/tasks", repo=None)
        logging.getLogger("locus.services.tags").debug("Wrote task")
        payload = json.loads(capfd.readouterr().err.strip().splitlines()[-1])
        assert payload["command"] == "set"
        assert payload["task_root"] == "/tasks"
        assert "repo" not in payload

    def test_reconfigure_clears_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        bind_log_context(command="list")
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("locus").debug("fresh")
        payload = json.loads(capfd.readouterr().err.strip().splitlines()[-1])
        assert "command" not in payload
