"""Tests for apibook.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from apibook.logging import BuildReport, ComponentFilter, configure_logging, get_logger


def test_get_logger_nests_components_under_apibook() -> None:
    assert get_logger().name == "apibook"
    assert get_logger("compiler").name == "apibook.compiler"


def test_component_filter_tags_records() -> None:
    record = logging.LogRecord("apibook.pages", logging.INFO, __file__, 1, "msg", None, None)
    assert ComponentFilter().filter(record) is True
    assert record.component == "pages"

    root_record = logging.LogRecord("apibook", logging.INFO, __file__, 1, "msg", None, None)
    ComponentFilter().filter(root_record)
    assert root_record.component == "main"


def test_configure_logging_replaces_handlers_and_keeps_debug_in_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "build.log"
    configure_logging()
    logger = configure_logging(verbose=False, log_file=log_file)

    assert len(logger.handlers) == 2
    console, file_handler = logger.handlers
    assert console.level == logging.INFO
    assert file_handler.level == logging.DEBUG

    get_logger("compiler").debug("Rendered Class 'Driver' into api/Driver.md")
    file_handler.flush()
    assert "apibook.compiler: Rendered Class 'Driver'" in log_file.read_text(encoding="utf-8")
    configure_logging()


def test_build_report_summarises_rendered_and_skipped(caplog: pytest.LogCaptureFixture) -> None:
    report = BuildReport()
    report.document("Class", "Driver", "api/Driver.md")
    report.document("Function", "step", "api/Functions.md")
    report.document("Function", "test", "api/Functions.md")
    report.skip("Variable", "setup")

    with caplog.at_level(logging.INFO, logger="apibook"):
        report.finish()

    assert report.summary() == "Rendered 3 entities (1 Class, 2 Function); skipped 1 (1 Variable)"
    assert report.summary() in caplog.text


def test_empty_report_summary() -> None:
    assert BuildReport().summary() == "Rendered 0 entities (nothing)"
