# tests/unit/logging/test_logger.py - v2
"""Tests for logging/logger.py - formatters and setup."""

from __future__ import annotations

import json
import logging
import sys
from logging.handlers import RotatingFileHandler

from procflow.logging.context import set_pass_context, set_provider_context, set_run_context
from procflow.logging.logger import ROOT_LOGGER, JsonFormatter, TextFormatter, setup_logging


def _record(msg: str = "Hello", exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="procflow.test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=exc_info,
    )


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert parsed["logger"] == "procflow.test"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_run_context("/work/app")
        set_pass_context("diverge.generate")
        set_provider_context("claude")
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["context"] == {
            "project": "/work/app",
            "pass_name": "diverge.generate",
            "provider": "claude",
        }

    def test_format_with_data(self):
        record = _record()
        record.data = {"tokens": 12}
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["data"] == {"tokens": 12}

    def test_format_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(exc_info=sys.exc_info())
        parsed = json.loads(JsonFormatter().format(record))
        assert "ValueError: boom" in parsed["exception"]


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert output.endswith("- Hello text")
        assert "INFO" in output

    def test_includes_pass_branch_provider(self):
        set_pass_context("branch.auth.review", "auth")
        set_provider_context("ollama")
        output = TextFormatter().format(_record())
        assert "[branch.auth.review] <auth> (ollama) - Hello" in output


class TestSetupLogging:
    def teardown_method(self):
        logging.getLogger(ROOT_LOGGER).handlers.clear()

    def test_console_only(self):
        root = setup_logging(level="DEBUG")
        assert root.name == ROOT_LOGGER
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_json_format(self):
        root = setup_logging(log_format="json")
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_unknown_level_defaults_to_info(self):
        assert setup_logging(level="CHATTY").level == logging.INFO

    def test_reinit_does_not_duplicate(self):
        setup_logging()
        root = setup_logging()
        assert len(root.handlers) == 1

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "procflow.log"
        root = setup_logging(log_file=log_file, rotation="1KB", retention=2)
        assert len(root.handlers) == 2
        file_handler = root.handlers[1]
        assert isinstance(file_handler, RotatingFileHandler)
        assert file_handler.maxBytes == 1024
        assert file_handler.backupCount == 2
        assert log_file.parent.is_dir()
        file_handler.close()

    def test_module_loggers_propagate_to_root(self, tmp_path):
        log_file = tmp_path / "run.log"
        root = setup_logging(log_file=log_file)
        logging.getLogger("procflow.pipeline.runner").info("pass finished")
        for handler in root.handlers:
            handler.flush()
        root.handlers[1].close()
        assert "pass finished" in log_file.read_text(encoding="utf-8")
