# tests/unit/logging/test_logger.py — v1
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import io
import json
import logging

from tokenslim.logging.context import clear_context, set_operation_context, set_request_context
from tokenslim.logging.logger import JsonFormatter, TextFormatter, setup_logging


def _record(msg: str = "Hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_request_context("req-9")
        set_operation_context("zon_to_json")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"] == {"operation": "zon_to_json", "request_id": "req-9"}

    def test_format_with_data(self):
        parsed = json.loads(JsonFormatter().format(_record(data={"input_length": 5})))
        assert parsed["data"] == {"input_length": 5}


class TestTextFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_operation(self):
        set_operation_context("filter")
        assert "[filter]" in TextFormatter().format(_record())


class TestSetupLogging:
    def teardown_method(self):
        root = logging.getLogger("tokenslim")
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

    def test_setup_json(self):
        stream = io.StringIO()
        setup_logging(level="DEBUG", log_format="json", stream=stream)
        root = logging.getLogger("tokenslim")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

        logging.getLogger("tokenslim.cache").debug("hello %s", "world")
        assert json.loads(stream.getvalue())["message"] == "hello world"

    def test_setup_text(self):
        setup_logging(level="INFO", log_format="text", stream=io.StringIO())
        root = logging.getLogger("tokenslim")
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reinit_does_not_duplicate(self):
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())
        assert len(logging.getLogger("tokenslim").handlers) == 1

    def test_with_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "tokenslim.log"
        setup_logging(log_file=log_file, stream=io.StringIO())
        assert len(logging.getLogger("tokenslim").handlers) == 2
        assert log_file.parent.exists()
