"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from docsclient.config.logging import HTTP_LOGGERS, PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore the touched loggers after each test."""
    loggers = [logging.getLogger(), *(logging.getLogger(n) for n in (PACKAGE_LOGGER, *HTTP_LOGGERS))]
    saved = [(lg, lg.handlers[:], lg.level, lg.propagate) for lg in loggers]
    yield
    for lg, handlers, level, propagate in saved:
        lg.handlers = handlers
        lg.setLevel(level)
        lg.propagate = propagate


def last_record(stream: io.StringIO) -> dict[str, object]:
    return json.loads(stream.getvalue().strip().splitlines()[-1])


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

    def test_root_logger_is_left_alone(self) -> None:
        root = logging.getLogger()
        before = (root.handlers[:], root.level)
        configure_logging(verbose=True, log_json=True)
        assert (root.handlers, root.level) == before
        assert logging.getLogger(PACKAGE_LOGGER).propagate is False

    def test_console_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, stream=stream)
        structlog.get_logger("docsclient.test").warning("hello world", key="val")
        output = stream.getvalue()
        assert "hello world" in output
        assert "key=val" in output
        assert "\x1b[" not in output

    def test_json_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        structlog.get_logger("docsclient.test").warning("json test", answer=42)
        parsed = last_record(stream)
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "docsclient.test"
        assert "timestamp" in parsed

    def test_default_stream_is_stderr(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("docsclient.test").warning("to stderr")
        captured = capfd.readouterr()
        assert json.loads(captured.err.strip())["event"] == "to stderr"

    def test_stdlib_module_logger_gets_structured_fields(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("docsclient.infrastructure.filesystem.disk").debug(
            "Failed to read docs/a.md"
        )
        parsed = last_record(stream)
        assert parsed["event"] == "Failed to read docs/a.md"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "docsclient.infrastructure.filesystem.disk"

    def test_exception_rendered_as_dict(self) -> None:
        stream = io.StringIO()
        configure_logging(log_json=True, stream=stream)
        try:
            raise OSError("disk full")
        except OSError:
            logging.getLogger("docsclient.test").exception("write failed")
        parsed = last_record(stream)
        assert parsed["event"] == "write failed"
        assert isinstance(parsed["exception"], list)

    def test_http_debug_is_suppressed(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("httpx").debug("request noise")
        logging.getLogger("httpcore").debug("connection noise")
        assert stream.getvalue() == ""
        logging.getLogger("httpx").warning("retrying")
        assert last_record(stream)["logger"] == "httpx"

    def test_repeated_calls_replace_the_handler(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1
        assert len(logging.getLogger("httpx").handlers) == 1

    def test_foreign_handlers_are_kept(self) -> None:
        own = logging.NullHandler()
        logging.getLogger(PACKAGE_LOGGER).addHandler(own)
        configure_logging()
        assert own in logging.getLogger(PACKAGE_LOGGER).handlers
