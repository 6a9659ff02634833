"""Tests for JSON logging utilities."""

import json
import logging
import sys

import pytest

from stopwatch.utils.logging import JSONFormatter, log_measurement, setup_logger


@pytest.fixture
def cleanup_logger():
    """Detach handlers from the stopwatch logger after a test."""
    yield
    logger = logging.getLogger("stopwatch")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


class TestJSONFormatter:
    """Test JSONFormatter output."""

    def test_format_basic_record(self):
        """Records become single-line JSON objects."""
        record = logging.LogRecord("stopwatch", logging.WARNING, "", 0, "clock %s", ("skew",), None)
        line = JSONFormatter().format(record)

        data = json.loads(line)
        assert data["level"] == "WARNING"
        assert data["message"] == "clock skew"
        assert data["timestamp"].endswith("Z")
        assert "\n" not in line

    def test_format_extra_fields(self):
        """Fields passed through extra= are merged into the JSON object."""
        record = logging.makeLogRecord({
            "name": "stopwatch.measurement",
            "levelno": logging.INFO,
            "levelname": "INFO",
            "msg": "msg",
            "elapsed_ms": 12,
            "command": "echo hi",
        })

        data = json.loads(JSONFormatter().format(record))
        assert data["logger"] == "stopwatch.measurement"
        assert data["elapsed_ms"] == 12
        assert data["command"] == "echo hi"
        assert "lineno" not in data
        assert "args" not in data

    def test_format_exception(self):
        """Exception tracebacks are included as a field."""
        try:
            raise ValueError("bad clock")
        except ValueError:
            record = logging.LogRecord(
                "stopwatch", logging.ERROR, "", 0, "failed", (), sys.exc_info()
            )

        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad clock" in data["exception"]


class TestSetupLogger:
    """Test logger configuration."""

    def test_file_logging(self, tmp_path, cleanup_logger):
        """A JSONL file is created in the log directory."""
        log_dir = tmp_path / "logs"
        logger = setup_logger(log_dir)

        log_measurement(logger, {"run": 1, "elapsed_seconds": 0.5})
        for handler in logger.handlers:
            handler.flush()

        files = list(log_dir.glob("stopwatch_*.jsonl"))
        assert len(files) == 1

        lines = files[0].read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1
        entry = json.loads(lines[0])
        assert entry["message"] == "Measurement logged"
        assert entry["logger"] == "stopwatch.measurement"
        assert entry["run"] == 1
        assert entry["elapsed_seconds"] == 0.5

    def test_no_log_path(self, cleanup_logger):
        """Without a log path or verbose flag only a null handler is attached."""
        logger = setup_logger(None)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.NullHandler)

    def test_verbose_adds_console_handler(self, cleanup_logger):
        """Verbose mode logs to the console."""
        logger = setup_logger(None, verbose=True)
        assert len(logger.handlers) == 1
        assert type(logger.handlers[0]) is logging.StreamHandler

    def test_replaces_existing_handlers(self, tmp_path, cleanup_logger):
        """Calling setup_logger twice does not stack handlers."""
        setup_logger(tmp_path, verbose=True)
        logger = setup_logger(tmp_path, verbose=True)
        assert len(logger.handlers) == 2

    def test_library_warnings_reach_log_file(self, tmp_path, make_clock, cleanup_logger):
        """Warnings from stopwatch modules land in the JSONL file."""
        from stopwatch import Stopwatch

        logger = setup_logger(tmp_path)
        clock = make_clock(start=1000)
        watch = Stopwatch.start_new(clock)
        clock.ticks = 0
        watch.stop()
        for handler in logger.handlers:
            handler.flush()

        (log_file,) = tmp_path.glob("stopwatch_*.jsonl")
        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "stopwatch.core"
        assert "clamping elapsed ticks" in entry["message"]
