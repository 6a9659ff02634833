"""Logging utilities with JSON formatting."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


class JSONFormatter(logging.Formatter):
    """Formats records as JSON lines, carrying any fields passed via ``extra=``."""

    # Attributes every LogRecord has; anything else came in through extra=
    RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, timezone.utc)
        log_data = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(
            (key, value) for key, value in vars(record).items() if key not in self.RESERVED
        )
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logger(log_path: Optional[Path], verbose: bool = False) -> logging.Logger:
    """
    Set up the stopwatch logger with JSON formatting.

    Args:
        log_path: Directory to write logs to, or None to skip file logging
        verbose: Whether to also log to console

    Returns:
        Configured logger
    """
    logger = logging.getLogger("stopwatch")
    logger.setLevel(logging.DEBUG)

    # Remove any existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    # File handler with JSON formatting
    if log_path is not None:
        log_path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
        log_file = log_path / f"stopwatch_{timestamp}.jsonl"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    # Console handler if verbose
    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(JSONFormatter())
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def log_measurement(logger: logging.Logger, data: Dict[str, Any]) -> None:
    """Log one timed run; each key of data becomes a field of the JSON line."""
    logger.getChild("measurement").info("Measurement logged", extra=data)
