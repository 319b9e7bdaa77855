"""Structured logging configuration.

This module initializes structlog loggers with a stable JSON format and
routes them through stdlib logging so one run can log to console and file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Protocol

import structlog

from core.errors import SweepConfigError

_LOG_FORMAT = "%(message)s"
_FILE_HANDLER_NAME = "sweep-file"
_STREAM_HANDLER_NAME = "sweep-console"
# Sink handlers are replaced, not stacked, when a process configures twice.
_SINK_HANDLER_NAMES = (_FILE_HANDLER_NAME, _STREAM_HANDLER_NAME)


class EventLogger(Protocol):
    """Structured event sink accepted by pipeline components."""

    def debug(self, event: str, **fields: Any) -> Any: ...

    def info(self, event: str, **fields: Any) -> Any: ...

    def warning(self, event: str, **fields: Any) -> Any: ...

    def error(self, event: str, **fields: Any) -> Any: ...


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger bound to the stdlib logger of the same name.
    """
    if not structlog.is_configured():
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
    return structlog.get_logger(name)


def configure_log_sink(log_dir: Path, log_file: str) -> Path:
    """Send log events to stdout and to a fresh file under ``log_dir``.

    Args:
        log_dir: Directory for the log file; created when missing.
        log_file: Log file name.

    Returns:
        Path of the log file.

    Raises:
        SweepConfigError: If the log directory cannot be created.
    """
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise SweepConfigError(
            f"Could not create log directory {log_dir}: {error}. Aborting before any cleanup."
        ) from error
    log_path = log_dir / log_file
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() in _SINK_HANDLER_NAMES:
            root_logger.removeHandler(handler)
            handler.close()
    formatter = logging.Formatter(_LOG_FORMAT)
    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.set_name(_FILE_HANDLER_NAME)
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.set_name(_STREAM_HANDLER_NAME)
    for handler in (file_handler, stream_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(logging.INFO)
    return log_path
