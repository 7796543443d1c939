"""
Logging configuration for PunchTrunk.

Rich-formatted terminal logs by default, JSON lines when ``--json-logs`` is
set so CI systems can ingest phase events.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "punchtrunk"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class JsonLineFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": _level_name(record.levelno),
            "message": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if fields:
            payload.update(fields)
        event = getattr(record, "event", None)
        if event:
            payload["event"] = event
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class EventTextFilter(logging.Filter):
    """Append ``| key=value`` pairs of structured events to the message."""

    def filter(self, record: logging.LogRecord) -> bool:
        fields = getattr(record, "fields", None)
        if fields and not getattr(record, "_fields_rendered", False):
            extras = " ".join(sorted(f"{k}={v}" for k, v in fields.items()))
            record.msg = f"{record.getMessage()} | {extras}"
            record.args = None
            record._fields_rendered = True
        return True


def _level_name(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warn"
    if levelno >= logging.INFO:
        return "info"
    return "debug"


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    json_logs: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the punchtrunk logger.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        json_logs: Emit JSON lines instead of rich text
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance for punchtrunk
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handlers: list[logging.Handler] = []
    if json_logs:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(JsonLineFormatter())
        handlers.append(stream_handler)
    else:
        rich_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
        rich_handler.addFilter(EventTextFilter())
        handlers.append(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        if json_logs:
            file_handler.setFormatter(JsonLineFormatter())
        else:
            file_handler.addFilter(EventTextFilter())
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        handlers.append(file_handler)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'punchtrunk.hotspots.engine')
              If None, returns the root punchtrunk logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)

    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def log_event(logger: logging.Logger, level: str, event: str, **fields: Any) -> None:
    """Emit a structured event such as ``mode.start`` or ``sarif.write``."""
    logger.log(
        _LEVELS.get(level, logging.INFO),
        event,
        extra={"event": event, "fields": fields},
    )
