"""Structured logging for the weather widget.

Every record carries ``event_type`` and ``session_id`` so lookups of one
browser session can be followed through the JSON log (logs/widget.log,
10MB rotation, 5 backups). The console gets the same records as plain lines.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "widget.log"
APP_NAME = "weather-widget"

JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(event_type)s %(session_id)s %(message)s"
CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s [%(event_type)s] %(name)s: %(message)s"

# Chatty libraries kept at WARNING regardless of the widget's level
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class WidgetContextFilter(logging.Filter):
    """Fill in the widget's context fields on records that were logged without them."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "event_type", None):
            record.event_type = "log"
        if not hasattr(record, "session_id"):
            record.session_id = ""
        return True


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Route all logging to the JSON file and the console.

    Args:
        log_level: Level name for the console and the root logger
        log_dir: Directory of the rotating JSON log (defaults to ./logs)

    Returns:
        The configured root logger
    """
    level = logging.getLevelName(log_level.upper())
    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    context_filter = WidgetContextFilter()

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        jsonlogger.JsonFormatter(
            JSON_FORMAT,
            timestamp=True,
            static_fields={"app": APP_NAME},
            json_ensure_ascii=False,
        )
    )
    file_handler.addFilter(context_filter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    console_handler.setLevel(level)
    console_handler.addFilter(context_filter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log ``message`` with structured fields such as event_type and session_id."""
    getattr(logger, level.lower())(message, extra=extra_fields)
