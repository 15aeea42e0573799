"""
Centralized logging configuration.

Provides:
- Human-readable console logging (stderr, so command output stays clean)
- JSON structured logging for log files and machine consumption
- Automatic context injection (timestamp, module, level)
- Log level taken from AZC_LOG_LEVEL unless set explicitly

Usage:
    from azc.core.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Fetching pull requests", extra={"role": "author"})

Access tokens must never be passed to a logger, either in the message or in extra.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from azc.secure_config import get_config


class JSONFormatter(logging.Formatter):
    """
    Format log records as JSON for structured logging.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string"""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Extra fields (from logger.info("msg", extra={"extra_fields": {...}}))
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


class ContextFormatter(logging.Formatter):
    """
    Human-readable formatter for console output.

    Includes color coding for log levels (when supported).
    """

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with color coding"""
        levelname = record.levelname
        if sys.stderr.isatty():
            color = self.COLORS.get(levelname, "")
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{levelname}{self.RESET}"

        return super().format(record)


def setup_logging(
    level: str | None = None,
    log_file: Path | None = None,
    json_output: bool = False,
) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); defaults to AZC_LOG_LEVEL
        log_file: Optional file path for log output (always JSON)
        json_output: If True, use JSON formatter on the console as well

    Example:
        setup_logging(level="DEBUG")
        setup_logging(level="INFO", log_file=Path(".tmp/logs/azc.log"))
    """
    if level is None:
        level = get_config().get_log_level()
    log_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)

    if json_output:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            ContextFormatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(JSONFormatter())

        root_logger.addHandler(file_handler)

    # httpx logs full request URLs at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the specified module.

    Args:
        name: Module name (use __name__ in calling module)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: str, message: str, **context: Any) -> None:
    """
    Log message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        **context: Additional context fields (key-value pairs)

    Example:
        log_with_context(logger, "debug", "Resolved access token", source="azure-cli")
    """
    log_func = getattr(logger, level.lower())
    log_func(message, extra={"extra_fields": context})


# Default configuration (can be overridden by calling setup_logging)
if not logging.getLogger().handlers:
    setup_logging()
