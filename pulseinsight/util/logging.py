"""Structured logging configuration for pulseinsight.

Provides a centralized logging setup with:
- Console handler (stderr) with configurable level
- Optional file handler (JSON lines for machine parsing)
- Environment-based configuration

Usage:
    from pulseinsight.util.logging import get_logger, configure_logging

    configure_logging(level="DEBUG", json_file="decode.log")
    logger = get_logger(__name__)
    logger.warning("assigned to zero", extra={"row": 3, "column": 2})
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Module-level state
_configured = False
_root_logger_name = "pulseinsight"

# Extra fields copied into JSON records when present on the LogRecord.
_STRUCTURED_FIELDS = ("row", "column", "window_size", "baud_rate", "interval_index", "error_type", "path")


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON for machine parsing."""

    def format(self, record: logging.LogRecord) -> str:
        output: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _STRUCTURED_FIELDS:
            if hasattr(record, key):
                output[key] = getattr(record, key)
        if record.exc_info:
            output["traceback"] = "".join(traceback.format_exception(*record.exc_info))
        return json.dumps(output, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable console format with optional color."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname
        if self.use_color:
            color = self.LEVEL_COLORS.get(level, "")
            level_str = f"{color}{level:8}{self.RESET}"
        else:
            level_str = f"{level:8}"
        name = record.name.replace("pulseinsight.", "")
        msg = record.getMessage()
        context = " ".join(
            f"{key}={getattr(record, key)}" for key in ("row", "column") if hasattr(record, key)
        )
        base = f"[{ts}] {level_str} [{name}] {msg}"
        if context:
            base += f" ({context})"
        if record.exc_info:
            base += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return base


def configure_logging(
    *,
    level: Optional[str] = None,
    json_file: Optional[str] = None,
    use_color: bool = True,
) -> None:
    """Configure the pulseinsight logging subsystem.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO,
               or DEBUG if PULSEINSIGHT_DEBUG=1 is set.
        json_file: Optional path to write JSON-formatted logs.
        use_color: Whether to colorize console output (auto-disabled if not a TTY).

    This function is idempotent; calling it multiple times reconfigures handlers.
    """
    global _configured

    if level is None:
        if os.environ.get("PULSEINSIGHT_DEBUG", "").strip() in ("1", "true", "yes"):
            level = "DEBUG"
        else:
            level = os.environ.get("PULSEINSIGHT_LOG_LEVEL", "INFO").upper()

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(_root_logger_name)
    logger.setLevel(numeric_level)

    # Remove existing handlers to allow reconfiguration
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(ConsoleFormatter(use_color=use_color))
    logger.addHandler(console_handler)

    if json_file:
        try:
            file_handler = logging.FileHandler(json_file, mode="a", encoding="utf-8")
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(JSONFormatter())
            logger.addHandler(file_handler)
        except OSError as exc:
            logger.warning("Failed to open JSON log file %s: %s", json_file, exc)

    # Records still propagate so that pytest's caplog sees them.
    logger.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the pulseinsight namespace.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        A logging.Logger instance.

    Unlike configure_logging(), this does not install handlers; records
    reach the root logger until the CLI configures the namespace.
    """
    if not name.startswith(_root_logger_name):
        if name == "__main__":
            name = f"{_root_logger_name}.main"
        else:
            name = f"{_root_logger_name}.{name}"

    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    message: str,
    *,
    error_type: Optional[str] = None,
    **extra: Any,
) -> None:
    """Log an exception with structured context.

    Call this inside an except block to capture the current exception.

    Args:
        logger: The logger to use.
        message: Human-readable error description.
        error_type: Category of error (e.g., "input", "decode").
        **extra: Additional context fields.
    """
    extra_dict = dict(extra)
    if error_type:
        extra_dict["error_type"] = error_type
    logger.exception(message, extra=extra_dict)
