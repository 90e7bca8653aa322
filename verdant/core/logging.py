"""
Logging for Verdant.

All loggers propagate to the root logger; ``setup_logging`` decides where
records go (stderr, optionally a file). ``StructuredLogger`` adds ``key=value``
context to a message, e.g.::

    logger.info("Created chunk", file="context_chunk_2.md", lines=800)
    [14:02:11] ℹ️  Created chunk (file=context_chunk_2.md, lines=800)
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from .utils import FileUtils


class VerdantFormatter(logging.Formatter):
    """Single-line formatter: time, level emoji, message, structured extras."""

    LEVEL_EMOJIS = {
        "DEBUG": "🔍",
        "INFO": "ℹ️",
        "WARNING": "⚠️",
        "ERROR": "❌",
        "CRITICAL": "🚨",
    }

    COLORS = {
        "DEBUG": "\033[90m",  # Gray
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = False, show_name: bool = False):
        super().__init__()
        self.use_color = use_color
        self.show_name = show_name

    def format(self, record: logging.LogRecord) -> str:
        emoji = self.LEVEL_EMOJIS.get(record.levelname, "📝")
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        prefix = f"[{timestamp}] {emoji}  "
        if self.show_name:
            prefix += f"{record.name}: "
        message = prefix + record.getMessage()

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            message += " (" + ", ".join(f"{key}={value}" for key, value in extra_data.items()) + ")"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        if self.use_color:
            color = self.COLORS.get(record.levelname, "")
            message = f"{color}{message}{self.RESET}"

        return message


def _is_tty(stream: TextIO) -> bool:
    return hasattr(stream, "isatty") and stream.isatty()


class StructuredLogger:
    """
    Thin wrapper over a stdlib logger whose level methods take keyword context.

    The wrapper owns no handlers. Without an explicit level it follows the
    root logger, so ``setup_logging("DEBUG")`` turns on its debug output too.
    """

    def __init__(self, name: str, level: str | None = None):
        self.logger = logging.getLogger(name)
        if level:
            self.set_level(level)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)

    def set_level(self, level: str) -> None:
        self.logger.setLevel(getattr(logging, level.upper()))

    def _log(self, level: int, message: str, extra_data: dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        # stacklevel 3 attributes the record to the caller of debug()/info()
        self.logger.log(level, message, extra={"extra_data": extra_data}, stacklevel=3)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Configure the root logger for a command run.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives the same records, uncoloured
        stream: Console stream, stderr when omitted
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    stream = stream or sys.stderr
    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(VerdantFormatter(use_color=_is_tty(stream)))
    root_logger.addHandler(console_handler)

    if log_file:
        FileUtils.ensure_directory(log_file.parent)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(VerdantFormatter(show_name=True))
        root_logger.addHandler(file_handler)


def get_logger(name: str, level: str | None = None) -> StructuredLogger:
    """Structured logger for a module (pass ``__name__``)."""
    return StructuredLogger(name, level)
