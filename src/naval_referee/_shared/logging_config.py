# Area: Shared
"""
naval_referee._shared.logging_config — Structured logging setup
===============================================================

Configures dual logging: terminal (colored) + file (JSON).
Provides rejection logging for the CLI.
Quiet mode suppresses standard logs on the terminal so that only
command results are printed.
"""

from __future__ import annotations
import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..errors import ContractError

# Package logger
logger = logging.getLogger("naval_referee")

# Flag to control terminal output
_quiet_mode_enabled = False


class QuietFilter(logging.Filter):
    """Filter that suppresses terminal logs below WARNING in quiet mode."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not _quiet_mode_enabled or record.levelno >= logging.WARNING


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy so the file handler still sees the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """JSON formatter for file output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("operation", "game_id", "error_type"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def setup_logging(
    log_file_path: Optional[str] = "naval_referee.log",
    level: int = logging.INFO,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str, optional
        Path to the log file. None disables file logging.
    level : int
        Logging level. Defaults to INFO.
    """
    pkg_logger = logging.getLogger("naval_referee")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    # Terminal handler with colors (stderr keeps stdout for command output)
    terminal_handler = logging.StreamHandler(sys.stderr)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    terminal_handler.addFilter(QuietFilter())
    pkg_logger.addHandler(terminal_handler)

    # File handler with JSON
    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_rejection(error: "ContractError") -> None:
    """
    Log a rejected operation in the structured format.

    Parameters
    ----------
    error : ContractError
        The rejection to log.
    """
    # Print to terminal (bypassing logger for exact formatting)
    print(error.format_error_log(), file=sys.stderr)

    # Also log to file via logger
    logger.error(
        f"Operation rejected: {error}",
        extra={
            "operation": error.operation,
            "game_id": error.game_id,
            "error_type": error.error_type,
        },
    )


def enable_quiet_mode() -> None:
    """Only WARNING and above reach the terminal; file logging is unchanged."""
    global _quiet_mode_enabled
    _quiet_mode_enabled = True


def disable_quiet_mode() -> None:
    """Restore standard terminal logging."""
    global _quiet_mode_enabled
    _quiet_mode_enabled = False


def is_quiet_mode_enabled() -> bool:
    return _quiet_mode_enabled
