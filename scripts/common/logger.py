"""
Proctor logging configuration.

Provides structured logging with colorized console output via colorama.
Supports both console (colorized) and file logging.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from colorama import Fore, Style, init as colorama_init

from .constants import LOG_LEVEL_ENV_VAR

colorama_init()


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds color to log levels for console output."""

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with color based on level."""
        color = self.COLORS.get(record.levelno, "")
        reset = Style.RESET_ALL if color else ""

        original_msg = record.msg
        record.msg = f"{color}{original_msg}{reset}"
        result = super().format(record)
        record.msg = original_msg  # Restore for other handlers

        return result


def resolve_log_level(level: Optional[object] = None) -> int:
    """
    Turn a level name, number, or None into a logging level.

    None falls back to the PROCTOR_LOG_LEVEL environment variable, then INFO.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def setup_logger(
    name: str = "proctor",
    level: Optional[object] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Setup and return a configured logger for proctor modules.

    Args:
        name: Logger name (default: "proctor")
        level: Logging level (defaults to env var PROCTOR_LOG_LEVEL or INFO)
        log_file: Optional file path for log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        if level is not None:
            logger.setLevel(resolve_log_level(level))
        return logger

    logger.setLevel(resolve_log_level(level))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        ColoredFormatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "proctor") -> logging.Logger:
    """
    Get or create a logger for the proctor modules.

    Child loggers ("proctor.something") propagate to the configured
    "proctor" logger instead of getting handlers of their own.

    Args:
        name: Logger name (default: "proctor")

    Returns:
        Logger instance
    """
    if name.startswith("proctor."):
        setup_logger("proctor")
        return logging.getLogger(name)
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger
