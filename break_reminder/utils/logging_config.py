"""Logging configuration for Break Reminder application.

This module provides centralized logging configuration
for the entire application.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

TRACE = 5

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(filename)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Global logging configuration storage
_logging_config: dict[str, Any] = {}


def _store_logging_config(config: dict[str, Any]) -> None:
    """Store logging configuration for global access."""
    _logging_config.update(config)


def get_logging_config() -> dict[str, Any]:
    """Get current logging configuration."""
    return _logging_config.copy()


def _setup_trace_level() -> None:
    """Setup TRACE logging level if not already defined."""
    if not hasattr(logging, "TRACE"):
        logging.TRACE = TRACE
        logging.addLevelName(TRACE, "TRACE")

        def trace(self, message, *args, **kwargs):
            if self.isEnabledFor(TRACE):
                self._log(TRACE, message, args, **kwargs)

        logging.Logger.trace = trace


def _get_logging_level(verbosity: int) -> int:
    """Get logging level based on verbosity."""
    if verbosity == 1:
        return logging.INFO
    elif verbosity == 2:
        return logging.DEBUG
    elif verbosity >= 3:
        return TRACE
    else:
        return logging.WARNING


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
) -> None:
    """Setup logging configuration for the application.

    Args:
        verbosity: Logging verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3=TRACE)
        log_file: Optional path to log file. If None, no file logging.
        log_to_console: Whether to log to console (default: True)
    """
    _setup_trace_level()
    logging_level = _get_logging_level(verbosity)

    _store_logging_config({
        "verbosity": verbosity,
        "log_file": log_file,
        "log_to_console": log_to_console,
    })

    handlers: list[logging.Handler] = []

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging_level)
        console_handler.setFormatter(logging.Formatter(fmt=SIMPLE_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(console_handler)

    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
            handlers.append(file_handler)
        except OSError as e:
            print(f"Warning: Could not setup file logging to {log_file}: {e}", file=sys.stderr)

    # Root level must let file DEBUG records through even when the console is quieter
    root_level = min(logging_level, logging.DEBUG) if log_file else logging_level
    logging.basicConfig(
        level=root_level,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )

    logging.captureWarnings(capture=True)

    _configure_third_party_loggers()

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured - Level: {logging.getLevelName(logging_level)}")
    if log_file:
        logger.info(f"File logging enabled: {log_file}")


def _configure_third_party_loggers() -> None:
    """Configure logging levels for third-party libraries."""
    logging.getLogger("PyQt6").setLevel(logging.WARNING)


def get_verbosity_level() -> int:
    """Get current verbosity level from configuration."""
    return _logging_config.get("verbosity", 0)


class LoggerMixin:
    """Mixin class to add logging capability to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get a logger instance for this class.

        Returns:
            Logger instance named after the class module and name
        """
        if not hasattr(self, "_logger"):
            self._logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
        return self._logger
