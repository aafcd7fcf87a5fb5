"""Structured logging utilities for Break Reminder application.

This module provides key=value structured logging with contextual
information, used for state machine transitions and timing diagnostics.
"""

import logging
from contextlib import contextmanager
from typing import Any

from .logging_config import LoggerMixin


class StructuredLogger(LoggerMixin):
    """Logger wrapper that appends ``key=value`` context to every message."""

    def __init__(self, context: dict[str, Any] | None = None):
        """Initialize structured logger with optional context.

        Args:
            context: Default context to include in all log messages
        """
        self._context = context or {}

    def _format_message(self, message: str, **kwargs) -> str:
        """Format log message with context and additional data.

        Args:
            message: Base log message
            **kwargs: Additional contextual data

        Returns:
            Formatted message with context
        """
        full_context = {**self._context, **kwargs}

        if full_context:
            context_str = " | ".join([f"{k}={v}" for k, v in full_context.items()])
            return f"{message} | {context_str}"
        return message

    def trace(self, message: str, **kwargs) -> None:
        """Log trace message with context."""
        self.logger.log(5, self._format_message(message, **kwargs))

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message with context."""
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs) -> None:
        """Log info message with context."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message with context."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs) -> None:
        """Log error message with context."""
        self.logger.error(self._format_message(message, **kwargs))

    def exception(self, message: str, **kwargs) -> None:
        """Log exception message with context."""
        self.logger.exception(self._format_message(message, **kwargs))

    def update_context(self, **kwargs) -> None:
        """Update the default context for this logger."""
        self._context.update(kwargs)

    @contextmanager
    def context(self, **kwargs):
        """Temporary context manager for logging with additional context.

        Args:
            **kwargs: Temporary context data
        """
        original_context = self._context.copy()
        self._context.update(kwargs)
        try:
            yield self
        finally:
            self._context = original_context


class EnhancedLoggerMixin(LoggerMixin):
    """Logger mixin with structured logging helpers."""

    _structured_logger: StructuredLogger | None = None

    @property
    def structured_logger(self) -> StructuredLogger:
        """Get structured logger instance for this class.

        Returns:
            StructuredLogger instance with class context
        """
        if self._structured_logger is None:
            context = {"class": self.__class__.__name__}
            if hasattr(self, "name"):
                context["instance_name"] = str(self.name)

            self._structured_logger = create_contextual_logger(self.__class__.__module__, context)
        return self._structured_logger

    def log_state_change(self, old_state: Any, new_state: Any, **kwargs) -> None:
        """Log state changes.

        Args:
            old_state: Previous state
            new_state: New state
            **kwargs: Additional context
        """
        self.structured_logger.info("State change", old_state=str(old_state), new_state=str(new_state), **kwargs)


def create_contextual_logger(name: str, context: dict[str, Any] | None = None) -> StructuredLogger:
    """Create a contextual logger with the given name and context.

    Args:
        name: Logger name
        context: Default context for the logger

    Returns:
        StructuredLogger instance
    """
    logger = StructuredLogger(context)
    logger._logger = logging.getLogger(name)
    return logger


def get_structured_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        StructuredLogger instance
    """
    return create_contextual_logger(name)
