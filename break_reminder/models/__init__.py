"""Models package for Break Reminder application.

This package contains the reminder scheduler state machine and the
toolkit-free data and configuration classes around it.
"""

from .configuration_model import ConfigurationData, ConfigurationModel
from .countdown_display import display_label, format_remaining, format_total_time
from .scheduler_model import ReminderScheduler
from .scheduler_types import (
    ConfigurationRejected,
    InvalidTransition,
    ReminderDue,
    SchedulerConfig,
    SchedulerError,
    SchedulerMode,
    SchedulerUpdate,
    SnoozeConfirmed,
)

__all__ = [
    "ConfigurationData",
    "ConfigurationModel",
    "ConfigurationRejected",
    "InvalidTransition",
    "ReminderDue",
    "ReminderScheduler",
    "SchedulerConfig",
    "SchedulerError",
    "SchedulerMode",
    "SchedulerUpdate",
    "SnoozeConfirmed",
    "display_label",
    "format_remaining",
    "format_total_time",
]
