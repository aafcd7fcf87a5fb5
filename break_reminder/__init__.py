"""Break Reminder - Periodic Movement Break Reminders.

This package provides a system tray application that reminds the user to
take regular breaks, using the MVP (Model-View-Presenter) architecture
pattern.
"""

from .main import main

__version__ = "0.1.0"
__author__ = "Break Reminder Team"
__description__ = "Break reminder tray application with pause, snooze and suspend-aware countdown"

__all__ = ["main"]
