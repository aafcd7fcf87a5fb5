"""Countdown display projection for Break Reminder application.

Pure functions that turn scheduler state into the strings shown in the
status area and the settings summary.
"""

from .scheduler_types import SchedulerMode

PAUSED_LABEL = "Paused"


def format_remaining(seconds: int) -> str:
    """Format a countdown as ``"45s"``, ``"15m"`` or ``"14m 30s"``."""
    minutes, secs = divmod(max(int(seconds), 0), 60)
    if minutes == 0:
        return f"{secs}s"
    if secs == 0:
        return f"{minutes}m"
    return f"{minutes}m {secs}s"


def display_label(mode: SchedulerMode, remaining: int) -> str:
    """Get the status label for a scheduler mode and remaining time.

    Args:
        mode: Current scheduler mode
        remaining: Seconds left in the current cycle

    Returns:
        ``"Paused"`` while paused, otherwise the formatted countdown
    """
    if mode is SchedulerMode.PAUSED:
        return PAUSED_LABEL
    return format_remaining(remaining)


def format_total_time(minutes: int, seconds: int) -> str:
    """Describe a configured interval in words for the settings form."""
    if minutes == 0 and seconds == 0:
        return "Timer disabled (0 seconds)"

    parts = []
    if minutes > 0:
        parts.append(f"{minutes} minute{'s' if minutes != 1 else ''}")
    if seconds > 0:
        parts.append(f"{seconds} second{'s' if seconds != 1 else ''}")
    return " and ".join(parts)
