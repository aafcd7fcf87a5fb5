"""Notification text for Break Reminder application.

Builds the title and body shown for scheduler events. Kept free of any
toolkit so the wording can be tested directly.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .countdown_display import format_remaining
from .scheduler_types import ReminderDue, SnoozeConfirmed

REMINDER_TITLE = "🏃 Time for a Movement Break!"
SNOOZE_OVER_TITLE = "⏰ Snooze Over - Time to Move!"
SNOOZE_CONFIRMED_TITLE = "⏰ Break Reminder Snoozed"
SNOOZE_ACTION_HINT = "Click this message to wait {snooze}."


@dataclass(frozen=True)
class ReminderMessage:
    """Title and body of a notification."""

    title: str
    body: str


def _clock_time(moment: Optional[datetime]) -> str:
    return (moment or datetime.now()).strftime("%H:%M:%S")


def compose_reminder(event: ReminderDue, interval: int, snooze_duration: int) -> ReminderMessage:
    """Compose the notification for a due reminder.

    Args:
        event: The ReminderDue event
        interval: Configured interval in seconds at the time of firing
        snooze_duration: Snooze length in seconds, offered as the follow-up action

    Returns:
        ReminderMessage to show
    """
    at = _clock_time(event.fired_at)
    hint = SNOOZE_ACTION_HINT.format(snooze=format_remaining(snooze_duration))
    if event.was_snoozed:
        body = (
            f"Your {format_remaining(snooze_duration)} snooze is up at {at}. "
            "Time to stretch, walk around, or do some quick exercises! 💪"
        )
        return ReminderMessage(SNOOZE_OVER_TITLE, f"{body}\n{hint}")

    body = (
        f"It's been {format_remaining(interval)} at {at}. "
        "Time to stretch, walk around, or do some quick exercises! 💪"
    )
    return ReminderMessage(REMINDER_TITLE, f"{body}\n{hint}")


def compose_snooze_confirmation(event: SnoozeConfirmed) -> ReminderMessage:
    """Compose the short confirmation shown after snoozing."""
    return ReminderMessage(
        SNOOZE_CONFIRMED_TITLE,
        f"You'll be reminded again in {format_remaining(event.snooze_duration)}. ({_clock_time(event.confirmed_at)})",
    )
