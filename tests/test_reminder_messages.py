"""Tests for notification wording."""

from datetime import datetime

from break_reminder.models.reminder_messages import (
    REMINDER_TITLE,
    SNOOZE_CONFIRMED_TITLE,
    SNOOZE_OVER_TITLE,
    compose_reminder,
    compose_snooze_confirmation,
)
from break_reminder.models.scheduler_types import ReminderDue, SnoozeConfirmed

FIRED_AT = datetime(2024, 3, 1, 14, 5, 9)


def test_regular_reminder():
    message = compose_reminder(ReminderDue(was_snoozed=False, fired_at=FIRED_AT), interval=900, snooze_duration=300)

    assert message.title == REMINDER_TITLE
    assert message.body.startswith("It's been 15m at 14:05:09.")
    assert message.body.endswith("Click this message to wait 5m.")


def test_snooze_over_reminder():
    message = compose_reminder(ReminderDue(was_snoozed=True, fired_at=FIRED_AT), interval=900, snooze_duration=90)

    assert message.title == SNOOZE_OVER_TITLE
    assert message.body.startswith("Your 1m 30s snooze is up at 14:05:09.")


def test_snooze_confirmation():
    message = compose_snooze_confirmation(SnoozeConfirmed(snooze_duration=300, confirmed_at=FIRED_AT))

    assert message.title == SNOOZE_CONFIRMED_TITLE
    assert message.body == "You'll be reminded again in 5m. (14:05:09)"
