"""Tests for the countdown display projection."""

import pytest

from break_reminder.models.countdown_display import display_label, format_remaining, format_total_time
from break_reminder.models.scheduler_types import SchedulerMode


class TestFormatRemaining:
    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "0s"),
            (1, "1s"),
            (45, "45s"),
            (60, "1m"),
            (90, "1m 30s"),
            (870, "14m 30s"),
            (900, "15m"),
            (7259, "120m 59s"),
        ],
    )
    def test_formats(self, seconds, expected):
        assert format_remaining(seconds) == expected

    def test_negative_clamps_to_zero(self):
        assert format_remaining(-4) == "0s"


class TestDisplayLabel:
    @pytest.mark.parametrize("mode", [SchedulerMode.RUNNING, SchedulerMode.SNOOZED, SchedulerMode.STOPPED])
    def test_counting_and_stopped_show_remaining(self, mode):
        assert display_label(mode, 125) == "2m 5s"

    def test_paused_shows_label(self):
        assert display_label(SchedulerMode.PAUSED, 125) == "Paused"


class TestFormatTotalTime:
    def test_disabled(self):
        assert format_total_time(0, 0) == "Timer disabled (0 seconds)"

    @pytest.mark.parametrize(
        "minutes,seconds,expected",
        [
            (1, 0, "1 minute"),
            (15, 0, "15 minutes"),
            (0, 1, "1 second"),
            (0, 30, "30 seconds"),
            (2, 1, "2 minutes and 1 second"),
        ],
    )
    def test_words(self, minutes, seconds, expected):
        assert format_total_time(minutes, seconds) == expected
