"""Core type definitions for the reminder scheduler.

This module defines:
- Scheduler modes and configuration
- Events emitted to notification collaborators
- Error values reported by transitions
- The update record every scheduler operation returns
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

DEFAULT_INTERVAL_SECONDS = 15 * 60
DEFAULT_SNOOZE_SECONDS = 5 * 60


# ============== Modes and Configuration ==============


class SchedulerMode(str, Enum):
    """Mode of the reminder scheduler."""

    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"
    SNOOZED = "snoozed"  # Counting down a snooze cycle

    def __str__(self) -> str:
        return self.value


COUNTING_MODES = frozenset({SchedulerMode.RUNNING, SchedulerMode.SNOOZED})


@dataclass(frozen=True)
class SchedulerConfig:
    """Timing configuration of the scheduler, in whole seconds.

    An ``interval`` of zero or less is a disabled configuration: the scheduler
    accepts it but refuses to count down with it.
    """

    interval: int = DEFAULT_INTERVAL_SECONDS
    snooze_duration: int = DEFAULT_SNOOZE_SECONDS

    def __post_init__(self):
        for name in ("interval", "snooze_duration"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int number of seconds, got {value!r}")
        if self.snooze_duration <= 0:
            raise ValueError(f"snooze_duration must be positive, got {self.snooze_duration}")

    @property
    def is_active(self) -> bool:
        return self.interval > 0

    @classmethod
    def from_minutes(cls, minutes: int, seconds: int = 0, snooze_minutes: int = 5) -> "SchedulerConfig":
        return cls(interval=minutes * 60 + seconds, snooze_duration=snooze_minutes * 60)


# ============== Events ==============


@dataclass(frozen=True)
class ReminderDue:
    """A cycle reached zero and the user should be reminded."""

    was_snoozed: bool
    fired_at: datetime = field(default_factory=datetime.now, compare=False)


@dataclass(frozen=True)
class SnoozeConfirmed:
    """A snooze cycle replaced the normal countdown."""

    snooze_duration: int
    confirmed_at: datetime = field(default_factory=datetime.now, compare=False)


SchedulerEvent = Union[ReminderDue, SnoozeConfirmed]


# ============== Errors ==============


class SchedulerError(Exception):
    """Base class for problems reported by scheduler transitions.

    Scheduler operations never raise these; they are returned in
    ``SchedulerUpdate.error`` so the caller can surface them.
    """


class InvalidTransition(SchedulerError):
    """Operation is not valid in the current mode."""

    def __init__(self, operation: str, mode: SchedulerMode):
        super().__init__(f"Cannot {operation} while {mode}")
        self.operation = operation
        self.mode = mode


class ConfigurationRejected(SchedulerError):
    """Configured interval cannot drive a countdown."""

    def __init__(self, interval: int):
        super().__init__(f"Reminder interval must be positive, got {interval}s")
        self.interval = interval


# ============== Update Record ==============


@dataclass(frozen=True)
class SchedulerUpdate:
    """Result of a scheduler operation."""

    mode: SchedulerMode
    remaining: int
    display: str
    events: tuple[SchedulerEvent, ...] = ()
    changed: bool = True
    error: Optional[SchedulerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reminder_due(self) -> Optional[ReminderDue]:
        """The reminder emitted by this update, if any."""
        for event in self.events:
            if isinstance(event, ReminderDue):
                return event
        return None
