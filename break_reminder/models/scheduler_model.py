"""Reminder Scheduler model for Break Reminder application.

This module contains the ReminderScheduler class, the state machine that
counts down reminder cycles, handles pause, snooze and live interval
changes, and keeps suspend time out of the countdown.

The scheduler is synchronous and push-based: an external one-second pulse
calls ``tick()`` and every other input is a discrete method call. Each call
returns a ``SchedulerUpdate`` carrying the new display string and any events
emitted by the transition.
"""

import functools
import threading
import time
from dataclasses import replace
from typing import Callable, Optional

from ..utils.structured_logging import EnhancedLoggerMixin
from .countdown_display import display_label
from .scheduler_types import (
    COUNTING_MODES,
    ConfigurationRejected,
    InvalidTransition,
    ReminderDue,
    SchedulerConfig,
    SchedulerError,
    SchedulerEvent,
    SchedulerMode,
    SchedulerUpdate,
    SnoozeConfirmed,
)

# If more than two minutes pass between ticks the machine most likely slept
DEFAULT_SUSPEND_GAP_THRESHOLD = 120.0


def _transition(method):
    """Run a scheduler operation under the lock, then dispatch its events."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            update = method(self, *args, **kwargs)
        self._dispatch_events(update)
        return update

    return wrapper


class ReminderScheduler(EnhancedLoggerMixin):
    """State machine driving periodic break reminders.

    Modes: ``STOPPED -> RUNNING <-> PAUSED`` and ``RUNNING -> SNOOZED ->
    RUNNING``. A finished snooze always resolves into a fresh normal cycle.
    Operations never raise for bad timing; invalid requests are logged and
    reported through ``SchedulerUpdate.error`` with state left unchanged.
    """

    def __init__(
        self,
        config: Optional[SchedulerConfig] = None,
        clock: Callable[[], float] = time.time,
        suspend_gap_threshold: float = DEFAULT_SUSPEND_GAP_THRESHOLD,
    ):
        """Initialize the ReminderScheduler.

        Args:
            config: Timing configuration (defaults to 15 minute interval, 5 minute snooze)
            clock: Wall-clock source in seconds, used only to measure suspend gaps
            suspend_gap_threshold: Gap between ticks, in seconds, that is logged as a missed suspend
        """
        self._config = config or SchedulerConfig()
        self._clock = clock
        self._suspend_gap_threshold = suspend_gap_threshold
        self._lock = threading.RLock()

        self._mode = SchedulerMode.STOPPED
        self._remaining = 0
        self._paused_from: Optional[SchedulerMode] = None
        self._last_tick_instant: Optional[float] = None
        self._suspended_at: Optional[float] = None

        self._event_callbacks: list[Callable[[SchedulerEvent], None]] = []

        self.structured_logger.info(
            "ReminderScheduler initialized",
            interval_s=self._config.interval,
            snooze_s=self._config.snooze_duration,
        )

    # ============== Properties ==============

    @property
    def mode(self) -> SchedulerMode:
        return self._mode

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def config(self) -> SchedulerConfig:
        return self._config

    @property
    def display(self) -> str:
        return display_label(self._mode, self._remaining)

    @property
    def is_counting(self) -> bool:
        """Check if ticks currently advance the countdown."""
        return self._mode in COUNTING_MODES

    @property
    def is_snoozed(self) -> bool:
        """Check if the current cycle is a snooze, including a paused one."""
        return self._mode is SchedulerMode.SNOOZED or (
            self._mode is SchedulerMode.PAUSED and self._paused_from is SchedulerMode.SNOOZED
        )

    def snapshot(self) -> SchedulerUpdate:
        """Get the current state as an unchanged update."""
        with self._lock:
            return self._update(changed=False)

    # ============== Callbacks ==============

    def add_event_callback(self, callback: Callable[[SchedulerEvent], None]) -> None:
        """Add callback for emitted events.

        Callbacks run after the transition has completed and the lock is
        released, so they may call back into the scheduler.

        Args:
            callback: Function to call with each ReminderDue or SnoozeConfirmed event
        """
        self._event_callbacks.append(callback)
        self.logger.debug("Scheduler event callback added", extra={"callback": str(callback)})

    def remove_event_callback(self, callback: Callable[[SchedulerEvent], None]) -> bool:
        """Remove an event callback.

        Returns:
            True if callback was removed, False if not found
        """
        try:
            self._event_callbacks.remove(callback)
            return True
        except ValueError:
            return False

    def _dispatch_events(self, update: SchedulerUpdate) -> None:
        for event in update.events:
            for callback in list(self._event_callbacks):
                try:
                    callback(event)
                except Exception:
                    self.logger.exception("Error in scheduler event callback", extra={"callback": str(callback)})

    # ============== Operations ==============

    @_transition
    def start(self) -> SchedulerUpdate:
        """Begin a fresh normal cycle from STOPPED or PAUSED.

        Returns:
            Update with ``remaining`` set to the full interval
        """
        if self._mode in COUNTING_MODES:
            self.structured_logger.debug("Start ignored, already counting", mode=self._mode)
            return self._update(changed=False)

        if not self._config.is_active:
            was_stopped = self._mode is SchedulerMode.STOPPED
            self._enter_stopped()
            return self._reject(ConfigurationRejected(self._config.interval), changed=not was_stopped)

        self._paused_from = None
        self._remaining = self._config.interval
        self._last_tick_instant = self._clock()
        self._set_mode(SchedulerMode.RUNNING, reason="start")
        return self._update()

    @_transition
    def pause(self) -> SchedulerUpdate:
        """Freeze the current cycle, normal or snoozed."""
        if self._mode is SchedulerMode.PAUSED:
            return self._update(changed=False)
        if self._mode is SchedulerMode.STOPPED:
            return self._reject(InvalidTransition("pause", self._mode))

        self._paused_from = self._mode
        self._set_mode(SchedulerMode.PAUSED, reason="pause", remaining=self._remaining)
        return self._update()

    @_transition
    def resume(self) -> SchedulerUpdate:
        """Continue the frozen cycle without touching ``remaining``."""
        if self._mode in COUNTING_MODES:
            return self._update(changed=False)
        if self._mode is SchedulerMode.STOPPED:
            return self._reject(InvalidTransition("resume", self._mode))

        resumed_mode = self._paused_from or SchedulerMode.RUNNING
        self._paused_from = None
        self._last_tick_instant = self._clock()
        self._set_mode(resumed_mode, reason="resume", remaining=self._remaining)
        return self._update()

    @_transition
    def tick(self) -> SchedulerUpdate:
        """Advance the countdown by one second.

        When the cycle reaches zero a ReminderDue event is emitted and the
        next normal cycle starts from the currently configured interval.
        Ticks outside RUNNING or SNOOZED are ignored.
        """
        if self._mode not in COUNTING_MODES:
            self.structured_logger.trace("Tick ignored", mode=self._mode)
            return self._update(changed=False)

        now = self._clock()
        self._check_tick_gap(now)
        self._last_tick_instant = now

        self._remaining = max(self._remaining - 1, 0)
        if self._remaining > 0:
            return self._update()

        event = ReminderDue(was_snoozed=self._mode is SchedulerMode.SNOOZED)
        self.structured_logger.info("Reminder due", was_snoozed=event.was_snoozed)

        if not self._config.is_active:
            self._enter_stopped()
            return self._reject(ConfigurationRejected(self._config.interval), events=(event,))

        self._remaining = self._config.interval
        self._set_mode(SchedulerMode.RUNNING, reason="cycle complete")
        return self._update(events=(event,))

    @_transition
    def snooze(self) -> SchedulerUpdate:
        """Replace the current normal cycle with a snooze countdown.

        Re-snoozing an active snooze is a no-op; snoozes do not stack.
        """
        if self.is_snoozed:
            self.structured_logger.debug("Snooze ignored, already snoozed", remaining=self._remaining)
            return self._update(changed=False)
        if self._mode is SchedulerMode.STOPPED:
            return self._reject(InvalidTransition("snooze", self._mode))

        self._paused_from = None
        self._remaining = self._config.snooze_duration
        self._last_tick_instant = self._clock()
        self._set_mode(SchedulerMode.SNOOZED, reason="snooze", remaining=self._remaining)
        return self._update(events=(SnoozeConfirmed(snooze_duration=self._config.snooze_duration),))

    @_transition
    def set_interval(self, interval: int) -> SchedulerUpdate:
        """Replace the configured interval.

        Args:
            interval: New interval in seconds

        Returns:
            Update reflecting the new countdown, or ConfigurationRejected for a non-positive interval
        """
        return self._apply_config(replace(self._config, interval=interval))

    @_transition
    def set_config(self, config: SchedulerConfig) -> SchedulerUpdate:
        """Atomically replace the whole timing configuration.

        The interval follows the same rules as ``set_interval``; a new snooze
        duration applies from the next snooze.
        """
        return self._apply_config(config)

    @_transition
    def stop(self) -> SchedulerUpdate:
        """Stop counting entirely."""
        if self._mode is SchedulerMode.STOPPED:
            return self._update(changed=False)
        self._enter_stopped()
        return self._update()

    @_transition
    def on_suspend(self) -> SchedulerUpdate:
        """Record the instant the host went to sleep."""
        now = self._clock()
        self._suspended_at = now
        self._last_tick_instant = now
        self.structured_logger.info("System suspending", mode=self._mode, remaining=self._remaining)
        return self._update(changed=False)

    @_transition
    def on_resume(self, gap: Optional[float] = None) -> SchedulerUpdate:
        """Note the host waking up.

        Suspend time is excluded from the countdown: ``remaining`` is left
        exactly as it was, and the caller re-arms its tick source from it.

        Args:
            gap: Measured suspend duration in seconds. If None, measured from ``on_suspend``.
        """
        now = self._clock()
        if gap is None and self._suspended_at is not None:
            gap = now - self._suspended_at
        self._suspended_at = None
        self._last_tick_instant = now

        self.structured_logger.info(
            "System resumed",
            gap_s=f"{gap:.0f}" if gap is not None else "unknown",
            mode=self._mode,
            remaining=self._remaining,
        )
        return self._update(changed=False)

    # ============== Internals ==============

    def _apply_config(self, config: SchedulerConfig) -> SchedulerUpdate:
        old_config = self._config
        if config == old_config:
            return self._update(changed=False)

        self._config = config
        if config.interval == old_config.interval:
            self.structured_logger.info("Snooze duration changed", snooze_s=config.snooze_duration)
            return self._update()

        self.structured_logger.info(
            "Interval changed",
            old_interval_s=old_config.interval,
            new_interval_s=config.interval,
            mode=self._mode,
        )

        if self.is_snoozed:
            # The snooze keeps counting; the new interval applies to the cycle after it
            if not config.is_active:
                return self._reject(ConfigurationRejected(config.interval), changed=True)
            return self._update()

        if not config.is_active:
            self._enter_stopped()
            return self._reject(ConfigurationRejected(config.interval), changed=True)

        if self._mode is SchedulerMode.RUNNING:
            self._remaining = config.interval
            self._last_tick_instant = self._clock()
        elif self._mode is SchedulerMode.STOPPED:
            self._remaining = config.interval
        # PAUSED keeps its frozen remaining; the next cycle picks up the new interval
        return self._update()

    def _check_tick_gap(self, now: float) -> None:
        if self._last_tick_instant is None:
            return
        gap = now - self._last_tick_instant
        if gap > self._suspend_gap_threshold:
            self.structured_logger.warning(
                "Tick gap detected, treating as unsignalled suspend",
                gap_s=f"{gap:.0f}",
                remaining=self._remaining,
            )

    def _enter_stopped(self) -> None:
        self._paused_from = None
        self._remaining = 0
        self._last_tick_instant = None
        self._set_mode(SchedulerMode.STOPPED, reason="stop")

    def _set_mode(self, new_mode: SchedulerMode, reason: str, **kwargs) -> None:
        old_mode = self._mode
        self._mode = new_mode
        if old_mode is not new_mode:
            self.log_state_change(old_mode, new_mode, reason=reason, **kwargs)

    def _reject(
        self, error: SchedulerError, events: tuple[SchedulerEvent, ...] = (), changed: bool = False
    ) -> SchedulerUpdate:
        self.structured_logger.warning(str(error), error_type=type(error).__name__, mode=self._mode)
        return self._update(events=events, changed=changed or bool(events), error=error)

    def _update(
        self,
        events: tuple[SchedulerEvent, ...] = (),
        changed: bool = True,
        error: Optional[SchedulerError] = None,
    ) -> SchedulerUpdate:
        return SchedulerUpdate(
            mode=self._mode,
            remaining=self._remaining,
            display=self.display,
            events=events,
            changed=changed,
            error=error,
        )
