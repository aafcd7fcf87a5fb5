"""Suspend and resume notifications for Break Reminder application.

On Linux the source subscribes to logind's ``PrepareForSleep`` signal on
the system bus. Where that is not possible the application keeps working
with ticks only: timers do not fire while the machine sleeps, so the
countdown pauses on its own.
"""

import logging
import sys
import time
from typing import Callable, Optional

from PyQt6.QtCore import QObject, pyqtSlot

LOGIND_SERVICE = "org.freedesktop.login1"
LOGIND_PATH = "/org/freedesktop/login1"
LOGIND_INTERFACE = "org.freedesktop.login1.Manager"
PREPARE_FOR_SLEEP = "PrepareForSleep"

logger = logging.getLogger(__name__)


class PowerEventSource:
    """Delivers suspend and resume notifications to callbacks.

    The resume callback receives the measured suspend duration in seconds,
    or None when the suspend instant was not seen.
    """

    available = False

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._suspended_at: Optional[float] = None
        self._suspend_callback: Optional[Callable[[], None]] = None
        self._resume_callback: Optional[Callable[[Optional[float]], None]] = None

    def set_suspend_callback(self, callback: Callable[[], None]) -> None:
        self._suspend_callback = callback

    def set_resume_callback(self, callback: Callable[[Optional[float]], None]) -> None:
        self._resume_callback = callback

    def close(self) -> None:
        """Stop delivering notifications."""

    def _emit_suspend(self) -> None:
        self._suspended_at = self._clock()
        if self._suspend_callback:
            try:
                self._suspend_callback()
            except Exception:
                logger.exception("Error in suspend callback")

    def _emit_resume(self) -> None:
        gap = self._clock() - self._suspended_at if self._suspended_at is not None else None
        self._suspended_at = None
        if self._resume_callback:
            try:
                self._resume_callback(gap)
            except Exception:
                logger.exception("Error in resume callback")


class NullPowerEventSource(PowerEventSource):
    """Power event source for platforms without suspend signalling."""


class _PrepareForSleepReceiver(QObject):
    """Qt slot target for the D-Bus signal."""

    def __init__(self, handler: Callable[[bool], None], parent: Optional[QObject] = None):
        super().__init__(parent)
        self._handler = handler

    @pyqtSlot(bool)
    def prepare_for_sleep(self, going_to_sleep: bool) -> None:
        self._handler(going_to_sleep)


class LogindPowerEventSource(PowerEventSource):
    """Power event source backed by systemd-logind over the system bus."""

    def __init__(self, parent: Optional[QObject] = None, clock: Callable[[], float] = time.time):
        super().__init__(clock)
        self._receiver = _PrepareForSleepReceiver(self._on_prepare_for_sleep, parent)
        self._bus = None

    def start(self) -> bool:
        """Subscribe to the logind signal.

        Returns:
            True if the subscription is active, False otherwise
        """
        from PyQt6.QtDBus import QDBusConnection

        bus = QDBusConnection.systemBus()
        if not bus.isConnected():
            logger.warning("System bus not reachable: %s", bus.lastError().message())
            return False

        connected = bus.connect(
            LOGIND_SERVICE,
            LOGIND_PATH,
            LOGIND_INTERFACE,
            PREPARE_FOR_SLEEP,
            self._receiver.prepare_for_sleep,
        )
        if not connected:
            logger.warning("Could not subscribe to %s.%s", LOGIND_INTERFACE, PREPARE_FOR_SLEEP)
            return False

        self._bus = bus
        self.available = True
        logger.info("Sleep detection initialized")
        return True

    def close(self) -> None:
        if self._bus is not None:
            self._bus.disconnect(
                LOGIND_SERVICE,
                LOGIND_PATH,
                LOGIND_INTERFACE,
                PREPARE_FOR_SLEEP,
                self._receiver.prepare_for_sleep,
            )
            self._bus = None
            self.available = False
            logger.debug("Sleep detection closed")

    def _on_prepare_for_sleep(self, going_to_sleep: bool) -> None:
        if going_to_sleep:
            logger.info("System going to sleep")
            self._emit_suspend()
        else:
            logger.info("System resuming from sleep")
            self._emit_resume()


def create_power_event_source(parent: Optional[QObject] = None) -> PowerEventSource:
    """Create the best available power event source for this platform.

    Falls back to a NullPowerEventSource, logging the degradation once.
    """
    if sys.platform.startswith("linux"):
        try:
            source = LogindPowerEventSource(parent)
            if source.start():
                return source
        except ImportError:
            logger.warning("QtDBus is not available")

    logger.warning("Suspend detection unavailable, continuing with tick-only timing")
    return NullPowerEventSource()
