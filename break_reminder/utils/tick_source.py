"""One-second pulse source for Break Reminder application.

This module contains the QtTickSource class that wraps a QTimer and
delivers ticks to the scheduler owner on the Qt event loop.
"""

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer

TICK_INTERVAL_MS = 1000


class QtTickSource(QObject):
    """Periodic pulse driving the reminder countdown.

    The source is armed only while the scheduler counts down and must be
    cancelled whenever it stops or pauses.
    """

    def __init__(
        self,
        callback: Optional[Callable[[], None]] = None,
        interval_ms: int = TICK_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ):
        """Initialize the tick source.

        Args:
            callback: Function called on every tick
            interval_ms: Pulse period in milliseconds
            parent: Optional Qt parent object
        """
        super().__init__(parent)
        self.logger = logging.getLogger(__name__)
        self._callback = callback
        self._interval_ms = interval_ms

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_armed(self) -> bool:
        return self._timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def set_tick_callback(self, callback: Callable[[], None]) -> None:
        """Set the function called on every tick."""
        self._callback = callback

    def arm(self) -> None:
        """Start pulsing if not already running."""
        if not self._timer.isActive():
            self._timer.start()
            self.logger.debug("Tick source armed")

    def rearm(self) -> None:
        """Restart the pulse so the next tick is a full period away."""
        self._timer.stop()
        self._timer.start()
        self.logger.debug("Tick source re-armed")

    def cancel(self) -> None:
        """Stop pulsing."""
        if self._timer.isActive():
            self._timer.stop()
            self.logger.debug("Tick source cancelled")

    def _on_timeout(self) -> None:
        if self._callback is None:
            return
        try:
            self._callback()
        except Exception:
            self.logger.exception("Error in tick callback")
