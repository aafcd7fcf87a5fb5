"""System tray view for Break Reminder application.

This module contains the BreakReminderTrayView class that shows the
countdown label, the control menu, and the reminder notifications.
"""

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QRectF, Qt
from PyQt6.QtGui import QAction, QColor, QIcon, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QMenu, QSystemTrayIcon

from ..models.countdown_display import PAUSED_LABEL
from ..models.reminder_messages import ReminderMessage
from ..models.scheduler_types import SchedulerMode

ICON_NAME = "daytime-sunrise-symbolic"
FALLBACK_ICON_NAME = "appointment-soon-symbolic"


def _draw_fallback_icon(size: int = 64) -> QIcon:
    """Draw a simple clock face for desktops without the themed icon."""
    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.GlobalColor.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    pen = QPen(QColor(0, 120, 255), size / 10)
    painter.setPen(pen)
    margin = size / 8
    painter.drawEllipse(QRectF(margin, margin, size - 2 * margin, size - 2 * margin))
    centre = size / 2
    painter.drawLine(int(centre), int(centre), int(centre), int(margin * 2.2))
    painter.drawLine(int(centre), int(centre), int(size - margin * 2.6), int(centre))
    painter.end()
    return QIcon(pixmap)


class BreakReminderTrayView(QObject):
    """Tray icon view for Break Reminder application.

    Receives the display string after every scheduler transition and
    surfaces reminders as tray messages. Clicking a reminder message asks
    the presenter to snooze.
    """

    def __init__(self, parent: QObject | None = None):
        """Initialize the BreakReminderTrayView."""
        super().__init__(parent)
        self.logger = logging.getLogger(__name__)

        # Callback functions (to be set by presenter)
        self.on_toggle_requested: Callable[[], None] | None = None
        self.on_restart_requested: Callable[[], None] | None = None
        self.on_snooze_requested: Callable[[], None] | None = None
        self.on_settings_requested: Callable[[], None] | None = None
        self.on_quit_requested: Callable[[], None] | None = None

        self._snooze_offer_active = False

        self.tray_icon: QSystemTrayIcon | None = None
        self.menu: QMenu | None = None
        self.status_action: QAction | None = None
        self.toggle_action: QAction | None = None
        self.restart_action: QAction | None = None
        self.snooze_action: QAction | None = None

        self._setup_ui()
        self.logger.info("BreakReminderTrayView initialized")

    @staticmethod
    def is_tray_available() -> bool:
        return QSystemTrayIcon.isSystemTrayAvailable()

    def _setup_ui(self) -> None:
        """Set up the tray icon and its menu."""
        icon = QIcon.fromTheme(ICON_NAME, QIcon.fromTheme(FALLBACK_ICON_NAME))
        if icon.isNull():
            icon = _draw_fallback_icon()

        self.tray_icon = QSystemTrayIcon(icon, self)
        self.tray_icon.messageClicked.connect(self._on_message_clicked)

        self.menu = QMenu()

        self.status_action = QAction("", self.menu)
        self.status_action.setEnabled(False)
        self.menu.addAction(self.status_action)
        self.menu.addSeparator()

        self.toggle_action = QAction("Start Reminders", self.menu)
        self.toggle_action.triggered.connect(lambda: self._invoke(self.on_toggle_requested))
        self.menu.addAction(self.toggle_action)

        self.restart_action = QAction("Restart Cycle", self.menu)
        self.restart_action.triggered.connect(lambda: self._invoke(self.on_restart_requested))
        self.menu.addAction(self.restart_action)

        self.snooze_action = QAction("Wait 5 minutes", self.menu)
        self.snooze_action.triggered.connect(lambda: self._invoke(self.on_snooze_requested))
        self.menu.addAction(self.snooze_action)

        self.menu.addSeparator()

        settings_action = QAction("Settings", self.menu)
        settings_action.triggered.connect(lambda: self._invoke(self.on_settings_requested))
        self.menu.addAction(settings_action)

        quit_action = QAction("Quit", self.menu)
        quit_action.triggered.connect(lambda: self._invoke(self.on_quit_requested))
        self.menu.addAction(quit_action)

        self.tray_icon.setContextMenu(self.menu)
        self.logger.debug("Tray UI setup completed")

    def show(self) -> None:
        self.tray_icon.show()

    def hide(self) -> None:
        self.tray_icon.hide()

    # ============== Status label sink ==============

    def set_display(self, text: str) -> None:
        """Show the countdown label."""
        self.status_action.setText(f"Next break: {text}" if text != PAUSED_LABEL else "Reminders paused")
        self.tray_icon.setToolTip(f"Break Reminder - {text}")

    def set_mode(self, mode: SchedulerMode, snoozed: bool, snooze_label: str) -> None:
        """Update menu actions for the scheduler mode.

        Args:
            mode: Current scheduler mode
            snoozed: Whether the current cycle is a snooze
            snooze_label: Snooze length as shown to the user
        """
        if mode is SchedulerMode.STOPPED:
            self.toggle_action.setText("Start Reminders")
        elif mode is SchedulerMode.PAUSED:
            self.toggle_action.setText("Resume Reminders")
        else:
            self.toggle_action.setText("Pause Reminders")

        self.restart_action.setEnabled(mode is not SchedulerMode.STOPPED)
        self.snooze_action.setText(f"Wait {snooze_label}")
        self.snooze_action.setEnabled(mode is not SchedulerMode.STOPPED and not snoozed)

    # ============== Notifier ==============

    def show_reminder(self, message: ReminderMessage, timeout_s: int) -> None:
        """Show a break reminder that offers snoozing when clicked."""
        self._snooze_offer_active = True
        self.tray_icon.showMessage(
            message.title, message.body, QSystemTrayIcon.MessageIcon.Information, timeout_s * 1000
        )
        self.logger.info(f"Reminder shown: {message.title}")

    def show_confirmation(self, message: ReminderMessage, timeout_s: int) -> None:
        """Show a short, non-interactive confirmation."""
        self._snooze_offer_active = False
        self.tray_icon.showMessage(
            message.title, message.body, QSystemTrayIcon.MessageIcon.NoIcon, timeout_s * 1000
        )

    def show_error(self, text: str, timeout_s: int = 5) -> None:
        self._snooze_offer_active = False
        self.tray_icon.showMessage("Break Reminder", text, QSystemTrayIcon.MessageIcon.Warning, timeout_s * 1000)

    def _on_message_clicked(self) -> None:
        if self._snooze_offer_active:
            self._snooze_offer_active = False
            self._invoke(self.on_snooze_requested)

    def _invoke(self, callback: Callable[[], None] | None) -> None:
        if callback:
            callback()
