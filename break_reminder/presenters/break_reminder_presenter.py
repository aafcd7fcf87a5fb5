"""Break Reminder Presenter for the application.

This module contains the BreakReminderPresenter class that coordinates
the reminder scheduler, its tick and power event sources, the settings
store, and the tray view.
"""

import logging
from dataclasses import replace
from typing import Optional

from PyQt6.QtCore import QFileSystemWatcher, QObject
from PyQt6.QtWidgets import QApplication

from ..models.configuration_model import ConfigurationData, ConfigurationModel
from ..models.countdown_display import format_remaining
from ..models.reminder_messages import compose_reminder, compose_snooze_confirmation
from ..models.scheduler_model import ReminderScheduler
from ..models.scheduler_types import (
    ConfigurationRejected,
    ReminderDue,
    SchedulerConfig,
    SchedulerEvent,
    SchedulerMode,
    SchedulerUpdate,
    SnoozeConfirmed,
)
from ..utils.power_events import create_power_event_source
from ..utils.tick_source import QtTickSource
from ..views.settings_dialog import SettingsDialog
from ..views.tray_view import BreakReminderTrayView


class BreakReminderPresenter(QObject):
    """Presenter class for Break Reminder application.

    The presenter owns the single ReminderScheduler instance. Every input
    (tick, menu action, settings change, suspend, resume) is applied to the
    scheduler on the Qt event loop, and the resulting update is pushed to
    the view while the tick source is armed or cancelled to match.
    """

    def __init__(self, config_file_path: Optional[str] = None, interval_override: Optional[int] = None):
        """Initialize the BreakReminderPresenter.

        Args:
            config_file_path: Optional settings file path
            interval_override: Interval in seconds to use instead of the stored one for this session
        """
        super().__init__()
        self.logger = logging.getLogger(__name__)

        self._interval_override = interval_override

        # Initialize models
        self.config_model = ConfigurationModel(config_file_path)
        self.scheduler = ReminderScheduler(self._scheduler_config())
        self.scheduler.add_event_callback(self._on_scheduler_event)

        # Set up configuration callbacks
        self.config_model.add_interval_changed_callback(self._on_interval_changed)
        self.config_model.add_config_changed_callback(self._on_config_changed)

        # Time and power inputs
        self.tick_source = QtTickSource(self._handle_tick, parent=self)
        self.power_source = create_power_event_source(self)
        self.power_source.set_suspend_callback(self._handle_suspend)
        self.power_source.set_resume_callback(self._handle_resume)

        # External edits of the settings file apply live
        self._config_watcher = QFileSystemWatcher(self)
        self._config_watcher.fileChanged.connect(self._on_config_file_changed)
        self._config_watcher.directoryChanged.connect(self._on_config_file_changed)
        self._watch_config_file()

        # Initialize view
        self.view = BreakReminderTrayView(self)
        self._settings_dialog: Optional[SettingsDialog] = None
        self._connect_view_callbacks()

        self._apply_update(self.scheduler.snapshot())
        self.logger.info("BreakReminderPresenter initialized")

    def _connect_view_callbacks(self) -> None:
        """Connect view callbacks to presenter methods."""
        self.view.on_toggle_requested = self._handle_toggle
        self.view.on_restart_requested = self._handle_restart
        self.view.on_snooze_requested = self._handle_snooze
        self.view.on_settings_requested = self._handle_settings
        self.view.on_quit_requested = self._handle_quit

        self.logger.debug("View callbacks connected")

    def _scheduler_config(self) -> SchedulerConfig:
        config = self.config_model.to_scheduler_config()
        if self._interval_override is not None:
            config = replace(config, interval=self._interval_override)
        return config

    # ============== Public API ==============

    def show_view(self) -> None:
        self.view.show()

    def start_reminders(self) -> SchedulerUpdate:
        """Start a fresh reminder cycle."""
        update = self.scheduler.start()
        self._apply_update(update, rearm=update.changed)
        return update

    def shutdown(self) -> None:
        """Stop the countdown and release signal sources."""
        self.tick_source.cancel()
        self.scheduler.stop()
        self.power_source.close()
        self.view.hide()
        self.logger.info("BreakReminderPresenter shut down")

    # ============== Scheduler plumbing ==============

    def _apply_update(self, update: SchedulerUpdate, rearm: bool = False) -> None:
        """Push an update to the view and keep the tick source in step with the mode."""
        self.view.set_display(update.display)
        self.view.set_mode(
            update.mode,
            self.scheduler.is_snoozed,
            format_remaining(self.scheduler.config.snooze_duration),
        )

        if self.scheduler.is_counting:
            if rearm:
                self.tick_source.rearm()
            else:
                self.tick_source.arm()
        else:
            self.tick_source.cancel()

        if isinstance(update.error, ConfigurationRejected):
            self.view.show_error(
                "Reminders are off because the interval is 0 seconds. Open Settings to choose an interval."
            )

    def _on_scheduler_event(self, event: SchedulerEvent) -> None:
        config = self.config_model.config_data
        if isinstance(event, ReminderDue):
            message = compose_reminder(
                event,
                interval=self.scheduler.config.interval,
                snooze_duration=self.scheduler.config.snooze_duration,
            )
            self.view.show_reminder(message, config.notification_timeout)
        elif isinstance(event, SnoozeConfirmed):
            self.view.show_confirmation(compose_snooze_confirmation(event), config.confirmation_timeout)

    def _handle_tick(self) -> None:
        update = self.scheduler.tick()
        if update.changed:
            self._apply_update(update)

    # ============== View handlers ==============

    def _handle_toggle(self) -> None:
        mode = self.scheduler.mode
        if mode is SchedulerMode.STOPPED:
            self.start_reminders()
        elif mode is SchedulerMode.PAUSED:
            self._apply_update(self.scheduler.resume(), rearm=True)
        else:
            self._apply_update(self.scheduler.pause())

    def _handle_restart(self) -> None:
        if self.scheduler.is_counting:
            self.scheduler.pause()
        self.start_reminders()

    def _handle_snooze(self) -> None:
        update = self.scheduler.snooze()
        self._apply_update(update, rearm=update.changed)

    def _handle_settings(self) -> None:
        if self._settings_dialog is None:
            self._settings_dialog = SettingsDialog(self.config_model.config_data)
            self._settings_dialog.on_settings_applied = self._handle_settings_applied
        else:
            self._settings_dialog.load_config(self.config_model.config_data)
        self._settings_dialog.show()
        self._settings_dialog.raise_()
        self._settings_dialog.activateWindow()

    def _handle_settings_applied(self, settings: dict) -> None:
        if not self.config_model.update_configuration(**settings):
            self.view.show_error("Could not apply settings.")

    def _handle_quit(self) -> None:
        self.shutdown()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    # ============== Power events ==============

    def _handle_suspend(self) -> None:
        self.tick_source.cancel()
        self.scheduler.on_suspend()

    def _handle_resume(self, gap: Optional[float]) -> None:
        update = self.scheduler.on_resume(gap)
        self._apply_update(update, rearm=True)

    # ============== Configuration ==============

    def _on_interval_changed(self, interval_seconds: int) -> None:
        if self._interval_override is not None:
            self.logger.info(f"Stored interval changed to {interval_seconds}s, dropping session override")
            self._interval_override = None

    def _on_config_changed(self, config_data: ConfigurationData) -> None:
        update = self.scheduler.set_config(self._scheduler_config())
        if update.changed:
            self._apply_update(update, rearm=update.mode is SchedulerMode.RUNNING)

    def _watch_config_file(self) -> None:
        paths = [self.config_model.config_file_path, self.config_model.config_file_path.parent]
        existing = [str(path) for path in paths if path.exists() and str(path) not in self._watched_paths()]
        if existing:
            self._config_watcher.addPaths(existing)

    def _watched_paths(self) -> list[str]:
        return self._config_watcher.files() + self._config_watcher.directories()

    def _on_config_file_changed(self, path: str) -> None:
        self.logger.debug(f"Settings path changed: {path}")
        if self.config_model.config_file_path.exists():
            self.config_model.reload_configuration()
        # Editors that replace the file drop it from the watch list
        self._watch_config_file()
