"""Settings dialog for Break Reminder application.

This module contains the SettingsDialog class, the form used to edit the
reminder interval and snooze length.
"""

import logging
from collections.abc import Callable

from PyQt6.QtWidgets import (
    QCheckBox,
    QDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ..models.configuration_model import (
    INTERVAL_MINUTES_RANGE,
    INTERVAL_SECONDS_RANGE,
    SNOOZE_MINUTES_RANGE,
    ConfigurationData,
)
from ..models.countdown_display import format_total_time


class SettingsDialog(QDialog):
    """Form for the break reminder timing settings."""

    def __init__(self, config: ConfigurationData, parent: QWidget | None = None):
        super().__init__(parent)
        self.logger = logging.getLogger(__name__)
        self.setWindowTitle("Break Reminder Settings")
        self.setModal(True)

        # Callback function (to be set by presenter)
        self.on_settings_applied: Callable[[dict], None] | None = None

        self.minutes_spin: QSpinBox | None = None
        self.seconds_spin: QSpinBox | None = None
        self.snooze_spin: QSpinBox | None = None
        self.auto_start_check: QCheckBox | None = None
        self.total_label: QLabel | None = None

        self.init_ui()
        self.load_config(config)

    def init_ui(self) -> None:
        layout = QVBoxLayout()

        timing_group = QGroupBox("Break Reminder Timing")
        timing_layout = QFormLayout()

        self.minutes_spin = QSpinBox()
        self.minutes_spin.setRange(*INTERVAL_MINUTES_RANGE)
        self.minutes_spin.setToolTip("Break reminder interval in minutes")
        timing_layout.addRow("Minutes:", self.minutes_spin)

        self.seconds_spin = QSpinBox()
        self.seconds_spin.setRange(*INTERVAL_SECONDS_RANGE)
        self.seconds_spin.setToolTip("Additional seconds to add to the interval")
        timing_layout.addRow("Seconds:", self.seconds_spin)

        self.total_label = QLabel()
        timing_layout.addRow("Current Total Interval:", self.total_label)

        self.snooze_spin = QSpinBox()
        self.snooze_spin.setRange(*SNOOZE_MINUTES_RANGE)
        timing_layout.addRow("Snooze (minutes):", self.snooze_spin)

        self.auto_start_check = QCheckBox("Start reminders on launch")
        timing_layout.addRow(self.auto_start_check)

        timing_group.setLayout(timing_layout)
        layout.addWidget(timing_group)

        self.minutes_spin.valueChanged.connect(self._update_total_label)
        self.seconds_spin.valueChanged.connect(self._update_total_label)

        # Buttons
        button_layout = QHBoxLayout()
        apply_btn = QPushButton("Apply")
        apply_btn.clicked.connect(self.apply_changes)
        ok_btn = QPushButton("OK")
        ok_btn.clicked.connect(self.accept_changes)
        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)

        button_layout.addWidget(apply_btn)
        button_layout.addStretch()
        button_layout.addWidget(ok_btn)
        button_layout.addWidget(cancel_btn)

        layout.addLayout(button_layout)
        self.setLayout(layout)

    def load_config(self, config: ConfigurationData) -> None:
        """Populate the form from configuration data."""
        self.minutes_spin.setValue(config.interval_minutes)
        self.seconds_spin.setValue(config.interval_seconds)
        self.snooze_spin.setValue(config.snooze_minutes)
        self.auto_start_check.setChecked(config.auto_start)
        self._update_total_label()

    def get_current_settings(self) -> dict:
        return {
            "interval_minutes": self.minutes_spin.value(),
            "interval_seconds": self.seconds_spin.value(),
            "snooze_minutes": self.snooze_spin.value(),
            "auto_start": self.auto_start_check.isChecked(),
        }

    def apply_changes(self) -> None:
        settings = self.get_current_settings()
        self.logger.debug(f"Settings applied: {settings}")
        if self.on_settings_applied:
            self.on_settings_applied(settings)

    def accept_changes(self) -> None:
        self.apply_changes()
        self.accept()

    def _update_total_label(self) -> None:
        self.total_label.setText(format_total_time(self.minutes_spin.value(), self.seconds_spin.value()))
