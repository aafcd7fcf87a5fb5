"""Configuration Model for Break Reminder application.

This module contains the ConfigurationModel class that handles
loading, saving and validating the reminder interval settings.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from .countdown_display import format_total_time
from .scheduler_types import SchedulerConfig

INTERVAL_MINUTES_RANGE = (0, 120)
INTERVAL_SECONDS_RANGE = (0, 59)
SNOOZE_MINUTES_RANGE = (1, 60)


def get_config_dir() -> Path:
    """Get the OS-specific configuration directory for the application."""
    if sys.platform == "win32":
        config_dir = Path.home() / "AppData" / "Roaming"
    elif sys.platform == "darwin":
        config_dir = Path.home() / "Library" / "Application Support"
    else:  # Linux and other Unix-like
        config_dir = Path.home() / ".config"
    return config_dir / "break_reminder"


def _in_range(value: Any, bounds: tuple[int, int]) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and bounds[0] <= value <= bounds[1]


def _settings_of(data: "ConfigurationData") -> dict[str, Any]:
    settings = data.to_dict()
    settings.pop("last_modified")
    return settings


class ConfigurationData:
    """Data class representing configuration settings."""

    def __init__(
        self,
        interval_minutes: int = 15,
        interval_seconds: int = 0,
        snooze_minutes: int = 5,
        auto_start: bool = True,
        notification_timeout: int = 10,
        confirmation_timeout: int = 3,
        auto_save: bool = True,
    ):
        """Initialize configuration data.

        Args:
            interval_minutes: Reminder interval minutes
            interval_seconds: Additional seconds added to the interval
            snooze_minutes: Length of a snooze in minutes
            auto_start: Whether reminders start counting when the application launches
            notification_timeout: Seconds a reminder notification stays visible
            confirmation_timeout: Seconds a snooze confirmation stays visible
            auto_save: Whether to automatically save configuration changes
        """
        self.interval_minutes = interval_minutes
        self.interval_seconds = interval_seconds
        self.snooze_minutes = snooze_minutes
        self.auto_start = auto_start
        self.notification_timeout = notification_timeout
        self.confirmation_timeout = confirmation_timeout
        self.auto_save = auto_save
        self.last_modified = datetime.now()

    @property
    def interval_total_seconds(self) -> int:
        return self.interval_minutes * 60 + self.interval_seconds

    @property
    def snooze_total_seconds(self) -> int:
        return self.snooze_minutes * 60

    def to_scheduler_config(self) -> SchedulerConfig:
        """Get the timing part of the settings as a scheduler configuration."""
        return SchedulerConfig(interval=self.interval_total_seconds, snooze_duration=self.snooze_total_seconds)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "interval_minutes": self.interval_minutes,
            "interval_seconds": self.interval_seconds,
            "snooze_minutes": self.snooze_minutes,
            "auto_start": self.auto_start,
            "notification_timeout": self.notification_timeout,
            "confirmation_timeout": self.confirmation_timeout,
            "auto_save": self.auto_save,
            "last_modified": self.last_modified.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConfigurationData":
        """Create configuration from dictionary.

        Out-of-range timing values fall back to their defaults.
        """
        defaults = cls()

        def pick(key: str, bounds: tuple[int, int]) -> int:
            value = data.get(key, getattr(defaults, key))
            if _in_range(value, bounds):
                return value
            logging.getLogger(__name__).warning(
                "Ignoring out-of-range configuration value", extra={"key": key, "value": value}
            )
            return getattr(defaults, key)

        config = cls(
            interval_minutes=pick("interval_minutes", INTERVAL_MINUTES_RANGE),
            interval_seconds=pick("interval_seconds", INTERVAL_SECONDS_RANGE),
            snooze_minutes=pick("snooze_minutes", SNOOZE_MINUTES_RANGE),
            auto_start=bool(data.get("auto_start", True)),
            notification_timeout=int(data.get("notification_timeout", 10)),
            confirmation_timeout=int(data.get("confirmation_timeout", 3)),
            auto_save=bool(data.get("auto_save", True)),
        )

        # Parse last_modified if present
        if "last_modified" in data:
            try:
                config.last_modified = datetime.fromisoformat(data["last_modified"])
            except (ValueError, TypeError):
                config.last_modified = datetime.now()

        return config

    def __str__(self) -> str:
        return f"ConfigurationData(interval={format_total_time(self.interval_minutes, self.interval_seconds)})"

    def __repr__(self) -> str:
        return (
            f"ConfigurationData(interval_minutes={self.interval_minutes}, "
            f"interval_seconds={self.interval_seconds}, snooze_minutes={self.snooze_minutes})"
        )


class ConfigurationModel:
    """Model class for managing application configuration.

    This class handles loading, saving, and managing the interval settings
    and notifies listeners so a running scheduler can follow live changes.
    """

    DEFAULT_CONFIG_FILE = "config.json"

    def __init__(self, config_file_path: Optional[str] = None):
        """Initialize the ConfigurationModel.

        Args:
            config_file_path: Path to configuration file (defaults to the OS config directory)
        """
        self.logger = logging.getLogger(__name__)

        if config_file_path:
            self.config_file_path = Path(config_file_path)
        else:
            self.config_file_path = get_config_dir() / self.DEFAULT_CONFIG_FILE

        self._config_data = ConfigurationData()

        # Callbacks for configuration changes
        self._config_changed_callbacks: list[Callable[[ConfigurationData], None]] = []
        self._interval_changed_callbacks: list[Callable[[int], None]] = []

        self.load_configuration()

        self.logger.info(
            "ConfigurationModel initialized",
            extra={
                "config_file": str(self.config_file_path),
                "interval_seconds": self._config_data.interval_total_seconds,
            },
        )

    @property
    def config_data(self) -> ConfigurationData:
        """Get current configuration data."""
        return self._config_data

    @property
    def interval_total_seconds(self) -> int:
        return self._config_data.interval_total_seconds

    def to_scheduler_config(self) -> SchedulerConfig:
        return self._config_data.to_scheduler_config()

    def get_interval_summary(self) -> str:
        """Get the configured interval in words."""
        return format_total_time(self._config_data.interval_minutes, self._config_data.interval_seconds)

    def set_interval(self, minutes: int, seconds: int = 0) -> bool:
        """Set the reminder interval.

        Args:
            minutes: Interval minutes (0-120)
            seconds: Additional seconds (0-59)

        Returns:
            True if interval was set successfully, False otherwise
        """
        if not _in_range(minutes, INTERVAL_MINUTES_RANGE) or not _in_range(seconds, INTERVAL_SECONDS_RANGE):
            self.logger.error("Invalid reminder interval", extra={"minutes": minutes, "seconds": seconds})
            return False

        old_total = self._config_data.interval_total_seconds
        self._config_data.interval_minutes = minutes
        self._config_data.interval_seconds = seconds
        self._config_data.last_modified = datetime.now()

        self.logger.info(
            "Reminder interval changed",
            extra={"old_seconds": old_total, "new_seconds": self._config_data.interval_total_seconds},
        )

        if self._config_data.auto_save:
            self.save_configuration()

        if self._config_data.interval_total_seconds != old_total:
            self._notify_interval_changed()
        self._notify_config_changed()
        return True

    def set_snooze_minutes(self, minutes: int) -> bool:
        """Set the snooze length.

        Args:
            minutes: Snooze minutes (1-60)

        Returns:
            True if snooze length was set successfully, False otherwise
        """
        if not _in_range(minutes, SNOOZE_MINUTES_RANGE):
            self.logger.error("Invalid snooze length", extra={"minutes": minutes})
            return False

        self._config_data.snooze_minutes = minutes
        self._config_data.last_modified = datetime.now()
        self.logger.info("Snooze length changed", extra={"minutes": minutes})

        if self._config_data.auto_save:
            self.save_configuration()

        self._notify_config_changed()
        return True

    def update_configuration(self, **kwargs) -> bool:
        """Update multiple configuration settings.

        Args:
            **kwargs: Configuration settings to update

        Returns:
            True if configuration was updated successfully, False otherwise
        """
        try:
            candidate = ConfigurationData.from_dict({**self._config_data.to_dict(), **kwargs})
        except (TypeError, ValueError):
            self.logger.exception("Error updating configuration", extra={"kwargs": kwargs})
            return False

        for key, value in kwargs.items():
            if not hasattr(self._config_data, key):
                self.logger.warning("Unknown configuration key", extra={"key": key, "value": value})
            elif getattr(candidate, key) != value:
                self.logger.error("Invalid configuration value", extra={"key": key, "value": value})
                return False

        return self._replace_data(candidate, save=self._config_data.auto_save)

    def load_configuration(self) -> bool:
        """Load configuration from file.

        Returns:
            True if configuration was loaded successfully, False otherwise
        """
        try:
            if not self.config_file_path.exists():
                self.logger.info(
                    "Configuration file not found, using defaults", extra={"config_file": str(self.config_file_path)}
                )
                return True

            with open(self.config_file_path, encoding="utf-8") as f:
                data = json.load(f)

            self._config_data = ConfigurationData.from_dict(data)

            self.logger.info(
                "Configuration loaded successfully",
                extra={
                    "config_file": str(self.config_file_path),
                    "interval_seconds": self._config_data.interval_total_seconds,
                },
            )

            return True

        except (OSError, ValueError, TypeError, AttributeError):
            self.logger.exception("Error loading configuration", extra={"config_file": str(self.config_file_path)})
            # Use default configuration on error
            self._config_data = ConfigurationData()
            return False

    def reload_configuration(self) -> bool:
        """Re-read the file after an external edit and notify listeners of changes.

        Returns:
            True if the file was read successfully, False otherwise
        """
        previous = self._config_data
        loaded = self.load_configuration()
        current = self._config_data
        if not loaded or _settings_of(current) == _settings_of(previous):
            if not loaded:
                self._config_data = previous
            return loaded

        self.logger.info("Configuration changed on disk", extra={"config_file": str(self.config_file_path)})
        if current.interval_total_seconds != previous.interval_total_seconds:
            self._notify_interval_changed()
        self._notify_config_changed()
        return True

    def save_configuration(self) -> bool:
        """Save configuration to file.

        Returns:
            True if configuration was saved successfully, False otherwise
        """
        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_file_path, "w", encoding="utf-8") as f:
                json.dump(self._config_data.to_dict(), f, indent=2, ensure_ascii=False)

            self.logger.info("Configuration saved successfully", extra={"config_file": str(self.config_file_path)})

            return True

        except OSError:
            self.logger.exception("Error saving configuration", extra={"config_file": str(self.config_file_path)})
            return False

    def reset_to_defaults(self) -> bool:
        """Reset configuration to default values.

        Returns:
            True if configuration was reset successfully, False otherwise
        """
        self.logger.info("Configuration reset to defaults")
        return self._replace_data(ConfigurationData(), save=True)

    def _replace_data(self, new_data: ConfigurationData, save: bool) -> bool:
        old_total = self._config_data.interval_total_seconds
        self._config_data = new_data
        self._config_data.last_modified = datetime.now()

        saved = self.save_configuration() if save else True

        if new_data.interval_total_seconds != old_total:
            self._notify_interval_changed()
        self._notify_config_changed()
        return saved

    def add_config_changed_callback(self, callback: Callable[[ConfigurationData], None]) -> None:
        """Add callback for configuration changes.

        Args:
            callback: Function to call when configuration changes
        """
        self._config_changed_callbacks.append(callback)
        self.logger.debug("Configuration change callback added", extra={"callback": str(callback)})

    def add_interval_changed_callback(self, callback: Callable[[int], None]) -> None:
        """Add callback for interval changes.

        Args:
            callback: Function to call with the new interval in seconds
        """
        self._interval_changed_callbacks.append(callback)
        self.logger.debug("Interval change callback added", extra={"callback": str(callback)})

    def remove_config_changed_callback(self, callback: Callable[[ConfigurationData], None]) -> bool:
        """Remove configuration change callback.

        Returns:
            True if callback was removed, False if not found
        """
        try:
            self._config_changed_callbacks.remove(callback)
            return True
        except ValueError:
            return False

    def _notify_interval_changed(self) -> None:
        """Notify all interval change callbacks."""
        total = self._config_data.interval_total_seconds
        for callback in self._interval_changed_callbacks:
            try:
                callback(total)
            except Exception:
                self.logger.exception("Error in interval change callback", extra={"callback": str(callback)})

    def _notify_config_changed(self) -> None:
        """Notify all configuration change callbacks."""
        for callback in self._config_changed_callbacks:
            try:
                callback(self._config_data)
            except Exception:
                self.logger.exception("Error in configuration change callback", extra={"callback": str(callback)})

    def get_config_summary(self) -> dict[str, Any]:
        """Get a summary of current configuration.

        Returns:
            Dictionary containing configuration summary
        """
        return {
            "interval": self.get_interval_summary(),
            "interval_seconds": self._config_data.interval_total_seconds,
            "snooze_minutes": self._config_data.snooze_minutes,
            "auto_start": self._config_data.auto_start,
            "config_file": str(self.config_file_path),
            "last_modified": self._config_data.last_modified.isoformat(),
        }
