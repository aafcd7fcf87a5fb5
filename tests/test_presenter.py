"""Tests for the presenter wiring scheduler, tick source and tray view."""

import json

import pytest

from break_reminder.models.reminder_messages import REMINDER_TITLE
from break_reminder.models.scheduler_types import SchedulerMode
from break_reminder.presenters import break_reminder_presenter
from break_reminder.presenters.break_reminder_presenter import BreakReminderPresenter
from break_reminder.utils.power_events import NullPowerEventSource


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config.json"


@pytest.fixture
def shown():
    """Notifications the view was asked to show."""
    return {"reminders": [], "confirmations": [], "errors": []}


@pytest.fixture
def make_presenter(qapp, monkeypatch, config_file, shown):
    power_source = NullPowerEventSource()
    monkeypatch.setattr(break_reminder_presenter, "create_power_event_source", lambda parent: power_source)
    created = []

    def factory(interval_override=None):
        presenter = BreakReminderPresenter(config_file_path=str(config_file), interval_override=interval_override)
        view = presenter.view
        monkeypatch.setattr(view, "show_reminder", lambda message, timeout: shown["reminders"].append(message))
        monkeypatch.setattr(view, "show_confirmation", lambda message, timeout: shown["confirmations"].append(message))
        monkeypatch.setattr(view, "show_error", lambda text, timeout_s=5: shown["errors"].append(text))
        created.append(presenter)
        return presenter

    yield factory
    for presenter in created:
        presenter.shutdown()


def tick(presenter, count):
    for _ in range(count):
        presenter._handle_tick()


class TestLifecycle:
    def test_initially_stopped(self, make_presenter):
        presenter = make_presenter()

        assert presenter.scheduler.mode is SchedulerMode.STOPPED
        assert not presenter.tick_source.is_armed
        assert presenter.view.toggle_action.text() == "Start Reminders"

    def test_start_arms_tick_source(self, make_presenter):
        presenter = make_presenter()

        update = presenter.start_reminders()

        assert update.mode is SchedulerMode.RUNNING
        assert presenter.tick_source.is_armed
        assert presenter.view.status_action.text() == "Next break: 15m"
        assert presenter.view.toggle_action.text() == "Pause Reminders"

    def test_interval_override(self, make_presenter):
        presenter = make_presenter(interval_override=30)

        assert presenter.start_reminders().remaining == 30

    def test_shutdown_cancels_ticks(self, make_presenter):
        presenter = make_presenter()
        presenter.start_reminders()

        presenter.shutdown()

        assert not presenter.tick_source.is_armed
        assert presenter.scheduler.mode is SchedulerMode.STOPPED


class TestReminders:
    def test_reminder_shown_when_cycle_completes(self, make_presenter, shown):
        presenter = make_presenter(interval_override=3)
        presenter.start_reminders()

        tick(presenter, 3)

        assert [m.title for m in shown["reminders"]] == [REMINDER_TITLE]
        assert presenter.scheduler.remaining == 3

    def test_clicking_reminder_snoozes(self, make_presenter, shown):
        presenter = make_presenter(interval_override=2)
        presenter.start_reminders()
        tick(presenter, 2)

        presenter.view._snooze_offer_active = True
        presenter.view._on_message_clicked()

        assert presenter.scheduler.mode is SchedulerMode.SNOOZED
        assert presenter.scheduler.remaining == 300
        assert len(shown["confirmations"]) == 1
        assert not presenter.view.snooze_action.isEnabled()

    def test_message_click_without_offer_does_nothing(self, make_presenter):
        presenter = make_presenter()
        presenter.start_reminders()

        presenter.view._on_message_clicked()

        assert presenter.scheduler.mode is SchedulerMode.RUNNING


class TestViewActions:
    def test_toggle_pauses_and_resumes(self, make_presenter):
        presenter = make_presenter()
        presenter.start_reminders()
        tick(presenter, 5)

        presenter._handle_toggle()
        assert presenter.scheduler.mode is SchedulerMode.PAUSED
        assert not presenter.tick_source.is_armed
        assert presenter.view.status_action.text() == "Reminders paused"

        presenter._handle_toggle()
        assert presenter.scheduler.mode is SchedulerMode.RUNNING
        assert presenter.scheduler.remaining == 895
        assert presenter.tick_source.is_armed

    def test_toggle_starts_when_stopped(self, make_presenter):
        presenter = make_presenter()

        presenter._handle_toggle()

        assert presenter.scheduler.mode is SchedulerMode.RUNNING

    def test_restart_begins_fresh_cycle(self, make_presenter):
        presenter = make_presenter()
        presenter.start_reminders()
        tick(presenter, 10)

        presenter._handle_restart()

        assert presenter.scheduler.remaining == 900
        assert presenter.scheduler.mode is SchedulerMode.RUNNING

    def test_settings_with_zero_interval_stops_and_warns(self, make_presenter, shown):
        presenter = make_presenter()
        presenter.start_reminders()

        presenter._handle_settings_applied(
            {"interval_minutes": 0, "interval_seconds": 0, "snooze_minutes": 5, "auto_start": True}
        )

        assert presenter.scheduler.mode is SchedulerMode.STOPPED
        assert not presenter.tick_source.is_armed
        assert len(shown["errors"]) == 1

    def test_settings_change_resets_running_cycle(self, make_presenter, config_file):
        presenter = make_presenter()
        presenter.start_reminders()
        tick(presenter, 10)

        presenter._handle_settings_applied(
            {"interval_minutes": 1, "interval_seconds": 0, "snooze_minutes": 2, "auto_start": True}
        )

        assert presenter.scheduler.remaining == 60
        assert presenter.scheduler.config.snooze_duration == 120
        assert json.loads(config_file.read_text(encoding="utf-8"))["interval_minutes"] == 1

    def test_stored_interval_change_drops_override(self, make_presenter):
        presenter = make_presenter(interval_override=5)

        presenter.config_model.set_interval(2, 0)

        assert presenter.scheduler.config.interval == 120

    def test_external_file_edit_applies_live(self, make_presenter, config_file):
        presenter = make_presenter()
        presenter.start_reminders()
        config_file.write_text(
            json.dumps({"interval_minutes": 0, "interval_seconds": 40, "snooze_minutes": 5}), encoding="utf-8"
        )

        presenter._on_config_file_changed(str(config_file))

        assert presenter.scheduler.config.interval == 40
        assert presenter.scheduler.remaining == 40


class TestPowerEvents:
    def test_suspend_and_resume_keep_remaining(self, make_presenter):
        presenter = make_presenter()
        presenter.start_reminders()
        tick(presenter, 30)

        presenter._handle_suspend()
        assert not presenter.tick_source.is_armed

        presenter._handle_resume(5400.0)
        assert presenter.tick_source.is_armed
        assert presenter.scheduler.remaining == 870

    def test_resume_while_paused_stays_idle(self, make_presenter):
        presenter = make_presenter()
        presenter.start_reminders()
        presenter._handle_toggle()

        presenter._handle_suspend()
        presenter._handle_resume(None)

        assert presenter.scheduler.mode is SchedulerMode.PAUSED
        assert not presenter.tick_source.is_armed
