"""Shared fixtures for the Break Reminder test suite."""

import os

import pytest

# Qt tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(scope="session")
def qapp():
    """Single QApplication shared by every Qt test."""
    qt_widgets = pytest.importorskip("PyQt6.QtWidgets")
    app = qt_widgets.QApplication.instance() or qt_widgets.QApplication([])
    yield app
