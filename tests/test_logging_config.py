"""Tests for logging setup and structured logging."""

import logging

import pytest

from break_reminder.utils.logging_config import (
    TRACE,
    _get_logging_level,
    get_logging_config,
    get_verbosity_level,
    setup_logging,
)
from break_reminder.utils.structured_logging import EnhancedLoggerMixin, StructuredLogger, get_structured_logger


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    logging.captureWarnings(False)


@pytest.mark.parametrize(
    "verbosity,level",
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (3, TRACE), (5, TRACE)],
)
def test_verbosity_levels(verbosity, level):
    assert _get_logging_level(verbosity) == level


def test_setup_logging_console_only(restore_root_logger):
    setup_logging(verbosity=2)

    assert restore_root_logger.level == logging.DEBUG
    assert get_verbosity_level() == 2
    assert get_logging_config()["log_file"] is None
    assert logging.getLevelName(TRACE) == "TRACE"


def test_setup_logging_with_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "logs" / "app.log"

    setup_logging(verbosity=0, log_file=str(log_file), log_to_console=False)
    logging.getLogger("break_reminder.test").debug("written to file")
    for handler in restore_root_logger.handlers:
        handler.flush()

    # File handler always records DEBUG even when the console stays at WARNING
    assert restore_root_logger.level == logging.DEBUG
    assert "written to file" in log_file.read_text(encoding="utf-8")


class TestStructuredLogger:
    def test_format_message_appends_context(self):
        logger = StructuredLogger({"class": "Thing"})

        assert logger._format_message("Hello", mode="running") == "Hello | class=Thing | mode=running"

    def test_format_message_without_context(self):
        assert StructuredLogger()._format_message("Hello") == "Hello"

    def test_temporary_context(self, caplog):
        logger = get_structured_logger("break_reminder.test")

        with caplog.at_level(logging.INFO, logger="break_reminder.test"):
            with logger.context(component="tray"):
                logger.info("inside")
            logger.info("outside")

        assert [r.getMessage() for r in caplog.records] == ["inside | component=tray", "outside"]

    def test_log_state_change(self, caplog):
        class Machine(EnhancedLoggerMixin):
            pass

        with caplog.at_level(logging.INFO):
            Machine().log_state_change("stopped", "running", reason="start")

        assert "State change | class=Machine | old_state=stopped | new_state=running | reason=start" in caplog.text
